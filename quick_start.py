import numpy as np

from online_fdr_analysis.benchmarking import (
    benjamini_hochberg_correction,
    false_discovery_proportion,
    generate_online_stream,
    statistical_power,
)
from online_fdr_analysis.online_testing import lord_star


def main():
    """
    A small, self-contained example of the three LORD* versions.
    """
    print("--- Starting Online Testing Example ---")

    # 1. --- Data Generation ---
    n_tests = 300
    hypotheses, p_values = generate_online_stream(
        n_tests, pi1=0.15, signal=3.0, seed=42
    )
    print(
        f"\nStep 1: Simulated a stream of {n_tests} p-values "
        f"({int(hypotheses.sum())} true non-nulls)."
    )

    # 2. --- Run each visibility model ---
    alpha = 0.05
    runs = {
        "async (each test finishes 5 steps late)": lord_star(
            p_values,
            alpha=alpha,
            version="async",
            decision_times=np.arange(1, n_tests + 1) + 5,
        ),
        "dep (lag 3)": lord_star(
            p_values, alpha=alpha, version="dep", lags=np.full(n_tests, 3)
        ),
        "batch (size 30)": lord_star(
            p_values, alpha=alpha, version="batch", batch_sizes=np.full(10, 30)
        ),
    }
    print("Step 2: Ran LORD* under three visibility models.")

    # 3. --- Offline reference ---
    bh_rejected, _ = benjamini_hochberg_correction(p_values, alpha=alpha)
    print("Step 3: Ran offline Benjamini-Hochberg on the full stream.")

    # --- Display Results ---
    print("\n--- Results ---")
    for name, out in runs.items():
        rejected = out["R"].to_numpy().astype(bool)
        print(
            f"  - LORD* {name}: {rejected.sum()} rejections, "
            f"FDP = {false_discovery_proportion(rejected, hypotheses):.3f}, "
            f"power = {statistical_power(rejected, hypotheses):.3f}"
        )
    print(
        f"  - BH (offline): {bh_rejected.sum()} rejections, "
        f"FDP = {false_discovery_proportion(bh_rejected, hypotheses):.3f}, "
        f"power = {statistical_power(bh_rejected, hypotheses):.3f}"
    )


if __name__ == "__main__":
    main()
