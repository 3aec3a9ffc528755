"""
Central configuration for the online FDR analysis library.
"""

# --- Statistical Parameters ---

# Default target level (alpha) for the online FDR procedures.
DEFAULT_ALPHA: float = 0.05

# Default initial wealth for the core LORD* recursions.
DEFAULT_W0: float = 0.005

# Fraction of alpha used as initial wealth when the front end is called
# without an explicit w0 (w0 = alpha / 10).
W0_ALPHA_FRACTION: float = 0.1

# --- Discount Sequence Parameters ---

# Normalising constant of the LORD discount sequence
# gamma_j = C * log(max(j, 2)) / (j * exp(sqrt(log(j)))), Javanmard & Montanari
# (2018), equation 31. Chosen so that the infinite series sums to ~1.
LORD_GAMMA_CONSTANT: float = 0.07720838

# Tolerance used when checking that a supplied discount sequence sums to <= 1.
GAMMA_SUM_TOLERANCE: float = 1e-12

# --- LORD* Versions ---

# Visibility models supported by the front end.
#   "async": outcomes become visible at a per-test decision time
#   "dep":   outcomes become visible after a per-step lag (local dependence)
#   "batch": outcomes become visible once the whole mini-batch is complete
LORDSTAR_VERSIONS: tuple[str, ...] = ("async", "dep", "batch")
