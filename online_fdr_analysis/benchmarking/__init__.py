"""
Benchmarking helpers for simulating p-value streams and scoring online procedures.
"""

from .baselines import benjamini_hochberg_correction
from .evaluation import evaluate_procedure
from .generators import generate_online_stream
from .metrics import false_discovery_proportion, statistical_power

__all__ = [
    "benjamini_hochberg_correction",
    "evaluate_procedure",
    "generate_online_stream",
    "false_discovery_proportion",
    "statistical_power",
]
