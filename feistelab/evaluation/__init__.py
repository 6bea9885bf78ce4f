"""Cryptanalysis and evaluation toolkit.

Single-sample avalanche/differential/linear tests, roundtrip verification,
SAC matrices, and S-box DDT/LAT analysis.

Research / education only. Do NOT use in production.
"""

from .analysis import (
    AvalancheResult,
    DifferentialResult,
    LinearResult,
    avalanche_test,
    differential_test,
    linear_test,
)
from .avalanche import SACResult, compute_sac
from .roundtrip import RoundtripResult, RoundtripFailure, run_roundtrip_tests
from .sbox_analysis import SBoxAnalysisResult, analyze_sbox, analyze_all_sboxes
from .report import EvaluationReport

__all__ = [
    "AvalancheResult",
    "DifferentialResult",
    "LinearResult",
    "avalanche_test",
    "differential_test",
    "linear_test",
    "SACResult",
    "compute_sac",
    "RoundtripResult",
    "RoundtripFailure",
    "run_roundtrip_tests",
    "SBoxAnalysisResult",
    "analyze_sbox",
    "analyze_all_sboxes",
    "EvaluationReport",
]
