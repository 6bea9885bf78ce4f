"""Structured evaluation report builder.

Aggregates results from the single-sample tests, roundtrip tests, SAC
analysis, and S-box analysis into a single serializable report for export
and UI display.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Union

from .analysis import AvalancheResult, DifferentialResult, LinearResult
from .avalanche import SACResult
from .roundtrip import RoundtripResult
from .sbox_analysis import SBoxAnalysisResult

AnalysisResult = Union[AvalancheResult, DifferentialResult, LinearResult]


@dataclass
class EvaluationReport:
    """Complete evaluation report aggregating all analysis results."""
    timestamp: str = ""
    key_hex: str = ""
    key_mixing: bool = False
    analysis_results: List[AnalysisResult] = field(default_factory=list)
    roundtrip_results: List[RoundtripResult] = field(default_factory=list)
    sac_results: List[SACResult] = field(default_factory=list)
    sbox_results: List[SBoxAnalysisResult] = field(default_factory=list)

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize full report for JSON export."""
        return {
            "timestamp": self.timestamp,
            "key_hex": self.key_hex,
            "key_mixing": self.key_mixing,
            "analysis": [
                {"test": type(r).__name__, **r.to_dict()} for r in self.analysis_results
            ],
            "roundtrip": [r.to_dict() for r in self.roundtrip_results],
            "sac": [s.to_dict() for s in self.sac_results],
            "sbox": [s.to_dict() for s in self.sbox_results],
            "summary": {
                "roundtrip_all_pass": all(r.is_perfect for r in self.roundtrip_results),
                "sac_all_pass": all(s.passes_sac for s in self.sac_results),
                "weak_sboxes": self.weak_sboxes(),
            },
        }

    def to_summary(self) -> str:
        """Human-readable summary for console and Streamlit display."""
        lines = [f"Evaluation Report - {self.timestamp}", "=" * 50]

        if self.analysis_results:
            lines.append("\nSingle-sample tests:")
            for a in self.analysis_results:
                lines.append(f"  {a.summary()}")

        if self.roundtrip_results:
            rt_pass = sum(1 for r in self.roundtrip_results if r.is_perfect)
            lines.append(f"\nRoundtrip Tests: {rt_pass}/{len(self.roundtrip_results)} runs pass")
            for r in self.roundtrip_results:
                lines.append(f"  {r.summary()}")

        if self.sac_results:
            sac_pass = sum(1 for s in self.sac_results if s.passes_sac)
            lines.append(f"\nSAC Analysis: {sac_pass}/{len(self.sac_results)} pass")
            for s in self.sac_results:
                lines.append(f"  {s.summary()}")

        if self.sbox_results:
            lines.append(f"\nS-box Analysis: {len(self.sbox_results)} rounds")
            for s in self.sbox_results:
                lines.append(f"  {s.summary()}")

        return "\n".join(lines)

    def weak_sboxes(self) -> List[int]:
        """Return 1-based round numbers whose S-box rates "poor" on either axis."""
        return [
            s.round_index + 1 for s in self.sbox_results
            if "poor" in (s.differential_uniformity, s.linearity)
        ]
