"""
model/schemas.py — Immutable HRV records
==========================================
Pydantic models for everything the engine hands back to callers.  All
models are frozen: consumers (UI, persistence, score fusion) may read the
fields but any assignment raises a `ValidationError`.

The frequency-domain group is modelled as a single optional
`SpectralMetrics` value on `HRVMetrics`: it is either absent as a whole or
present with all four band powers.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field

from model.confidence import (
    ConfidenceLevel,
    RMSSDInterpretation,
    classify_confidence,
    interpret_rmssd,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SpectralMetrics(BaseModel):
    """Frequency-domain group: band powers in ms², ratios when defined."""
    model_config = ConfigDict(frozen=True)

    vlf_power: float
    lf_power: float
    hf_power: float
    total_power: float
    lf_hf_ratio: Optional[float] = None     # None when hf_power == 0
    lf_nu: Optional[float] = None           # None when total - vlf <= 0
    hf_nu: Optional[float] = None


class HRVMetrics(BaseModel):
    """
    Complete HRV result for one window of R-R intervals.

    Invariant: ``sample_count + artifact_count`` equals the raw input length
    for valid windows; the insufficient-data record reports
    ``sample_count = 0`` and ``artifact_percentage = 1.0``.
    """
    model_config = ConfigDict(frozen=True)

    # Time domain
    rmssd: float
    sdnn: float
    sdsd: float
    pnn50: float = Field(..., ge=0.0, le=100.0)
    nn50: int = Field(..., ge=0)
    mean_rr: float
    mean_hr: float

    # Frequency domain (None = not computed)
    spectral: Optional[SpectralMetrics] = None

    # Quality
    sample_count: int = Field(..., ge=0)
    artifact_count: int = Field(..., ge=0)
    artifact_percentage: float = Field(..., ge=0.0, le=1.0)
    window_duration_seconds: float
    is_valid: bool
    timestamp: datetime = Field(default_factory=_utcnow)

    @computed_field
    @property
    def confidence_level(self) -> ConfidenceLevel:
        return classify_confidence(
            self.artifact_percentage, self.sample_count, self.window_duration_seconds,
        )

    @computed_field
    @property
    def rmssd_interpretation(self) -> RMSSDInterpretation:
        return interpret_rmssd(self.rmssd)

    # ── Frequency-domain shortcuts ─────────────────────────────────────────

    @property
    def has_spectral(self) -> bool:
        return self.spectral is not None

    @property
    def vlf_power(self) -> Optional[float]:
        return self.spectral.vlf_power if self.spectral else None

    @property
    def lf_power(self) -> Optional[float]:
        return self.spectral.lf_power if self.spectral else None

    @property
    def hf_power(self) -> Optional[float]:
        return self.spectral.hf_power if self.spectral else None

    @property
    def total_power(self) -> Optional[float]:
        return self.spectral.total_power if self.spectral else None

    @property
    def lf_hf_ratio(self) -> Optional[float]:
        return self.spectral.lf_hf_ratio if self.spectral else None

    @property
    def lf_nu(self) -> Optional[float]:
        return self.spectral.lf_nu if self.spectral else None

    @property
    def hf_nu(self) -> Optional[float]:
        return self.spectral.hf_nu if self.spectral else None

    # ── Display ────────────────────────────────────────────────────────────

    @property
    def summary(self) -> str:
        if not self.is_valid:
            return "Invalid measurement"
        return f"RMSSD: {self.rmssd:.1f}ms | HR: {self.mean_hr:.0f} bpm"

    def describe(self) -> str:
        """Multi-line breakdown for logs and the CLI."""

        def _fmt(value: Optional[float]) -> str:
            return "N/A" if value is None else f"{value:.2f}"

        return "\n".join([
            f"HRV Metrics ({self.timestamp.isoformat()})",
            "Time Domain:",
            f"  RMSSD: {self.rmssd:.2f} ms",
            f"  SDNN: {self.sdnn:.2f} ms",
            f"  SDSD: {self.sdsd:.2f} ms",
            f"  pNN50: {self.pnn50:.1f}% (NN50={self.nn50})",
            f"  Mean RR: {self.mean_rr:.1f} ms",
            f"  Mean HR: {self.mean_hr:.1f} bpm",
            "Frequency Domain:",
            f"  VLF Power: {_fmt(self.vlf_power)} ms²",
            f"  LF Power: {_fmt(self.lf_power)} ms²",
            f"  HF Power: {_fmt(self.hf_power)} ms²",
            f"  Total Power: {_fmt(self.total_power)} ms²",
            f"  LF/HF Ratio: {_fmt(self.lf_hf_ratio)}",
            f"  LF n.u.: {_fmt(self.lf_nu)}  HF n.u.: {_fmt(self.hf_nu)}",
            "Quality:",
            f"  Samples: {self.sample_count}",
            f"  Artifacts: {self.artifact_count} ({self.artifact_percentage * 100:.1f}%)",
            f"  Window: {self.window_duration_seconds:.0f}s",
            f"  Confidence: {self.confidence_level.value}",
            f"  Valid: {'Yes' if self.is_valid else 'No'}",
        ])


class HRVDataPoint(BaseModel):
    """One point of a rolling HRV time series (timestamp = window end)."""
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    timestamp: datetime
    rmssd: float
    mean_hr: float
    is_valid: bool


class FlowHRVAssessment(BaseModel):
    """How favourable a metrics record is for sustained focus."""
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    interpretation: str
    recommendation: str
    baseline_deviation: Optional[float] = None
