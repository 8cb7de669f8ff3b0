"""Vital-sign readings and assessment result types."""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Score status thresholds (inclusive lower bounds, highest first)
# ---------------------------------------------------------------------------

STATUS_GOOD = "Good"
STATUS_AVERAGE = "Average"
STATUS_BELOW_AVERAGE = "Below Average"
STATUS_NEEDS_ATTENTION = "Needs Attention"

SCORE_STATUS_THRESHOLDS = [
    (80, STATUS_GOOD),
    (60, STATUS_AVERAGE),
    (40, STATUS_BELOW_AVERAGE),
]

BASE_SCORE = 50
MAX_SCORE = 100

# Per-metric classifier labels
LOW = "Low"
NORMAL = "Normal"
HIGH = "High"


@dataclass(frozen=True)
class VitalReadings:
    """A transient snapshot from the wearable (or simulated) device."""

    heart_rate: float = 72            # beats/min
    body_temperature: float = 36.6    # °C
    respiratory_rate: float = 16      # breaths/min
    systolic_bp: float = 120          # mmHg
    diastolic_bp: float = 80          # mmHg
    step_count: int = 0

    @property
    def heart_rate_text(self) -> str:
        return f"{int(self.heart_rate)} Bpm"

    @property
    def body_temperature_text(self) -> str:
        return f"{self.body_temperature:.1f}°C"

    @property
    def respiratory_rate_text(self) -> str:
        return f"{int(self.respiratory_rate)} Bpm"

    @property
    def blood_pressure_text(self) -> str:
        return f"{int(self.systolic_bp)}/{int(self.diastolic_bp)}"


@dataclass(frozen=True)
class VitalsAssessment:
    score: int                    # 0-100
    status: str                   # Good | Average | Below Average | Needs Attention
    heart_rate_status: str        # Low | Normal | High
    blood_pressure_status: str    # Low | Normal | High
