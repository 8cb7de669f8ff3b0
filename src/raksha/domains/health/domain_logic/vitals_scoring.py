"""Deterministic vital-signs scoring.

The score is a banded sum starting at 50 and capped at 100. The per-metric
Low/Normal/High classifiers are separate thresholds and do not feed the
score.
"""

from __future__ import annotations

from raksha.domains.health.domain_logic.vitals_models import (
    BASE_SCORE,
    HIGH,
    LOW,
    MAX_SCORE,
    NORMAL,
    SCORE_STATUS_THRESHOLDS,
    STATUS_NEEDS_ATTENTION,
    VitalReadings,
    VitalsAssessment,
)


def _heart_rate_points(bpm: float) -> int:
    if 60 <= bpm <= 100:
        return 15
    if 50 <= bpm <= 110:
        return 8
    return 0


def _blood_pressure_points(systolic: float, diastolic: float) -> int:
    if 90 <= systolic <= 130 and 60 <= diastolic <= 85:
        return 15
    # Partial band checks systolic only.
    if 85 <= systolic <= 140:
        return 8
    return 0


def _temperature_points(celsius: float) -> int:
    if 36.1 <= celsius <= 37.2:
        return 10
    if 35.5 <= celsius <= 38.0:
        return 5
    return 0


def _step_points(steps: float) -> int:
    if steps > 8000:
        return 10
    if steps > 5000:
        return 7
    if steps > 2000:
        return 4
    return 0


def compute_health_score(readings: VitalReadings) -> int:
    """Score in [0, 100]."""
    score = (
        BASE_SCORE
        + _heart_rate_points(readings.heart_rate)
        + _blood_pressure_points(readings.systolic_bp, readings.diastolic_bp)
        + _temperature_points(readings.body_temperature)
        + _step_points(readings.step_count)
    )
    return min(score, MAX_SCORE)


def score_status(score: int) -> str:
    """Map a score to its categorical status."""
    for threshold, label in SCORE_STATUS_THRESHOLDS:
        if score >= threshold:
            return label
    return STATUS_NEEDS_ATTENTION


def classify_heart_rate(bpm: float) -> str:
    if bpm < 60:
        return LOW
    if bpm > 100:
        return HIGH
    return NORMAL


def classify_blood_pressure(systolic: float, diastolic: float) -> str:
    if systolic > 140 or diastolic > 90:
        return HIGH
    if systolic < 90 or diastolic < 60:
        return LOW
    return NORMAL


def assess_vitals(readings: VitalReadings) -> VitalsAssessment:
    score = compute_health_score(readings)
    return VitalsAssessment(
        score=score,
        status=score_status(score),
        heart_rate_status=classify_heart_rate(readings.heart_rate),
        blood_pressure_status=classify_blood_pressure(
            readings.systolic_bp, readings.diastolic_bp
        ),
    )
