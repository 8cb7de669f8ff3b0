"""Concrete VitalsProvider implementations."""

from __future__ import annotations

from raksha.domains.health.domain_logic.vitals_models import VitalReadings


class SimulatedVitalsProvider:
    """Returns a fixed snapshot. Always available."""

    def __init__(self, readings: VitalReadings | None = None) -> None:
        self._readings = readings or VitalReadings()

    async def get_readings(self) -> VitalReadings:
        return self._readings

    def update(self, readings: VitalReadings) -> None:
        self._readings = readings

    def is_connected(self) -> bool:
        return False

    @property
    def data_source(self) -> str:
        return "simulated"
