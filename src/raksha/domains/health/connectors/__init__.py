"""Vital-sign connectors — abstraction layer for readings retrieval."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from raksha.domains.health.domain_logic.vitals_models import VitalReadings


@runtime_checkable
class VitalsProvider(Protocol):
    """Source of the current vital-sign snapshot (wearable, manual, simulated)."""

    async def get_readings(self) -> VitalReadings:
        ...

    def is_connected(self) -> bool:
        """Whether a real device is supplying the readings."""
        ...

    @property
    def data_source(self) -> str:
        ...
