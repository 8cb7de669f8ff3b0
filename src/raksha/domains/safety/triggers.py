"""Physical triggers that arm the coordinator."""

from __future__ import annotations

import logging

from raksha.domains.safety.coordinator import EmergencyCoordinator
from raksha.domains.safety.models import Location

logger = logging.getLogger(__name__)


class ShakeTrigger:
    """Arms the SOS countdown on a shake gesture when enabled."""

    def __init__(self, coordinator: EmergencyCoordinator, *, enabled: bool = True) -> None:
        self._coordinator = coordinator
        self.enabled = enabled

    def on_shake(self, location: Location | None) -> bool:
        if not self.enabled:
            logger.debug("Shake ignored: shake-to-SOS disabled")
            return False
        logger.info("Shake detected, arming SOS")
        return self._coordinator.arm(location)
