"""Attention cue implementations."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class LoggingAttentionCue:
    """Stands in for device haptics: logs and counts each cue."""

    def __init__(self) -> None:
        self.count = 0

    def signal(self) -> None:
        self.count += 1
        logger.warning("SOS attention cue")
