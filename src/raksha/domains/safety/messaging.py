"""Messaging: quick messages, user templates and a compose history.

Held in memory for the session; only contacts, emergency history and the
profile are persisted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable

from raksha.domains.safety.composer import LOCATION_UNAVAILABLE, maps_url
from raksha.domains.safety.connectors import NotificationChannel
from raksha.domains.safety.models import Location, new_id

logger = logging.getLogger(__name__)

TEMPLATE_ICONS = ("💬", "🆘", "✅", "📍", "⚠️", "🚨", "💙", "🏠", "🚗", "✈️")
DEFAULT_ICON = "💬"


class QuickMessage(str, Enum):
    SOS = "SOS! I need help."
    SAFE = "I'm safe."
    LOCATION = "Here is my location."


@dataclass(frozen=True)
class MessageTemplate:
    name: str
    body: str
    icon: str = DEFAULT_ICON
    include_location: bool = False
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Template name must not be empty")
        if not self.body.strip():
            raise ValueError("Template message must not be empty")
        if self.icon not in TEMPLATE_ICONS:
            raise ValueError(f"Unknown template icon {self.icon!r}")


@dataclass(frozen=True)
class MessageHistoryEntry:
    """One successfully handed-off compose attempt."""

    type: str
    preview: str
    recipient_count: int
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str = field(default_factory=new_id)


def render_message(body: str, include_location: bool, location: Location | None) -> str:
    """Append a location line (or the unavailable notice) when requested."""
    if not include_location:
        return body
    if location is None:
        return f"{body}\n\n{LOCATION_UNAVAILABLE}"
    return (
        f"{body}\n\n📍 Location: {location.latitude}, {location.longitude}\n"
        f"Maps: {maps_url(location)}"
    )


class MessagingService:
    def __init__(self) -> None:
        self._templates: list[MessageTemplate] = []
        self._history: list[MessageHistoryEntry] = []

    # Templates

    def templates(self) -> tuple[MessageTemplate, ...]:
        return tuple(self._templates)

    def add_template(self, template: MessageTemplate) -> bool:
        if any(t.id == template.id for t in self._templates):
            return False
        self._templates.append(template)
        return True

    def delete_template(self, template_id: str) -> bool:
        before = len(self._templates)
        self._templates = [t for t in self._templates if t.id != template_id]
        return len(self._templates) != before

    def get_template(self, template_id: str) -> MessageTemplate | None:
        for template in self._templates:
            if template.id == template_id:
                return template
        return None

    # Sending

    def send(
        self,
        kind: str,
        body: str,
        recipients: Iterable[str],
        channel: NotificationChannel,
    ) -> int:
        """Dispatch ``body`` to each recipient; returns how many were handed off.

        A history entry is recorded only when at least one dispatch succeeded.
        """
        recipients = list(recipients)
        handed_off = 0
        for phone_number in recipients:
            try:
                if channel.dispatch(phone_number, body):
                    handed_off += 1
            except Exception as exc:
                logger.warning("Message dispatch failed: %s", exc)
        if handed_off:
            self._history.insert(0, MessageHistoryEntry(
                type=kind,
                preview=body,
                recipient_count=len(recipients),
            ))
        else:
            logger.warning("Message not sent: no recipient accepted it")
        return handed_off

    # History

    def history(self) -> tuple[MessageHistoryEntry, ...]:
        return tuple(self._history)

    def clear_history(self) -> int:
        count = len(self._history)
        self._history = []
        return count
