"""Concrete NotificationChannel implementations."""

from __future__ import annotations

import logging
import re
from collections import deque
from typing import Callable
from urllib.parse import quote

logger = logging.getLogger(__name__)

_NON_DIAL_CHARS = re.compile(r"[^\d+]")

# Most recent messages an OutboxChannel keeps; older ones are dropped.
OUTBOX_MAXLEN = 100


def normalize_phone_number(phone_number: str) -> str:
    """Reduce free-text input to digits with an optional leading '+'.

    ``"+91 (984) 501-2345"`` -> ``"+919845012345"``
    """
    cleaned = _NON_DIAL_CHARS.sub("", phone_number.strip())
    if not cleaned:
        return ""
    return cleaned[0] + cleaned[1:].replace("+", "")


def build_sms_uri(phone_number: str, body: str) -> str:
    """``sms:`` link that opens a prefilled compose screen."""
    return f"sms:{quote(phone_number, safe='+')}&body={quote(body, safe='')}"


class OutboxChannel:
    """Keeps the most recent dispatched messages in memory. Always succeeds.

    Useful as the default channel when no device messaging is wired up,
    and for asserting on fan-out in tests.
    """

    def __init__(self, maxlen: int = OUTBOX_MAXLEN) -> None:
        self.sent: deque[tuple[str, str]] = deque(maxlen=maxlen)

    def dispatch(self, phone_number: str, body: str) -> bool:
        self.sent.append((phone_number, body))
        logger.info("Queued message to outbox (%d queued)", len(self.sent))
        return True


class SmsLinkChannel:
    """Hands an ``sms:`` link for each recipient to an opener.

    Args:
        opener: Callable that opens a URI and returns whether the platform
            accepted it (e.g. ``webbrowser.open``).
    """

    def __init__(self, opener: Callable[[str], bool]) -> None:
        self._opener = opener

    def dispatch(self, phone_number: str, body: str) -> bool:
        number = normalize_phone_number(phone_number)
        if not number:
            logger.warning("Skipping SMS dispatch: no dialable digits in phone number")
            return False
        uri = build_sms_uri(number, body)
        logger.debug("Opening %s", uri)
        return bool(self._opener(uri))
