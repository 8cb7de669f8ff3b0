"""Alert Composer: builds the outgoing distress message body.

Pure function of (location snapshot, time). Never raises; coordinates are
formatted as given, including NaN and infinities.
"""

from __future__ import annotations

from datetime import datetime

from raksha.domains.safety.models import Location

APP_NAME = "RakshaOne"

ALERT_PREAMBLE = f"🚨 EMERGENCY ALERT from {APP_NAME} 🚨\n\nI need immediate help!\n\n"

MAPS_URL_TEMPLATE = "https://www.google.com/maps?q={latitude},{longitude}"

LOCATION_UNAVAILABLE = "📍 Location: Unable to retrieve"

TIMESTAMP_FORMAT = "%b %d, %Y %H:%M:%S"


def format_timestamp(moment: datetime) -> str:
    """Human-readable timestamp, e.g. ``Mar 04, 2026 18:22:05``."""
    return moment.strftime(TIMESTAMP_FORMAT)


def maps_url(location: Location) -> str:
    return MAPS_URL_TEMPLATE.format(
        latitude=location.latitude, longitude=location.longitude
    )


def location_block(location: Location | None) -> str:
    """Lines describing the location, or the unavailable notice."""
    if location is None:
        return LOCATION_UNAVAILABLE + "\n"
    return (
        "📍 My Location:\n"
        f"Latitude: {location.latitude}\n"
        f"Longitude: {location.longitude}\n"
        f"Maps: {maps_url(location)}\n"
    )


def compose_alert(location: Location | None, now: datetime) -> str:
    """Compose the emergency alert body sent to every contact.

    Args:
        location: Snapshot captured when the alert was armed, or None if no
            fix was available.
        now: Time the alert fired.

    Returns:
        Non-empty message body.
    """
    return (
        ALERT_PREAMBLE
        + location_block(location)
        + f"\nTime: {format_timestamp(now)}\n"
    )
