"""MCP tools driving the SOS countdown and alert."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

from raksha.domains.safety.models import Location

if TYPE_CHECKING:
    from raksha.domains.safety.session import SafetySession

logger = logging.getLogger(__name__)


def location_from_args(latitude: float | None, longitude: float | None) -> Location | None:
    """Build a location snapshot; either coordinate missing means no fix."""
    if latitude is None or longitude is None:
        return None
    return Location(latitude=latitude, longitude=longitude)


def register_sos_tools(mcp: FastMCP, session: SafetySession) -> None:
    """Register SOS coordinator tools on the MCP server."""
    coordinator = session.coordinator

    @mcp.tool
    async def sos_arm(
        ctx: Context,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> str:
        """Start the 30-second SOS countdown. The alert fires unless cancelled.

        Args:
            latitude: Current latitude, if a location fix is available.
            longitude: Current longitude, if a location fix is available.
        """
        armed = coordinator.arm(location_from_args(latitude, longitude))
        return json.dumps({
            "status": "armed" if armed else "ignored",
            "state": coordinator.snapshot.to_dict(),
        })

    @mcp.tool
    async def sos_cancel(ctx: Context) -> str:
        """Cancel a running SOS countdown before the alert fires."""
        cancelled = coordinator.cancel()
        return json.dumps({
            "status": "cancelled" if cancelled else "ignored",
            "state": coordinator.snapshot.to_dict(),
        })

    @mcp.tool
    async def sos_trigger_now(
        ctx: Context,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> str:
        """Fire the emergency alert immediately, skipping the countdown.

        Args:
            latitude: Current latitude, if a location fix is available.
            longitude: Current longitude, if a location fix is available.
        """
        fired = coordinator.trigger_now(location_from_args(latitude, longitude))
        return json.dumps({
            "status": "fired" if fired else "ignored",
            "state": coordinator.snapshot.to_dict(),
        })

    @mcp.tool
    async def shake_detected(
        ctx: Context,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> str:
        """Report a shake gesture; arms the countdown when shake-to-SOS is enabled.

        Args:
            latitude: Current latitude, if a location fix is available.
            longitude: Current longitude, if a location fix is available.
        """
        armed = session.shake.on_shake(location_from_args(latitude, longitude))
        return json.dumps({
            "status": "armed" if armed else "ignored",
            "shake_enabled": session.shake.enabled,
            "state": coordinator.snapshot.to_dict(),
        })

    @mcp.tool
    async def sos_status(ctx: Context) -> str:
        """Current SOS state: phase, countdown, SMS and recording status."""
        state = coordinator.snapshot.to_dict()
        state["countdown_value"] = coordinator.countdown_value
        return json.dumps({"status": "ok", "state": state})

    @mcp.tool
    async def stop_recording(ctx: Context) -> str:
        """Stop the audio evidence recording started by an alert."""
        stopped = coordinator.stop_recording()
        path = session.recorder.current_path
        return json.dumps({
            "status": "stopped" if stopped else "not_recording",
            "recording_status": session.recorder.status,
            "path": str(path) if stopped and path else None,
        })
