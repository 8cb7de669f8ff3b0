"""MCP tools for the emergency history log."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

from raksha.domains.safety.composer import format_timestamp, maps_url

if TYPE_CHECKING:
    from raksha.domains.safety.history import HistoryLog

logger = logging.getLogger(__name__)


def register_history_tools(mcp: FastMCP, history: HistoryLog) -> None:
    """Register emergency history tools on the MCP server."""

    @mcp.tool
    async def list_history(ctx: Context, limit: int = 50) -> str:
        """List fired emergency alerts, most recent first.

        Args:
            limit: Maximum number of events to return.
        """
        events = []
        for event in history.list()[: max(limit, 0)]:
            entry = event.to_dict()
            entry["display_time"] = format_timestamp(event.timestamp)
            location = event.location
            entry["maps_url"] = maps_url(location) if location else None
            events.append(entry)
        return json.dumps({
            "status": "ok",
            "total": len(history),
            "events": events,
        }, indent=2)

    @mcp.tool
    async def clear_history(ctx: Context, confirm: str = "") -> str:
        """Permanently delete the emergency history.

        Args:
            confirm: Must be exactly 'CLEAR_HISTORY' to proceed.
        """
        if confirm != "CLEAR_HISTORY":
            return json.dumps({
                "status": "cancelled",
                "message": (
                    "To clear the emergency history, call this tool with "
                    "confirm='CLEAR_HISTORY'. This action cannot be undone."
                ),
            })
        count = history.clear()
        return json.dumps({"status": "cleared", "events_deleted": count})
