"""MCP tools for quick messages and user-defined templates."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

from raksha.domains.safety.messaging import (
    DEFAULT_ICON,
    TEMPLATE_ICONS,
    MessageTemplate,
    QuickMessage,
    render_message,
)
from raksha.domains.safety.tools.sos_tools import location_from_args

if TYPE_CHECKING:
    from raksha.domains.safety.session import SafetySession

logger = logging.getLogger(__name__)

_QUICK_KINDS = {
    "sos": (QuickMessage.SOS, False),
    "safe": (QuickMessage.SAFE, False),
    "location": (QuickMessage.LOCATION, True),
}


def _template_dict(template: MessageTemplate) -> dict:
    return {
        "id": template.id,
        "name": template.name,
        "icon": template.icon,
        "body": template.body,
        "include_location": template.include_location,
    }


def register_messaging_tools(mcp: FastMCP, session: SafetySession) -> None:
    """Register messaging tools on the MCP server."""
    messaging = session.messaging

    def _recipients() -> list[str]:
        return [c.phone_number for c in session.contacts.list()]

    def _send(kind: str, body: str) -> str:
        recipients = _recipients()
        if not recipients:
            return json.dumps({"status": "error", "message": "No contacts configured"})
        handed_off = messaging.send(kind, body, recipients, session.channel)
        return json.dumps({
            "status": "sent" if handed_off else "failed",
            "recipients": len(recipients),
            "handed_off": handed_off,
            "preview": body,
        })

    @mcp.tool
    async def quick_message(
        ctx: Context,
        kind: str,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> str:
        """Send a one-tap message to all emergency contacts.

        Args:
            kind: 'sos', 'safe' or 'location'.
            latitude: Current latitude, used by the 'location' message.
            longitude: Current longitude, used by the 'location' message.
        """
        if kind not in _QUICK_KINDS:
            return json.dumps({
                "status": "error",
                "message": f"Unknown quick message {kind!r}. Use one of {sorted(_QUICK_KINDS)}.",
            })
        message, with_location = _QUICK_KINDS[kind]
        body = render_message(
            message.value, with_location, location_from_args(latitude, longitude)
        )
        return _send(kind.upper(), body)

    @mcp.tool
    async def add_message_template(
        ctx: Context,
        name: str,
        body: str,
        icon: str = DEFAULT_ICON,
        include_location: bool = False,
    ) -> str:
        """Save a reusable message template.

        Args:
            name: Template name.
            body: Message text.
            icon: One of the template icons (💬 🆘 ✅ 📍 ⚠️ 🚨 💙 🏠 🚗 ✈️).
            include_location: Append GPS coordinates when sending.
        """
        try:
            template = MessageTemplate(
                name=name, body=body, icon=icon, include_location=include_location
            )
        except ValueError as exc:
            return json.dumps({
                "status": "error",
                "message": str(exc),
                "icons": list(TEMPLATE_ICONS),
            })
        messaging.add_template(template)
        return json.dumps({"status": "saved", "template": _template_dict(template)})

    @mcp.tool
    async def delete_message_template(ctx: Context, template_id: str) -> str:
        """Delete a message template.

        Args:
            template_id: ID returned by add_message_template.
        """
        deleted = messaging.delete_template(template_id)
        return json.dumps({
            "status": "deleted" if deleted else "not_found",
            "template_id": template_id,
        })

    @mcp.tool
    async def list_message_templates(ctx: Context) -> str:
        """List saved message templates."""
        items = [_template_dict(t) for t in messaging.templates()]
        return json.dumps({"status": "ok", "count": len(items), "templates": items}, indent=2)

    @mcp.tool
    async def send_message(
        ctx: Context,
        template_id: str = "",
        text: str = "",
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> str:
        """Send a saved template or custom text to all emergency contacts.

        Args:
            template_id: Template to send. Takes precedence over text.
            text: Custom message text.
            latitude: Current latitude, for templates that include location.
            longitude: Current longitude, for templates that include location.
        """
        if template_id:
            template = messaging.get_template(template_id)
            if template is None:
                return json.dumps({"status": "not_found", "template_id": template_id})
            body = render_message(
                template.body,
                template.include_location,
                location_from_args(latitude, longitude),
            )
            return _send(template.name, body)
        if not text.strip():
            return json.dumps({"status": "error", "message": "Provide template_id or text"})
        return _send("Custom", text)

    @mcp.tool
    async def message_history(ctx: Context, limit: int = 20) -> str:
        """List sent messages, most recent first.

        Args:
            limit: Maximum entries to return.
        """
        entries = [
            {
                "id": e.id,
                "type": e.type,
                "preview": e.preview,
                "recipient_count": e.recipient_count,
                "timestamp": e.timestamp.isoformat(),
            }
            for e in messaging.history()[: max(limit, 0)]
        ]
        return json.dumps({"status": "ok", "count": len(entries), "entries": entries}, indent=2)

    @mcp.tool
    async def clear_message_history(ctx: Context) -> str:
        """Forget the sent-message history."""
        count = messaging.clear_history()
        return json.dumps({"status": "cleared", "entries_deleted": count})
