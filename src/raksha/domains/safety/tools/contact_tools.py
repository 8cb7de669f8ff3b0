"""MCP tools for managing emergency contacts."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

from raksha.domains.safety.models import EmergencyContact

if TYPE_CHECKING:
    from raksha.domains.safety.contacts import ContactStore

logger = logging.getLogger(__name__)


def register_contact_tools(mcp: FastMCP, contacts: ContactStore) -> None:
    """Register emergency contact tools on the MCP server."""

    @mcp.tool
    async def add_contact(
        ctx: Context,
        name: str,
        phone_number: str,
        relationship: str = "",
    ) -> str:
        """Add an emergency contact who will be messaged when an alert fires.

        Args:
            name: Display name of the contact.
            phone_number: Phone number as typed; normalized when dialing.
            relationship: e.g. 'Mother', 'Friend', 'Doctor'.
        """
        try:
            contact = EmergencyContact(
                name=name, phone_number=phone_number, relationship=relationship
            )
        except ValueError as exc:
            return json.dumps({"status": "error", "message": str(exc)})
        contacts.add(contact)
        return json.dumps({
            "status": "saved",
            "contact": contact.to_dict(),
            "total_contacts": len(contacts),
        })

    @mcp.tool
    async def remove_contact(ctx: Context, index: int) -> str:
        """Remove the emergency contact at a position in the list.

        Args:
            index: Zero-based position as returned by list_contacts.
        """
        removed = contacts.remove_at(index)
        if removed is None:
            return json.dumps({
                "status": "not_found",
                "message": f"No contact at index {index}.",
                "total_contacts": len(contacts),
            })
        return json.dumps({
            "status": "removed",
            "contact": removed.to_dict(),
            "total_contacts": len(contacts),
        })

    @mcp.tool
    async def list_contacts(ctx: Context) -> str:
        """List emergency contacts in the order they will be messaged."""
        items = [
            {"index": i, **contact.to_dict()}
            for i, contact in enumerate(contacts.list())
        ]
        return json.dumps({"status": "ok", "count": len(items), "contacts": items}, indent=2)
