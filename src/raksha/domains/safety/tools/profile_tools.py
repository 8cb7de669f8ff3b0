"""MCP tools for the user profile."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from fastmcp import Context, FastMCP

from raksha.domains.safety.models import MAX_AGE, MIN_AGE, BloodType, Gender

if TYPE_CHECKING:
    from raksha.domains.safety.profile import ProfileStore


def register_profile_tools(mcp: FastMCP, profiles: ProfileStore) -> None:
    """Register profile tools on the MCP server."""

    @mcp.tool
    async def get_profile(ctx: Context) -> str:
        """Return the user's profile (name, age, gender, blood type)."""
        return json.dumps({"status": "ok", "profile": profiles.profile.to_dict()})

    @mcp.tool
    async def update_profile(
        ctx: Context,
        name: str | None = None,
        age: int | None = None,
        gender: str | None = None,
        blood_type: str | None = None,
    ) -> str:
        """Edit the user's profile. Omitted fields keep their current value.

        Args:
            name: Display name.
            age: Age in years (1-120).
            gender: 'Male', 'Female' or 'Other'.
            blood_type: One of A+, A-, B+, B-, AB+, AB-, O+, O-.
        """
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = name
        if age is not None:
            changes["age"] = age
        if gender is not None:
            changes["gender"] = gender
        if blood_type is not None:
            changes["blood_type"] = blood_type

        if not changes:
            return json.dumps({"status": "unchanged", "profile": profiles.profile.to_dict()})

        if not profiles.update(**changes):
            return json.dumps({
                "status": "error",
                "message": (
                    f"Invalid profile values. Age must be {MIN_AGE}-{MAX_AGE}; "
                    f"gender one of {[g.value for g in Gender]}; "
                    f"blood type one of {[b.value for b in BloodType]}."
                ),
                "profile": profiles.profile.to_dict(),
            })
        return json.dumps({"status": "saved", "profile": profiles.profile.to_dict()})
