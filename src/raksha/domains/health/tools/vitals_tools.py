"""MCP tool reporting scored vital signs with profile context."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

from raksha.domains.health.domain_logic.vitals_scoring import assess_vitals

if TYPE_CHECKING:
    from raksha.domains.health.connectors import VitalsProvider
    from raksha.domains.safety.profile import ProfileStore

logger = logging.getLogger(__name__)


def register_vitals_tools(
    mcp: FastMCP,
    provider: VitalsProvider,
    profiles: ProfileStore,
) -> None:
    """Register the vitals report tool on the MCP server."""

    @mcp.tool
    async def vitals_report(ctx: Context) -> str:
        """Current vital signs, health score (0-100) and per-metric status."""
        readings = await provider.get_readings()
        assessment = assess_vitals(readings)
        logger.info("Vitals scored %d (%s)", assessment.score, assessment.status)
        return json.dumps({
            "status": "ok",
            "health_score": assessment.score,
            "health_status": assessment.status,
            "vitals": {
                "heart_rate": readings.heart_rate_text,
                "body_temperature": readings.body_temperature_text,
                "respiratory_rate": readings.respiratory_rate_text,
                "blood_pressure": readings.blood_pressure_text,
                "step_count": readings.step_count,
            },
            "indicators": {
                "heart_rate": assessment.heart_rate_status,
                "blood_pressure": assessment.blood_pressure_status,
            },
            "profile": profiles.profile.to_dict(),
            "data_source": provider.data_source,
            "device_connected": provider.is_connected(),
            "last_updated": datetime.now(timezone.utc).isoformat(),
        }, indent=2)
