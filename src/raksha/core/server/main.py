"""Raksha server entry point: ``python -m raksha.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from raksha.core.config.settings import get_settings
from raksha.core.server.app import create_app


def _is_loopback_host(host: str) -> bool:
    if host in {"localhost"}:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def run() -> None:
    """Start the Raksha MCP server with Streamable HTTP transport."""
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.raksha_log_level.upper(), logging.INFO))

    logger = logging.getLogger(__name__)
    if not settings.raksha_allow_insecure_bind and not _is_loopback_host(settings.raksha_host):
        raise RuntimeError(
            "Refusing to bind Raksha server to a non-loopback host without an auth layer. "
            "Set RAKSHA_ALLOW_INSECURE_BIND=true to override (unsafe)."
        )
    logger.info(
        "Starting Raksha Personal Safety server on %s:%d",
        settings.raksha_host,
        settings.raksha_port,
    )

    mcp = create_app()
    mcp.run(
        transport="streamable-http",
        host=settings.raksha_host,
        port=settings.raksha_port,
    )


if __name__ == "__main__":
    run()
