"""Raksha personal-safety MCP server — application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from raksha.core.config.settings import get_settings
from raksha.core.scheduling.scheduler import AsyncioScheduler, Scheduler
from raksha.core.storage.blob_store import (
    BlobStore,
    EncryptedBlobStore,
    MemoryBlobStore,
    SQLiteBlobStore,
)
from raksha.core.storage.database import SafetyDatabase
from raksha.core.storage.encryption import BlobEncryptor, EncryptionError
from raksha.domains.health.connectors import VitalsProvider
from raksha.domains.health.connectors.providers import SimulatedVitalsProvider
from raksha.domains.health.tools.vitals_tools import register_vitals_tools
from raksha.domains.safety.connectors import CaptureDevice, NotificationChannel
from raksha.domains.safety.connectors.attention import LoggingAttentionCue
from raksha.domains.safety.connectors.capture import PlaceholderWaveCaptureDevice
from raksha.domains.safety.connectors.channels import OutboxChannel
from raksha.domains.safety.session import create_session
from raksha.domains.safety.tools.contact_tools import register_contact_tools
from raksha.domains.safety.tools.history_tools import register_history_tools
from raksha.domains.safety.tools.messaging_tools import register_messaging_tools
from raksha.domains.safety.tools.profile_tools import register_profile_tools
from raksha.domains.safety.tools.sos_tools import register_sos_tools

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def _create_blob_store(db_path: str, encryption_key: str) -> BlobStore:
    """SQLite-backed store, sealed with Fernet when a key is configured."""
    if not db_path:
        logger.info("No DB_PATH configured, running without persistence")
        return MemoryBlobStore()

    database = SafetyDatabase(db_path)
    database.initialize()
    store: BlobStore = SQLiteBlobStore(database)
    logger.info(
        "Safety store initialized: %s (schema v%d)", db_path, database.get_schema_version()
    )

    if not encryption_key:
        logger.info(
            "No ENCRYPTION_KEY configured: contacts and history stored unencrypted. "
            "Set ENCRYPTION_KEY to seal stored data."
        )
        return store
    try:
        return EncryptedBlobStore(store, BlobEncryptor(encryption_key))
    except EncryptionError as exc:
        logger.error("Failed to initialize encryption: %s", exc)
        logger.warning("Continuing without persistence: data will not be stored")
        return MemoryBlobStore()


def create_app(
    *,
    blob_store_override: BlobStore | None = None,
    scheduler_override: Scheduler | None = None,
    channel_override: NotificationChannel | None = None,
    capture_device_override: CaptureDevice | None = None,
    vitals_provider_override: VitalsProvider | None = None,
) -> FastMCP:
    """Create and configure the Raksha MCP server.

    1. Creates the FastMCP server instance
    2. Opens the blob store (contacts, history, profile)
    3. Builds the safety session (stores loaded, coordinator wired)
    4. Initializes the vitals provider
    5. Registers all tools
    """
    settings = get_settings()

    server = FastMCP(
        "Raksha Personal Safety",
        instructions=(
            "Personal-safety server. Arms a 30-second SOS countdown that, unless "
            "cancelled, messages every emergency contact with the user's location, "
            "starts an audio evidence recording and logs the event. Also manages "
            "contacts, message templates, the user profile and a vital-signs score."
        ),
    )

    if blob_store_override is not None:
        blob_store = blob_store_override
    else:
        blob_store = _create_blob_store(settings.db_path, settings.encryption_key)

    session = create_session(
        blob_store=blob_store,
        scheduler=scheduler_override or AsyncioScheduler(),
        channel=channel_override or OutboxChannel(),
        capture_device=capture_device_override or PlaceholderWaveCaptureDevice(),
        recordings_dir=settings.recordings_dir,
        attention=LoggingAttentionCue(),
        shake_enabled=settings.shake_to_sos_enabled,
    )

    if vitals_provider_override is not None:
        vitals_provider = vitals_provider_override
    else:
        vitals_provider = SimulatedVitalsProvider()
        logger.info("Using simulated vitals provider")

    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": "Raksha Personal Safety",
            "version": VERSION,
            "contacts": len(session.contacts),
            "events_logged": len(session.history),
            "sos_phase": session.coordinator.phase.value,
            "shake_to_sos_enabled": session.shake.enabled,
        }

    register_sos_tools(server, session)
    register_contact_tools(server, session.contacts)
    register_history_tools(server, session.history)
    register_profile_tools(server, session.profile)
    register_messaging_tools(server, session)
    register_vitals_tools(server, vitals_provider, session.profile)
    logger.info("Safety, messaging and vitals tools registered")

    return server


# Module-level instance for FastMCP discovery.
# Lazy: only created when this attribute is accessed (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
