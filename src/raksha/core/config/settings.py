"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Raksha safety server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default: the server controls SOS dispatch and has no auth layer.
    raksha_host: str = "127.0.0.1"
    raksha_port: int = 8001
    raksha_log_level: str = "info"
    raksha_allow_insecure_bind: bool = False

    # Storage (contacts, history, profile blobs)
    db_path: str = "~/.raksha/safety.db"

    # Encryption of stored blobs; empty means plaintext JSON
    encryption_key: str = ""

    # Audio evidence
    recordings_dir: str = "~/.raksha/recordings"

    # Features
    shake_to_sos_enabled: bool = True


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
