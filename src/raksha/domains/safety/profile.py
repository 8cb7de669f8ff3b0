"""User profile store: defaults on first run, persisted on every edit."""

from __future__ import annotations

import dataclasses
import json
import logging
from typing import Any

from raksha.core.storage.blob_store import PROFILE_KEY, BlobStore
from raksha.domains.safety.models import UserProfile

logger = logging.getLogger(__name__)


class ProfileStore:
    def __init__(self, blob_store: BlobStore) -> None:
        self._blobs = blob_store
        self._profile = UserProfile()

    @property
    def profile(self) -> UserProfile:
        return self._profile

    def update(self, **fields: Any) -> bool:
        """Replace the profile with ``fields`` applied, then persist.

        Returns False (leaving the profile unchanged) when a field name is
        unknown or a value fails validation.
        """
        try:
            updated = dataclasses.replace(self._profile, **fields)
        except (TypeError, ValueError) as exc:
            logger.warning("Rejected profile update: %s", exc)
            return False
        self._profile = updated
        self._save()
        return True

    def load(self) -> None:
        raw = self._blobs.load(PROFILE_KEY)
        if raw is None:
            return
        try:
            self._profile = UserProfile.from_dict(json.loads(raw.decode("utf-8")))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning("Stored profile unreadable, using defaults: %s", exc)
            self._profile = UserProfile()

    def _save(self) -> None:
        payload = json.dumps(self._profile.to_dict(), separators=(",", ":")).encode("utf-8")
        try:
            self._blobs.save(PROFILE_KEY, payload)
        except Exception:
            logger.exception("Failed to persist user profile")
