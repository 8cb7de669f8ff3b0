"""Ordered emergency contacts with persistence round-trip."""

from __future__ import annotations

import json
import logging

from raksha.core.storage.blob_store import CONTACTS_KEY, BlobStore
from raksha.domains.safety.models import EmergencyContact

logger = logging.getLogger(__name__)


class ContactStore:
    """Insertion-ordered emergency contacts, persisted on every mutation.

    Usage::

        store = ContactStore(blob_store)
        store.load()
        store.add(EmergencyContact(name="Asha", phone_number="+91 98450 12345"))
        store.remove_at(0)
    """

    def __init__(self, blob_store: BlobStore) -> None:
        self._blobs = blob_store
        self._contacts: list[EmergencyContact] = []

    def __len__(self) -> int:
        return len(self._contacts)

    def list(self) -> tuple[EmergencyContact, ...]:
        """Return the contacts in insertion order."""
        return tuple(self._contacts)

    def get(self, contact_id: str) -> EmergencyContact | None:
        for contact in self._contacts:
            if contact.id == contact_id:
                return contact
        return None

    def add(self, contact: EmergencyContact) -> bool:
        """Append a contact and persist. A duplicate id is ignored."""
        if self.get(contact.id) is not None:
            logger.warning("Ignoring contact with duplicate id %s", contact.id)
            return False
        self._contacts.append(contact)
        self._save()
        logger.info("Added emergency contact %s (%d total)", contact.id, len(self._contacts))
        return True

    def remove_at(self, index: int) -> EmergencyContact | None:
        """Remove the contact at ``index`` and persist.

        Out-of-range indices (including negative ones) leave the store
        unchanged and return None.
        """
        if not 0 <= index < len(self._contacts):
            logger.warning(
                "remove_at(%d) out of range for %d contacts", index, len(self._contacts)
            )
            return None
        removed = self._contacts.pop(index)
        self._save()
        logger.info("Removed emergency contact %s", removed.id)
        return removed

    def replace_at(self, index: int, contact: EmergencyContact) -> bool:
        """Replace the contact at ``index`` wholesale and persist."""
        if not 0 <= index < len(self._contacts):
            return False
        clash = self.get(contact.id)
        if clash is not None and clash is not self._contacts[index]:
            logger.warning("Replacement id %s already used by another contact", contact.id)
            return False
        self._contacts[index] = contact
        self._save()
        return True

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Load contacts from the blob store; absent or corrupt data yields an empty store."""
        raw = self._blobs.load(CONTACTS_KEY)
        if raw is None:
            self._contacts = []
            return
        try:
            items = json.loads(raw.decode("utf-8"))
            contacts = [EmergencyContact.from_dict(item) for item in items]
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning("Stored contacts unreadable, starting empty: %s", exc)
            self._contacts = []
            return
        seen: set[str] = set()
        self._contacts = []
        for contact in contacts:
            if contact.id in seen:
                continue
            seen.add(contact.id)
            self._contacts.append(contact)
        logger.info("Loaded %d emergency contacts", len(self._contacts))

    def _save(self) -> None:
        payload = json.dumps(
            [c.to_dict() for c in self._contacts], separators=(",", ":")
        ).encode("utf-8")
        try:
            self._blobs.save(CONTACTS_KEY, payload)
        except Exception:
            logger.exception("Failed to persist emergency contacts")
