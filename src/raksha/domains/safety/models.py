"""Data models for the personal-safety domain."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Location:
    """A latitude/longitude snapshot. Values are taken as-is, unvalidated."""

    latitude: float
    longitude: float


# ---------------------------------------------------------------------------
# Emergency contacts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EmergencyContact:
    """A person notified when an alert fires.

    The phone number is free text; it is only normalized at dial time.
    """

    name: str
    phone_number: str
    relationship: str = ""
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Contact name must not be empty")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "phone_number": self.phone_number,
            "relationship": self.relationship,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EmergencyContact:
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            phone_number=str(data["phone_number"]),
            relationship=str(data.get("relationship", "")),
        )


# ---------------------------------------------------------------------------
# Emergency events (history)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EmergencyEvent:
    """An alert that fired. Immutable once created.

    ``contacts_notified`` is the number of contacts in the store at fire
    time (dispatch attempts), not confirmed deliveries.
    """

    timestamp: datetime
    contacts_notified: int
    latitude: float | None = None
    longitude: float | None = None
    id: str = field(default_factory=new_id)

    @classmethod
    def create(
        cls, timestamp: datetime, location: Location | None, contacts_notified: int
    ) -> EmergencyEvent:
        return cls(
            timestamp=timestamp,
            contacts_notified=contacts_notified,
            latitude=location.latitude if location else None,
            longitude=location.longitude if location else None,
        )

    @property
    def location(self) -> Location | None:
        if self.latitude is None or self.longitude is None:
            return None
        return Location(self.latitude, self.longitude)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "latitude": self.latitude,
            "longitude": self.longitude,
            "contacts_notified": self.contacts_notified,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EmergencyEvent:
        ts = datetime.fromisoformat(data["timestamp"])
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        lat = data.get("latitude")
        lon = data.get("longitude")
        return cls(
            id=str(data["id"]),
            timestamp=ts,
            latitude=float(lat) if lat is not None else None,
            longitude=float(lon) if lon is not None else None,
            contacts_notified=int(data["contacts_notified"]),
        )


# ---------------------------------------------------------------------------
# User profile
# ---------------------------------------------------------------------------

class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class BloodType(str, Enum):
    A_POS = "A+"
    A_NEG = "A-"
    B_POS = "B+"
    B_NEG = "B-"
    AB_POS = "AB+"
    AB_NEG = "AB-"
    O_POS = "O+"
    O_NEG = "O-"


MIN_AGE = 1
MAX_AGE = 120


@dataclass(frozen=True)
class UserProfile:
    """Per-session user profile, embedded in health context displays."""

    name: str = "User"
    age: int = 25
    gender: Gender = Gender.MALE
    blood_type: BloodType = BloodType.AB_POS

    def __post_init__(self) -> None:
        # Accept raw strings for the enum fields.
        object.__setattr__(self, "gender", Gender(self.gender))
        object.__setattr__(self, "blood_type", BloodType(self.blood_type))
        if isinstance(self.age, bool) or not isinstance(self.age, int):
            raise ValueError(f"Age must be an integer, got {self.age!r}")
        if not MIN_AGE <= self.age <= MAX_AGE:
            raise ValueError(f"Age must be between {MIN_AGE} and {MAX_AGE}, got {self.age}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "age": self.age,
            "gender": self.gender.value,
            "blood_type": self.blood_type.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserProfile:
        return cls(
            name=str(data["name"]),
            age=data["age"],
            gender=data["gender"],
            blood_type=data["blood_type"],
        )


# ---------------------------------------------------------------------------
# Coordinator state
# ---------------------------------------------------------------------------

class CoordinatorPhase(str, Enum):
    IDLE = "idle"
    COUNTING_DOWN = "counting_down"
    FIRING = "firing"
    COOLDOWN = "cooldown"


@dataclass(frozen=True)
class CoordinatorSnapshot:
    """Read-only view of the coordinator published to observers."""

    phase: CoordinatorPhase
    remaining: int | None
    alert_active: bool
    sms_status: str
    recording_status: str
    is_recording: bool
    armed_location: Location | None = None

    def to_dict(self) -> dict[str, Any]:
        loc = self.armed_location
        return {
            "phase": self.phase.value,
            "remaining": self.remaining,
            "alert_active": self.alert_active,
            "sms_status": self.sms_status,
            "recording_status": self.recording_status,
            "is_recording": self.is_recording,
            "armed_location": (
                {"latitude": loc.latitude, "longitude": loc.longitude} if loc else None
            ),
        }
