"""Safety connectors — collaborator interfaces consumed by the coordinator."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class NotificationChannel(Protocol):
    """Outgoing message channel (SMS compose, push, test outbox...).

    ``True`` means the message was handed to the channel, not that it was
    delivered.
    """

    def dispatch(self, phone_number: str, body: str) -> bool:
        ...


@runtime_checkable
class CaptureHandle(Protocol):
    """An open audio-capture session."""

    def record(self) -> None:
        ...

    def stop(self) -> None:
        ...


@runtime_checkable
class CaptureDevice(Protocol):
    """Audio capture device.

    ``open_for_write`` raises ``OSError`` when the device or target file
    cannot be opened.
    """

    def open_for_write(self, path: str) -> CaptureHandle:
        ...


@runtime_checkable
class AttentionCue(Protocol):
    """Fire-and-forget haptic/attention signal."""

    def signal(self) -> None:
        ...
