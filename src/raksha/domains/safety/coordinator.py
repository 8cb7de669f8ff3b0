"""Emergency alert coordinator: countdown, fire and cooldown.

State machine::

    Idle --arm--> CountingDown(N) --tick--> ... CountingDown(0) --> Firing
    CountingDown(n>0) --cancel--> Idle
    Firing --> Cooldown --(cooldown delay)--> Idle

All public methods and every scheduled callback must run on the single
thread of control that owns the scheduler (the asyncio loop for the MCP
server, the test body for the manual scheduler). Every scheduled callback
carries the generation it was scheduled under and is ignored once the
coordinator has moved on, so a tick that was already queued when
``cancel()`` ran has no effect.

No public method raises. Collaborator failures during the fire sequence
are logged and the sequence continues.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from raksha.core.scheduling.scheduler import ScheduledHandle, Scheduler
from raksha.domains.safety.composer import compose_alert
from raksha.domains.safety.connectors import AttentionCue, NotificationChannel
from raksha.domains.safety.contacts import ContactStore
from raksha.domains.safety.history import HistoryLog
from raksha.domains.safety.models import (
    CoordinatorPhase,
    CoordinatorSnapshot,
    EmergencyContact,
    EmergencyEvent,
    Location,
)
from raksha.domains.safety.recording import RecordingController

logger = logging.getLogger(__name__)

COUNTDOWN_SECONDS = 30
COOLDOWN_SECONDS = 3.0
TICK_SECONDS = 1.0
SMS_STATUS_RESET_SECONDS = 5.0

SMS_READY = "Ready"
SMS_NO_CONTACTS = "No contacts configured"

Observer = Callable[[CoordinatorSnapshot], None]


def _local_now() -> datetime:
    return datetime.now(timezone.utc).astimezone()


class EmergencyCoordinator:
    """Orchestrates the countdown -> fire -> reset protocol.

    Usage::

        coordinator = EmergencyCoordinator(contacts, history, recorder, channel, scheduler)
        unsubscribe = coordinator.subscribe(print)
        coordinator.arm(Location(12.97, 77.59))
        coordinator.cancel()
    """

    def __init__(
        self,
        contacts: ContactStore,
        history: HistoryLog,
        recorder: RecordingController,
        channel: NotificationChannel,
        scheduler: Scheduler,
        *,
        attention: AttentionCue | None = None,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self._contacts = contacts
        self._history = history
        self._recorder = recorder
        self._channel = channel
        self._scheduler = scheduler
        self._attention = attention
        self._clock = clock

        self._phase = CoordinatorPhase.IDLE
        self._remaining = COUNTDOWN_SECONDS
        self._alert_active = False
        self._armed_location: Location | None = None
        self._sms_status = SMS_READY

        self._generation = 0
        self._tick_handle: ScheduledHandle | None = None
        self._cooldown_handle: ScheduledHandle | None = None
        self._sms_reset_handle: ScheduledHandle | None = None

        self._observers: list[Observer] = []
        self._recorder.on_change = self._publish

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def phase(self) -> CoordinatorPhase:
        return self._phase

    @property
    def countdown_value(self) -> int:
        """Seconds shown on the countdown dial; the nominal length when not counting."""
        if self._phase is CoordinatorPhase.COUNTING_DOWN:
            return self._remaining
        return COUNTDOWN_SECONDS

    @property
    def snapshot(self) -> CoordinatorSnapshot:
        counting = self._phase is CoordinatorPhase.COUNTING_DOWN
        return CoordinatorSnapshot(
            phase=self._phase,
            remaining=self._remaining if counting else None,
            alert_active=self._alert_active,
            sms_status=self._sms_status,
            recording_status=self._recorder.status,
            is_recording=self._recorder.is_recording,
            armed_location=self._armed_location if counting else None,
        )

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer`` for snapshots; returns an unsubscribe function."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def _publish(self) -> None:
        snapshot = self.snapshot
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception:
                logger.exception("Coordinator observer %r failed", observer)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def arm(self, location: Location | None) -> bool:
        """Start the countdown. No-op unless idle.

        ``location`` is captured now and used when the alert fires.
        """
        if self._phase is not CoordinatorPhase.IDLE:
            logger.debug("arm() ignored in phase %s", self._phase.value)
            return False

        generation = self._generation + 1
        try:
            tick_handle = self._scheduler.call_repeating(
                TICK_SECONDS, lambda: self._on_tick(generation)
            )
        except Exception:
            logger.exception("Could not schedule SOS countdown, staying idle")
            return False

        self._generation = generation
        self._tick_handle = tick_handle
        self._armed_location = location
        self._remaining = COUNTDOWN_SECONDS
        self._phase = CoordinatorPhase.COUNTING_DOWN
        self._signal_attention()
        logger.info("SOS armed: firing in %d seconds", COUNTDOWN_SECONDS)
        self._publish()
        return True

    def cancel(self) -> bool:
        """Abort a running countdown. No-op unless counting down."""
        if self._phase is not CoordinatorPhase.COUNTING_DOWN:
            return False
        self._teardown_countdown()
        self._armed_location = None
        self._remaining = COUNTDOWN_SECONDS
        self._phase = CoordinatorPhase.IDLE
        logger.info("SOS countdown cancelled")
        self._publish()
        return True

    def trigger_now(self, location: Location | None) -> bool:
        """Fire immediately without a countdown.

        Allowed while idle or counting down (the countdown is torn down
        first); ignored while an alert is already firing or cooling down.
        """
        if self._phase in (CoordinatorPhase.FIRING, CoordinatorPhase.COOLDOWN):
            logger.debug("trigger_now() ignored in phase %s", self._phase.value)
            return False
        if self._phase is CoordinatorPhase.COUNTING_DOWN:
            self._teardown_countdown()
        self._signal_attention()
        logger.info("SOS triggered directly")
        self._perform_fire_sequence(location)
        return True

    def stop_recording(self) -> bool:
        return self._recorder.stop()

    def shutdown(self) -> None:
        """Cancel every scheduled task and finalize any running recording."""
        self._generation += 1
        for handle in (self._tick_handle, self._cooldown_handle, self._sms_reset_handle):
            if handle is not None:
                handle.cancel()
        self._tick_handle = self._cooldown_handle = self._sms_reset_handle = None
        self._recorder.stop()
        self._recorder.cancel_pending()
        self._phase = CoordinatorPhase.IDLE
        self._alert_active = False
        self._remaining = COUNTDOWN_SECONDS
        self._armed_location = None

    # ------------------------------------------------------------------
    # Scheduled callbacks
    # ------------------------------------------------------------------

    def _on_tick(self, generation: int) -> None:
        if generation != self._generation or self._phase is not CoordinatorPhase.COUNTING_DOWN:
            return
        if self._remaining > 0:
            self._remaining -= 1
            logger.debug("SOS countdown: %d", self._remaining)
            self._publish()
        # An observer may have cancelled during the publish above.
        if generation != self._generation or self._phase is not CoordinatorPhase.COUNTING_DOWN:
            return
        if self._remaining == 0:
            location = self._armed_location
            self._teardown_countdown()
            self._perform_fire_sequence(location)

    def _end_cooldown(self, generation: int) -> None:
        if generation != self._generation or self._phase is not CoordinatorPhase.COOLDOWN:
            return
        self._cooldown_handle = None
        self._phase = CoordinatorPhase.IDLE
        self._alert_active = False
        self._remaining = COUNTDOWN_SECONDS
        logger.info("SOS cooldown finished")
        self._publish()

    def _reset_sms_status(self) -> None:
        self._sms_reset_handle = None
        self._sms_status = SMS_READY
        self._publish()

    # ------------------------------------------------------------------
    # Fire sequence
    # ------------------------------------------------------------------

    def _perform_fire_sequence(self, location: Location | None) -> None:
        """Compose, fan out, record audio, log. Single path for every fire."""
        self._phase = CoordinatorPhase.FIRING
        self._alert_active = True
        self._armed_location = None
        self._publish()

        now = self._clock()
        body = compose_alert(location, now)

        contacts = self._contacts.list()
        delivered = self._fan_out(contacts, body)
        self._set_sms_status(contacts)

        if not self._recorder.is_recording:
            try:
                self._recorder.start()
            except Exception:
                logger.exception("Recording controller failed to start")

        event = EmergencyEvent.create(now, location, contacts_notified=len(contacts))
        try:
            self._history.record(event)
        except Exception:
            logger.exception("Failed to record emergency event %s", event.id)

        logger.warning(
            "SOS alert fired: %d contact(s), %d handed to channel, location=%s",
            len(contacts),
            delivered,
            "yes" if location is not None else "no",
        )

        self._generation += 1
        generation = self._generation
        try:
            self._cooldown_handle = self._scheduler.call_later(
                COOLDOWN_SECONDS, lambda: self._end_cooldown(generation)
            )
        except Exception:
            logger.exception("Could not schedule SOS cooldown, returning to idle")
            self._cooldown_handle = None
            self._phase = CoordinatorPhase.IDLE
            self._alert_active = False
            self._remaining = COUNTDOWN_SECONDS
            self._publish()
            return
        self._phase = CoordinatorPhase.COOLDOWN
        self._publish()

    def _fan_out(self, contacts: tuple[EmergencyContact, ...], body: str) -> int:
        delivered = 0
        for contact in contacts:
            try:
                if self._channel.dispatch(contact.phone_number, body):
                    delivered += 1
                else:
                    logger.warning("Channel refused message for contact %s", contact.id)
            except Exception as exc:
                logger.warning("Dispatch to contact %s failed: %s", contact.id, exc)
        return delivered

    def _set_sms_status(self, contacts: tuple[EmergencyContact, ...]) -> None:
        if self._sms_reset_handle is not None:
            self._sms_reset_handle.cancel()
            self._sms_reset_handle = None
        if not contacts:
            self._sms_status = SMS_NO_CONTACTS
            return
        self._sms_status = f"SMS sent to {len(contacts)} contact(s)"
        try:
            self._sms_reset_handle = self._scheduler.call_later(
                SMS_STATUS_RESET_SECONDS, self._reset_sms_status
            )
        except Exception:
            logger.exception("Could not schedule SMS status reset")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _teardown_countdown(self) -> None:
        self._generation += 1
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _signal_attention(self) -> None:
        if self._attention is None:
            return
        try:
            self._attention.signal()
        except Exception as exc:
            logger.warning("Attention cue failed: %s", exc)
