"""Qt-facing owner of the session state machine.

The controller is the only writer of the session.  Commands and ticker
pulses both land here on the Qt event loop, so they are processed one at
a time and no locking is needed.

Signals
-------
snapshot_changed(snapshot: Session)
    Emitted after every command and every accepted pulse.
interval_completed(event: CompletionEvent)
    Emitted when a pulse finishes an interval.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal

from .engine import (
    CompletionEvent,
    IntervalKind,
    NotificationSink,
    RunState,
    Session,
    SessionStateMachine,
    TimerConfig,
)
from .ticker import QtTicker, Ticker, TickSubscription


logger = logging.getLogger(__name__)


class TimerController(QObject):

    snapshot_changed = pyqtSignal(object)
    interval_completed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        config: TimerConfig | None = None,
        sink: NotificationSink | None = None,
        ticker: Ticker | None = None,
    ) -> None:
        super().__init__(parent)
        self._machine = SessionStateMachine(config, sink)
        self._ticker: Ticker = ticker if ticker is not None else QtTicker(self)
        self._subscription: TickSubscription | None = None

    # ── properties ────────────────────────────────────────────────────

    @property
    def snapshot(self) -> Session:
        return self._machine.snapshot

    @property
    def config(self) -> TimerConfig:
        return self._machine.config

    @property
    def ticking(self) -> bool:
        return self._subscription is not None and not self._subscription.cancelled

    # ── commands ──────────────────────────────────────────────────────

    def start(self) -> None:
        snapshot = self._machine.start()
        if snapshot.state is RunState.RUNNING and not self.ticking:
            self._subscribe()
        self._publish(snapshot)

    def pause(self) -> None:
        self._cancel_ticker()
        self._publish(self._machine.pause())

    def reset(self) -> None:
        self._cancel_ticker()
        self._publish(self._machine.reset())

    def change_mode(self, mode: IntervalKind | str) -> None:
        self._cancel_ticker()
        self._publish(self._machine.change_mode(mode))

    def toggle(self) -> None:
        """Start/pause button: pause when running, start otherwise."""
        if self._machine.snapshot.state is RunState.RUNNING:
            self.pause()
        else:
            self.start()

    # ── ticker plumbing ───────────────────────────────────────────────

    def _subscribe(self) -> None:
        subscription: TickSubscription | None = None

        def on_pulse() -> None:
            # Only the current subscription may advance the machine.
            if subscription is not self._subscription:
                logger.debug("dropped pulse from a cancelled subscription")
                return
            self._on_pulse()

        subscription = self._ticker.subscribe(on_pulse)
        self._subscription = subscription

    def _cancel_ticker(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    def _on_pulse(self) -> None:
        before = self._machine.last_completion
        snapshot = self._machine.tick()
        if snapshot.state is not RunState.RUNNING:
            self._cancel_ticker()
        self._publish(snapshot)

        event = self._machine.last_completion
        if event is not None and event is not before:
            self.interval_completed.emit(event)

    def _publish(self, snapshot: Session) -> None:
        self.snapshot_changed.emit(snapshot)
