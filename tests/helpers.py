"""Shared test helpers for PomoCycle."""

from typing import Callable

from pomocycle.timer.engine import RunState, Session, SessionStateMachine
from pomocycle.timer.ticker import TickSubscription


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class RecordingSink:
    """Notification sink that counts plays."""

    def __init__(self):
        self.plays = 0

    def play(self) -> None:
        self.plays += 1


class FailingSink:
    """Notification sink whose playback always blows up."""

    def __init__(self, exc: Exception | None = None):
        self.attempts = 0
        self._exc = exc or RuntimeError("audio device gone")

    def play(self) -> None:
        self.attempts += 1
        raise self._exc


class FakeTicker:
    """Hand-cranked ticker.

    ``pulse()`` delivers through the latest subscription, honouring
    cancellation.  ``fire_raw(i)`` calls the i-th subscriber's callback
    directly, the way a late, already-queued pulse would.
    """

    def __init__(self):
        self.subscriptions: list[TickSubscription] = []
        self.callbacks: list[Callable[[], None]] = []
        self.cancels = 0

    @property
    def active(self) -> bool:
        return bool(self.subscriptions) and not self.subscriptions[-1].cancelled

    def subscribe(self, callback):
        if self.subscriptions:
            self.subscriptions[-1].cancel()
        sub = TickSubscription(callback, self._on_cancel)
        self.subscriptions.append(sub)
        self.callbacks.append(callback)
        return sub

    def pulse(self, times: int = 1) -> int:
        """Deliver up to *times* pulses; returns how many were accepted."""
        delivered = 0
        for _ in range(times):
            if not self.subscriptions or not self.subscriptions[-1].deliver():
                break
            delivered += 1
        return delivered

    def fire_raw(self, index: int) -> None:
        self.callbacks[index]()

    def _on_cancel(self):
        self.cancels += 1


def run_to_completion(machine: SessionStateMachine) -> Session:
    """Start the current interval and tick until it finishes."""
    machine.start()
    snapshot = machine.snapshot
    while snapshot.state is RunState.RUNNING:
        snapshot = machine.tick()
    return snapshot
