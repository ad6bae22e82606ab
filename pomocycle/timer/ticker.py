"""One-pulse-per-second sources for the timer controller."""

from __future__ import annotations

from typing import Callable, Protocol

from PyQt6.QtCore import QObject, QTimer


TICK_INTERVAL_MS = 1000


class TickSubscription:
    """Handle for a live pulse stream.  ``cancel()`` is idempotent."""

    def __init__(self, callback: Callable[[], None], on_cancel: Callable[[], None]) -> None:
        self._callback = callback
        self._on_cancel = on_cancel
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._on_cancel()

    def deliver(self) -> bool:
        """Forward one pulse.  Returns False if it was dropped."""
        if self._cancelled:
            return False
        self._callback()
        return True


class Ticker(Protocol):
    @property
    def active(self) -> bool: ...

    def subscribe(self, callback: Callable[[], None]) -> TickSubscription: ...


class QtTicker(QObject):
    """QTimer-backed ticker.  At most one live subscription at a time;
    subscribing again cancels the previous one first.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._subscription: TickSubscription | None = None
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self._on_timeout)

    @property
    def active(self) -> bool:
        return self._subscription is not None and not self._subscription.cancelled

    def subscribe(self, callback: Callable[[], None]) -> TickSubscription:
        if self._subscription is not None:
            self._subscription.cancel()
        subscription = TickSubscription(callback, self._qt_timer.stop)
        self._subscription = subscription
        self._qt_timer.start()
        return subscription

    def _on_timeout(self) -> None:
        if self._subscription is None or not self._subscription.deliver():
            self._qt_timer.stop()
