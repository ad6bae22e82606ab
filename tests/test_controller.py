"""Tests for the Qt controller and tickers.

Covers: ticker subscription lifecycle, snapshot/completion signals,
cancellation on pause/reset/change_mode, stale-pulse rejection, and the
QTimer-backed ticker.
"""

import pytest

from pomocycle.timer.controller import TimerController
from pomocycle.timer.engine import IntervalKind, RunState
from pomocycle.timer.ticker import QtTicker, TickSubscription, TICK_INTERVAL_MS

from helpers import FailingSink, SignalCollector


# ═══════════════════════════════════════════════════════════════════════════
#  SUBSCRIPTIONS
# ═══════════════════════════════════════════════════════════════════════════


class TestTickSubscription:

    def test_deliver_calls_back(self):
        calls = []
        sub = TickSubscription(lambda: calls.append(1), lambda: None)
        assert sub.deliver() is True
        assert calls == [1]

    def test_cancelled_drops_pulses(self):
        calls = []
        sub = TickSubscription(lambda: calls.append(1), lambda: None)
        sub.cancel()
        assert sub.deliver() is False
        assert calls == []

    def test_cancel_is_idempotent(self):
        cancels = []
        sub = TickSubscription(lambda: None, lambda: cancels.append(1))
        sub.cancel()
        sub.cancel()
        assert cancels == [1]
        assert sub.cancelled


# ═══════════════════════════════════════════════════════════════════════════
#  CONTROLLER
# ═══════════════════════════════════════════════════════════════════════════


class TestControllerCommands:

    def test_initial_snapshot(self, controller):
        snap = controller.snapshot
        assert snap.mode is IntervalKind.WORK
        assert snap.state is RunState.IDLE
        assert snap.time_left == 60
        assert not controller.ticking

    def test_start_subscribes_ticker(self, controller, ticker):
        controller.start()
        assert controller.ticking
        assert ticker.active
        assert len(ticker.subscriptions) == 1

    def test_start_twice_keeps_one_subscription(self, controller, ticker):
        controller.start()
        controller.start()
        assert len(ticker.subscriptions) == 1

    def test_pulse_advances_machine(self, controller, ticker):
        controller.start()
        ticker.pulse(3)
        assert controller.snapshot.time_left == 57

    def test_every_command_publishes_snapshot(self, controller, ticker):
        c = SignalCollector()
        controller.snapshot_changed.connect(c)

        controller.start()
        ticker.pulse()
        controller.pause()
        controller.reset()
        controller.change_mode(IntervalKind.SHORT_BREAK)

        assert len(c) == 5
        assert c.last == controller.snapshot
        assert c[1].time_left == 59

    @pytest.mark.parametrize("command", ["pause", "reset", "change_mode"])
    def test_commands_cancel_ticker(self, controller, ticker, command):
        controller.start()
        if command == "change_mode":
            controller.change_mode(IntervalKind.LONG_BREAK)
        else:
            getattr(controller, command)()
        assert not controller.ticking
        assert not ticker.active
        assert ticker.pulse() == 0

    def test_pause_then_start_resubscribes(self, controller, ticker):
        controller.start()
        ticker.pulse(5)
        controller.pause()
        paused = controller.snapshot
        controller.start()
        assert controller.snapshot.time_left == paused.time_left
        assert len(ticker.subscriptions) == 2
        ticker.pulse()
        assert controller.snapshot.time_left == paused.time_left - 1

    def test_toggle(self, controller):
        controller.toggle()
        assert controller.snapshot.state is RunState.RUNNING
        controller.toggle()
        assert controller.snapshot.state is RunState.PAUSED
        controller.toggle()
        assert controller.snapshot.state is RunState.RUNNING


class TestControllerCompletion:

    def test_completion_stops_ticker_and_emits(self, controller, ticker, sink):
        done = SignalCollector()
        controller.interval_completed.connect(done)

        controller.start()
        accepted = ticker.pulse(100)

        assert accepted == 60
        assert not controller.ticking
        assert controller.snapshot.mode is IntervalKind.SHORT_BREAK
        assert controller.snapshot.state is RunState.IDLE
        assert len(done) == 1
        assert done.last.completed is IntervalKind.WORK
        assert sink.plays == 1

    def test_no_completion_signal_for_plain_ticks(self, controller, ticker):
        done = SignalCollector()
        controller.interval_completed.connect(done)
        controller.start()
        ticker.pulse(10)
        assert len(done) == 0

    def test_next_interval_waits_for_start(self, controller, ticker):
        controller.start()
        ticker.pulse(60)
        before = controller.snapshot
        assert ticker.pulse(5) == 0
        assert controller.snapshot == before
        controller.start()
        ticker.pulse()
        assert controller.snapshot.time_left == before.time_left - 1

    def test_failing_sink_still_emits_completion(self, qapp, ticker, short_config):
        ctrl = TimerController(None, config=short_config, sink=FailingSink(), ticker=ticker)
        done = SignalCollector()
        ctrl.interval_completed.connect(done)
        ctrl.start()
        ticker.pulse(60)
        assert len(done) == 1
        assert ctrl.snapshot.completed_work_count == 1


class TestStalePulses:

    def test_stale_callback_after_pause_is_rejected(self, controller, ticker):
        controller.start()
        ticker.pulse(2)
        controller.pause()
        before = controller.snapshot
        ticker.fire_raw(0)
        assert controller.snapshot == before

    def test_stale_callback_after_restart_is_rejected(self, controller, ticker):
        controller.start()
        controller.pause()
        controller.start()  # second subscription now live
        before = controller.snapshot
        ticker.fire_raw(0)  # late pulse from the first one
        assert controller.snapshot == before
        ticker.fire_raw(1)
        assert controller.snapshot.time_left == before.time_left - 1


# ═══════════════════════════════════════════════════════════════════════════
#  QT TICKER
# ═══════════════════════════════════════════════════════════════════════════


class TestQtTicker:

    def test_default_interval(self, qapp):
        t = QtTicker()
        assert t._qt_timer.interval() == TICK_INTERVAL_MS == 1000

    def test_subscribe_starts_and_cancel_stops(self, qapp):
        t = QtTicker()
        sub = t.subscribe(lambda: None)
        assert t.active
        assert t._qt_timer.isActive()
        sub.cancel()
        assert not t.active
        assert not t._qt_timer.isActive()

    def test_resubscribe_cancels_previous(self, qapp):
        t = QtTicker()
        first = t.subscribe(lambda: None)
        second = t.subscribe(lambda: None)
        assert first.cancelled
        assert not second.cancelled
        assert t._qt_timer.isActive()

    def test_timeout_routes_to_live_subscriber(self, qapp):
        calls = []
        t = QtTicker()
        t.subscribe(lambda: calls.append(1))
        t._on_timeout()
        t._on_timeout()
        assert calls == [1, 1]

    def test_timeout_after_cancel_is_dropped(self, qapp):
        calls = []
        t = QtTicker()
        sub = t.subscribe(lambda: calls.append(1))
        sub.cancel()
        t._on_timeout()
        assert calls == []

    def test_real_timer_pulses(self, qapp, qtbot_wait):
        calls = []
        t = QtTicker(interval_ms=10)
        t.subscribe(lambda: calls.append(1))
        qtbot_wait(lambda: len(calls) >= 2, timeout_ms=2000)
        assert len(calls) >= 2

    def test_controller_with_real_ticker(self, qapp, short_config, qtbot_wait):
        ctrl = TimerController(
            None, config=short_config, ticker=QtTicker(interval_ms=1),
        )
        ctrl.start()
        qtbot_wait(lambda: ctrl.snapshot.state is RunState.IDLE, timeout_ms=5000)
        assert ctrl.snapshot.mode is IntervalKind.SHORT_BREAK
        assert not ctrl.ticking


@pytest.fixture
def qtbot_wait(qapp):
    """Spin the Qt event loop until *predicate* holds or time runs out."""
    from PyQt6.QtCore import QElapsedTimer

    def wait(predicate, timeout_ms=1000):
        clock = QElapsedTimer()
        clock.start()
        while not predicate() and clock.elapsed() < timeout_ms:
            qapp.processEvents()
        return predicate()

    return wait
