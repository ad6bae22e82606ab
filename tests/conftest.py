"""Shared pytest fixtures for PomoCycle tests."""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtWidgets import QApplication

from pomocycle.timer.controller import TimerController
from pomocycle.timer.engine import SessionStateMachine, TimerConfig

from helpers import FakeTicker, RecordingSink


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def machine(sink):
    """Fresh state machine with default durations and a recording sink."""
    return SessionStateMachine(TimerConfig(), sink)


@pytest.fixture
def short_config():
    """Tiny durations so whole cycles can be ticked through."""
    return TimerConfig.from_minutes(work=1, short_break=1, long_break=2)


@pytest.fixture
def ticker():
    return FakeTicker()


@pytest.fixture
def controller(qapp, sink, ticker, short_config):
    """Controller driven by a hand-cranked ticker (no real clock)."""
    return TimerController(None, config=short_config, sink=sink, ticker=ticker)
