"""Timer package."""

from .engine import (
    SessionStateMachine,
    Session,
    CompletionEvent,
    IntervalKind,
    RunState,
    TimerConfig,
    NotificationSink,
    SilentSink,
    advance,
    DEFAULT_DURATIONS,
    ROUNDS_PER_CYCLE,
)

__all__ = [
    "SessionStateMachine",
    "Session",
    "CompletionEvent",
    "IntervalKind",
    "RunState",
    "TimerConfig",
    "NotificationSink",
    "SilentSink",
    "advance",
    "DEFAULT_DURATIONS",
    "ROUNDS_PER_CYCLE",
]
