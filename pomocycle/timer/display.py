"""Formatting helpers shared by the presentation layer."""

from __future__ import annotations

from .engine import IntervalKind, ROUNDS_PER_CYCLE, Session, TimerConfig


MODE_LABELS: dict[IntervalKind, str] = {
    IntervalKind.WORK:        "Work",
    IntervalKind.SHORT_BREAK: "Short Break",
    IntervalKind.LONG_BREAK:  "Long Break",
}

MODE_DISPLAY: dict[IntervalKind, str] = {
    IntervalKind.WORK:        "FOCUS TIME",
    IntervalKind.SHORT_BREAK: "SHORT BREAK",
    IntervalKind.LONG_BREAK:  "LONG BREAK",
}


def format_time(seconds: int) -> str:
    """``MM:SS``.  Minutes are not wrapped into hours."""
    seconds = max(0, int(seconds))
    mins, secs = divmod(seconds, 60)
    return f"{mins:02d}:{secs:02d}"


def progress_fraction(snapshot: Session, config: TimerConfig) -> float:
    """0.0 → 1.0 progress through the current interval."""
    total = config[snapshot.mode]
    if total <= 0:
        return 0.0
    elapsed = total - snapshot.time_left
    return max(0.0, min(1.0, elapsed / total))


def cycle_label(snapshot: Session) -> str:
    return f"Cycle {snapshot.cycle_position} of {ROUNDS_PER_CYCLE}"
