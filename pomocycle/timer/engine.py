"""Session state machine for PomoCycle.

Interval kinds
--------------
WORK          Focused-work countdown.
SHORT_BREAK   Rest between work intervals.
LONG_BREAK    Rest after every fourth work interval.

Run states
----------
IDLE          Not counting down; waiting for ``start``.
RUNNING       Counting down, one ``tick`` per second.
PAUSED        Frozen mid-interval; ``time_left`` preserved.

Transitions
-----------
IDLE | PAUSED → RUNNING                 (start)
RUNNING → PAUSED                        (pause)
Any → IDLE, full duration of mode       (reset)
Any → IDLE, mode := m                   (change_mode)
RUNNING, time_left > 1 → RUNNING        (tick: time_left -= 1)
RUNNING, time_left ≤ 1 → IDLE + next    (tick: completion policy)

The machine holds data only.  The ticker and the completion cue are
injected, so the whole thing runs deterministically in tests without a
clock or a sound card.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Mapping, Protocol


logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class IntervalKind(Enum):
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_DURATIONS: dict[IntervalKind, int] = {
    IntervalKind.WORK: 25 * 60,
    IntervalKind.SHORT_BREAK: 5 * 60,
    IntervalKind.LONG_BREAK: 15 * 60,
}

ROUNDS_PER_CYCLE = 4


# ── configuration ─────────────────────────────────────────────────────────


class TimerConfig(Mapping[IntervalKind, int]):
    """Immutable interval kind → duration (seconds) mapping."""

    __slots__ = ("_durations",)

    def __init__(self, durations: Mapping[IntervalKind, int] | None = None) -> None:
        merged = dict(DEFAULT_DURATIONS)
        if durations is not None:
            merged.update(durations)
        for kind, seconds in merged.items():
            if not isinstance(kind, IntervalKind):
                raise ValueError(f"unknown interval kind: {kind!r}")
            if isinstance(seconds, bool) or not isinstance(seconds, int):
                raise ValueError(f"{kind.value} duration must be an int, got {seconds!r}")
            if seconds <= 0:
                raise ValueError(f"{kind.value} duration must be positive, got {seconds}")
        self._durations = merged

    @classmethod
    def from_minutes(
        cls,
        *,
        work: int = 25,
        short_break: int = 5,
        long_break: int = 15,
    ) -> TimerConfig:
        return cls({
            IntervalKind.WORK: work * 60,
            IntervalKind.SHORT_BREAK: short_break * 60,
            IntervalKind.LONG_BREAK: long_break * 60,
        })

    def __getitem__(self, kind: IntervalKind) -> int:
        return self._durations[kind]

    def __iter__(self) -> Iterator[IntervalKind]:
        return iter(self._durations)

    def __len__(self) -> int:
        return len(self._durations)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TimerConfig):
            return self._durations == other._durations
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(sorted((k.value, v) for k, v in self._durations.items())))

    def __repr__(self) -> str:
        body = ", ".join(f"{k.value}={v}" for k, v in self._durations.items())
        return f"TimerConfig({body})"


# ── snapshot / events ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Session:
    """Read-only view of the machine, handed to observers."""

    mode: IntervalKind
    state: RunState
    time_left: int
    cycle_position: int
    completed_work_count: int

    @classmethod
    def initial(cls, config: TimerConfig) -> Session:
        return cls(
            mode=IntervalKind.WORK,
            state=RunState.IDLE,
            time_left=config[IntervalKind.WORK],
            cycle_position=1,
            completed_work_count=0,
        )

    @property
    def is_running(self) -> bool:
        return self.state is RunState.RUNNING


@dataclass(frozen=True)
class CompletionEvent:
    """Emitted by the tick that finishes an interval."""

    completed: IntervalKind
    next_mode: IntervalKind
    completed_work_count: int
    cycle_position: int


class NotificationSink(Protocol):
    def play(self) -> None: ...


class SilentSink:
    """Sink that does nothing.  Used when sound is unavailable."""

    def play(self) -> None:
        return None


# ── transition ────────────────────────────────────────────────────────────


def advance(
    session: Session, config: TimerConfig
) -> tuple[Session, CompletionEvent | None]:
    """One elapsed second.  Pure: returns the next session and, if an
    interval just finished, the matching completion event.

    The countdown never rests at zero: the second that would reach it
    lands directly on the next interval's full duration.
    """
    if session.state is not RunState.RUNNING:
        return session, None

    if session.time_left > 1:
        return replace(session, time_left=session.time_left - 1), None

    completed_work = session.completed_work_count
    cycle = session.cycle_position
    if session.mode is IntervalKind.WORK:
        completed_work += 1
        if cycle >= ROUNDS_PER_CYCLE:
            next_mode = IntervalKind.LONG_BREAK
            cycle = 1
        else:
            next_mode = IntervalKind.SHORT_BREAK
            cycle += 1
    else:
        next_mode = IntervalKind.WORK

    after = Session(
        mode=next_mode,
        state=RunState.IDLE,
        time_left=config[next_mode],
        cycle_position=cycle,
        completed_work_count=completed_work,
    )
    event = CompletionEvent(
        completed=session.mode,
        next_mode=next_mode,
        completed_work_count=completed_work,
        cycle_position=cycle,
    )
    return after, event


# ── machine ───────────────────────────────────────────────────────────────


class SessionStateMachine:
    """Owns the single live session.

    Every command is total: calling it from a state where it makes no
    sense leaves the session untouched.  Each command returns the
    resulting snapshot.
    """

    def __init__(
        self,
        config: TimerConfig | None = None,
        sink: NotificationSink | None = None,
    ) -> None:
        self._config = config if config is not None else TimerConfig()
        self._sink: NotificationSink = sink if sink is not None else SilentSink()
        self._session = Session.initial(self._config)
        self._last_completion: CompletionEvent | None = None

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def snapshot(self) -> Session:
        return self._session

    @property
    def config(self) -> TimerConfig:
        return self._config

    @property
    def last_completion(self) -> CompletionEvent | None:
        """The most recent completion, or None before the first one."""
        return self._last_completion

    # ══════════════════════════════════════════════════════════════════
    #  COMMANDS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> Session:
        """Begin or resume counting down.  No-op when already running."""
        if self._session.state is RunState.RUNNING:
            return self._session
        self._session = replace(self._session, state=RunState.RUNNING)
        return self._session

    def pause(self) -> Session:
        """Freeze the countdown, keeping ``time_left`` exactly."""
        if self._session.state is not RunState.RUNNING:
            return self._session
        self._session = replace(self._session, state=RunState.PAUSED)
        return self._session

    def reset(self) -> Session:
        """Back to IDLE with the full duration of the current mode."""
        self._session = replace(
            self._session,
            state=RunState.IDLE,
            time_left=self._config[self._session.mode],
        )
        return self._session

    def change_mode(self, mode: IntervalKind | str) -> Session:
        """Switch interval kind manually.

        The abandoned interval is not counted and the cycle position is
        left alone.
        """
        mode = IntervalKind(mode)
        self._session = replace(
            self._session,
            mode=mode,
            state=RunState.IDLE,
            time_left=self._config[mode],
        )
        return self._session

    def tick(self) -> Session:
        """Advance one second.  No-op unless RUNNING."""
        self._session, event = advance(self._session, self._config)
        if event is not None:
            self._last_completion = event
            logger.info(
                "%s interval complete; next %s (completed work: %d, cycle %d/%d)",
                event.completed.value,
                event.next_mode.value,
                event.completed_work_count,
                event.cycle_position,
                ROUNDS_PER_CYCLE,
            )
            self._notify()
        return self._session

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _notify(self) -> None:
        try:
            self._sink.play()
        except Exception:
            logger.warning("completion cue failed", exc_info=True)
