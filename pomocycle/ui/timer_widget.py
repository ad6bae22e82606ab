"""Timer display widget.

Layout (top → bottom):
    - Mode selector row (Work / Short Break / Long Break)
    - Time readout + mode caption
    - Progress bar
    - Start/Pause + Reset
    - Session stats (configured durations, completed work count)

Everything is rendered from the controller's snapshots; the widget
never reads or writes session fields any other way.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QProgressBar,
)

from ..timer.controller import TimerController
from ..timer.display import (
    MODE_DISPLAY, MODE_LABELS, cycle_label, format_time, progress_fraction,
)
from ..timer.engine import IntervalKind, RunState, Session


PROGRESS_STEPS = 1000


class TimerWidget(QWidget):
    """The timer card."""

    def __init__(self, controller: TimerController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._controller = controller
        self._build_ui()
        self._connect_signals()
        self.render(controller.snapshot)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(12)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        # ── mode selector ────────────────────────────────────────────
        mode_row = QHBoxLayout()
        mode_row.setSpacing(8)
        self._mode_buttons: dict[IntervalKind, QPushButton] = {}
        for kind in IntervalKind:
            btn = QPushButton(MODE_LABELS[kind], self)
            btn.setCheckable(True)
            self._mode_buttons[kind] = btn
            mode_row.addWidget(btn)
        layout.addLayout(mode_row)

        # ── readout ──────────────────────────────────────────────────
        self._time_label = QLabel(self)
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        font = self._time_label.font()
        font.setPointSize(48)
        self._time_label.setFont(font)
        layout.addWidget(self._time_label)

        self._mode_caption = QLabel(self)
        self._mode_caption.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._mode_caption)

        self._progress = QProgressBar(self)
        self._progress.setRange(0, PROGRESS_STEPS)
        self._progress.setTextVisible(False)
        layout.addWidget(self._progress)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        self._start_pause_btn = QPushButton("Start", self)
        self._reset_btn = QPushButton("Reset", self)
        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

        # ── stats ────────────────────────────────────────────────────
        config = self._controller.config
        stats_row = QHBoxLayout()
        for kind in IntervalKind:
            minutes = config[kind] // 60
            label = QLabel(f"{MODE_LABELS[kind]}: {minutes}m", self)
            label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            stats_row.addWidget(label)
        layout.addLayout(stats_row)

        self._cycle_label = QLabel(self)
        self._cycle_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._cycle_label)

        self._completed_label = QLabel(self)
        self._completed_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._completed_label)

    def _connect_signals(self) -> None:
        for kind, btn in self._mode_buttons.items():
            btn.clicked.connect(lambda _checked=False, k=kind: self._controller.change_mode(k))
        self._start_pause_btn.clicked.connect(self._controller.toggle)
        self._reset_btn.clicked.connect(self._controller.reset)
        self._controller.snapshot_changed.connect(self.render)

    # ── rendering ─────────────────────────────────────────────────────────

    def render(self, snapshot: Session) -> None:
        for kind, btn in self._mode_buttons.items():
            btn.setChecked(kind is snapshot.mode)
        self._time_label.setText(format_time(snapshot.time_left))
        self._mode_caption.setText(MODE_DISPLAY[snapshot.mode])
        fraction = progress_fraction(snapshot, self._controller.config)
        self._progress.setValue(round(fraction * PROGRESS_STEPS))
        self._start_pause_btn.setText(
            "Pause" if snapshot.state is RunState.RUNNING else "Start"
        )
        self._cycle_label.setText(cycle_label(snapshot))
        self._completed_label.setText(
            f"Completed Pomodoros: {snapshot.completed_work_count}"
        )

    # ── read-back (tests / accessibility of state) ───────────────────────

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    @property
    def start_pause_text(self) -> str:
        return self._start_pause_btn.text()

    @property
    def completed_text(self) -> str:
        return self._completed_label.text()

    def mode_button(self, kind: IntervalKind) -> QPushButton:
        return self._mode_buttons[kind]
