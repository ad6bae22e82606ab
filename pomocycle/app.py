"""Main application window for PomoCycle."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QMainWindow

from .audio.sounds import SoundManager
from .settings import Settings, load_settings
from .timer.controller import TimerController
from .timer.display import MODE_LABELS, format_time
from .timer.engine import CompletionEvent, RunState, Session
from .ui.timer_widget import TimerWidget


class PomoCycleApp(QMainWindow):
    """Main application window."""

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("PomoCycle")
        self.setMinimumSize(420, 420)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings if settings is not None else load_settings()
        if self._settings.always_on_top:
            self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, True)

        # ── sound ─────────────────────────────────────────────────────
        self._sound_manager = SoundManager(parent=self)
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._sound_manager.set_enabled(self._settings.sound_enabled)

        # ── timer ─────────────────────────────────────────────────────
        self._controller = TimerController(
            self,
            config=self._settings.timer_config(),
            sink=self._sound_manager,
        )
        self._controller.snapshot_changed.connect(self._update_title)
        self._controller.interval_completed.connect(self._on_interval_completed)

        self._timer_widget = TimerWidget(self._controller, self)
        self.setCentralWidget(self._timer_widget)
        self._update_title(self._controller.snapshot)

    @property
    def controller(self) -> TimerController:
        return self._controller

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    def _update_title(self, snapshot: Session) -> None:
        if snapshot.state is RunState.IDLE:
            self.setWindowTitle("PomoCycle")
        else:
            self.setWindowTitle(
                f"{format_time(snapshot.time_left)} · {MODE_LABELS[snapshot.mode]}"
            )

    def _on_interval_completed(self, event: CompletionEvent) -> None:
        self.statusBar().showMessage(
            f"{MODE_LABELS[event.completed]} finished. "
            f"Next up: {MODE_LABELS[event.next_mode]}"
        )

    def closeEvent(self, event) -> None:  # noqa: N802
        self._controller.reset()
        super().closeEvent(event)
