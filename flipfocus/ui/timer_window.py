"""Main window: timer controls on top, session history below.

Deliberately unstyled.  Layout (top → bottom):
    - Active preset label
    - Task title input
    - MM:SS clock
    - Start/Pause + Reset
    - Save to Google Calendar
    - Preset buttons
    - History list with Add to Cal / Delete
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QLineEdit, QListWidget, QListWidgetItem,
)

from ..app import FocusController
from ..history.records import SessionRecord
from ..timer.engine import TimerPhase, format_clock


class TimerWindow(QWidget):
    def __init__(self, controller: FocusController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._controller = controller
        self._engine = controller.engine
        self._history = controller.history
        self.setWindowTitle("FlipFocus")
        self._build_ui()
        self._connect_signals()
        self._refresh_display(self._engine.remaining)
        self._refresh_controls()
        self._refresh_history()

    # ── build ─────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)

        self._preset_label = QLabel(self._engine.active_preset.label, self)
        self._preset_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._preset_label)

        self._title_input = QLineEdit(self)
        self._title_input.setPlaceholderText("What are you working on?")
        self._title_input.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._title_input)

        self._clock_label = QLabel(self)
        self._clock_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._clock_label)

        btn_row = QHBoxLayout()
        self._start_pause_btn = QPushButton("Start", self)
        self._reset_btn = QPushButton("Reset", self)
        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

        self._calendar_btn = QPushButton("Save to Google Calendar", self)
        layout.addWidget(self._calendar_btn)

        preset_row = QHBoxLayout()
        self._preset_buttons: dict[str, QPushButton] = {}
        for preset in self._engine.catalog:
            btn = QPushButton(f"{preset.minutes} min", self)
            btn.setCheckable(True)
            btn.clicked.connect(
                lambda _checked=False, label=preset.label: self._on_preset_clicked(label)
            )
            preset_row.addWidget(btn)
            self._preset_buttons[preset.label] = btn
        layout.addLayout(preset_row)

        self._history_header = QLabel(self)
        layout.addWidget(self._history_header)

        self._history_list = QListWidget(self)
        layout.addWidget(self._history_list)

        history_row = QHBoxLayout()
        self._add_to_cal_btn = QPushButton("Add to Cal", self)
        self._delete_btn = QPushButton("Delete", self)
        history_row.addWidget(self._add_to_cal_btn)
        history_row.addWidget(self._delete_btn)
        layout.addLayout(history_row)

        self._status_label = QLabel(self)
        layout.addWidget(self._status_label)

    def _connect_signals(self) -> None:
        self._title_input.textChanged.connect(self._on_title_changed)
        self._start_pause_btn.clicked.connect(self._controller.toggle)
        self._reset_btn.clicked.connect(self._controller.reset)
        self._calendar_btn.clicked.connect(self._controller.save_current_to_calendar)
        self._add_to_cal_btn.clicked.connect(self._on_add_selected_to_calendar)
        self._delete_btn.clicked.connect(self._on_delete_selected)

        self._engine.remaining_changed.connect(self._refresh_display)
        self._engine.phase_changed.connect(lambda _phase: self._refresh_controls())
        self._engine.start_rejected.connect(
            lambda: self._status_label.setText("Enter a session title first.")
        )
        self._history.changed.connect(self._refresh_history)
        self._history.persistence_failed.connect(self._status_label.setText)

    # ── slots ─────────────────────────────────────────────────────────

    def _on_preset_clicked(self, label: str) -> None:
        self._controller.select_preset(label)
        self._refresh_controls()

    def _on_title_changed(self, text: str) -> None:
        self._controller.set_title(text)
        self._status_label.clear()
        self._refresh_controls()

    def _selected_record(self) -> SessionRecord | None:
        item = self._history_list.currentItem()
        if item is None:
            return None
        return self._history.get(item.data(Qt.ItemDataRole.UserRole))

    def _on_add_selected_to_calendar(self) -> None:
        record = self._selected_record()
        if record is not None:
            self._controller.add_to_calendar(record)

    def _on_delete_selected(self) -> None:
        record = self._selected_record()
        if record is not None:
            self._controller.delete_session(record.id)

    # ── refresh ───────────────────────────────────────────────────────

    def _refresh_display(self, remaining: int) -> None:
        self._clock_label.setText(format_clock(remaining))

    def _refresh_controls(self) -> None:
        running = self._engine.phase == TimerPhase.RUNNING
        has_title = self._engine.can_start
        self._start_pause_btn.setText("Pause" if running else "Start")
        self._start_pause_btn.setEnabled(running or has_title)
        self._calendar_btn.setEnabled(has_title)
        active = self._engine.active_preset.label
        self._preset_label.setText(active)
        for label, btn in self._preset_buttons.items():
            btn.setChecked(label == active)

    def _refresh_history(self) -> None:
        self._history_list.clear()
        self._history_header.setText(f"History ({len(self._history)})")
        for record in self._history.recent_first():
            item = QListWidgetItem(
                f"{record.title}  ·  {record.type} · {record.duration_minutes} min · "
                f"{record.completed_at.strftime('%x %X')}"
            )
            item.setData(Qt.ItemDataRole.UserRole, record.id)
            self._history_list.addItem(item)
