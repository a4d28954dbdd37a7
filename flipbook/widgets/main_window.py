"""
Main Window

Toolbar with the editing tools, color picker, undo/redo, the frame
timeline controls, playback and export, around a single CanvasWidget.
"""

from pathlib import Path
from typing import Dict, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QColor, QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QButtonGroup, QColorDialog, QComboBox, QFileDialog, QHBoxLayout, QLabel,
    QMainWindow, QMessageBox, QPushButton, QVBoxLayout, QWidget
)

from ..config import Config
from ..core.animation_player import AnimationPlayer
from ..core.session import EditorSession
from ..core.tool_controller import EraserType, ToolMode
from ..events.event_bus import get_event_bus
from ..services.export_service import VideoExporter
from .canvas_widget import CanvasWidget


class MainWindow(QMainWindow):
    """Flipbook editor window."""

    def __init__(self, session: Optional[EditorSession] = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._session = session or EditorSession()
        self._event_bus = get_event_bus()

        self._canvas = CanvasWidget(self._session)
        self._player = AnimationPlayer(self._session, self._canvas.renderer, parent=self)
        self._exporter = VideoExporter(self._session, self._canvas.renderer, parent=self)
        self._tool_buttons: Dict[ToolMode, QPushButton] = {}

        self.setWindowTitle(f"{Config.APP_NAME} {Config.APP_VERSION}")
        self._create_widgets()
        self._create_layout()
        self._connect_signals()
        self._create_shortcuts()
        self._update_frame_ui()

    # ==================== Setup ====================

    def _create_widgets(self):
        self._tool_group = QButtonGroup(self)
        self._tool_group.setExclusive(True)
        for mode, label in ((ToolMode.DRAW, "Draw"), (ToolMode.MOVE, "Move"),
                            (ToolMode.ROTATE, "Rotate")):
            self._tool_buttons[mode] = self._make_tool_button(label)
        self._eraser_button = self._make_tool_button("Eraser")
        self._tool_buttons[ToolMode.DRAW].setChecked(True)

        self._eraser_select = QComboBox()
        self._eraser_select.addItem("Stroke", EraserType.STROKE)
        self._eraser_select.addItem("Area", EraserType.AREA)
        self._eraser_select.setVisible(False)

        self._color_button = QPushButton()
        self._color_button.setFixedWidth(36)
        self._color_button.setToolTip("Stroke color")
        self._update_color_button(self._session.tools.user_color)

        self._undo_button = QPushButton("Undo")
        self._redo_button = QPushButton("Redo")
        self._undo_button.setEnabled(False)
        self._redo_button.setEnabled(False)

        self._prev_button = QPushButton("◀ Prev")
        self._next_button = QPushButton("Next ▶")
        self._add_frame_button = QPushButton("+ Frame")
        self._duplicate_button = QPushButton("Duplicate")
        self._frame_label = QLabel()
        self._frame_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._frame_label.setMinimumWidth(60)

        self._play_button = QPushButton("▶ Play")
        self._onion_button = QPushButton()
        self._onion_button.setCheckable(True)
        self._onion_button.setChecked(self._session.onion_skin_enabled)
        self._update_onion_button()
        self._download_button = QPushButton("Download")

    def _make_tool_button(self, label: str) -> QPushButton:
        button = QPushButton(label)
        button.setCheckable(True)
        self._tool_group.addButton(button)
        return button

    def _create_layout(self):
        tools_row = QHBoxLayout()
        for button in self._tool_buttons.values():
            tools_row.addWidget(button)
        tools_row.addWidget(self._eraser_button)
        tools_row.addWidget(self._eraser_select)
        tools_row.addWidget(self._color_button)
        tools_row.addSpacing(12)
        tools_row.addWidget(self._undo_button)
        tools_row.addWidget(self._redo_button)
        tools_row.addStretch()

        frames_row = QHBoxLayout()
        frames_row.addWidget(self._prev_button)
        frames_row.addWidget(self._frame_label)
        frames_row.addWidget(self._next_button)
        frames_row.addWidget(self._add_frame_button)
        frames_row.addWidget(self._duplicate_button)
        frames_row.addSpacing(12)
        frames_row.addWidget(self._play_button)
        frames_row.addWidget(self._onion_button)
        frames_row.addStretch()
        frames_row.addWidget(self._download_button)

        layout = QVBoxLayout()
        layout.addLayout(tools_row)
        layout.addWidget(self._canvas, alignment=Qt.AlignmentFlag.AlignCenter)
        layout.addLayout(frames_row)

        central = QWidget()
        central.setLayout(layout)
        self.setCentralWidget(central)

    def _connect_signals(self):
        session = self._session

        for mode, button in self._tool_buttons.items():
            button.clicked.connect(lambda _checked, m=mode: self._select_tool(m))
        self._eraser_button.clicked.connect(lambda: self._select_eraser())
        self._eraser_select.currentIndexChanged.connect(lambda _index: self._select_eraser())
        self._color_button.clicked.connect(lambda: self._pick_color())

        self._undo_button.clicked.connect(lambda: session.undo())
        self._redo_button.clicked.connect(lambda: session.redo())
        session.history.undo_available_changed.connect(self._undo_button.setEnabled)
        session.history.redo_available_changed.connect(self._redo_button.setEnabled)

        self._prev_button.clicked.connect(lambda: session.prev_frame())
        self._next_button.clicked.connect(lambda: session.next_frame())
        self._add_frame_button.clicked.connect(lambda: session.insert_frame())
        self._duplicate_button.clicked.connect(lambda: session.duplicate_frame())
        self._play_button.clicked.connect(lambda: self._player.toggle())
        self._onion_button.clicked.connect(lambda: self._toggle_onion())
        self._download_button.clicked.connect(lambda: self._export_video())

        session.frame_changed.connect(lambda _i, _n: self._update_frame_ui())
        session.color_changed.connect(self._update_color_button)
        self._player.playback_state_changed.connect(self._on_playback_changed)
        self._player.frame_shown.connect(lambda _i: self._canvas.update())

        self._event_bus.export_started.connect(self._on_export_started)
        self._event_bus.export_finished.connect(self._on_export_finished)
        self._event_bus.error_occurred.connect(self._show_error)

    def _create_shortcuts(self):
        undo = QAction(self)
        undo.setShortcut(QKeySequence.StandardKey.Undo)
        undo.triggered.connect(lambda: self._session.undo())
        self.addAction(undo)

        for sequence in ("Ctrl+Y", "Ctrl+Shift+Z"):
            shortcut = QShortcut(QKeySequence(sequence), self)
            shortcut.activated.connect(self._session.redo)

        play = QShortcut(QKeySequence(Qt.Key.Key_Space), self)
        play.activated.connect(self._player.toggle)

    # ==================== Tools ====================

    def _select_tool(self, mode: ToolMode):
        self._eraser_select.setVisible(False)
        self._session.tools.set_mode(mode)

    def _select_eraser(self):
        self._eraser_button.setChecked(True)
        self._eraser_select.setVisible(True)
        self._session.tools.select_eraser(self._eraser_select.currentData())

    def _pick_color(self):
        color = QColorDialog.getColor(QColor(self._session.tools.user_color), self, "Stroke Color")
        if color.isValid():
            self._session.set_color(color.name())

    def _update_color_button(self, color: str):
        self._color_button.setStyleSheet(f"background-color: {color}; border: 1px solid #555;")

    # ==================== Frames & Playback ====================

    def _update_frame_ui(self):
        session = self._session
        self._frame_label.setText(session.frame_label())
        playing = session.is_playing
        self._prev_button.setEnabled(not playing and session.can_go_prev())
        self._next_button.setEnabled(not playing and session.can_go_next())

    def _toggle_onion(self):
        self._session.toggle_onion_skin()
        self._update_onion_button()

    def _update_onion_button(self):
        enabled = self._session.onion_skin_enabled
        self._onion_button.setChecked(enabled)
        self._onion_button.setText("Onion Skin: ON" if enabled else "Onion Skin: OFF")

    def _on_playback_changed(self, playing: bool):
        self._play_button.setText("⏹ Stop" if playing else "▶ Play")
        editing_widgets = (
            *self._tool_buttons.values(), self._eraser_button, self._eraser_select,
            self._color_button, self._add_frame_button, self._duplicate_button,
            self._download_button,
        )
        for widget in editing_widgets:
            widget.setEnabled(not playing)
        self._undo_button.setEnabled(not playing and self._session.history.can_undo())
        self._redo_button.setEnabled(not playing and self._session.history.can_redo())
        self._update_frame_ui()

    # ==================== Export ====================

    def _export_video(self):
        if self._session.is_playing:
            self._player.stop()
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Animation", Config.EXPORT_FILENAME, "MP4 Video (*.mp4)"
        )
        if path:
            self._exporter.export(Path(path))

    def _on_export_started(self):
        self._download_button.setText("Processing...")
        self._download_button.setEnabled(False)

    def _on_export_finished(self, success: bool, message: str):
        self._download_button.setText("Download")
        self._download_button.setEnabled(True)
        if success:
            self.statusBar().showMessage(message, 5000)

    def _show_error(self, error_type: str, message: str):
        QMessageBox.warning(self, f"{Config.APP_NAME} - {error_type.title()} Error", message)

    def closeEvent(self, event):
        self._player.stop()
        super().closeEvent(event)


__all__ = ['MainWindow']
