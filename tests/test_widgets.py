"""Smoke tests for the Qt widgets (offscreen)."""

import pytest

from flipbook.core.session import EditorSession
from flipbook.core.tool_controller import ToolMode
from flipbook.widgets.canvas_widget import CanvasWidget
from flipbook.widgets.main_window import MainWindow


@pytest.fixture
def window():
    win = MainWindow(EditorSession())
    yield win
    win.close()


def test_canvas_redraws_on_session_request():
    session = EditorSession()
    canvas = CanvasWidget(session)
    assert canvas.width() == canvas.renderer.surface.width

    canvas.gestures.pointer_down(10, 10)
    canvas.gestures.pointer_move(100, 10)
    canvas.gestures.pointer_up()

    image = canvas.renderer.surface.image
    assert len(session.timeline.strokes) == 1
    assert image.pixelColor(50, 10).name() == "#000000"

    session.undo()
    assert image.pixelColor(50, 10).name() == "#ffffff"


def test_frame_controls(window):
    session = window._session
    assert window._frame_label.text() == "1 / 1"
    assert not window._prev_button.isEnabled()
    assert not window._next_button.isEnabled()

    window._add_frame_button.click()
    assert window._frame_label.text() == "2 / 2"
    assert window._prev_button.isEnabled()

    window._prev_button.click()
    assert session.timeline.current_index == 0
    assert window._next_button.isEnabled()


def test_tool_buttons_switch_mode(window):
    session = window._session
    window._tool_buttons[ToolMode.ROTATE].click()
    assert session.tools.mode == ToolMode.ROTATE

    window._eraser_button.click()
    assert session.tools.mode == ToolMode.ERASE_STROKE
    window._eraser_select.setCurrentIndex(1)
    assert session.tools.mode == ToolMode.ERASE_AREA


def test_undo_button_follows_history(window):
    session = window._session
    assert not window._undo_button.isEnabled()
    session.history.save_state(session.timeline.strokes)
    assert window._undo_button.isEnabled()
    window._undo_button.click()
    assert not window._undo_button.isEnabled()
    assert window._redo_button.isEnabled()


def test_play_button_toggles_playback(window):
    session = window._session
    window._play_button.click()
    assert session.is_playing
    assert not window._add_frame_button.isEnabled()
    window._play_button.click()
    assert not session.is_playing
    assert window._add_frame_button.isEnabled()


def test_editing_controls_disabled_while_playing(window):
    session = window._session
    session.history.save_state(session.timeline.strokes)
    assert window._undo_button.isEnabled()

    window._play_button.click()
    assert not window._undo_button.isEnabled()
    assert not window._color_button.isEnabled()
    assert not window._eraser_button.isEnabled()
    assert not window._tool_buttons[ToolMode.MOVE].isEnabled()

    window._play_button.click()
    assert window._tool_buttons[ToolMode.MOVE].isEnabled()
    assert not window._undo_button.isEnabled()
