"""
ToolController - the active editing mode.

Modes only change when the user picks a tool; nothing switches them
automatically. Erasing is one tool with two behaviours chosen by an
EraserType sub-option.
"""

from enum import Enum

from PyQt6.QtCore import QObject, pyqtSignal

from ..config import Config


class ToolMode(Enum):
    """Available editing modes."""
    DRAW = 'draw'
    MOVE = 'move'
    ROTATE = 'rotate'
    ERASE_STROKE = 'erase_stroke'   # Delete whole strokes under the pointer
    ERASE_AREA = 'erase_area'       # Paint over with the background color


class EraserType(Enum):
    """Sub-option of the erase tool."""
    STROKE = 'stroke'
    AREA = 'area'


SELECTION_MODES = (ToolMode.MOVE, ToolMode.ROTATE)
PAINTING_MODES = (ToolMode.DRAW, ToolMode.ERASE_AREA)


class ToolController(QObject):
    """
    Finite-state machine over ToolMode.

    The paint color and width used for new strokes follow from the mode:
    Draw uses the user's color at the base width, the area eraser uses the
    background color at the eraser width.
    """

    mode_changed = pyqtSignal(object)  # ToolMode

    def __init__(self, user_color: str = Config.DEFAULT_COLOR):
        super().__init__()
        self._mode = ToolMode.DRAW
        self._eraser_type = EraserType.STROKE
        self._user_color = user_color

    @property
    def mode(self) -> ToolMode:
        return self._mode

    @property
    def eraser_type(self) -> EraserType:
        return self._eraser_type

    @property
    def user_color(self) -> str:
        return self._user_color

    @user_color.setter
    def user_color(self, value: str):
        self._user_color = value

    @property
    def active_color(self) -> str:
        if self._mode == ToolMode.ERASE_AREA:
            return Config.BACKGROUND_COLOR
        return self._user_color

    @property
    def active_width(self) -> float:
        if self._mode == ToolMode.ERASE_AREA:
            return Config.ERASER_WIDTH
        return Config.BASE_STROKE_WIDTH

    def is_selection_mode(self) -> bool:
        return self._mode in SELECTION_MODES

    def is_painting_mode(self) -> bool:
        return self._mode in PAINTING_MODES

    def is_erase_mode(self) -> bool:
        return self._mode in (ToolMode.ERASE_STROKE, ToolMode.ERASE_AREA)

    def set_mode(self, mode: ToolMode):
        """
        Enter a mode. Always emits mode_changed, even when re-entering the
        current mode, so listeners can drop the selection and redraw.
        """
        if mode == ToolMode.ERASE_STROKE:
            self._eraser_type = EraserType.STROKE
        elif mode == ToolMode.ERASE_AREA:
            self._eraser_type = EraserType.AREA
        self._mode = mode
        self.mode_changed.emit(mode)

    def select_eraser(self, eraser_type: EraserType = None):
        """Enter the erase tool with the given (or last used) sub-option."""
        if eraser_type is None:
            eraser_type = self._eraser_type
        if eraser_type == EraserType.AREA:
            self.set_mode(ToolMode.ERASE_AREA)
        else:
            self.set_mode(ToolMode.ERASE_STROKE)


__all__ = ['ToolMode', 'EraserType', 'ToolController']
