"""
Editing engine: session state, history, tools, gestures and playback.
"""

from .history import HistoryManager
from .tool_controller import ToolMode, EraserType, ToolController
from .session import EditorSession
from .gesture_handler import InputGestureHandler
from .animation_player import AnimationPlayer

__all__ = [
    'HistoryManager',
    'ToolMode',
    'EraserType',
    'ToolController',
    'EditorSession',
    'InputGestureHandler',
    'AnimationPlayer',
]
