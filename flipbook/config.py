"""
Global configuration for Flipbook

Editing constants, playback and export timings, and the small JSON settings
file kept in the user data directory.
"""

import os
import sys
import json
from pathlib import Path
from typing import Final, Optional


class Config:
    """Central configuration class for all application settings"""

    # Application metadata
    APP_NAME: Final[str] = "Flipbook"
    APP_VERSION: Final[str] = "0.3.0"
    APP_AUTHOR: Final[str] = "Flipbook"

    # Paths
    APP_ROOT: Final[Path] = Path(__file__).parent

    # Canvas
    CANVAS_WIDTH: Final[int] = 800
    CANVAS_HEIGHT: Final[int] = 600
    BACKGROUND_COLOR: Final[str] = "#FFFFFF"
    DEFAULT_COLOR: Final[str] = "#000000"

    # Stroke widths (pixels)
    BASE_STROKE_WIDTH: Final[float] = 3
    ERASER_WIDTH: Final[float] = 20

    # Hit testing: stroke half-width plus this tolerance (pixels)
    HIT_TOLERANCE: Final[float] = 5

    # Selection affordance
    SELECTION_WIDTH_BOOST: Final[float] = 4
    SELECTION_SHADOW_COLOR: Final[str] = "#000000"
    SELECTION_SHADOW_ALPHA: Final[float] = 0.3
    SELECTION_SHADOW_BLUR: Final[int] = 10

    # Onion skin
    ONION_SKIN_OPACITY: Final[float] = 0.2
    ONION_SKIN_DEFAULT: Final[bool] = True

    # Undo history (snapshots per frame)
    MAX_UNDO_HISTORY: Final[int] = 100

    # Playback
    PLAYBACK_INTERVAL_MS: Final[int] = 100

    # Export / render service
    EXPORT_FPS: Final[int] = 10
    EXPORT_TIMEOUT_SEC: Final[int] = 600
    EXPORT_FILENAME: Final[str] = "animation.mp4"
    RENDER_SERVICE_HOST: Final[str] = "localhost"
    RENDER_SERVICE_PORT: Final[int] = 3000
    RENDER_SERVICE_PATH: Final[str] = "/render-video"
    RENDER_URL_ENV: Final[str] = "FLIPBOOK_RENDER_URL"
    RENDER_JOB_PREFIX: Final[str] = "job-"
    RENDER_DOWNLOAD_NAME: Final[str] = "my-animation.mp4"
    RENDER_MAX_CONTENT_MB: Final[int] = 500
    FFMPEG_TIMEOUT_SEC: Final[int] = 600

    SETTINGS_FILE: Final[str] = "settings.json"

    @classmethod
    def get_user_data_dir(cls) -> Path:
        """
        Get user data directory.

        Uses system AppData/Local (Windows), Application Support (macOS) or
        .local/share (Linux). A 'portable.txt' file next to the package keeps
        everything in a local 'data' folder instead.
        """
        portable_flag = cls.APP_ROOT.parent / 'portable.txt'
        if portable_flag.exists():
            user_dir = cls.APP_ROOT.parent / 'data'
        elif sys.platform == 'win32':
            base_path = Path(os.environ.get('LOCALAPPDATA', os.path.expanduser('~')))
            user_dir = base_path / 'Flipbook'
        elif sys.platform == 'darwin':
            user_dir = Path.home() / 'Library' / 'Application Support' / 'Flipbook'
        else:
            user_dir = Path.home() / '.local' / 'share' / 'Flipbook'

        user_dir.mkdir(parents=True, exist_ok=True)
        return user_dir

    @classmethod
    def get_log_dir(cls) -> Path:
        """Get the folder log files are written to"""
        log_dir = cls.get_user_data_dir() / 'logs'
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir

    @classmethod
    def get_settings_file(cls) -> Path:
        """Get settings JSON file path"""
        return cls.get_user_data_dir() / cls.SETTINGS_FILE

    @classmethod
    def load_settings(cls) -> dict:
        """
        Load user settings

        Returns:
            dict: Stored settings, or an empty dict if the file is missing
            or unreadable
        """
        settings_file = cls.get_settings_file()
        if settings_file.exists():
            try:
                with open(settings_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                    if isinstance(data, dict):
                        return data
            except (OSError, ValueError):
                pass
        return {}

    @classmethod
    def save_settings(cls, settings: dict) -> bool:
        """
        Merge settings into the settings file

        Returns:
            bool: True if saved successfully, False otherwise
        """
        try:
            settings_file = cls.get_settings_file()
            merged = cls.load_settings()
            merged.update(settings)
            with open(settings_file, 'w', encoding='utf-8') as f:
                json.dump(merged, f, indent=2)
            return True
        except OSError:
            return False

    @classmethod
    def get_render_service_url(cls) -> str:
        """
        Resolve the render service endpoint.

        Order: FLIPBOOK_RENDER_URL environment variable, 'render_service_url'
        in the settings file, then the local default.
        """
        env_url = os.environ.get(cls.RENDER_URL_ENV)
        if env_url:
            return env_url

        url: Optional[str] = cls.load_settings().get('render_service_url')
        if url:
            return url

        return f"http://{cls.RENDER_SERVICE_HOST}:{cls.RENDER_SERVICE_PORT}{cls.RENDER_SERVICE_PATH}"


__all__ = ['Config']
