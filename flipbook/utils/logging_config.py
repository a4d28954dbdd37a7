"""
Centralized logging configuration for Flipbook

The editor logs to a file in the user data folder and to stdout. The render
service runs headless and only needs the console handler.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

FILE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
CONSOLE_FORMAT = '[%(levelname)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class LoggingConfig:
    """Central logging configuration"""

    _initialized = False
    _log_file_path: Optional[Path] = None

    @classmethod
    def setup_logging(cls, log_dir: Optional[Path] = None,
                      log_name: str = "flipbook.log",
                      console_level: int = logging.INFO):
        """
        Setup logging system.

        Args:
            log_dir: Folder for the log file; None skips the file handler
            log_name: Log file name inside log_dir
            console_level: Level for the stdout handler
        """
        if cls._initialized:
            return

        root = logging.getLogger()
        root.setLevel(logging.DEBUG)

        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            cls._log_file_path = log_dir / log_name

            file_handler = logging.FileHandler(cls._log_file_path, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
            root.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root.addHandler(console_handler)

        cls._initialized = True
        if cls._log_file_path:
            root.info(f"Logging to {cls._log_file_path}")

    @classmethod
    def get_logger(cls, name: str):
        """Get a logger instance"""
        return logging.getLogger(name)

    @classmethod
    def get_log_file_path(cls) -> Optional[Path]:
        """Get the log file path (None when only console logging is active)"""
        return cls._log_file_path


__all__ = ['LoggingConfig']
