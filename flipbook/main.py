"""
Flipbook - Main Entry Point

Frame-by-frame vector sketching and animation preview.

Usage:
    python -m flipbook.main
"""

import sys

from PyQt6.QtWidgets import QApplication

from .config import Config
from .utils.logging_config import LoggingConfig


def setup_application() -> QApplication:
    """
    Initialize and configure the Qt application

    Returns:
        Configured QApplication instance
    """
    app = QApplication(sys.argv)

    app.setApplicationName(Config.APP_NAME)
    app.setApplicationVersion(Config.APP_VERSION)
    app.setOrganizationName(Config.APP_AUTHOR)

    return app


def main():
    """
    Main entry point for Flipbook

    Creates the application, sets up the main window, and runs the event loop.
    """
    # Setup logging first
    LoggingConfig.setup_logging(Config.get_log_dir())

    logger = LoggingConfig.get_logger(__name__)
    logger.info(f"Starting {Config.APP_NAME} {Config.APP_VERSION}...")
    logger.info(f"Render service: {Config.get_render_service_url()}")

    app = setup_application()

    from .widgets.main_window import MainWindow
    window = MainWindow()
    window.show()

    logger.info("Application started successfully!")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
