"""
Sketch Canvas - Main Entry Point

Usage:
    python -m sketch_canvas.main
"""

import sys
from PyQt6.QtWidgets import QApplication

from .config import Config
from .events.event_bus import get_event_bus
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

    # Initialize event bus (singleton)
    get_event_bus()

    return app


def main():
    """
    Main entry point for Sketch Canvas

    Creates the application, shows the main window, and runs the event loop.
    """
    # Setup logging first
    LoggingConfig.setup_logging(Config.get_log_dir())

    logger = LoggingConfig.get_logger(__name__)
    logger.info(f"Starting {Config.APP_NAME} {Config.APP_VERSION}...")
    logger.info(f"Log file: {LoggingConfig.get_log_file_path()}")

    app = setup_application()

    from .widgets.main_window import MainWindow
    window = MainWindow(event_bus=get_event_bus())
    window.show()

    logger.info("Application started successfully!")

    exit_code = app.exec()
    logger.info("Application closed")
    LoggingConfig.shutdown()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
