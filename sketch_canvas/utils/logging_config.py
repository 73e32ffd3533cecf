"""
Logging setup for Sketch Canvas

Everything goes to a DEBUG log file in the user data directory and to
stdout at a level taken from the SKETCH_CANVAS_LOG_LEVEL environment
variable. Qt's own diagnostics (QPainter, image plugins, platform
warnings) are routed into the same handlers under the "qt" logger.
"""
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Union

from PyQt6.QtCore import QtMsgType, qInstallMessageHandler

from ..config import Config


FILE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
CONSOLE_FORMAT = '[%(levelname)s] %(name)s: %(message)s'

_QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


def _qt_message_handler(msg_type, context, message):
    logger = logging.getLogger('qt')
    level = _QT_LEVELS.get(msg_type, logging.WARNING)
    if context is not None and context.category and context.category != 'default':
        message = f"{context.category}: {message}"
    logger.log(level, message)


class LoggingConfig:
    """Owns the handlers installed on the root logger."""

    _initialized = False
    _log_file_path: Optional[Path] = None
    _handlers: List[logging.Handler] = []

    @classmethod
    def console_level(cls) -> int:
        """Console level from the environment, INFO when unset or unknown."""
        name = os.environ.get(Config.LOG_LEVEL_ENV, '').strip().upper()
        level = logging.getLevelName(name) if name else logging.INFO
        return level if isinstance(level, int) else logging.INFO

    @classmethod
    def setup_logging(cls, log_dir: Path, console_level: Optional[Union[int, str]] = None):
        """
        Install the file and console handlers once per process.

        Args:
            log_dir: Directory for the log file, created if missing
            console_level: Overrides the environment level for stdout
        """
        if cls._initialized:
            return

        log_dir.mkdir(parents=True, exist_ok=True)
        cls._log_file_path = log_dir / Config.LOG_FILE_NAME

        if console_level is None:
            console_level = cls.console_level()

        root = logging.getLogger()
        root.setLevel(logging.DEBUG)

        file_handler = logging.FileHandler(cls._log_file_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

        cls._handlers = [file_handler, console_handler]
        for handler in cls._handlers:
            root.addHandler(handler)

        qInstallMessageHandler(_qt_message_handler)

        cls._initialized = True
        root.info("Logging to %s", cls._log_file_path)

    @classmethod
    def shutdown(cls):
        """Remove and close the installed handlers and restore Qt's default output."""
        if not cls._initialized:
            return

        qInstallMessageHandler(None)
        root = logging.getLogger()
        for handler in cls._handlers:
            root.removeHandler(handler)
            handler.close()

        cls._handlers = []
        cls._log_file_path = None
        cls._initialized = False

    @classmethod
    def get_logger(cls, name: str):
        return logging.getLogger(name)

    @classmethod
    def get_log_file_path(cls) -> Optional[Path]:
        return cls._log_file_path


__all__ = ['LoggingConfig']
