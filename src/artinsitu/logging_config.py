"""
Logging Configuration
=====================
Sets up the 'artinsitu' logger namespace and routes Qt's own diagnostics
(image plugin warnings, QPainter misuse, network errors) into it.

Why is this file needed?
------------------------
1. One stream: Qt writes its warnings straight to stderr. Routing them
   through `artinsitu.qt` puts them next to our own records, with the same
   format and in the optional log file.
2. Re-entrancy: Tests and the headless export call setup repeatedly; it must
   never stack handlers.
"""
import logging
import sys
from typing import Optional

from PySide6.QtCore import QtMsgType, qInstallMessageHandler

QT_LOGGER_NAME = "artinsitu.qt"

_QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


def _qt_message_handler(msg_type, context, message: str) -> None:
    level = _QT_LEVELS.get(msg_type, logging.WARNING)
    category = getattr(context, "category", None)
    if category and category != "default":
        message = f"[{category}] {message}"
    logging.getLogger(QT_LOGGER_NAME).log(level, message)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the 'artinsitu' logger and installs the Qt message handler.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    logger = logging.getLogger("artinsitu")
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    qInstallMessageHandler(_qt_message_handler)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
