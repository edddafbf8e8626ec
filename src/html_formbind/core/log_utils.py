"""
Core Log Utilities for html-formbind.

Logger setup for applications embedding the binder, plus discovery of the
log file currently in use.
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

from html_formbind.protocols.binding_config import get_binding_config

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _get_log_dir() -> Path:
    """Return configured log directory or default."""
    config = get_binding_config()
    if config.log_dir:
        return Path(config.log_dir)
    return Path.home() / ".local" / "share" / "html_formbind" / "logs"


def configure_logging(level: Union[int, str] = logging.INFO,
                      log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Attach handlers to the package logger.

    Safe to call more than once: handlers installed by a previous call are
    replaced rather than duplicated.

    Args:
        level: Logging level for the package logger
        log_file: Optional file to receive the same records

    Returns:
        The configured package logger
    """
    config = get_binding_config()
    package_logger = logging.getLogger(config.logger_name)
    package_logger.setLevel(level)

    for handler in list(package_logger.handlers):
        if getattr(handler, "_html_formbind_handler", False):
            package_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [logging.StreamHandler()]
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._html_formbind_handler = True
        package_logger.addHandler(handler)

    logger.debug(f"Logging configured: level={level} file={log_file}")
    return package_logger


def get_current_log_file_path() -> str:
    """Get the current log file path from the logging system."""
    config = get_binding_config()
    for logger_name in (config.logger_name, None):
        for handler in logging.getLogger(logger_name).handlers:
            if isinstance(handler, logging.FileHandler):
                return handler.baseFilename

    # Last resort: build a default path
    log_dir = _get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    return str(log_dir / f"{config.log_prefix}{int(time.time())}.log")
