"""
PNGCHAT Logger
Logging setup shared by the CLI and the chunk codec.
"""

import logging
import sys
from functools import wraps
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Callable

from config import LOGGING_SETTINGS

_CONFIGURED = set()


def setup_logger(name, level=None):
    """
    Create and configure a logger.

    Args:
        name: logger name (usually ``__name__``)
        level: log level name; defaults to ``LOGGING_SETTINGS["level"]``

    Returns:
        logging.Logger: Logger object
    """
    logger = logging.getLogger(name)

    # handlers are attached once per logger
    if logger.handlers:
        if level is not None:
            set_level(logger, level)
        return logger

    if level is None:
        level = LOGGING_SETTINGS.get("level", "INFO")
    logger.setLevel(getattr(logging, level))

    log_dir = Path(LOGGING_SETTINGS.get("log_dir", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOGGING_SETTINGS.get("log_file", "pngchat.log")

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LOGGING_SETTINGS.get("max_bytes", 2 * 1024 * 1024),
        backupCount=LOGGING_SETTINGS.get("backup_count", 3),
        encoding="utf-8",
    )
    file_handler.setLevel(getattr(logging, level))

    # stdout carries command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, level))

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    _CONFIGURED.add(name)

    return logger


def set_level(logger, level):
    """Apply *level* to ``logger`` and every handler attached to it."""
    numeric = getattr(logging, level)
    logger.setLevel(numeric)
    for handler in logger.handlers:
        handler.setLevel(numeric)


def set_global_level(level):
    """Apply *level* to every logger created through :func:`setup_logger`."""
    for name in sorted(_CONFIGURED):
        set_level(logging.getLogger(name), level)


def log_operation(arg, operation=None, status="SUCCESS", details=None):
    """Decorator/utility for recording the status of an operation.

    Two forms are supported:

    * as a decorator: ``@log_operation("Encode")``
    * called directly: ``log_operation(logger, "Encode", status="FAILED")``
    """

    if operation is None and isinstance(arg, str):
        operation_name = arg

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):
                logger = logging.getLogger(func.__module__)
                logger.info(f"[{operation_name}] Started")
                try:
                    result = func(*args, **kwargs)
                except Exception as exc:
                    logger.error(f"[{operation_name}] FAILED: {exc}")
                    raise
                logger.info(f"[{operation_name}] Completed")
                return result

            return wrapper

        return decorator

    if operation is not None:
        logger = arg
        msg = f"[{operation}] Status: {status}"
        if details:
            msg += f" | Details: {details}"

        if status and status.upper() == "FAILED":
            logger.error(msg)
        else:
            logger.info(msg)
        return None

    raise TypeError(
        "log_operation must be used as a decorator with an operation name "
        "or called with a logger and an operation name"
    )
