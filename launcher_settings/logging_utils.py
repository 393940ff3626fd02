"""Logger naming and optional handler wiring for the settings store."""
from __future__ import annotations

import logging
import os
from typing import Optional

LOGGER_NAME = "KeypadLauncher.Settings"
LOG_TAG = "KeypadLauncher"
DEFAULT_LOG_LEVEL = logging.INFO
DEV_MODE_ENV_VAR = "KEYPAD_LAUNCHER_DEV_MODE"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def get_logger(component: str) -> logging.Logger:
    """Return the logger for one component, e.g. ``get_logger("Storage")``."""

    return logging.getLogger(f"{LOGGER_NAME}.{component}")


def dev_mode_enabled() -> bool:
    """True when ``KEYPAD_LAUNCHER_DEV_MODE`` asks for verbose logging."""

    return os.getenv(DEV_MODE_ENV_VAR, "").strip().lower() in _TRUE_VALUES


def effective_log_level(level: Optional[int] = None) -> int:
    if level is None:
        level = DEFAULT_LOG_LEVEL
    if dev_mode_enabled() and level > logging.DEBUG:
        return logging.DEBUG
    return level


def configure_logger(level: Optional[int] = None) -> logging.Logger:
    """Attach a single formatted stream handler to the package logger.

    Safe to call repeatedly; hosts that configure logging themselves can skip it.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(effective_log_level(level))
    if not any(getattr(handler, "_launcher_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler._launcher_handler = True  # type: ignore[attr-defined]
        formatter = logging.Formatter(f"[%(asctime)s] [{LOG_TAG}] %(message)s", "%H:%M:%S")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False
    return logger
