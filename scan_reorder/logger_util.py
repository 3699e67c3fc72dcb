"""
logger_util.py - Central Logging Utility

Provides get_logger() returning the configured "scan_reorder" logger (or one of
its children) so that core, CLI and GUI share formatting and levels.

Usage:
    from ..logger_util import get_logger
    log = get_logger(__name__)
    log.info("message")

The level comes from the SCAN_REORDER_LOG_LEVEL environment variable
(default INFO) and can be changed later with set_level().
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

_ROOT_NAME = "scan_reorder"
_ROOT: Optional[logging.Logger] = None


def _configure_root() -> logging.Logger:
    global _ROOT
    if _ROOT is not None:
        return _ROOT

    logger = logging.getLogger(_ROOT_NAME)
    # Only configure once (avoid duplicate handlers if reloaded)
    if not logger.handlers:
        level_name = os.environ.get("SCAN_REORDER_LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_name, logging.INFO)
        logger.setLevel(level)
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False
    _ROOT = logger
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get the application logger

    Args:
        name: Module name; children of "scan_reorder" reuse the root handler

    Returns:
        Logger instance
    """
    root = _configure_root()
    if not name or name == _ROOT_NAME:
        return root
    if name.startswith(_ROOT_NAME + "."):
        name = name[len(_ROOT_NAME) + 1:]
    return root.getChild(name)


def set_level(level: Union[int, str]) -> None:
    """Dynamically adjust log level for the root logger and its handlers"""
    logger = _configure_root()
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


__all__ = ["get_logger", "set_level"]
