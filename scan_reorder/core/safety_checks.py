"""
safety_checks.py - Safety Check Module

Provides checks run before a plan is executed
"""

import os
import platform
from typing import Optional, Tuple

from .fs_ops import LocalFileSystem
from .path_utils import basename, dirname

INVALID_CHARS = '<>:"/\\|?*'

RESERVED_NAMES = {
    'CON', 'PRN', 'AUX', 'NUL',
    'COM1', 'COM2', 'COM3', 'COM4', 'COM5', 'COM6', 'COM7', 'COM8', 'COM9',
    'LPT1', 'LPT2', 'LPT3', 'LPT4', 'LPT5', 'LPT6', 'LPT7', 'LPT8', 'LPT9'
}


def is_valid_filename(name: str) -> Tuple[bool, Optional[str]]:
    """
    Check if filename is valid (mainly for Windows)

    Args:
        name: Filename

    Returns:
        (is_valid, error_reason)
    """
    if not name:
        return False, "Filename cannot be empty"

    for char in INVALID_CHARS:
        if char in name:
            return False, f"Filename contains invalid character: {char}"

    # Trailing space or dot
    if name.endswith(' ') or name.endswith('.'):
        return False, "Filename cannot end with space or dot"

    name_upper = name.upper().split('.')[0]
    if name_upper in RESERVED_NAMES:
        return False, f"Filename is a Windows reserved name: {name_upper}"

    if len(name) > 255:
        return False, "Filename exceeds 255 characters"

    return True, None


def check_writable(path: str) -> Tuple[bool, Optional[str]]:
    """
    Check if the directory holding path is writable

    Args:
        path: File path

    Returns:
        (is_writable, error_reason)
    """
    parent = dirname(path) or "."
    if not os.path.isdir(parent):
        return False, f"Parent directory does not exist: {parent}"
    if not os.access(parent, os.W_OK):
        return False, f"Directory is not writable: {parent}"
    return True, None


def check_path_length(path: str, max_length: int = 260) -> Tuple[bool, Optional[str]]:
    """
    Check if path length exceeds limit (mainly for Windows)

    Args:
        path: Path to check
        max_length: Maximum length

    Returns:
        (is_valid, error_reason)
    """
    if len(path) > max_length:
        return False, f"Path length ({len(path)}) exceeds limit ({max_length}): {path}"
    return True, None


def check_rename_op(src: str, dst: str, fs=None) -> Tuple[bool, Optional[str]]:
    """
    Check if a single rename operation is safe

    Args:
        src: Source path
        dst: Destination path
        fs: Filesystem capabilities

    Returns:
        (is_safe, error_reason)
    """
    if fs is None:
        fs = LocalFileSystem()

    if not fs.exists(src):
        return False, f"Source file does not exist: {src}"

    valid, error = is_valid_filename(basename(dst))
    if not valid:
        return False, f"{basename(dst)}: {error}"

    if platform.system() == "Windows":
        valid, error = check_path_length(dst)
        if not valid:
            return False, error

    # Only meaningful against the real disk
    if isinstance(fs, LocalFileSystem):
        valid, error = check_writable(src)
        if not valid:
            return False, error

    return True, None
