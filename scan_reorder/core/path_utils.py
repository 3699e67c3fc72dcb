"""
path_utils.py - Separator-Aware Path Helpers

Paths are handled as plain strings so that a batch coming from a Windows
share keeps its backslashes and a POSIX batch keeps its slashes, whatever
platform the tool runs on.
"""

from typing import Tuple

SEPARATORS = ("/", "\\")


def detect_separator(path: str) -> str:
    """
    Detect the separator a path uses

    Args:
        path: Path string

    Returns:
        "\\" if the path only uses backslashes (or uses one last), otherwise "/"
    """
    last_slash = path.rfind("/")
    last_backslash = path.rfind("\\")
    if last_backslash > last_slash:
        return "\\"
    return "/"


def _split(path: str) -> Tuple[str, str]:
    """Split into (head, tail) at the last separator, trailing separators ignored"""
    stripped = path.rstrip("/\\")
    if not stripped:
        # Root only ("/" or "\\")
        return path[:1], ""

    idx = max(stripped.rfind("/"), stripped.rfind("\\"))
    if idx < 0:
        return "", stripped

    head = stripped[:idx]
    tail = stripped[idx + 1:]
    if not head or head.endswith(":"):
        # Keep the separator for "/x" and "C:\x"
        head = stripped[:idx + 1]
    return head, tail


def dirname(path: str) -> str:
    """
    Get the parent directory of a path

    Examples:
        dirname("/scans/book1/p1.jpg") -> "/scans/book1"
        dirname("C:\\scans\\book1\\p1.jpg") -> "C:\\scans\\book1"
        dirname("C:\\p1.jpg") -> "C:\\"
    """
    return _split(path)[0]


def basename(path: str) -> str:
    """Get the last component of a path (trailing separators ignored)"""
    return _split(path)[1]


def join_path(directory: str, name: str) -> str:
    """
    Join a directory and a filename with the directory's own separator

    Args:
        directory: Directory path
        name: File name

    Returns:
        Joined path
    """
    if not directory:
        return name
    if directory.endswith(SEPARATORS):
        return directory + name
    return directory + detect_separator(directory) + name


def extension(name: str) -> str:
    """Substring after the last "." of a filename ("" if there is none)"""
    name = name or ""
    name = basename(name) if any(sep in name for sep in SEPARATORS) else name
    idx = name.rfind(".")
    if idx < 0:
        return ""
    return name[idx + 1:]
