"""
errors.py - Error Types

Structural errors abort before the filesystem is touched and are raised to the
caller. Per-file errors (RenameFailure, UndoNotFoundError, UndoFailure) are
never raised out of a batch; they are counted and recorded in the result.
"""

from typing import List, Tuple


class ReorderError(Exception):
    """Base class for all scan reorder errors"""


class DirectoryReadError(ReorderError):
    """Directory listing failed or the path is not a directory"""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        msg = f"Cannot read directory: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class NoSupportedFilesError(ReorderError):
    """No entry survived the image extension filter"""

    def __init__(self, path: str = ""):
        self.path = path
        super().__init__(f"No supported image files found in {path}" if path else "No supported image files found")


class MissingPathError(ReorderError):
    """An entry has no usable path; it is excluded from the batch"""

    def __init__(self, name: str = ""):
        self.name = name
        super().__init__(f"Entry has no usable path: {name or '(unnamed)'}")


class MixedDirectoryError(ReorderError):
    """Dropped files do not share one parent directory"""

    def __init__(self, directories: List[str]):
        self.directories = directories
        super().__init__(f"Files must come from a single directory, got {len(directories)}: {', '.join(directories)}")


class PlanCollisionError(ReorderError):
    """Two computed target paths coincide, or a target hits a file outside the batch"""

    def __init__(self, collisions: List[Tuple[str, str]]):
        # (source path, colliding target path)
        self.collisions = collisions
        preview = "; ".join(f"{src} -> {dst}" for src, dst in collisions[:5])
        more = f" ... and {len(collisions) - 5} more" if len(collisions) > 5 else ""
        super().__init__(f"Rename plan has {len(collisions)} colliding target(s): {preview}{more}")


class PlanOverflowError(ReorderError):
    """Batch is too large for the fixed zero-pad width"""

    def __init__(self, count: int, width: int):
        self.count = count
        self.width = width
        super().__init__(f"{count} files do not fit a {width}-digit sequence number")


class SessionBusyError(ReorderError):
    """A batch or undo is already running in this session"""


class PendingHistoryError(ReorderError):
    """A previous batch can still be undone; it must be discarded first"""

    def __init__(self, pending: int):
        self.pending = pending
        super().__init__(f"{pending} rename(s) from the previous batch can still be undone; discard them first")


class RenameFailure(ReorderError):
    """A single rename in a batch failed"""


class UndoNotFoundError(ReorderError):
    """A renamed file is no longer present when undoing"""


class UndoFailure(ReorderError):
    """A single rename back to the original name failed"""
