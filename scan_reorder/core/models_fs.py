"""
models_fs.py - Core Data Structure Definitions

Contains:
- FileEntry: One image file of a batch
- DirEntry: One raw directory listing entry
- RenameOperation: Single rename operation
- RenamePlan: Ordered batch rename plan
- RenameOptions: Rename options configuration
- DroppedFiles / DroppedFolder: Resolved drag-and-drop input
"""

from dataclasses import dataclass, field
from typing import Optional, List, FrozenSet, Union
from enum import Enum
import platform

from .errors import MissingPathError
from .path_utils import basename, dirname, extension


SUPPORTED_EXTENSIONS: FrozenSet[str] = frozenset({
    "jpg", "jpeg", "png", "gif", "webp", "bmp", "tif", "tiff", "svg",
    "heif", "heic", "raw", "cr2", "nef", "arw", "dng", "avif", "jxr",
    "jp2", "j2k", "psd",
})


class PadOverflow(Enum):
    """What to do when a batch has more files than the pad width can number"""
    WIDEN = "widen"      # Grow the width to the digit count of the batch size
    REJECT = "reject"    # Refuse the batch


@dataclass(frozen=True)
class DirEntry:
    """Raw directory listing entry"""
    name: str
    is_file: bool


@dataclass(frozen=True)
class FileEntry:
    """Image file information"""
    name: str                       # Filename (with extension)
    path: str                       # Absolute, platform-native path

    @classmethod
    def from_path(cls, path: str) -> "FileEntry":
        """Create FileEntry from a path string"""
        return cls(name=basename(path), path=path)

    @property
    def extension(self) -> str:
        return extension(self.name)

    @property
    def directory(self) -> str:
        return dirname(self.path)

    def require_path(self) -> str:
        """Return the path, raising MissingPathError if it is unusable"""
        if not self.path or not self.path.strip():
            raise MissingPathError(self.name)
        return self.path


@dataclass(frozen=True)
class RenameOperation:
    """Single rename operation"""
    original_path: str              # Source path
    new_path: str                   # Destination path

    @property
    def is_same(self) -> bool:
        """Whether source and destination are the same"""
        return self.original_path == self.new_path

    def reversed(self) -> "RenameOperation":
        """Operation that undoes this one"""
        return RenameOperation(original_path=self.new_path, new_path=self.original_path)


@dataclass
class RenameOptions:
    """Rename options configuration"""
    # Target naming: <folder><separator><number>.<ext>
    separator: str = "_"
    pad_width: int = 3
    pad_overflow: PadOverflow = PadOverflow.WIDEN

    # Case-insensitive collision detection (Windows/macOS default to insensitive)
    case_insensitive_detect: bool = field(default_factory=lambda: platform.system() in ("Windows", "Darwin"))

    # Scanning
    include_hidden: bool = False
    extensions: FrozenSet[str] = SUPPORTED_EXTENSIONS

    # Execution options
    staged_execution: bool = True   # Go through temporary names when targets overlap sources
    dry_run: bool = False           # Preview only, do not actually execute
    log_dir: Optional[str] = None   # Where history logs are written (None disables)


@dataclass
class RenamePlan:
    """Ordered batch rename plan"""
    directory: str = ""
    ops: List[RenameOperation] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    options: RenameOptions = field(default_factory=RenameOptions)

    @property
    def total_count(self) -> int:
        """Total number of operations"""
        return len(self.ops)

    @property
    def change_count(self) -> int:
        """Operations that actually change a name"""
        return sum(1 for op in self.ops if not op.is_same)

    @property
    def needs_staging(self) -> bool:
        """Whether some target is also the source of another operation"""
        return has_overlap(self.ops, self.options.case_insensitive_detect)

    def add_op(self, original_path: str, new_path: str) -> None:
        """Add operation"""
        self.ops.append(RenameOperation(original_path=original_path, new_path=new_path))

    def add_warning(self, msg: str) -> None:
        """Add warning"""
        self.warnings.append(msg)

    def summary(self) -> str:
        """Generate summary"""
        lines = [
            "Rename Plan Summary:",
            f"  - Directory: {self.directory}",
            f"  - Total operations: {self.total_count}",
            f"  - Name changes: {self.change_count}",
            f"  - Warnings: {len(self.warnings)}",
        ]
        return "\n".join(lines)


@dataclass(frozen=True)
class DroppedFiles:
    """Individual files dropped onto the application"""
    paths: List[str]


@dataclass(frozen=True)
class DroppedFolder:
    """A folder dropped onto the application"""
    path: str


DroppedInput = Union[DroppedFiles, DroppedFolder]


def normalize_for_comparison(name: str, case_insensitive: bool) -> str:
    """Normalize filename for comparison"""
    if case_insensitive:
        return name.casefold()
    return name


def has_overlap(ops: List[RenameOperation], case_insensitive: bool = False) -> bool:
    """
    Check whether executing ops one by one could hit a not-yet-moved source

    Args:
        ops: Operations in execution order
        case_insensitive: Compare paths case-insensitively

    Returns:
        True if the target of one operation is the source of a different one
    """
    sources = {}
    for idx, op in enumerate(ops):
        sources[normalize_for_comparison(op.original_path, case_insensitive)] = idx
    for idx, op in enumerate(ops):
        if op.is_same:
            continue
        other = sources.get(normalize_for_comparison(op.new_path, case_insensitive))
        if other is not None and other != idx:
            return True
    return False
