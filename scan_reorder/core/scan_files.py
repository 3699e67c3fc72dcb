"""
scan_files.py - File Scanning Module

Lists one flat directory, keeps the supported image files and resolves
drag-and-drop input into a single-directory batch
"""

from typing import Iterable, List, Optional, Set, Tuple

from .errors import DirectoryReadError, MissingPathError, MixedDirectoryError, NoSupportedFilesError
from .fs_ops import LocalFileSystem
from .models_fs import (
    FileEntry, RenameOptions, DroppedInput, DroppedFiles, DroppedFolder,
    SUPPORTED_EXTENSIONS, normalize_for_comparison
)
from .path_utils import dirname, extension, join_path
from ..logger_util import get_logger

log = get_logger(__name__)


def is_supported(name: str, extensions: Iterable[str] = SUPPORTED_EXTENSIONS) -> bool:
    """Whether a filename has an allowed image extension (case-insensitive)"""
    ext = extension(name).lower()
    return bool(ext) and ext in extensions


def usable_entries(entries: Iterable[FileEntry]) -> List[FileEntry]:
    """
    Drop entries without a usable path

    Args:
        entries: Candidate entries

    Returns:
        Entries that can take part in a batch
    """
    results: List[FileEntry] = []
    for entry in entries:
        try:
            entry.require_path()
        except MissingPathError as e:
            log.warning("Skipping entry: %s", e)
            continue
        results.append(entry)
    return results


def scan_directory(
    directory: str,
    options: Optional[RenameOptions] = None,
    fs=None
) -> List[FileEntry]:
    """
    Scan a single directory (non-recursive) for supported image files

    Args:
        directory: Target directory
        options: Rename options (extension allow-list, hidden files)
        fs: Filesystem capabilities (defaults to LocalFileSystem)

    Returns:
        Image entries in listing order

    Raises:
        DirectoryReadError: Directory missing or unreadable
        NoSupportedFilesError: No supported image in the directory
    """
    if options is None:
        options = RenameOptions()
    if fs is None:
        fs = LocalFileSystem()

    if not directory or not fs.is_dir(directory):
        raise DirectoryReadError(directory, "not a directory")

    try:
        listing = fs.list_directory(directory)
    except OSError as e:
        raise DirectoryReadError(directory, str(e)) from e

    results: List[FileEntry] = []
    for item in listing:
        # Only process files, not directories
        if not item.is_file:
            continue

        # Skip hidden files
        if not options.include_hidden and item.name.startswith('.'):
            continue

        if not is_supported(item.name, options.extensions):
            continue

        results.append(FileEntry(name=item.name, path=join_path(directory, item.name)))

    results = usable_entries(results)
    if not results:
        raise NoSupportedFilesError(directory)

    log.debug("Scanned %s: %d image file(s)", directory, len(results))
    return results


def resolve_dropped_input(
    dropped: DroppedInput,
    options: Optional[RenameOptions] = None,
    fs=None
) -> Tuple[str, List[FileEntry]]:
    """
    Turn dropped files or a dropped folder into one batch

    Args:
        dropped: DroppedFiles or DroppedFolder
        options: Rename options
        fs: Filesystem capabilities

    Returns:
        (directory, entries)

    Raises:
        MixedDirectoryError: Dropped files come from several directories
        NoSupportedFilesError: Nothing supported was dropped
        DirectoryReadError: Dropped folder cannot be read
    """
    if options is None:
        options = RenameOptions()

    if isinstance(dropped, DroppedFolder):
        return dropped.path, scan_directory(dropped.path, options, fs)

    if not isinstance(dropped, DroppedFiles):
        raise TypeError(f"Unsupported dropped input: {dropped!r}")

    candidates = [FileEntry.from_path(p) for p in dropped.paths if p]
    candidates = [e for e in usable_entries(candidates) if is_supported(e.name, options.extensions)]
    if not candidates:
        raise NoSupportedFilesError()

    directories = sorted({dirname(e.path) for e in candidates})
    if len(directories) > 1:
        raise MixedDirectoryError(directories)

    return directories[0], candidates


def get_existing_names(directory: str, case_insensitive: bool = True, fs=None) -> Set[str]:
    """
    Get set of existing filenames in directory (for conflict detection)

    Args:
        directory: Target directory
        case_insensitive: Whether case-insensitive
        fs: Filesystem capabilities

    Returns:
        Filename set (empty if the directory cannot be read)
    """
    if fs is None:
        fs = LocalFileSystem()

    try:
        listing = fs.list_directory(directory)
    except OSError as e:
        log.debug("Cannot list %s for conflict detection: %s", directory, e)
        return set()

    return {normalize_for_comparison(item.name, case_insensitive) for item in listing}
