"""
core - Scan Reorder Core Module

Provides natural sorting, page-order interleaving, rename plan generation,
execution with undo, and the supporting scanning / path helpers.
"""

from .errors import (
    ReorderError,
    DirectoryReadError,
    NoSupportedFilesError,
    MissingPathError,
    MixedDirectoryError,
    PlanCollisionError,
    PlanOverflowError,
    SessionBusyError,
    PendingHistoryError,
    RenameFailure,
    UndoNotFoundError,
    UndoFailure,
)

from .models_fs import (
    FileEntry,
    DirEntry,
    RenameOperation,
    RenamePlan,
    RenameOptions,
    PadOverflow,
    DroppedFiles,
    DroppedFolder,
    DroppedInput,
    SUPPORTED_EXTENSIONS,
)

from .path_utils import (
    dirname,
    basename,
    join_path,
    extension,
    detect_separator,
)

from .fs_ops import LocalFileSystem

from .scan_files import (
    scan_directory,
    resolve_dropped_input,
    is_supported,
)

from .sort_rules import (
    sort_entries,
    sort_names,
    compare_names,
    split_chunks,
    natural_sort_key,
)

from .interleave import (
    interleave,
    interleave_indices,
)

from .plan_rename import (
    build_plan,
    build_export_plan,
    plan_reorder,
    validate_plan,
    folder_prefix,
)

from .session import Session, SessionState

from .exec_rename import (
    apply,
    undo,
    export_copy,
    BatchResult,
    UndoResult,
    save_history_log,
    load_history_log,
    update_history_log,
    cleanup_temp_files,
)

__all__ = [
    # Errors
    "ReorderError",
    "DirectoryReadError",
    "NoSupportedFilesError",
    "MissingPathError",
    "MixedDirectoryError",
    "PlanCollisionError",
    "PlanOverflowError",
    "SessionBusyError",
    "PendingHistoryError",
    "RenameFailure",
    "UndoNotFoundError",
    "UndoFailure",

    # Data models
    "FileEntry",
    "DirEntry",
    "RenameOperation",
    "RenamePlan",
    "RenameOptions",
    "PadOverflow",
    "DroppedFiles",
    "DroppedFolder",
    "DroppedInput",
    "SUPPORTED_EXTENSIONS",
    "BatchResult",
    "UndoResult",
    "Session",
    "SessionState",

    # Paths and filesystem
    "dirname",
    "basename",
    "join_path",
    "extension",
    "detect_separator",
    "LocalFileSystem",

    # Scanning
    "scan_directory",
    "resolve_dropped_input",
    "is_supported",

    # Sorting
    "sort_entries",
    "sort_names",
    "compare_names",
    "split_chunks",
    "natural_sort_key",

    # Interleaving
    "interleave",
    "interleave_indices",

    # Planning
    "build_plan",
    "build_export_plan",
    "plan_reorder",
    "validate_plan",
    "folder_prefix",

    # Execution
    "apply",
    "undo",
    "export_copy",
    "save_history_log",
    "load_history_log",
    "update_history_log",
    "cleanup_temp_files",
]
