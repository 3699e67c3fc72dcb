"""
exec_rename.py - Rename Execution Module

Responsibilities:
- Apply a rename plan one operation at a time, recording successes in the session history
- Undo the recorded history, newest first
- Staged execution through temporary names when targets overlap sources
- History logs (save / load) and recovery of leftover temporary files
- Copy-based export of a plan
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple, Type
import json
import os
import uuid

from .errors import ReorderError, RenameFailure, UndoFailure, UndoNotFoundError
from .fs_ops import LocalFileSystem
from .models_fs import RenameOperation, RenameOptions, RenamePlan, has_overlap
from .path_utils import basename, dirname, join_path
from .session import Session
from ..logger_util import get_logger

log = get_logger(__name__)

TEMP_PREFIX = ".__tmp_reorder__"

ProgressCallback = Callable[[int, int, str], None]


@dataclass
class BatchResult:
    """Rename execution result"""
    success_count: int = 0
    fail_count: int = 0
    failed: List[Tuple[RenameOperation, str]] = field(default_factory=list)  # (op, error_msg)
    dry_run: bool = False
    log_path: Optional[str] = None

    @property
    def total(self) -> int:
        return self.success_count + self.fail_count

    def summary(self) -> str:
        """Generate summary"""
        title = "Preview Result:" if self.dry_run else "Execution Result:"
        lines = [
            title,
            f"  - Success: {self.success_count}",
            f"  - Failed: {self.fail_count}",
        ]
        lines.extend(_failure_lines(self.failed))
        return "\n".join(lines)


@dataclass
class UndoResult:
    """Undo result"""
    success_count: int = 0
    fail_count: int = 0
    not_found_count: int = 0
    failed: List[Tuple[RenameOperation, str]] = field(default_factory=list)
    not_found: List[RenameOperation] = field(default_factory=list)

    @property
    def fully_resolved(self) -> bool:
        return self.fail_count == 0 and self.not_found_count == 0

    def summary(self) -> str:
        """Generate summary"""
        lines = [
            "Undo Result:",
            f"  - Restored: {self.success_count}",
            f"  - Failed: {self.fail_count}",
            f"  - Not found: {self.not_found_count}",
        ]
        lines.extend(_failure_lines(self.failed))
        return "\n".join(lines)


def _failure_lines(failed: List[Tuple[RenameOperation, str]], limit: int = 10) -> List[str]:
    if not failed:
        return []
    lines = ["Failure Details:"]
    for op, error in failed[:limit]:
        lines.append(f"  - {basename(op.original_path)} -> {basename(op.new_path)}: {error}")
    if len(failed) > limit:
        lines.append(f"  ... and {len(failed) - limit} more failures")
    return lines


def _generate_temp_path(original: str) -> str:
    """Generate temporary path next to the original"""
    unique_id = uuid.uuid4().hex[:8]
    return join_path(dirname(original), f"{TEMP_PREFIX}{unique_id}__{basename(original)}")


def _is_temp_name(name: str) -> bool:
    """Check if it's a temporary filename"""
    return name.startswith(TEMP_PREFIX)


def _execute_ops(
    ops: List[RenameOperation],
    fs,
    on_result: Callable[[int, Optional[ReorderError]], None],
    failure_cls: Type[ReorderError],
    staged: bool = False,
    check_missing: bool = False,
    progress_callback: Optional[ProgressCallback] = None,
    label: str = "Rename"
) -> None:
    """
    Run operations sequentially, reporting each outcome as soon as it is known

    Args:
        ops: Operations in execution order
        fs: Filesystem capabilities
        on_result: Called with (index, None) on success or (index, error) on failure
        failure_cls: Error type used for failed renames
        staged: Move every source to a temporary name first, then to its target
        check_missing: Report UndoNotFoundError for sources that no longer exist
        progress_callback: Progress callback (current, total, message)
        label: Progress message label
    """
    total = len(ops) * (2 if staged else 1)
    step = 0
    temps: Dict[int, str] = {}

    # Direct execution, or phase 1 of staged execution
    for idx, op in enumerate(ops):
        step += 1
        if progress_callback:
            phase = "[Phase 1] " if staged else ""
            progress_callback(step, total, f"[{label}] {phase}{basename(op.original_path)} -> {basename(op.new_path)}")

        if check_missing and not fs.exists(op.original_path):
            on_result(idx, UndoNotFoundError(f"File no longer exists: {op.original_path}"))
            continue

        if op.is_same:
            on_result(idx, None)
            continue

        if not staged:
            try:
                fs.rename(op.original_path, op.new_path)
            except OSError as e:
                on_result(idx, failure_cls(str(e)))
                continue
            on_result(idx, None)
            continue

        temp_path = _generate_temp_path(op.original_path)
        try:
            fs.rename(op.original_path, temp_path)
        except OSError as e:
            on_result(idx, failure_cls(f"Phase 1 failed: {e}"))
            continue
        temps[idx] = temp_path

    if not staged:
        return

    # Phase 2: temporary names to final names, still in plan order
    for idx, temp_path in temps.items():
        op = ops[idx]
        step += 1
        if progress_callback:
            progress_callback(step, total, f"[{label}] [Phase 2] temp name -> {basename(op.new_path)}")

        try:
            fs.rename(temp_path, op.new_path)
        except OSError as e:
            # Try to restore
            try:
                fs.rename(temp_path, op.original_path)
                message = f"Phase 2 failed (restored): {e}"
            except OSError as e2:
                message = f"Phase 2 failed (restore also failed): {e}, restore error: {e2}"
                log.error("File left at temporary name %s: %s", temp_path, e2)
            on_result(idx, failure_cls(message))
            continue
        on_result(idx, None)


def apply(
    plan: RenamePlan,
    session: Session,
    fs=None,
    progress_callback: Optional[ProgressCallback] = None
) -> BatchResult:
    """
    Execute a rename plan and record the committed renames

    Every operation is attempted; a failed rename is counted and the batch
    continues. Successful operations are appended to session.history in
    execution order.

    Args:
        plan: Rename plan
        session: Workflow session (must be idle with no pending history)
        fs: Filesystem capabilities (defaults to LocalFileSystem)
        progress_callback: Progress callback (current, total, message)

    Returns:
        Execution result

    Raises:
        SessionBusyError: The session is already processing or undoing
        PendingHistoryError: The previous batch has not been undone or discarded
    """
    if fs is None:
        fs = LocalFileSystem()

    options = plan.options
    result = BatchResult(dry_run=options.dry_run)

    if options.dry_run:
        # Nothing is renamed, so the session is left untouched
        for i, op in enumerate(plan.ops):
            if progress_callback:
                progress_callback(i + 1, plan.total_count, f"[Preview] {basename(op.original_path)} -> {basename(op.new_path)}")
            result.success_count += 1
        return result

    with session.processing_batch():
        staged = options.staged_execution and plan.needs_staging
        if staged:
            log.info("Targets overlap sources in %s, renaming through temporary names", plan.directory)

        def on_result(idx: int, error: Optional[ReorderError]) -> None:
            op = plan.ops[idx]
            if error is None:
                session.history.append(op)
                result.success_count += 1
            else:
                result.fail_count += 1
                result.failed.append((op, str(error)))
                log.warning("Rename failed: %s -> %s: %s", op.original_path, op.new_path, error)

        _execute_ops(
            plan.ops, fs, on_result, RenameFailure,
            staged=staged, progress_callback=progress_callback, label="Rename",
        )

    log.info("Batch finished in %s: %d succeeded, %d failed", plan.directory, result.success_count, result.fail_count)

    if options.log_dir and session.has_history:
        try:
            result.log_path = save_history_log(session, plan.directory, options.log_dir)
        except OSError as e:
            log.error("Could not write history log to %s: %s", options.log_dir, e)

    return result


def undo(
    session: Session,
    fs=None,
    progress_callback: Optional[ProgressCallback] = None,
    options: Optional[RenameOptions] = None
) -> UndoResult:
    """
    Reverse the session history, newest rename first

    A rename whose file has disappeared is counted as not found and skipped.
    Restored entries leave the history; failed and missing ones stay so undo
    can be run again. The history is cleared only if everything was restored.

    Args:
        session: Workflow session
        fs: Filesystem capabilities (defaults to LocalFileSystem)
        progress_callback: Progress callback (current, total, message)
        options: Rename options (staging and case sensitivity)

    Returns:
        Undo result

    Raises:
        SessionBusyError: The session is already processing or undoing
    """
    if fs is None:
        fs = LocalFileSystem()
    if options is None:
        options = RenameOptions()

    result = UndoResult()

    with session.undoing_batch():
        newest_first = list(reversed(session.history))
        reverse_ops = [op.reversed() for op in newest_first]
        staged = options.staged_execution and has_overlap(reverse_ops, options.case_insensitive_detect)

        def on_result(idx: int, error: Optional[ReorderError]) -> None:
            op = newest_first[idx]
            if error is None:
                session.history.remove(op)
                result.success_count += 1
            elif isinstance(error, UndoNotFoundError):
                result.not_found_count += 1
                result.not_found.append(op)
                log.warning("Undo skipped, %s", error)
            else:
                result.fail_count += 1
                result.failed.append((op, str(error)))
                log.warning("Undo failed: %s -> %s: %s", op.new_path, op.original_path, error)

        _execute_ops(
            reverse_ops, fs, on_result, UndoFailure,
            staged=staged, check_missing=True, progress_callback=progress_callback, label="Undo",
        )

        if result.fully_resolved:
            session.history.clear()

    log.info(
        "Undo finished: %d restored, %d failed, %d not found",
        result.success_count, result.fail_count, result.not_found_count
    )
    return result


def export_copy(
    plan: RenamePlan,
    fs=None,
    progress_callback: Optional[ProgressCallback] = None
) -> BatchResult:
    """
    Copy files to the targets of an export plan (originals are left alone)

    Args:
        plan: Plan from build_export_plan()
        fs: Filesystem capabilities
        progress_callback: Progress callback (current, total, message)

    Returns:
        Execution result
    """
    if fs is None:
        fs = LocalFileSystem()

    result = BatchResult(dry_run=plan.options.dry_run)
    if not plan.ops:
        return result

    if not plan.options.dry_run:
        try:
            fs.makedirs(plan.directory)
        except OSError as e:
            # Every copy would fail; report them all
            for op in plan.ops:
                result.fail_count += 1
                result.failed.append((op, f"Failed to create output directory: {e}"))
            return result

    for i, op in enumerate(plan.ops):
        if progress_callback:
            progress_callback(i + 1, plan.total_count, f"[Export] {basename(op.original_path)} -> {basename(op.new_path)}")
        if plan.options.dry_run:
            result.success_count += 1
            continue
        try:
            fs.copy(op.original_path, op.new_path)
        except OSError as e:
            result.fail_count += 1
            result.failed.append((op, str(e)))
            log.warning("Copy failed: %s -> %s: %s", op.original_path, op.new_path, e)
            continue
        result.success_count += 1

    log.info("Export to %s finished: %d copied, %d failed", plan.directory, result.success_count, result.fail_count)
    return result


def save_history_log(session: Session, directory: str, log_dir: str) -> str:
    """
    Save the pending history so it can be undone later

    Args:
        session: Session whose history is saved
        directory: Directory the batch was applied to
        log_dir: Log directory

    Returns:
        Log file path
    """
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"reorder_history_{timestamp}_{uuid.uuid4().hex[:6]}.json")
    _write_history(log_file, timestamp, directory, session.history)
    log.info("History log written: %s", log_file)
    return log_file


def _write_history(log_file: str, timestamp: str, directory: str, history: List[RenameOperation]) -> None:
    data = {
        "timestamp": timestamp,
        "directory": directory,
        "total_ops": len(history),
        "operations": [
            {"original_path": op.original_path, "new_path": op.new_path}
            for op in history
        ],
    }

    with open(log_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def load_history_log(log_file: str, session: Session) -> str:
    """
    Load a history log into an idle session without pending history

    Args:
        log_file: Log written by save_history_log()
        session: Target session

    Returns:
        Directory the history belongs to

    Raises:
        SessionBusyError / PendingHistoryError: Session cannot take a history
        ValueError: Log file is malformed
    """
    session.ensure_can_apply()

    with open(log_file, 'r', encoding='utf-8') as f:
        data = json.load(f)

    try:
        ops = [
            RenameOperation(original_path=item["original_path"], new_path=item["new_path"])
            for item in data["operations"]
        ]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed history log {log_file}: {e}") from e

    session.history.extend(ops)
    return data.get("directory", "")


def update_history_log(log_file: str, session: Session, directory: str = "") -> bool:
    """
    Rewrite a history log after an undo pass

    Args:
        log_file: Log file path
        session: Session holding the remaining history
        directory: Directory the history belongs to

    Returns:
        True if the log still holds operations, False if it was removed
    """
    if not session.history:
        if os.path.exists(log_file):
            os.remove(log_file)
        return False

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    _write_history(log_file, timestamp, directory, session.history)
    return True


def cleanup_temp_files(directory: str, fs=None) -> int:
    """
    Restore files left at temporary names by an interrupted staged run

    Args:
        directory: Directory

    Returns:
        Number of restored files
    """
    if fs is None:
        fs = LocalFileSystem()

    count = 0
    for item in fs.list_directory(directory):
        if not (item.is_file and _is_temp_name(item.name)):
            continue
        # Temporary name format: .__tmp_reorder__{uuid}__{original_name}
        original_name = item.name[len(TEMP_PREFIX):].split("__", 1)[-1]
        original_path = join_path(directory, original_name)
        if fs.exists(original_path):
            log.warning("Cannot restore %s: %s already exists", item.name, original_name)
            continue
        try:
            fs.rename(join_path(directory, item.name), original_path)
            count += 1
        except OSError as e:
            log.warning("Cannot restore %s: %s", item.name, e)
    return count
