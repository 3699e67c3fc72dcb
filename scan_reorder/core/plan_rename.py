"""
plan_rename.py - Rename Plan Generation Module

Responsibilities:
- Derive target names <folder>_<number>.<ext> for the interleaved sequence
- Size the zero padding for the batch
- Reject colliding targets before anything touches the disk
- Output RenamePlan
"""

from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .errors import MixedDirectoryError, PlanCollisionError, PlanOverflowError
from .interleave import interleave
from .models_fs import FileEntry, RenameOptions, RenamePlan, PadOverflow, normalize_for_comparison
from .path_utils import basename, dirname, extension, join_path
from .safety_checks import check_rename_op
from .scan_files import get_existing_names, usable_entries
from .sort_rules import sort_entries
from ..logger_util import get_logger

log = get_logger(__name__)

FALLBACK_PREFIX = "output"


def folder_prefix(entries: Sequence[FileEntry]) -> str:
    """Name of the directory the batch lives in ("output" at a filesystem or drive root)"""
    if not entries:
        return ""
    prefix = basename(dirname(entries[0].require_path()))
    if not prefix or prefix.endswith(":"):
        return FALLBACK_PREFIX
    return prefix


def pad_width(count: int, options: RenameOptions) -> int:
    """
    Number of digits used for sequence numbers

    Args:
        count: Batch size
        options: Rename options

    Returns:
        Width

    Raises:
        PlanOverflowError: Batch does not fit and the policy is REJECT
    """
    needed = len(str(count)) if count > 0 else 1
    if needed <= options.pad_width:
        return options.pad_width
    if options.pad_overflow == PadOverflow.REJECT:
        raise PlanOverflowError(count, options.pad_width)
    return needed


def target_name(prefix: str, position: int, ext: str, width: int, separator: str = "_") -> str:
    """
    Build the target filename for a 0-based position

    Example:
        target_name("book1", 0, "jpg", 3) -> "book1_001.jpg"
    """
    name = f"{prefix}{separator}{str(position + 1).zfill(width)}"
    if ext:
        name += f".{ext}"
    return name


def _batch_directory(batch: Sequence[FileEntry]) -> str:
    directories = sorted({dirname(e.require_path()) for e in batch})
    if len(directories) > 1:
        raise MixedDirectoryError(directories)
    return directories[0]


def _warn_if_widened(plan: RenamePlan, width: int) -> None:
    if width > plan.options.pad_width:
        plan.add_warning(f"Sequence numbers widened to {width} digits for {plan.total_count} files")


def _find_collisions(
    plan: RenamePlan,
    occupied: Set[str],
    case_insensitive: bool
) -> List[Tuple[str, str]]:
    """Targets that repeat each other or land on an occupied name"""
    collisions: List[Tuple[str, str]] = []
    by_target: Dict[str, List[str]] = defaultdict(list)

    for op in plan.ops:
        key = normalize_for_comparison(op.new_path, case_insensitive)
        by_target[key].append(op.original_path)
        if normalize_for_comparison(basename(op.new_path), case_insensitive) in occupied:
            collisions.append((op.original_path, op.new_path))

    for op in plan.ops:
        key = normalize_for_comparison(op.new_path, case_insensitive)
        if len(by_target[key]) > 1:
            collisions.append((op.original_path, op.new_path))

    return collisions


def build_plan(
    interleaved: Sequence[FileEntry],
    batch: Sequence[FileEntry],
    options: Optional[RenameOptions] = None,
    fs=None
) -> RenamePlan:
    """
    Generate the in-place rename plan

    Args:
        interleaved: Entries in target order
        batch: The same entries in natural order (folder prefix source)
        options: Rename options
        fs: Filesystem capabilities used to look for non-batch files

    Returns:
        Rename plan with one operation per entry, in target order

    Raises:
        PlanCollisionError: Targets collide with each other or with other files
        PlanOverflowError: Batch too large for the REJECT pad policy
        MixedDirectoryError: Entries do not share one directory
    """
    if options is None:
        options = RenameOptions()

    interleaved = usable_entries(interleaved)
    batch = usable_entries(batch)
    if not interleaved:
        return RenamePlan(options=options)

    source = batch if batch else interleaved
    directory = _batch_directory(interleaved)
    prefix = folder_prefix(source)
    width = pad_width(len(interleaved), options)

    plan = RenamePlan(directory=directory, options=options)
    for i, entry in enumerate(interleaved):
        original = entry.require_path()
        name = target_name(prefix, i, extension(entry.name), width, options.separator)
        plan.add_op(original, join_path(dirname(original), name))
    _warn_if_widened(plan, width)

    # Names on disk that are not part of this batch must not be replaced
    ci = options.case_insensitive_detect
    occupied = get_existing_names(directory, ci, fs)
    occupied -= {normalize_for_comparison(basename(e.path), ci) for e in interleaved}

    collisions = _find_collisions(plan, occupied, ci)
    if collisions:
        log.warning("Rejected plan for %s: %d collision(s)", directory, len(collisions))
        raise PlanCollisionError(collisions)

    log.info("Planned %d rename(s) in %s (prefix %r, width %d)", plan.total_count, directory, prefix, width)
    return plan


def plan_reorder(
    entries: Sequence[FileEntry],
    options: Optional[RenameOptions] = None,
    fs=None
) -> RenamePlan:
    """
    Sort, interleave and plan in one step

    Args:
        entries: Batch entries in any order
        options: Rename options
        fs: Filesystem capabilities

    Returns:
        Rename plan
    """
    batch = sort_entries(usable_entries(entries))
    return build_plan(interleave(batch), batch, options, fs)


def build_export_plan(
    interleaved: Sequence[FileEntry],
    batch: Sequence[FileEntry],
    output_dir: Optional[str] = None,
    options: Optional[RenameOptions] = None,
    fs=None
) -> RenamePlan:
    """
    Generate a copy plan into a separate folder, leaving the originals alone

    Args:
        interleaved: Entries in target order
        batch: The same entries in natural order
        output_dir: Destination folder (default: <folder>_reordered next to the source)
        options: Rename options
        fs: Filesystem capabilities

    Returns:
        Plan whose new_path values live in output_dir

    Raises:
        PlanCollisionError: Targets collide or already exist in output_dir
    """
    if options is None:
        options = RenameOptions()

    interleaved = usable_entries(interleaved)
    batch = usable_entries(batch)
    if not interleaved:
        return RenamePlan(options=options)

    source = batch if batch else interleaved
    directory = _batch_directory(interleaved)
    prefix = folder_prefix(source)
    width = pad_width(len(interleaved), options)

    if not output_dir:
        output_dir = join_path(dirname(directory), f"{prefix}{options.separator}reordered")

    plan = RenamePlan(directory=output_dir, options=options)
    for i, entry in enumerate(interleaved):
        name = target_name(prefix, i, extension(entry.name), width, options.separator)
        plan.add_op(entry.require_path(), join_path(output_dir, name))
    _warn_if_widened(plan, width)

    ci = options.case_insensitive_detect
    collisions = _find_collisions(plan, get_existing_names(output_dir, ci, fs), ci)
    if collisions:
        raise PlanCollisionError(collisions)

    log.info("Planned export of %d file(s) to %s", plan.total_count, output_dir)
    return plan


def validate_plan(plan: RenamePlan, fs=None) -> List[str]:
    """
    Validate rename plan

    Args:
        plan: Rename plan
        fs: Filesystem capabilities

    Returns:
        Problem list (empty if the plan looks safe)
    """
    errors = []

    for op in plan.ops:
        if op.is_same:
            continue
        valid, error = check_rename_op(op.original_path, op.new_path, fs)
        if not valid:
            errors.append(error)

    # Check for duplicate destinations
    dst_set: Dict[str, List[str]] = defaultdict(list)
    for op in plan.ops:
        key = normalize_for_comparison(op.new_path, plan.options.case_insensitive_detect)
        dst_set[key].append(op.original_path)

    for dst_key, srcs in dst_set.items():
        if len(srcs) > 1:
            errors.append(f"Multiple files have the same destination: {srcs} -> {dst_key}")

    return errors
