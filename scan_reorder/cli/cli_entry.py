"""
cli_entry.py - CLI Entry Point

Supports:
- Command-line argument mode
- Interactive mode
"""

import argparse
import os
import sys

from ..core import (
    scan_directory, sort_entries, interleave, plan_reorder, build_export_plan,
    validate_plan, apply, undo, export_copy, load_history_log, update_history_log, cleanup_temp_files,
    RenameOptions, PadOverflow, Session, ReorderError
)
from ..logger_util import set_level
from .cli_interactive import interactive_mode, print_plan

DEFAULT_LOG_DIR = os.path.join(os.path.expanduser("~"), ".scan_reorder", "history")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="scan-reorder",
        description="Reorder scanned pages into physical order and rename them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  scan-reorder --cli

  # List images in natural order
  scan-reorder --cli scan ./book1

  # Show the rename plan
  scan-reorder --cli preview ./book1

  # Rename in place (writes an undo log)
  scan-reorder --cli reorder ./book1 --yes

  # Undo a batch
  scan-reorder --cli undo ~/.scan_reorder/history/reorder_history_....json

  # Copy into ./book1_reordered instead of renaming
  scan-reorder --cli export ./book1

  # Restore temporary names after an interrupted run
  scan-reorder --cli recover ./book1
"""
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    # scan subcommand
    scan_parser = subparsers.add_parser("scan", help="List supported images in natural order")
    scan_parser.add_argument("directory", type=str, help="Image directory")
    scan_parser.add_argument("--include-hidden", action="store_true", help="Include hidden files")

    # preview subcommand
    preview_parser = subparsers.add_parser("preview", help="Show the rename plan")
    preview_parser.add_argument("directory", type=str, help="Image directory")
    _add_plan_arguments(preview_parser)

    # reorder subcommand
    reorder_parser = subparsers.add_parser("reorder", help="Reorder and rename in place")
    reorder_parser.add_argument("directory", type=str, help="Image directory")
    _add_plan_arguments(reorder_parser)
    reorder_parser.add_argument("--log-dir", type=str, default=DEFAULT_LOG_DIR, help="History log directory")
    reorder_parser.add_argument("--no-staging", action="store_true", help="Never rename through temporary names")
    reorder_parser.add_argument("--dry-run", "-d", action="store_true", help="Preview only, do not execute")
    reorder_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    # undo subcommand
    undo_parser = subparsers.add_parser("undo", help="Undo a batch from its history log")
    undo_parser.add_argument("log_file", type=str, help="History log written by reorder")
    undo_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    # export subcommand
    export_parser = subparsers.add_parser("export", help="Copy reordered files into a new folder")
    export_parser.add_argument("directory", type=str, help="Image directory")
    export_parser.add_argument("--output", "-o", type=str, default=None, help="Output folder (default: <folder>_reordered)")
    _add_plan_arguments(export_parser)
    export_parser.add_argument("--dry-run", "-d", action="store_true", help="Preview only, do not execute")
    export_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    # recover subcommand
    recover_parser = subparsers.add_parser("recover", help="Restore files left at temporary names")
    recover_parser.add_argument("directory", type=str, help="Image directory")

    return parser


def _add_plan_arguments(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("--padding", type=int, default=3, help="Minimum zero-padding digits")
    sub.add_argument("--pad-overflow", type=str, default="widen",
                     choices=[p.value for p in PadOverflow], help="Large batches: widen numbers or reject")
    sub.add_argument("--include-hidden", action="store_true", help="Include hidden files")


def _options_from_args(args) -> RenameOptions:
    options = RenameOptions(
        pad_width=getattr(args, "padding", 3),
        pad_overflow=PadOverflow(getattr(args, "pad_overflow", "widen")),
        include_hidden=getattr(args, "include_hidden", False),
        dry_run=getattr(args, "dry_run", False),
    )
    if getattr(args, "no_staging", False):
        options.staged_execution = False
    log_dir = getattr(args, "log_dir", None)
    if log_dir:
        options.log_dir = log_dir
    return options


def _confirm(args, prompt: str) -> bool:
    if getattr(args, "yes", False):
        return True
    return input(f"\n{prompt} (y/N): ").strip().lower() == 'y'


def cmd_scan(args):
    """Handle scan command"""
    directory = os.path.abspath(args.directory)
    options = _options_from_args(args)

    files = sort_entries(scan_directory(directory, options))

    print(f"Found {len(files)} images in {directory}:")
    print("-" * 80)
    for i, f in enumerate(files, 1):
        print(f"  {i:>4}. {f.name}")
    print("-" * 80)
    return 0


def cmd_preview(args):
    """Handle preview command"""
    directory = os.path.abspath(args.directory)
    options = _options_from_args(args)

    plan = plan_reorder(scan_directory(directory, options), options)
    print_plan(plan)
    for problem in validate_plan(plan):
        print(f"  ! {problem}")
    return 0


def cmd_reorder(args):
    """Handle reorder command"""
    directory = os.path.abspath(args.directory)
    options = _options_from_args(args)

    print(f"Scan directory: {directory}")
    files = scan_directory(directory, options)
    print(f"Found {len(files)} images")

    plan = plan_reorder(files, options)
    print_plan(plan)

    problems = validate_plan(plan)
    if problems:
        print("Warnings:")
        for problem in problems:
            print(f"  - {problem}")

    if args.dry_run:
        print("\n[Preview mode] Will not actually execute")
        return 0

    if not _confirm(args, "Confirm execution?"):
        print("Cancelled")
        return 0

    print("\nExecuting...")
    session = Session()
    result = apply(plan, session)
    print(result.summary())

    if result.log_path:
        print(f"\nUndo log: {result.log_path}")
        print(f"Undo with: scan-reorder --cli undo \"{result.log_path}\"")

    return 0 if result.fail_count == 0 else 1


def cmd_undo(args):
    """Handle undo command"""
    session = Session()
    directory = load_history_log(args.log_file, session)

    print(f"Undo {len(session.history)} rename(s) in {directory or '(unknown directory)'}")
    if not _confirm(args, "Confirm undo?"):
        print("Cancelled")
        return 0

    result = undo(session)
    print(result.summary())

    if update_history_log(args.log_file, session, directory):
        print(f"\n{len(session.history)} rename(s) remain in {args.log_file}")
    return 0 if result.fully_resolved else 1


def cmd_export(args):
    """Handle export command"""
    directory = os.path.abspath(args.directory)
    options = _options_from_args(args)

    batch = sort_entries(scan_directory(directory, options))
    output = os.path.abspath(args.output) if args.output else None
    plan = build_export_plan(interleave(batch), batch, output, options)

    print(f"Output directory: {plan.directory}")
    print_plan(plan)

    if args.dry_run:
        print("\n[Preview mode] Will not actually execute")
        return 0

    if not _confirm(args, "Confirm export?"):
        print("Cancelled")
        return 0

    result = export_copy(plan)
    print(result.summary())
    return 0 if result.fail_count == 0 else 1


def cmd_recover(args):
    """Handle recover command"""
    directory = os.path.abspath(args.directory)
    count = cleanup_temp_files(directory)
    print(f"Restored {count} file(s) in {directory}")
    return 0


COMMANDS = {
    "scan": cmd_scan,
    "preview": cmd_preview,
    "reorder": cmd_reorder,
    "undo": cmd_undo,
    "export": cmd_export,
    "recover": cmd_recover,
}


def main(argv=None):
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_level("DEBUG")

    if args.command is None:
        # No subcommand, enter interactive mode
        return interactive_mode()

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except ReorderError as e:
        print(f"Error: {e}")
        return 1
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
