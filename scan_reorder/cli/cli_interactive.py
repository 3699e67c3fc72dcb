"""
cli_interactive.py - Interactive CLI

Provides a menu-style interactive interface. One Session lives for the whole
menu loop, so the last batch can be undone until it is discarded.
"""

import os
from typing import Optional

from ..core import (
    scan_directory, plan_reorder, validate_plan, apply, undo,
    RenameOptions, RenamePlan, Session, ReorderError, basename
)


def clear_screen():
    """Clear screen"""
    os.system('cls' if os.name == 'nt' else 'clear')


def print_header(title: str):
    """Print header"""
    print()
    print("=" * 60)
    print(f"  {title}")
    print("=" * 60)
    print()


def print_plan(plan: RenamePlan, limit: int = 20):
    """Print the operations of a plan"""
    print()
    print(plan.summary())
    for warning in plan.warnings:
        print(f"  ! {warning}")
    print()
    print("-" * 80)
    for op in plan.ops[:limit]:
        marker = "" if not op.is_same else " (unchanged)"
        print(f"  {basename(op.original_path):<40} -> {basename(op.new_path)}{marker}")
    if plan.total_count > limit:
        print(f"  ... and {plan.total_count - limit} more operations")
    print("-" * 80)


def input_directory(prompt: str = "Please enter directory path") -> Optional[str]:
    """Input and validate directory"""
    while True:
        path_str = input(f"{prompt} (q to return): ").strip()
        if path_str.lower() == 'q':
            return None

        path = os.path.abspath(os.path.expanduser(path_str))
        if os.path.isdir(path):
            return path
        else:
            print(f"Error: Directory does not exist: {path}")


def input_bool(prompt: str, default: bool = False) -> bool:
    """Input boolean value"""
    default_str = "Y/n" if default else "y/N"
    value = input(f"{prompt} ({default_str}): ").strip().lower()
    if not value:
        return default
    return value == 'y'


def menu_reorder(session: Session):
    """Reorder and rename menu"""
    print_header("Reorder Scans")

    if session.has_history:
        print(f"The last batch ({len(session.history)} renames) can still be undone.")
        if not input_bool("Discard its undo history and continue", default=False):
            return
        session.discard_history()

    directory = input_directory("Please enter image directory")
    if directory is None:
        return

    options = RenameOptions()
    try:
        files = scan_directory(directory, options)
        plan = plan_reorder(files, options)
    except ReorderError as e:
        print(f"\nError: {e}")
        input("Press Enter to return...")
        return

    print(f"Found {len(files)} images")
    print_plan(plan, limit=15)

    problems = validate_plan(plan)
    if problems:
        print("Warnings:")
        for problem in problems:
            print(f"  - {problem}")

    # Confirm execution
    print()
    if not input_bool("Confirm execution", default=False):
        print("Cancelled")
        input("Press Enter to return...")
        return

    print("\nExecuting...")
    result = apply(plan, session)
    print()
    print(result.summary())
    if session.has_history:
        print("\nUse 'Undo last batch' from the main menu to restore the old names.")

    input("\nPress Enter to return...")


def menu_undo(session: Session):
    """Undo menu"""
    print_header("Undo Last Batch")

    if not session.has_history:
        print("Nothing to undo")
        input("Press Enter to return...")
        return

    print(f"{len(session.history)} rename(s) will be reverted")
    if not input_bool("Confirm undo", default=False):
        print("Cancelled")
        input("Press Enter to return...")
        return

    result = undo(session)
    print()
    print(result.summary())
    if session.has_history:
        print(f"\n{len(session.history)} rename(s) could not be reverted; undo can be retried.")

    input("\nPress Enter to return...")


def interactive_mode() -> int:
    """Interactive mode main loop"""
    session = Session()
    while True:
        clear_screen()
        print_header("Scan Reorder Tool")

        print("Please select function:")
        print()
        print("  1. Reorder and rename scans")
        print(f"  2. Undo last batch{' (' + str(len(session.history)) + ' pending)' if session.has_history else ''}")
        print("  3. Discard undo history")
        print()
        print("  q. Exit")
        print()

        choice = input("Please select (1/2/3/q): ").strip().lower()

        if choice == 'q':
            print("Goodbye!")
            return 0
        elif choice == '1':
            menu_reorder(session)
        elif choice == '2':
            menu_undo(session)
        elif choice == '3':
            count = session.discard_history()
            print(f"Discarded {count} pending rename(s)")
            input("Press Enter to continue...")
        else:
            print("Invalid choice")
            input("Press Enter to continue...")


if __name__ == "__main__":
    import sys
    sys.exit(interactive_mode())
