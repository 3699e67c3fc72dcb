#!/usr/bin/env python3
"""
Scan Reorder Tool - Main Entry

Supports:
- GUI mode (default startup)
- CLI mode (--cli or -c parameter)

Usage:
    scan-reorder                          # GUI mode (default)
    scan-reorder --cli                    # CLI interactive mode
    scan-reorder -c preview ./book1       # CLI command mode
    scan-reorder -c reorder ./book1 -y    # CLI command mode
    python -m scan_reorder --cli undo LOG # CLI command mode
"""

import sys


def main():
    """Main entry point"""
    # Check if CLI should be started
    if "--cli" in sys.argv or "-c" in sys.argv:
        # Remove --cli parameter
        argv = [arg for arg in sys.argv[1:] if arg not in ("--cli", "-c")]

        # CLI mode
        from .cli import main as cli_main
        return cli_main(argv)

    # Default to starting GUI
    try:
        from .gui import main as gui_main
    except ImportError as e:
        print(f"Error: Unable to start GUI, please ensure PySide6 is installed")
        print(f"Detailed error: {e}")
        print("\nInstall command: pip install PySide6")
        print("\nTo use CLI mode, run:")
        print("    scan-reorder --cli")
        print("or  scan-reorder -c")
        return 1
    return gui_main()


if __name__ == "__main__":
    sys.exit(main())
