"""
gui - PySide6 Interface for the Scan Reorder Tool
"""

from .gui_entry import main

__all__ = ["main"]
