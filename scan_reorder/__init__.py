"""
scan_reorder - Reorder scanned pages into physical order and rename them in place
"""

__version__ = "1.0.0"
