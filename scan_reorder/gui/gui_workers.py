"""
gui_workers.py - GUI Worker Threads

Provides background execution of long tasks to avoid blocking UI
"""

from typing import Optional, List

from PySide6.QtCore import QThread, Signal, QObject

from ..core import (
    resolve_dropped_input, sort_entries, plan_reorder, apply, undo,
    RenameOptions, FileEntry, RenamePlan, Session, DroppedInput
)


class ScanWorker(QThread):
    """Directory scanning worker thread"""

    # Signals
    finished = Signal(str, list)    # Complete, returns (directory, naturally sorted entries)
    error = Signal(str)             # Error message

    def __init__(
        self,
        dropped: DroppedInput,
        options: Optional[RenameOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.dropped = dropped
        self.options = options or RenameOptions()

    def run(self):
        try:
            directory, files = resolve_dropped_input(self.dropped, self.options)
            self.finished.emit(directory, sort_entries(files))
        except Exception as e:
            self.error.emit(str(e))


class PlanWorker(QThread):
    """Rename plan generation worker thread"""

    # Signals
    finished = Signal(object)           # RenamePlan
    error = Signal(str)                 # Error message

    def __init__(
        self,
        files: List[FileEntry],
        options: Optional[RenameOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.files = files
        self.options = options or RenameOptions()

    def run(self):
        try:
            plan = plan_reorder(self.files, self.options)
            self.finished.emit(plan)
        except Exception as e:
            self.error.emit(str(e))


class RenameWorker(QThread):
    """Rename execution worker thread"""

    # Signals
    progress = Signal(int, int, str)    # current, total, message
    finished = Signal(object)           # BatchResult
    error = Signal(str)                 # Error message

    def __init__(
        self,
        plan: RenamePlan,
        session: Session,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.plan = plan
        self.session = session

    def run(self):
        try:
            def progress_callback(current: int, total: int, msg: str):
                self.progress.emit(current, total, msg)

            result = apply(self.plan, self.session, progress_callback=progress_callback)
            self.finished.emit(result)
        except Exception as e:
            self.error.emit(str(e))


class UndoWorker(QThread):
    """Undo worker thread"""

    progress = Signal(int, int, str)
    finished = Signal(object)           # UndoResult
    error = Signal(str)

    def __init__(
        self,
        session: Session,
        options: Optional[RenameOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.session = session
        self.options = options or RenameOptions()

    def run(self):
        try:
            def progress_callback(current: int, total: int, msg: str):
                self.progress.emit(current, total, msg)

            result = undo(self.session, progress_callback=progress_callback, options=self.options)
            self.finished.emit(result)
        except Exception as e:
            self.error.emit(str(e))
