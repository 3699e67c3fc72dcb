"""
gui_mainwindow.py - GUI Main Window

Single page workflow:
1. Pick or drop a folder (or files from one folder)
2. Preview the physical page order and new names
3. Execute, then undo or discard the batch
"""

import os
from typing import Optional, List

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QLineEdit, QPushButton, QSpinBox, QCheckBox,
    QTableWidget, QTableWidgetItem, QProgressBar,
    QFileDialog, QMessageBox, QHeaderView, QGroupBox
)
from PySide6.QtCore import Slot
from PySide6.QtGui import QColor

from ..core import (
    FileEntry, RenamePlan, RenameOptions, PadOverflow, Session,
    BatchResult, UndoResult, DroppedFiles, DroppedFolder, DroppedInput,
    basename, validate_plan
)
from .gui_workers import ScanWorker, PlanWorker, RenameWorker, UndoWorker


def dropped_input_from_paths(paths: List[str]) -> Optional[DroppedInput]:
    """Map dropped local paths to a folder drop or a files drop"""
    paths = [p for p in paths if p]
    if not paths:
        return None
    if len(paths) == 1 and os.path.isdir(paths[0]):
        return DroppedFolder(path=paths[0])
    return DroppedFiles(paths=[p for p in paths if os.path.isfile(p)])


class ReorderPage(QWidget):
    """Reorder and rename page"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.session = Session()
        self.directory: str = ""
        self.files: List[FileEntry] = []
        self.plan: Optional[RenamePlan] = None
        self.scan_worker: Optional[ScanWorker] = None
        self.plan_worker: Optional[PlanWorker] = None
        self.rename_worker: Optional[RenameWorker] = None
        self.undo_worker: Optional[UndoWorker] = None

        self.setAcceptDrops(True)
        self._init_ui()
        self._update_buttons()

    def _init_ui(self):
        layout = QVBoxLayout(self)

        # Directory settings group
        dir_group = QGroupBox("Scans")
        dir_layout = QGridLayout(dir_group)

        dir_layout.addWidget(QLabel("Directory:"), 0, 0)
        self.dir_edit = QLineEdit()
        self.dir_edit.setPlaceholderText("Select a folder of scans, or drop it here...")
        dir_layout.addWidget(self.dir_edit, 0, 1)
        self.browse_btn = QPushButton("Browse...")
        self.browse_btn.clicked.connect(self._browse_directory)
        dir_layout.addWidget(self.browse_btn, 0, 2)

        dir_layout.addWidget(QLabel("Padding Digits:"), 1, 0)
        self.padding_spin = QSpinBox()
        self.padding_spin.setRange(1, 10)
        self.padding_spin.setValue(3)
        dir_layout.addWidget(self.padding_spin, 1, 1)

        self.reject_check = QCheckBox("Reject batches that need more digits")
        dir_layout.addWidget(self.reject_check, 2, 1, 1, 2)

        self.scan_btn = QPushButton("Scan and Preview")
        self.scan_btn.clicked.connect(self._do_scan)
        dir_layout.addWidget(self.scan_btn, 3, 0, 1, 3)

        layout.addWidget(dir_group)

        # Results table
        self.table = QTableWidget()
        self.table.setColumnCount(3)
        self.table.setHorizontalHeaderLabels(["Page", "Original Name", "New Name"])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeMode.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        self.table.horizontalHeader().setSectionResizeMode(2, QHeaderView.ResizeMode.Stretch)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        layout.addWidget(self.table, 1)

        # Progress and execution
        bottom_layout = QHBoxLayout()

        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        bottom_layout.addWidget(self.progress_bar, 1)

        self.discard_btn = QPushButton("Discard Undo")
        self.discard_btn.clicked.connect(self._do_discard)
        bottom_layout.addWidget(self.discard_btn)

        self.undo_btn = QPushButton("Undo")
        self.undo_btn.clicked.connect(self._do_undo)
        bottom_layout.addWidget(self.undo_btn)

        self.execute_btn = QPushButton("Execute Rename")
        self.execute_btn.clicked.connect(self._do_execute)
        self.execute_btn.setStyleSheet("QPushButton { background-color: #4CAF50; color: white; font-weight: bold; padding: 8px 16px; }")
        bottom_layout.addWidget(self.execute_btn)

        layout.addLayout(bottom_layout)

        # Status label
        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

    def _options(self) -> RenameOptions:
        return RenameOptions(
            pad_width=self.padding_spin.value(),
            pad_overflow=PadOverflow.REJECT if self.reject_check.isChecked() else PadOverflow.WIDEN,
        )

    def _update_buttons(self):
        """Enable controls according to the session state"""
        busy = self.session.busy
        self.browse_btn.setEnabled(not busy)
        self.scan_btn.setEnabled(not busy)
        self.execute_btn.setEnabled(not busy and self.plan is not None and self.plan.total_count > 0)
        self.undo_btn.setEnabled(not busy and self.session.has_history)
        self.discard_btn.setEnabled(not busy and self.session.has_history)
        if self.session.has_history:
            self.undo_btn.setText(f"Undo ({len(self.session.history)})")
        else:
            self.undo_btn.setText("Undo")

    # Drag and drop

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls() and not self.session.busy:
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        paths = [url.toLocalFile() for url in event.mimeData().urls() if url.isLocalFile()]
        dropped = dropped_input_from_paths(paths)
        if dropped is None:
            return
        if isinstance(dropped, DroppedFolder):
            self.dir_edit.setText(dropped.path)
        event.acceptProposedAction()
        self._start_scan(dropped)

    # Scan and preview

    def _browse_directory(self):
        """Browse and select directory"""
        directory = QFileDialog.getExistingDirectory(self, "Select Directory")
        if directory:
            self.dir_edit.setText(directory)

    def _do_scan(self):
        """Execute scan"""
        directory = self.dir_edit.text().strip()
        if not directory:
            QMessageBox.warning(self, "Warning", "Please select a directory first")
            return
        self._start_scan(DroppedFolder(path=directory))

    def _start_scan(self, dropped: DroppedInput):
        self.plan = None
        self.scan_btn.setEnabled(False)
        self.scan_btn.setText("Scanning...")
        self.execute_btn.setEnabled(False)

        self.scan_worker = ScanWorker(dropped, self._options())
        self.scan_worker.finished.connect(self._on_scan_finished)
        self.scan_worker.error.connect(self._on_scan_error)
        self.scan_worker.start()

    @Slot(str, list)
    def _on_scan_finished(self, directory: str, files: List[FileEntry]):
        """Scan complete, generate the preview"""
        self.directory = directory
        self.files = files
        self.dir_edit.setText(directory)
        self.status_label.setText(f"Found {len(files)} images")

        self.plan_worker = PlanWorker(files, self._options())
        self.plan_worker.finished.connect(self._on_plan_finished)
        self.plan_worker.error.connect(self._on_plan_error)
        self.plan_worker.start()

    @Slot(str)
    def _on_scan_error(self, error: str):
        """Scan error"""
        self.scan_btn.setText("Scan and Preview")
        self._update_buttons()
        QMessageBox.critical(self, "Error", f"Scan failed: {error}")

    @Slot(object)
    def _on_plan_finished(self, plan: RenamePlan):
        """Plan generation complete"""
        self.plan = plan
        self.scan_btn.setText("Scan and Preview")

        self.table.setRowCount(plan.total_count)
        for i, op in enumerate(plan.ops):
            self.table.setItem(i, 0, QTableWidgetItem(str(i + 1)))
            self.table.setItem(i, 1, QTableWidgetItem(basename(op.original_path)))
            new_item = QTableWidgetItem(basename(op.new_path))
            if op.is_same:
                new_item.setForeground(QColor(150, 150, 150))
            else:
                new_item.setForeground(QColor(0, 150, 0))
            self.table.setItem(i, 2, new_item)

        problems = validate_plan(plan)
        if problems:
            self.status_label.setText(f"{plan.total_count} files, {len(problems)} warning(s): {problems[0]}")
        else:
            self.status_label.setText(f"Will perform {plan.total_count} rename operations")
        self._update_buttons()

    @Slot(str)
    def _on_plan_error(self, error: str):
        """Plan generation error"""
        self.scan_btn.setText("Scan and Preview")
        self.table.setRowCount(0)
        self._update_buttons()
        QMessageBox.critical(self, "Error", f"Failed to generate preview: {error}")

    # Execute

    def _do_execute(self):
        """Execute rename"""
        if not self.plan or not self.plan.ops:
            return

        discard = self.session.has_history
        if discard:
            reply = QMessageBox.question(
                self, "Discard Undo",
                f"The previous batch ({len(self.session.history)} renames) can still be undone.\n\n"
                "Discard its undo history and continue?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
            )
            if reply != QMessageBox.StandardButton.Yes:
                return

        reply = QMessageBox.question(
            self, "Confirm",
            f"Are you sure you want to execute {self.plan.total_count} rename operations?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if reply != QMessageBox.StandardButton.Yes:
            return
        if discard:
            self.session.discard_history()

        self.execute_btn.setText("Executing...")
        self.progress_bar.setVisible(True)
        self.progress_bar.setRange(0, self.plan.total_count * 2)

        self.rename_worker = RenameWorker(self.plan, self.session)
        self.rename_worker.progress.connect(self._on_progress)
        self.rename_worker.finished.connect(self._on_rename_finished)
        self.rename_worker.error.connect(self._on_worker_error)
        self.rename_worker.start()
        self._update_buttons_busy()

    def _update_buttons_busy(self):
        for btn in (self.browse_btn, self.scan_btn, self.execute_btn, self.undo_btn, self.discard_btn):
            btn.setEnabled(False)

    @Slot(int, int, str)
    def _on_progress(self, current: int, total: int, msg: str):
        """Execution progress update"""
        self.progress_bar.setMaximum(total)
        self.progress_bar.setValue(current)
        self.status_label.setText(msg)

    @Slot(object)
    def _on_rename_finished(self, result: BatchResult):
        """Execution complete"""
        self.execute_btn.setText("Execute Rename")
        self.progress_bar.setVisible(False)

        msg = f"Rename complete!\n\nSuccess: {result.success_count}\nFailed: {result.fail_count}"
        if result.fail_count > 0:
            msg += "\n\nFailure Details:\n"
            for op, error in result.failed[:5]:
                msg += f"  {basename(op.original_path)}: {error}\n"
            if len(result.failed) > 5:
                msg += f"  ... and {len(result.failed) - 5} more failures"

        QMessageBox.information(self, "Complete", msg)

        self.plan = None
        self.table.setRowCount(0)
        self.status_label.setText("Complete")
        self._update_buttons()

    # Undo

    def _do_undo(self):
        """Undo last batch"""
        if not self.session.has_history:
            return

        self.progress_bar.setVisible(True)
        self.progress_bar.setRange(0, len(self.session.history))

        self.undo_worker = UndoWorker(self.session, self._options())
        self.undo_worker.progress.connect(self._on_progress)
        self.undo_worker.finished.connect(self._on_undo_finished)
        self.undo_worker.error.connect(self._on_worker_error)
        self.undo_worker.start()
        self._update_buttons_busy()

    @Slot(object)
    def _on_undo_finished(self, result: UndoResult):
        self.progress_bar.setVisible(False)

        msg = (
            f"Undo complete!\n\nRestored: {result.success_count}\n"
            f"Failed: {result.fail_count}\nNot found: {result.not_found_count}"
        )
        if not result.fully_resolved:
            msg += f"\n\n{len(self.session.history)} rename(s) remain; undo can be retried."
        QMessageBox.information(self, "Undo", msg)

        self.status_label.setText("Undo complete" if result.fully_resolved else "Undo partially complete")
        self._update_buttons()

    def _do_discard(self):
        reply = QMessageBox.question(
            self, "Discard Undo",
            "Forget the undo history? The files keep their new names.",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if reply != QMessageBox.StandardButton.Yes:
            return
        count = self.session.discard_history()
        self.status_label.setText(f"Discarded {count} pending rename(s)")
        self._update_buttons()

    @Slot(str)
    def _on_worker_error(self, error: str):
        """Execution error"""
        self.execute_btn.setText("Execute Rename")
        self.progress_bar.setVisible(False)
        self._update_buttons()
        QMessageBox.critical(self, "Error", f"Execution failed: {error}")


class MainWindow(QMainWindow):
    """Main window"""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Scan Reorder Tool")
        self.setMinimumSize(800, 600)

        self.page = ReorderPage()
        self.setCentralWidget(self.page)

        # Status bar
        self.statusBar().showMessage("Ready")
