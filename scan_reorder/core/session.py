"""
session.py - Workflow Session

A Session owns the mutable state of one directory workflow: the processing and
undoing flags and the history of committed renames. It is passed explicitly to
apply() and undo(); nothing in the core keeps state elsewhere.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List

from .errors import PendingHistoryError, SessionBusyError
from .models_fs import RenameOperation
from ..logger_util import get_logger

log = get_logger(__name__)


class SessionState(Enum):
    """Session state"""
    IDLE = "idle"
    PROCESSING = "processing"
    UNDOING = "undoing"


@dataclass
class Session:
    """Single-owner workflow context"""
    processing: bool = False
    undoing: bool = False
    history: List[RenameOperation] = field(default_factory=list)

    @property
    def state(self) -> SessionState:
        if self.processing:
            return SessionState.PROCESSING
        if self.undoing:
            return SessionState.UNDOING
        return SessionState.IDLE

    @property
    def busy(self) -> bool:
        return self.processing or self.undoing

    @property
    def has_history(self) -> bool:
        """Whether a batch can still be undone"""
        return bool(self.history)

    def discard_history(self) -> int:
        """
        Forget the pending history (the renamed files stay as they are)

        Returns:
            Number of discarded operations

        Raises:
            SessionBusyError: A batch or undo is running
        """
        if self.busy:
            raise SessionBusyError(f"Cannot discard history while {self.state.value}")
        count = len(self.history)
        self.history.clear()
        if count:
            log.info("Discarded %d pending undo operation(s)", count)
        return count

    def ensure_can_apply(self) -> None:
        """
        Check that a new batch may start

        Raises:
            SessionBusyError: A batch or undo is running
            PendingHistoryError: A previous batch is still undoable
        """
        if self.busy:
            raise SessionBusyError(f"Session is {self.state.value}")
        if self.history:
            raise PendingHistoryError(len(self.history))

    @contextmanager
    def processing_batch(self) -> Iterator["Session"]:
        """Mark the session as processing for the duration of a batch"""
        self.ensure_can_apply()
        self.processing = True
        try:
            yield self
        finally:
            self.processing = False

    @contextmanager
    def undoing_batch(self) -> Iterator["Session"]:
        """Mark the session as undoing for the duration of an undo pass"""
        if self.busy:
            raise SessionBusyError(f"Session is {self.state.value}")
        self.undoing = True
        try:
            yield self
        finally:
            self.undoing = False
