import pytest

from scan_reorder.core import (
    RenameOperation, Session, SessionState, SessionBusyError, PendingHistoryError
)


def _op(n):
    return RenameOperation(original_path=f"/scans/book1/p{n}.jpg", new_path=f"/scans/book1/book1_{n:03d}.jpg")


def test_new_session_is_idle():
    session = Session()
    assert session.state == SessionState.IDLE
    assert not session.busy
    assert not session.has_history
    session.ensure_can_apply()


def test_processing_flag_is_scoped():
    session = Session()
    with session.processing_batch():
        assert session.processing
        assert session.state == SessionState.PROCESSING
        with pytest.raises(SessionBusyError):
            session.ensure_can_apply()
    assert not session.processing


def test_flags_reset_when_batch_raises():
    session = Session()
    with pytest.raises(RuntimeError):
        with session.undoing_batch():
            assert session.state == SessionState.UNDOING
            raise RuntimeError("boom")
    assert not session.busy


def test_no_overlapping_batches():
    session = Session()
    with session.undoing_batch():
        with pytest.raises(SessionBusyError):
            with session.processing_batch():
                pass
        with pytest.raises(SessionBusyError):
            with session.undoing_batch():
                pass


def test_pending_history_requires_discard():
    session = Session(history=[_op(1), _op(2)])

    with pytest.raises(PendingHistoryError) as excinfo:
        session.ensure_can_apply()
    assert excinfo.value.pending == 2

    assert session.discard_history() == 2
    session.ensure_can_apply()


def test_discard_while_busy_is_refused():
    session = Session(history=[_op(1)])
    with session.undoing_batch():
        with pytest.raises(SessionBusyError):
            session.discard_history()
    assert session.has_history


def test_operation_reversed():
    op = _op(3)
    assert op.reversed().original_path == op.new_path
    assert op.reversed().reversed() == op
    assert not op.is_same
