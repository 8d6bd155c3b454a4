from __future__ import annotations

from contextlib import nullcontext

from fieldwire.lock_mode import LockMode


def test_thread_mode_creates_reentrant_lock() -> None:
    lock = LockMode.THREAD.create_lock()

    with lock, lock:
        pass

    assert type(lock).__name__ == "RLock"


def test_none_mode_creates_no_op_lock() -> None:
    assert isinstance(LockMode.NONE.create_lock(), nullcontext)


def test_each_call_creates_a_new_lock() -> None:
    assert LockMode.THREAD.create_lock() is not LockMode.THREAD.create_lock()
