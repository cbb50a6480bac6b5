import threading

from assignables.threading.lock_handle import LockHandle, create_default_lock


def test_stdlib_locks_are_lock_handles() -> None:
    assert isinstance(threading.Lock(), LockHandle)
    assert isinstance(threading.RLock(), LockHandle)
    assert isinstance(threading.Semaphore(), LockHandle)
    assert not isinstance(object(), LockHandle)


def test_default_lock_is_reentrant() -> None:
    lock = create_default_lock()
    assert lock.acquire()
    assert lock.acquire(blocking=False)
    lock.release()
    lock.release()


def test_default_locks_are_independent() -> None:
    first = create_default_lock()
    second = create_default_lock()
    first.acquire()
    try:
        acquired = threading.Event()

        def take_second() -> None:
            if second.acquire(blocking=False):
                acquired.set()
                second.release()

        thread = threading.Thread(target=take_second)
        thread.start()
        thread.join(timeout=1.0)
        assert acquired.is_set()
    finally:
        first.release()
