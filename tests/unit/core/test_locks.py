"""Tests for the keyed mutex."""

import threading
import time

from app.core.locks import KeyedLock


def test_same_key_is_serialised():
    locks = KeyedLock()
    active = []
    overlaps = []

    def worker():
        with locks.hold(("u", 1)):
            active.append(1)
            if len(active) > 1:
                overlaps.append(True)
            time.sleep(0.01)
            active.pop()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert overlaps == []


def test_different_keys_do_not_block():
    locks = KeyedLock()
    entered = threading.Event()

    def other():
        with locks.hold("b"):
            entered.set()

    with locks.hold("a"):
        t = threading.Thread(target=other)
        t.start()
        assert entered.wait(2)
        t.join()


def test_entries_are_released():
    locks = KeyedLock()
    with locks.hold("a"):
        with locks.hold("b"):
            assert len(locks) == 2
    assert len(locks) == 0


def test_released_on_exception():
    locks = KeyedLock()
    try:
        with locks.hold("a"):
            raise ValueError
    except ValueError:
        pass
    assert len(locks) == 0
    with locks.hold("a"):
        pass
