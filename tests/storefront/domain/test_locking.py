"""Tests for the per-key lock registry."""

import threading

import pytest

from storefront.shared.locking import KeyedLocks


@pytest.fixture()
def locks():
    return KeyedLocks("test")


class TestKeyedLocks:
    def test_entry_exists_only_while_held(self, locks):
        with locks.hold("p-1"):
            assert locks.is_held("p-1")
            assert len(locks) == 1
        assert not locks.is_held("p-1")
        assert len(locks) == 0

    def test_keys_are_compared_as_strings(self, locks):
        with locks.hold(42):
            assert locks.is_held("42")

    def test_reentrant_on_the_same_thread(self, locks):
        with locks.hold("p-1"):
            with locks.hold("p-1"):
                assert len(locks) == 1
            assert locks.is_held("p-1")
        assert len(locks) == 0

    def test_entry_released_when_body_raises(self, locks):
        with pytest.raises(RuntimeError):
            with locks.hold("p-1"):
                raise RuntimeError("boom")
        assert len(locks) == 0

    def test_distinct_keys_do_not_block_each_other(self, locks):
        entered = threading.Event()

        def other_key():
            with locks.hold("p-2"):
                entered.set()

        with locks.hold("p-1"):
            worker = threading.Thread(target=other_key)
            worker.start()
            assert entered.wait(timeout=5)
            worker.join(timeout=5)
        assert len(locks) == 0

    def test_waiter_keeps_the_entry_until_it_is_done(self, locks):
        order = []
        waiting = threading.Event()

        def second():
            waiting.set()
            with locks.hold("p-1"):
                order.append("second")

        with locks.hold("p-1"):
            worker = threading.Thread(target=second)
            worker.start()
            assert waiting.wait(timeout=5)
            worker.join(timeout=0.2)
            assert worker.is_alive()
            order.append("first")

        worker.join(timeout=5)
        assert order == ["first", "second"]
        assert len(locks) == 0

    def test_many_keys_leave_nothing_behind(self, locks):
        for i in range(500):
            with locks.hold(f"no-such-product-{i}"):
                pass
        assert len(locks) == 0
