"""Tests for the per-key lock registry."""

import threading
from concurrent.futures import ThreadPoolExecutor

from storefront.domain.service.keyed_lock import KeyedLock


class TestKeyedLock:

    def test_same_key_is_reentrant(self):
        locks = KeyedLock()
        with locks.hold("a"):
            with locks.hold("a"):
                assert len(locks) == 1
        assert len(locks) == 0

    def test_entries_dropped_after_use(self):
        locks = KeyedLock()

        def use(owner):
            with locks.hold(f"session-{owner}"):
                pass

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(use, range(200)))

        assert len(locks) == 0

    def test_entry_kept_while_someone_waits(self):
        locks = KeyedLock()
        waiting = threading.Event()
        done = threading.Event()

        def wait_for_key():
            waiting.set()
            with locks.hold("a"):
                done.set()

        with locks.hold("a"):
            worker = threading.Thread(target=wait_for_key)
            worker.start()
            waiting.wait(timeout=5)
            assert not done.wait(timeout=0.1)
            assert len(locks) == 1

        worker.join(timeout=5)
        assert done.is_set()
        assert len(locks) == 0

    def test_different_keys_do_not_block(self):
        locks = KeyedLock()

        def use_b():
            with locks.hold("b"):
                return True

        with ThreadPoolExecutor(max_workers=1) as pool:
            with locks.hold("a"):
                assert pool.submit(use_b).result(timeout=5)

    def test_hold_all_takes_every_key(self):
        locks = KeyedLock()
        with locks.hold_all(["b", "a", "b"]):
            assert len(locks) == 2
        assert len(locks) == 0
