"""Tests for signaling.identity — the identity allocator."""

import threading

from signaling.identity import IdentityAllocator


class TestIdentityAllocator:
    """Strictly increasing, never repeated identities."""

    def test_starts_at_zero(self) -> None:
        alloc = IdentityAllocator()
        assert alloc.next() == 0
        assert alloc.next() == 1

    def test_custom_start(self) -> None:
        alloc = IdentityAllocator(start=100)
        assert alloc.next() == 100

    def test_peek_does_not_consume(self) -> None:
        alloc = IdentityAllocator()
        assert alloc.peek() == 0
        assert alloc.peek() == 0
        assert alloc.next() == 0
        assert alloc.peek() == 1

    def test_independent_allocators(self) -> None:
        a = IdentityAllocator()
        b = IdentityAllocator()
        a.next()
        a.next()
        assert b.next() == 0

    def test_thread_safety(self) -> None:
        """Concurrent callers never observe the same identity."""
        alloc = IdentityAllocator()
        results: list[list[int]] = [[] for _ in range(8)]

        def worker(out: list[int]) -> None:
            for _ in range(2_000):
                out.append(alloc.next())

        threads = [threading.Thread(target=worker, args=(out,)) for out in results]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        issued = [ident for out in results for ident in out]
        assert len(issued) == 16_000
        assert len(set(issued)) == 16_000
        assert set(issued) == set(range(16_000))
        for out in results:
            assert out == sorted(out)
