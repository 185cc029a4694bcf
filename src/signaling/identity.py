"""Identity allocator — monotonically increasing ids for instrumented values.

Thread Safety:
    ``next()`` is guarded by a ``threading.Lock``.  Concurrent callers never
    observe the same identity.

"""

import threading

from signaling._types import Identity


class IdentityAllocator:
    """Issues strictly increasing identities, starting at ``start``.

    Identities are never reused or reset for the lifetime of the allocator.

    Args:
        start: The first identity to hand out.

    """

    __slots__ = ("_lock", "_next")

    def __init__(self, start: int = 0) -> None:
        self._next = start
        self._lock = threading.Lock()

    def next(self) -> Identity:
        """Return a fresh identity."""
        with self._lock:
            ident = self._next
            self._next += 1
        return ident

    def peek(self) -> Identity:
        """Return the identity the next call to ``next()`` will hand out."""
        with self._lock:
            return self._next
