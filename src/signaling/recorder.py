"""Ready-made listeners: an in-memory recorder and a stderr printer.

Thread Safety:
    ``EventRecorder`` is protected by a ``threading.RLock`` and may be
    attached to registries receiving events from several threads.  The lock
    is reentrant because a garbage-collected value can emit ``Destroyed``
    while the recorder itself holds it.  Events are never dropped while the
    lock is held: dropping one may free the last reference to a value.

"""

import sys
import threading
from collections import deque
from collections.abc import Iterator
from typing import Any, TextIO

from signaling.events import Event, describe


class EventRecorder:
    """Listener that keeps every event it receives, in arrival order.

    Usage::

        recorder = EventRecorder()
        Ints.registry.attach(recorder)
        ...
        assert recorder.events == [DefaultConstructed(0), Destroyed(0)]

    """

    __slots__ = ("_events", "_lock")

    def __init__(self) -> None:
        self._events: deque[Event] = deque()
        self._lock = threading.RLock()

    def receive(self, event: Event) -> None:
        """Record an event."""
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> list[Event]:
        """All recorded events (snapshot)."""
        with self._lock:
            return list(self._events)

    def recent(self, n: int = 20) -> list[Event]:
        """Return the N most recent events."""
        with self._lock:
            items = list(self._events)
        return items[-n:]

    def clear(self) -> int:
        """Forget all events and return the count that was cleared."""
        with self._lock:
            old, self._events = self._events, deque()
        count = len(old)
        del old
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def stats(self) -> dict[str, Any]:
        """Return summary statistics about recorded events."""
        with self._lock:
            events = list(self._events)

        type_counts: dict[str, int] = {}
        for event in events:
            name = type(event).__name__
            type_counts[name] = type_counts.get(name, 0) + 1

        return {
            "total": len(events),
            "by_type": type_counts,
        }


class EventPrinter:
    """Listener that prints one line per event.

    Args:
        stream: Where to write.  Defaults to ``sys.stderr`` at print time.
        prefix: Text put in front of every line.

    """

    __slots__ = ("_prefix", "_stream")

    def __init__(self, stream: TextIO | None = None, *, prefix: str = "  ") -> None:
        self._stream = stream
        self._prefix = prefix

    def receive(self, event: Event) -> None:
        print(f"{self._prefix}{describe(event)}", file=self._stream or sys.stderr)
