"""Listener registry — fans events out to attached listeners.

One registry serves one instrumented value family and owns the identity
allocator of that family.  Listeners are either objects with a
``receive(event)`` method or plain callables taking the event; the
listener object itself is the handle used to detach it.

Thread Safety:
    The listener set is guarded by a ``threading.Lock`` that is never held
    while listener code runs: ``emit()`` takes a snapshot, releases the lock
    and then delivers.  Deliveries are serialized by a reentrant lock, so a
    listener may attach, detach or trigger further events from inside its
    callback on the same thread without deadlocking.  Listener callbacks must
    not block waiting on another thread that emits into the same registry.

    ``emit_deferred()`` never blocks.  Garbage collection runs finalizers at
    arbitrary points, including inside the registry's own critical sections
    or inside a listener's lock, so ``Destroyed`` events from collected
    values go through it.  When the registry is busy on the calling thread,
    or another thread is delivering, the event is queued and delivered by
    whichever thread holds the delivery lock, ahead of its next event.

"""

from __future__ import annotations

import sys
import threading
from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from signaling._errors import ListenerError
from signaling._types import ListenerFunc
from signaling.config import SignalingConfig
from signaling.events import describe
from signaling.identity import IdentityAllocator
from signaling.recorder import EventRecorder

if TYPE_CHECKING:
    from signaling.events import Event


def _resolve_callback(listener: Any) -> ListenerFunc:
    """Return the function that receives events for ``listener``."""
    receive = getattr(listener, "receive", None)
    if callable(receive):
        return receive
    if callable(listener):
        return listener
    msg = (
        f"{type(listener).__name__} is not a listener: "
        "expected a callable or an object with receive(event)"
    )
    raise ListenerError(msg)


class ListenerRegistry:
    """Set of attached listeners for one instrumented value family.

    Listeners are delivered to in attachment order.  A listener only sees
    events emitted after its ``attach()`` returned, and is never invoked
    again once its ``detach()`` returned.

    Args:
        config: Policies for duplicate attaches and listener failures, and the
            first identity handed out by ``allocator``.

    """

    __slots__ = (
        "_allocator",
        "_config",
        "_delivery",
        "_listeners",
        "_local",
        "_lock",
        "_pending",
    )

    def __init__(self, config: SignalingConfig | None = None) -> None:
        self._config = config if config is not None else SignalingConfig()
        # id(listener) -> (listener, callback); dicts keep attachment order
        self._listeners: dict[int, tuple[Any, ListenerFunc]] = {}
        self._lock = threading.Lock()
        self._delivery = threading.RLock()
        self._allocator = IdentityAllocator(self._config.first_id)
        # deque.append/popleft are atomic, so no lock guards the queue
        self._pending: deque[Event] = deque()
        # per-thread nesting depth of critical sections and deliveries
        self._local = threading.local()

    @property
    def config(self) -> SignalingConfig:
        """The registry's configuration."""
        return self._config

    @property
    def allocator(self) -> IdentityAllocator:
        """Identity allocator shared by every value bound to this registry."""
        return self._allocator

    @property
    def listener_count(self) -> int:
        """Number of currently attached listeners."""
        with self._critical():
            return len(self._listeners)

    @property
    def pending_count(self) -> int:
        """Number of deferred events not delivered yet."""
        return len(self._pending)

    def listeners(self) -> tuple[Any, ...]:
        """Currently attached listeners (snapshot, in attachment order)."""
        with self._critical():
            return tuple(listener for listener, _ in self._listeners.values())

    def is_attached(self, listener: Any) -> bool:
        """Whether ``listener`` is currently attached."""
        with self._critical():
            entry = self._listeners.get(id(listener))
            return entry is not None and entry[0] is listener

    def attach(self, listener: Any) -> None:
        """Attach a listener.

        Raises:
            ListenerError: ``listener`` is not a listener, or it is already
                attached and the duplicate policy is ``"error"``.

        """
        callback = _resolve_callback(listener)
        with self._critical():
            if id(listener) in self._listeners:
                if self._config.on_duplicate_attach == "ignore":
                    return
                msg = f"listener {listener!r} is already attached"
                raise ListenerError(msg)
            self._listeners[id(listener)] = (listener, callback)

    def detach(self, listener: Any) -> None:
        """Detach a listener.  Detaching a listener that is not attached is a no-op."""
        # Wait for in-flight deliveries on other threads to finish.
        with self._delivery, self._critical():
            entry = self._listeners.get(id(listener))
            if entry is not None and entry[0] is listener:
                del self._listeners[id(listener)]
        self._drain()

    def emit(self, event: Event) -> None:
        """Deliver ``event`` to every attached listener, once each.

        Deferred events queued before this call are delivered first.

        Raises:
            ListenerError: One or more listeners raised and the error policy
                is ``"raise"``.  Every listener still received the event.

        """
        with self._delivery:
            outermost = not self._busy()
            if outermost:
                self._deliver_pending()
            report = self._config.on_listener_error == "report"
            errors = self._deliver(event, report=report)
            if outermost:
                self._deliver_pending()
        if outermost:
            self._drain()

        if errors and self._config.on_listener_error == "raise":
            msg = f"{len(errors)} listener(s) failed on {describe(event)}"
            raise ListenerError(msg, tuple(errors)) from errors[0]

    def emit_deferred(self, event: Event) -> None:
        """Queue ``event`` and deliver it as soon as the registry is free.

        Delivers before returning when nothing on this thread is inside the
        registry and no other thread is delivering.  Never blocks and never
        raises; listener failures are reported on stderr.

        """
        self._pending.append(event)
        if not self._busy():
            self._drain()

    # ----- internals -----

    def _depth(self) -> int:
        return getattr(self._local, "depth", 0)

    def _busy(self) -> bool:
        return self._depth() > 0

    @contextmanager
    def _critical(self) -> Iterator[None]:
        """Hold the listener-set lock, marking this thread busy meanwhile."""
        depth = self._depth()
        self._local.depth = depth + 1
        try:
            with self._lock:
                yield
        finally:
            self._local.depth = depth
        if depth == 0 and self._pending:
            self._drain()

    def _drain(self) -> None:
        """Deliver queued events unless another thread is delivering.

        That thread re-checks the queue after releasing the delivery lock,
        so nothing queued here is left behind.
        """
        if self._busy():
            return
        while self._pending:
            if not self._delivery.acquire(blocking=False):
                return
            try:
                self._deliver_pending()
            finally:
                self._delivery.release()

    def _deliver_pending(self) -> None:
        while True:
            try:
                event = self._pending.popleft()
            except IndexError:
                return
            self._deliver(event, report=True)

    def _deliver(self, event: Event, *, report: bool) -> list[Exception]:
        """Call every attached listener once.  Caller holds ``_delivery``."""
        depth = self._depth()
        self._local.depth = depth + 1
        try:
            with self._lock:
                snapshot = tuple(self._listeners.items())

            errors: list[Exception] = []
            for key, (listener, callback) in snapshot:
                with self._lock:
                    current = self._listeners.get(key)
                if current is None or current[0] is not listener:
                    continue  # detached by an earlier callback
                try:
                    callback(event)
                except Exception as exc:
                    errors.append(exc)
                    if report:
                        print(
                            f"  Listener error: {describe(event)}: "
                            f"{type(exc).__name__}: {exc}",
                            file=sys.stderr,
                        )
        finally:
            self._local.depth = depth
        return errors

    @contextmanager
    def listening(self, listener: Any = None) -> Iterator[Any]:
        """Attach a listener for the duration of a ``with`` block.

        Attaches a fresh ``EventRecorder`` when no listener is given.  The
        listener is detached on every exit path, including exceptions.

        Usage::

            with registry.listening() as recorder:
                ...
            assert recorder.events == [...]

        """
        if listener is None:
            listener = EventRecorder()
        self.attach(listener)
        try:
            yield listener
        finally:
            self.detach(listener)
