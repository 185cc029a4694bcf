"""Instrumented values — drop-in wrappers that report their value semantics.

``signaling_type(int)`` builds a class whose instances hold one ``int`` and
emit an event for every construction, assignment, swap, comparison and
destruction.  Every instance of that class shares one ``ListenerRegistry``
(and its identity allocator); separate calls give independent families.

Copy and move are explicit: the caller picks ``from_copy`` / ``copy_from``
or ``from_move`` / ``move_from``.  A moved-from value keeps its identity and
holds a fresh default value.

Events are emitted after the underlying operation succeeded.  Errors raised
by the wrapped type propagate unchanged and emit nothing.
Values freed by the garbage collector report ``Destroyed`` through
``ListenerRegistry.emit_deferred``, which never blocks.

Usage::

    Ints = signaling_type(int)
    with Ints.listening() as recorder:
        a = Ints()
        b = Ints.from_copy(a)
        swap(a, b)
        a == b
        b.destroy()
        a.destroy()
    assert len(recorder) == 6

"""

from __future__ import annotations

import copy
import operator
import weakref
from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Any, ClassVar, Self

from signaling._errors import ConfigError, DestroyedValueError
from signaling._types import ValueFactory
from signaling.config import SignalingConfig
from signaling.events import (
    Compared,
    CopyAssigned,
    CopyConstructed,
    DefaultConstructed,
    Destroyed,
    Event,
    MoveAssigned,
    MoveConstructed,
    Swapped,
    ValueAssigned,
    ValueConstructed,
)
from signaling.recorder import EventRecorder
from signaling.registry import ListenerRegistry

_UNSET: Any = object()


class SignalingValue:
    """Base class of every instrumented value family.

    Not instantiated directly: ``signaling_type()`` creates a subclass bound
    to a registry and a wrapped value type.

    Instances are unhashable, like any mutable value.

    """

    __slots__ = ("__weakref__", "_finalizer", "_id", "_value")

    registry: ClassVar[ListenerRegistry | None] = None
    value_type: ClassVar[ValueFactory]

    def __init__(self, value: Any = _UNSET) -> None:
        cls = type(self)
        cls._require_family()
        if value is _UNSET:
            self._bind(cls.value_type())
            self._emit(DefaultConstructed(self._id))
        else:
            self._reject_member(value, "from_copy() or from_move()")
            self._bind(cls.registry.config.copier(value))
            self._emit(ValueConstructed(self._id, value))

    # ----- construction helpers -----

    @classmethod
    def _require_family(cls) -> None:
        if cls.registry is None:
            msg = f"{cls.__name__} is not bound to a registry; use signaling_type()"
            raise TypeError(msg)

    @classmethod
    def _adopt(cls, value: Any) -> Self:
        """Create an instance around an already produced value, without emitting."""
        cls._require_family()
        instance = cls.__new__(cls)
        instance._bind(value)
        return instance

    @classmethod
    def _require_member(cls, other: object, operation: str) -> None:
        cls._require_family()
        if not isinstance(other, SignalingValue) or type(other).registry is not cls.registry:
            msg = f"cannot {operation} {type(other).__name__} into {cls.__name__}"
            raise TypeError(msg)

    def _bind(self, value: Any) -> None:
        registry = type(self).registry
        self._value = value
        self._id = registry.allocator.next()
        self._finalizer = weakref.finalize(self, registry.emit_deferred, Destroyed(self._id))
        self._finalizer.atexit = False

    def _emit(self, event: Event) -> None:
        type(self).registry.emit(event)

    def _same_family(self, other: object) -> bool:
        return (
            isinstance(other, SignalingValue)
            and type(other).registry is type(self).registry
        )

    def _require_same_family(self, other: object, operation: str) -> None:
        if not self._same_family(other):
            msg = (
                f"cannot {operation} {type(self).__name__} "
                f"with {type(other).__name__}"
            )
            raise TypeError(msg)

    @classmethod
    def _reject_member(cls, value: object, instead: str) -> None:
        if isinstance(value, SignalingValue) and type(value).registry is cls.registry:
            msg = (
                f"{cls.__name__} value given where a bare value is expected; "
                f"use {instead} to copy or move it"
            )
            raise TypeError(msg)

    def _require_alive(self) -> None:
        if not self._finalizer.alive:
            msg = f"{type(self).__name__} id={self._id} was destroyed"
            raise DestroyedValueError(msg)

    # ----- construction -----

    @classmethod
    def from_copy(cls, other: SignalingValue) -> Self:
        """Construct a copy of ``other``.  Emits ``CopyConstructed``."""
        cls._require_member(other, "copy")
        other._require_alive()
        instance = cls._adopt(cls.registry.config.copier(other._value))
        instance._emit(CopyConstructed(instance._id, other._id))
        return instance

    @classmethod
    def from_move(cls, other: SignalingValue) -> Self:
        """Construct by taking over ``other``'s value.  Emits ``MoveConstructed``.

        ``other`` keeps its identity and is left holding a default value.

        """
        cls._require_member(other, "move")
        other._require_alive()
        moved_from = cls.value_type()
        value, other._value = other._value, moved_from
        instance = cls._adopt(value)
        instance._emit(MoveConstructed(instance._id, other._id))
        return instance

    def __copy__(self) -> Self:
        return type(self).from_copy(self)

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        self._require_alive()
        cls = type(self)
        instance = cls._adopt(copy.deepcopy(self._value, memo))
        instance._emit(CopyConstructed(instance._id, self._id))
        return instance

    # ----- accessors (never emit) -----

    @property
    def id(self) -> int:
        """Identity of this instance, fixed at construction."""
        return self._id

    @property
    def value(self) -> Any:
        """The wrapped value."""
        return self._value

    @property
    def destroyed(self) -> bool:
        """Whether ``Destroyed`` was already emitted for this instance."""
        return not self._finalizer.alive

    # ----- assignment -----

    def copy_from(self, other: SignalingValue) -> None:
        """Assign a copy of ``other``'s value.  Emits ``CopyAssigned``."""
        self._require_same_family(other, "copy-assign")
        self._require_alive()
        other._require_alive()
        self._value = type(self).registry.config.copier(other._value)
        self._emit(CopyAssigned(self._id, other._id))

    def move_from(self, other: SignalingValue) -> None:
        """Take over ``other``'s value.  Emits ``MoveAssigned``.

        ``other`` is left holding a default value.  Moving from ``self``
        leaves the value unchanged.

        """
        self._require_same_family(other, "move-assign")
        self._require_alive()
        other._require_alive()
        if other is not self:
            moved_from = type(self).value_type()
            self._value, other._value = other._value, moved_from
        self._emit(MoveAssigned(self._id, other._id))

    def assign(self, value: Any) -> None:
        """Assign a copy of a bare value.  Emits ``ValueAssigned``."""
        self._reject_member(value, "copy_from() or move_from()")
        self._require_alive()
        self._value = type(self).registry.config.copier(value)
        self._emit(ValueAssigned(self._id, value))

    def swap(self, other: SignalingValue) -> None:
        """Exchange values with ``other``.  Emits one ``Swapped``."""
        self._require_same_family(other, "swap")
        self._require_alive()
        other._require_alive()
        self._value, other._value = other._value, self._value
        self._emit(Swapped(self._id, other._id))

    # ----- destruction -----

    def destroy(self) -> None:
        """Emit ``Destroyed``.  Later calls, and garbage collection, emit nothing."""
        if self._finalizer.detach() is not None:
            self._emit(Destroyed(self._id))

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.destroy()

    # ----- comparison -----

    def _compare(self, other: object, op: Callable[[Any, Any], Any]) -> Any:
        if not self._same_family(other):
            return NotImplemented
        self._require_alive()
        other._require_alive()
        result = op(self._value, other._value)
        self._emit(Compared(self._id, other._id))
        return result

    def __eq__(self, other: object) -> Any:
        return self._compare(other, operator.eq)

    def __ne__(self, other: object) -> Any:
        return self._compare(other, operator.ne)

    def __lt__(self, other: object) -> Any:
        return self._compare(other, operator.lt)

    def __le__(self, other: object) -> Any:
        return self._compare(other, operator.le)

    def __gt__(self, other: object) -> Any:
        return self._compare(other, operator.gt)

    def __ge__(self, other: object) -> Any:
        return self._compare(other, operator.ge)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = ", destroyed" if self.destroyed else ""
        return f"{type(self).__name__}(id={self._id}, value={self._value!r}{state})"

    # ----- listeners -----

    @classmethod
    def listen(cls) -> EventRecorder:
        """Attach and return a fresh ``EventRecorder``.

        Detach it with ``cls.registry.detach(recorder)``.

        """
        cls._require_family()
        recorder = EventRecorder()
        cls.registry.attach(recorder)
        return recorder

    @classmethod
    def listening(cls, listener: Any = None) -> AbstractContextManager[Any]:
        """Attach a listener for the duration of a ``with`` block.

        See ``ListenerRegistry.listening``.

        """
        cls._require_family()
        return cls.registry.listening(listener)


def swap(a: SignalingValue, b: SignalingValue) -> None:
    """Exchange the values of ``a`` and ``b``.  Emits one ``Swapped(a.id, b.id)``."""
    a.swap(b)


def signaling_type(
    value_type: ValueFactory,
    *,
    registry: ListenerRegistry | None = None,
    config: SignalingConfig | None = None,
    name: str | None = None,
) -> type[SignalingValue]:
    """Build an instrumented value class for ``value_type``.

    Args:
        value_type: The wrapped type, or any zero-argument factory returning
            its default value.  Used for default construction and for the
            state of moved-from values.
        registry: Registry to bind the family to.  A new one is created
            when omitted.
        config: Configuration for the new registry.  Must not be combined
            with a ``registry`` that already has a different config.
        name: Class name.  Defaults to ``Signaling`` + the type's name.

    Returns:
        A ``SignalingValue`` subclass.

    Raises:
        TypeError: ``value_type`` is not callable.
        ConfigError: ``config`` conflicts with ``registry.config``.

    """
    if not callable(value_type):
        msg = f"value_type must be callable, got {type(value_type).__name__}"
        raise TypeError(msg)
    if registry is None:
        registry = ListenerRegistry(config)
    elif config is not None and config != registry.config:
        msg = "config conflicts with the config of the given registry"
        raise ConfigError(msg)

    if name is None:
        type_name = getattr(value_type, "__name__", "Value")
        name = f"Signaling{type_name[:1].upper()}{type_name[1:]}"

    namespace = {
        "__slots__": (),
        "__module__": SignalingValue.__module__,
        "registry": registry,
        "value_type": staticmethod(value_type),
    }
    return type(name, (SignalingValue,), namespace)

