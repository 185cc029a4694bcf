"""Event model for instrumented values.

One event class per observed value-semantic operation.  Every event
carries ``id``, the identity of the acting value, plus the identity or the
supplied value of its counterpart where the operation has one.

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.
    ``from_value`` payloads are the caller's objects and are not copied.

"""

from dataclasses import dataclass, fields
from typing import Any


# ---------------------------------------------------------------------------
# Construction events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DefaultConstructed:
    """A value was constructed holding its type's default."""

    id: int


@dataclass(frozen=True, slots=True)
class CopyConstructed:
    """A value was constructed as a copy of ``from_id``."""

    id: int
    from_id: int


@dataclass(frozen=True, slots=True)
class MoveConstructed:
    """A value was constructed by taking over the value of ``from_id``."""

    id: int
    from_id: int


@dataclass(frozen=True, slots=True)
class ValueConstructed:
    """A value was constructed from a bare value.

    Attributes:
        id: Identity of the new value.
        from_value: The object the caller supplied, not the stored copy.

    """

    id: int
    from_value: Any


# ---------------------------------------------------------------------------
# Assignment events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CopyAssigned:
    """``id`` was assigned a copy of the value of ``from_id``."""

    id: int
    from_id: int


@dataclass(frozen=True, slots=True)
class MoveAssigned:
    """``id`` took over the value of ``from_id``."""

    id: int
    from_id: int


@dataclass(frozen=True, slots=True)
class ValueAssigned:
    """``id`` was assigned a bare value (``from_value`` as supplied)."""

    id: int
    from_value: Any


# ---------------------------------------------------------------------------
# Other operations
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Swapped:
    """The values of ``id`` and ``with_id`` were exchanged."""

    id: int
    with_id: int


@dataclass(frozen=True, slots=True)
class Destroyed:
    """The value ``id`` was destroyed."""

    id: int


@dataclass(frozen=True, slots=True)
class Compared:
    """``id`` was compared with ``id_with`` (any relational operator)."""

    id: int
    id_with: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type Event = (
    DefaultConstructed
    | CopyConstructed
    | MoveConstructed
    | ValueConstructed
    | CopyAssigned
    | MoveAssigned
    | ValueAssigned
    | Swapped
    | Destroyed
    | Compared
)

EVENT_TYPES: tuple[type, ...] = (
    DefaultConstructed,
    CopyConstructed,
    MoveConstructed,
    ValueConstructed,
    CopyAssigned,
    MoveAssigned,
    ValueAssigned,
    Swapped,
    Destroyed,
    Compared,
)


def describe(event: Event) -> str:
    """Render an event on one line, e.g. ``Swapped(id=0, with_id=1)``."""
    parts = ", ".join(
        f"{f.name}={getattr(event, f.name)!r}" for f in fields(event)
    )
    return f"{type(event).__name__}({parts})"
