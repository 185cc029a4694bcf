"""Tests for signaling.events — the event model."""

import pytest

from signaling.events import (
    EVENT_TYPES,
    Compared,
    CopyAssigned,
    CopyConstructed,
    DefaultConstructed,
    Destroyed,
    MoveAssigned,
    MoveConstructed,
    Swapped,
    ValueAssigned,
    ValueConstructed,
    describe,
)


class TestEventTypes:
    """Shape of the ten event classes."""

    def test_ten_kinds(self) -> None:
        assert len(EVENT_TYPES) == 10
        assert len(set(EVENT_TYPES)) == 10

    def test_every_event_has_id_first(self) -> None:
        samples = [
            DefaultConstructed(1),
            CopyConstructed(1, 0),
            MoveConstructed(1, 0),
            ValueConstructed(1, "x"),
            CopyAssigned(1, 0),
            MoveAssigned(1, 0),
            ValueAssigned(1, "x"),
            Swapped(1, 0),
            Destroyed(1),
            Compared(1, 0),
        ]
        assert {type(s) for s in samples} == set(EVENT_TYPES)
        assert all(s.id == 1 for s in samples)

    def test_counterpart_fields(self) -> None:
        assert CopyConstructed(id=1, from_id=0).from_id == 0
        assert MoveAssigned(id=1, from_id=0).from_id == 0
        assert Swapped(id=1, with_id=2).with_id == 2
        assert Compared(id=1, id_with=2).id_with == 2
        assert ValueAssigned(id=1, from_value=[1]).from_value == [1]

    def test_frozen(self) -> None:
        event = Destroyed(id=3)
        with pytest.raises(AttributeError):
            event.id = 4  # type: ignore[misc]

    def test_value_equality(self) -> None:
        assert Compared(0, 1) == Compared(0, 1)
        assert Compared(0, 1) != Compared(1, 0)

    def test_kinds_with_same_fields_differ(self) -> None:
        assert CopyConstructed(1, 0) != MoveConstructed(1, 0)
        assert CopyAssigned(1, 0) != CopyConstructed(1, 0)


class TestDescribe:
    """One-line rendering used by the printer and error messages."""

    def test_single_field(self) -> None:
        assert describe(Destroyed(4)) == "Destroyed(id=4)"

    def test_two_fields(self) -> None:
        assert describe(Swapped(0, 1)) == "Swapped(id=0, with_id=1)"

    def test_value_uses_repr(self) -> None:
        assert describe(ValueConstructed(2, "hi")) == "ValueConstructed(id=2, from_value='hi')"
