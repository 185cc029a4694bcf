"""Shared test fixtures for signaling."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from signaling.recorder import EventRecorder
from signaling.value import SignalingValue, signaling_type


@pytest.fixture
def ints() -> type[SignalingValue]:
    """A fresh ``int`` family with its own registry and identities from 0."""
    return signaling_type(int)


@pytest.fixture
def recorder(ints: type[SignalingValue]) -> Any:
    """An ``EventRecorder`` attached to ``ints`` for the duration of the test."""
    with ints.listening(EventRecorder()) as rec:
        yield rec


class Fragile:
    """Value type whose copy and comparison can be made to fail."""

    fail_copy = False
    fail_compare = False

    def __init__(self, n: int = 0) -> None:
        self.n = n

    def __deepcopy__(self, memo: dict[int, Any]) -> Fragile:
        if Fragile.fail_copy:
            msg = "copy failed"
            raise RuntimeError(msg)
        return Fragile(copy.deepcopy(self.n, memo))

    def __eq__(self, other: object) -> bool:
        if Fragile.fail_compare:
            msg = "compare failed"
            raise ValueError(msg)
        return isinstance(other, Fragile) and self.n == other.n

    __hash__ = None  # type: ignore[assignment]


@pytest.fixture
def fragile() -> Any:
    """A ``Fragile`` family; failure switches are reset after the test."""
    yield signaling_type(Fragile)
    Fragile.fail_copy = False
    Fragile.fail_compare = False
