"""Shared type definitions for signaling."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from signaling.events import Event

# Identity of one instrumented value instance
type Identity = int

# Zero-argument factory producing a wrapped type's default value
type ValueFactory = Callable[[], Any]

# Copies a wrapped value (copy.copy or copy.deepcopy)
type Copier = Callable[[Any], Any]

# Plain-function listener
type ListenerFunc = Callable[[Event], object]

# What attach() does with an already attached listener
type DuplicatePolicy = Literal["error", "ignore"]

# What emit() does when a listener raises
type ErrorPolicy = Literal["raise", "report"]
