"""Signaling configuration.

SignalingConfig is shared by a registry and the value family bound to it,
frozen after creation.
"""

import copy
from dataclasses import dataclass

from signaling._errors import ConfigError
from signaling._types import Copier, DuplicatePolicy, ErrorPolicy


@dataclass(frozen=True, slots=True)
class SignalingConfig:
    """Configuration for one instrumented value family.

    Attributes:
        first_id: First identity handed out by the family's allocator.
        deep_copy: Copy wrapped values with ``copy.deepcopy`` so that copies
            never share state with their source. ``False`` uses ``copy.copy``.
        on_duplicate_attach: ``"error"`` raises ``ListenerError`` when an
            attached listener is attached again; ``"ignore"`` makes it a no-op.
        on_listener_error: ``"raise"`` delivers the event to every listener,
            then raises ``ListenerError``; ``"report"`` prints a one-line
            diagnostic to stderr and carries on.

    """

    first_id: int = 0
    deep_copy: bool = True
    on_duplicate_attach: DuplicatePolicy = "error"
    on_listener_error: ErrorPolicy = "raise"

    def __post_init__(self) -> None:
        if isinstance(self.first_id, bool) or not isinstance(self.first_id, int):
            msg = f"first_id must be an int, got {type(self.first_id).__name__}"
            raise ConfigError(msg)
        if self.first_id < 0:
            msg = f"first_id must be >= 0, got {self.first_id}"
            raise ConfigError(msg)
        if self.on_duplicate_attach not in ("error", "ignore"):
            msg = (
                f"on_duplicate_attach must be 'error' or 'ignore', "
                f"got {self.on_duplicate_attach!r}"
            )
            raise ConfigError(msg)
        if self.on_listener_error not in ("raise", "report"):
            msg = (
                f"on_listener_error must be 'raise' or 'report', "
                f"got {self.on_listener_error!r}"
            )
            raise ConfigError(msg)

    @property
    def copier(self) -> Copier:
        """The copy function used for value copies."""
        return copy.deepcopy if self.deep_copy else copy.copy
