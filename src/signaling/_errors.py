"""Signaling error hierarchy.

All signaling-specific errors inherit from SignalingError for easy catching.
Errors raised by the wrapped value type are never converted into these.
"""


class SignalingError(Exception):
    """Base error for all signaling operations."""


class ConfigError(SignalingError):
    """Invalid configuration value."""


class ListenerError(SignalingError):
    """Listener registry misuse, or listener failures during delivery.

    Attributes:
        errors: Exceptions raised by listeners while an event was delivered.
            Empty for misuse errors (e.g. attaching a listener twice).

    """

    def __init__(self, message: str, errors: tuple[BaseException, ...] = ()) -> None:
        super().__init__(message)
        self.errors = errors


class DestroyedValueError(SignalingError):
    """An instrumented value was used after it was destroyed."""
