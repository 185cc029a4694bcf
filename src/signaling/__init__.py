"""Signaling — instrumented values that report their value semantics.

Wraps any value type in a drop-in substitute that behaves like the value
under copy, move, assignment, swap, comparison and destruction, and emits
one event per such operation to the listeners of its registry.  Built for
tests that assert *how* code treats its values: that a container moves
rather than copies, or that an algorithm compares exactly N times.

Quick start::

    from signaling import signaling_type, swap

    Ints = signaling_type(int)
    with Ints.listening() as recorder:
        a = Ints()
        b = Ints.from_copy(a)
        swap(a, b)

    recorder.events
    # [DefaultConstructed(id=0), CopyConstructed(id=1, from_id=0),
    #  Swapped(id=0, with_id=1)]

Every call to ``signaling_type()`` creates an independent family with its
own ``ListenerRegistry`` and identity counter.

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "EVENT_TYPES",
    "Compared",
    "ConfigError",
    "CopyAssigned",
    "CopyConstructed",
    "DefaultConstructed",
    "DestroyedValueError",
    "Destroyed",
    "EventPrinter",
    "EventRecorder",
    "IdentityAllocator",
    "ListenerError",
    "ListenerRegistry",
    "MoveAssigned",
    "MoveConstructed",
    "SignalingConfig",
    "SignalingError",
    "SignalingValue",
    "Swapped",
    "ValueAssigned",
    "ValueConstructed",
    "__version__",
    "describe",
    "signaling_type",
    "swap",
]

_LAZY: dict[str, str] = {
    "SignalingError": "signaling._errors",
    "ConfigError": "signaling._errors",
    "ListenerError": "signaling._errors",
    "DestroyedValueError": "signaling._errors",
    "SignalingConfig": "signaling.config",
    "IdentityAllocator": "signaling.identity",
    "ListenerRegistry": "signaling.registry",
    "EventRecorder": "signaling.recorder",
    "EventPrinter": "signaling.recorder",
    "SignalingValue": "signaling.value",
    "signaling_type": "signaling.value",
    "swap": "signaling.value",
    "EVENT_TYPES": "signaling.events",
    "describe": "signaling.events",
    "DefaultConstructed": "signaling.events",
    "CopyConstructed": "signaling.events",
    "MoveConstructed": "signaling.events",
    "ValueConstructed": "signaling.events",
    "CopyAssigned": "signaling.events",
    "MoveAssigned": "signaling.events",
    "ValueAssigned": "signaling.events",
    "Swapped": "signaling.events",
    "Destroyed": "signaling.events",
    "Compared": "signaling.events",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import signaling`` fast while providing a flat top-level API.
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
