from __future__ import annotations

import inspect
from typing import Any, TypeGuard, get_origin


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return whether candidate can be used as a class identifier.

    Parametrized generics such as ``list[int]`` pass ``isinstance(x, type)`` on
    some interpreters but are not resolution keys, so anything with a generic
    origin is rejected.

    Args:
        candidate: Value being checked.

    """
    return inspect.isclass(candidate) and get_origin(candidate) is None


def abstract_reason(cls: type[Any]) -> str | None:
    """Return why cls cannot be instantiated directly, or ``None`` if it can.

    Protocols and classes with unimplemented abstract methods fail on ``cls()``
    regardless of their constructor signature.
    """
    if cls.__dict__.get("_is_protocol", False):
        return "it is a protocol"
    if inspect.isabstract(cls):
        abstract_methods = ", ".join(sorted(cls.__abstractmethods__))
        return f"it has abstract methods: {abstract_methods}"
    return None


__all__ = ["abstract_reason", "is_runtime_class"]
