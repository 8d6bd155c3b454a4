from __future__ import annotations

import importlib
import warnings
from collections.abc import Iterator
from typing import Any

from fieldwire._internal.type_checks import is_runtime_class

# Modules exposing a ``BaseSettings`` class, most recent API first.
_SETTINGS_MODULES = ("pydantic_settings", "pydantic.v1", "pydantic")

_PYDANTIC_V1_WARNING_PATTERN = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)


def _import_settings_base(module_name: str) -> type[Any] | None:
    """Return ``module_name.BaseSettings`` if the module imports and exposes a class."""
    try:
        module = importlib.import_module(module_name)
        # Pydantic 2 raises an ImportError subclass for the moved ``pydantic.BaseSettings``.
        settings_base = getattr(module, "BaseSettings", None)
    except ImportError:
        return None
    return settings_base if isinstance(settings_base, type) else None


def _iter_settings_bases() -> Iterator[type[Any]]:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message=_PYDANTIC_V1_WARNING_PATTERN,
            category=UserWarning,
        )
        for module_name in _SETTINGS_MODULES:
            settings_base = _import_settings_base(module_name)
            if settings_base is not None:
                yield settings_base


SETTINGS_BASES: tuple[type[Any], ...] = tuple(dict.fromkeys(_iter_settings_bases()))
"""Settings base classes found at import time, without duplicates."""


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return whether a class is a Pydantic settings model.

    Settings models read their fields from the environment, so the container
    builds them with no arguments even when they declare required fields, and
    treats them as singletons unless the class declares another lifecycle.
    Without Pydantic installed this returns ``False`` for every candidate.

    Args:
        candidate: Object to test.

    """
    if not is_runtime_class(candidate):
        return False
    try:
        return any(issubclass(candidate, base) for base in SETTINGS_BASES)
    except TypeError:
        return False


__all__ = ["SETTINGS_BASES", "is_pydantic_settings_subclass"]
