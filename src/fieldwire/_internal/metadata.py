from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from fieldwire._internal.identifiers import Identifier
from fieldwire._internal.providers import Lifecycle

METADATA_ATTR = "__fieldwire_metadata__"

Setter = Callable[[Any, Any], None]
"""Callable storing a resolved value on an instance: ``setter(instance, value)``."""


@dataclass(frozen=True)
class DependencyMetadata:
    """Describe one injected field of a class."""

    field: str
    """Name of the attribute the dependency is stored in."""
    identifier: Identifier
    """Identifier resolved for this field."""
    setter: Setter
    """Callable storing the resolved value on the instance."""


@dataclass
class ServiceMetadata:
    """Per-class injection metadata read by the container.

    ``lifecycle`` is ``None`` when the class does not declare one, in which case
    the container falls back to its ``default_lifecycle``.
    """

    lifecycle: Lifecycle | None = None
    dependencies: list[DependencyMetadata] = field(default_factory=list)

    def add_dependency(
        self,
        field_name: str,
        identifier: Identifier,
        setter: Setter | None = None,
    ) -> None:
        """Declare that ``field_name`` is injected with ``identifier``.

        Declaring the same field again replaces the earlier declaration and moves
        it to the end of the injection order.

        Args:
            field_name: Attribute name on the instance.
            identifier: Identifier resolved for the field.
            setter: Optional custom setter. Defaults to ``setattr``.

        """
        if setter is None:
            setter = _attribute_setter(field_name)
        self.dependencies = [
            dependency for dependency in self.dependencies if dependency.field != field_name
        ]
        self.dependencies.append(DependencyMetadata(field_name, identifier, setter))

    def copy(self) -> ServiceMetadata:
        return ServiceMetadata(lifecycle=self.lifecycle, dependencies=list(self.dependencies))


def _attribute_setter(field_name: str) -> Setter:
    def setter(instance: Any, value: Any) -> None:
        setattr(instance, field_name, value)

    return setter


def get_class_metadata(cls: type[Any]) -> ServiceMetadata | None:
    """Return the metadata declared on cls or inherited from its closest base.

    Args:
        cls: Class to inspect.

    Returns:
        The metadata, or ``None`` if neither the class nor its bases declare any.

    """
    for klass in cls.__mro__:
        metadata = klass.__dict__.get(METADATA_ATTR)
        if isinstance(metadata, ServiceMetadata):
            return metadata
    return None


def ensure_class_metadata(cls: type[Any]) -> ServiceMetadata:
    """Return the metadata owned by cls, creating it if needed.

    New metadata starts as a copy of the inherited metadata, so subclasses keep
    the dependencies and lifecycle of their bases without mutating them.
    """
    metadata = cls.__dict__.get(METADATA_ATTR)
    if isinstance(metadata, ServiceMetadata):
        return metadata

    inherited = get_class_metadata(cls)
    metadata = inherited.copy() if inherited is not None else ServiceMetadata()
    setattr(cls, METADATA_ATTR, metadata)
    return metadata


__all__ = [
    "DependencyMetadata",
    "ServiceMetadata",
    "ensure_class_metadata",
    "get_class_metadata",
]
