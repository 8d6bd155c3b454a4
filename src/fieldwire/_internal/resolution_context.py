from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from fieldwire._internal.identifiers import identifier_name, is_token

ChainKind = Literal["class", "provider"]


@dataclass
class ChainEntry:
    """One identifier on the dependency chain of a resolution branch."""

    identifier: Any
    kind: ChainKind
    done: bool = False


def chain_kind(identifier: object) -> ChainKind:
    return "provider" if is_token(identifier) else "class"


class ResolutionContext:
    """Track one top-level ``resolve()`` call across its recursive walk.

    The dependency chain is the path from the requested identifier to the one
    currently being resolved; it is only used for cycle detection. The
    instance cache holds every instance produced during the call and serves
    resolution-scoped lifecycles.

    ``fork()`` copies the chain and shares the instance cache, so sibling
    dependencies never see each other's in-progress entries while still
    converging on the same resolution-scoped instances.
    """

    def __init__(self) -> None:
        self._chain: list[ChainEntry] = []
        self._instances: dict[Any, Any] = {}
        self._created_singletons: list[type[Any]] = []

    def fork(self) -> ResolutionContext:
        context = ResolutionContext.__new__(ResolutionContext)
        context._chain = list(self._chain)
        context._instances = self._instances
        context._created_singletons = self._created_singletons
        return context

    def has_circular_dependency(self, identifier: object) -> bool:
        """Return whether identifier is already in progress on this branch."""
        kind = chain_kind(identifier)
        return any(
            entry.identifier == identifier
            for entry in self._chain
            if entry.kind == kind and not entry.done
        )

    def circular_chain(self, identifier: object) -> list[str]:
        """Return the names from the first in-progress occurrence of identifier back to it."""
        kind = chain_kind(identifier)
        start = next(
            index
            for index, entry in enumerate(self._chain)
            if entry.kind == kind and not entry.done and entry.identifier == identifier
        )
        return [identifier_name(entry.identifier) for entry in self._chain[start:]] + [
            identifier_name(identifier),
        ]

    def has_instance(self, identifier: object) -> bool:
        return identifier in self._instances

    def get_instance(self, identifier: object) -> Any:
        return self._instances[identifier]

    def start(self, identifier: object) -> ChainEntry:
        """Mark identifier as in progress on this branch."""
        entry = ChainEntry(identifier, chain_kind(identifier))
        self._chain.append(entry)
        return entry

    def finish(self, entry: ChainEntry, instance: Any) -> None:
        """Mark entry as done and record the instance produced for it."""
        entry.done = True
        self._instances[entry.identifier] = instance

    def record_singleton(self, concrete_type: type[Any]) -> None:
        self._created_singletons.append(concrete_type)

    @property
    def created_singletons(self) -> tuple[type[Any], ...]:
        """Classes whose singleton was created during this top-level call."""
        return tuple(self._created_singletons)


__all__ = ["ChainEntry", "ResolutionContext", "chain_kind"]
