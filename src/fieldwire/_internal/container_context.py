from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar, overload

from fieldwire._internal.container import Container
from fieldwire._internal.identifiers import Token, TokenKey
from fieldwire._internal.lazy import Lazy
from fieldwire._internal.providers import Provider
from fieldwire.exceptions import FieldWireInvalidRegistrationError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ContainerContext:
    """Proxy registrations and resolution through a process-global container.

    A default ``Container`` is created with the context, so module-level code
    can register and resolve without any setup. ``set_current`` swaps in
    another container (for example a differently configured one, or a fresh
    one per test) and ``get_current`` returns the active one.

    The binding is process-global for this instance (not task-local or
    thread-local), which matters for tests that run in parallel.
    """

    def __init__(self, container: Container | None = None) -> None:
        self._container = container if container is not None else Container()

    def set_current(self, container: Container) -> None:
        """Make container the target of every proxied call.

        Raises:
            FieldWireInvalidRegistrationError: If ``container`` is not a ``Container``.

        """
        if not isinstance(container, Container):
            msg = f"set_current() expects a Container, got {container!r}."
            raise FieldWireInvalidRegistrationError(msg)
        self._container = container
        logger.debug("Bound container %r to the container context", container)

    def get_current(self) -> Container:
        return self._container

    def register(self, token: TokenKey, provider: Provider | type[Any]) -> None:
        """Bind a token on the current container. See ``Container.register``."""
        self._container.register(token, provider)

    def add_value(self, token: TokenKey, value: Any) -> None:
        self._container.add_value(token, value)

    def add_factory(self, token: TokenKey, factory: Callable[[Container], Any]) -> None:
        self._container.add_factory(token, factory)

    def add_concrete(self, token: TokenKey, concrete_type: type[Any] | Lazy[Any]) -> None:
        self._container.add_concrete(token, concrete_type)

    def add_alias(self, token: TokenKey, target: TokenKey) -> None:
        self._container.add_alias(token, target)

    def has(self, identifier: object) -> bool:
        return self._container.has(identifier)

    @overload
    def resolve(self, identifier: Token[T]) -> T: ...

    @overload
    def resolve(self, identifier: type[T]) -> T: ...

    @overload
    def resolve(self, identifier: Lazy[T]) -> T: ...

    @overload
    def resolve(self, identifier: Any) -> Any: ...

    def resolve(self, identifier: Any) -> Any:
        """Resolve on the current container. See ``Container.resolve``."""
        return self._container.resolve(identifier)

    def reset(self) -> None:
        """Clear registrations and singletons of the current container."""
        self._container.reset()


container_context = ContainerContext()
"""Process-wide default container context."""


__all__ = ["ContainerContext", "container_context"]
