from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload

from fieldwire._internal.identifiers import Identifier, identifier_name, is_identifier
from fieldwire._internal.metadata import ensure_class_metadata
from fieldwire._internal.providers import Lifecycle
from fieldwire._internal.type_checks import is_runtime_class
from fieldwire.exceptions import FieldWireInvalidInjectionError

if TYPE_CHECKING:
    from typing_extensions import Self

T = TypeVar("T")
C = TypeVar("C", bound=type[Any])


class Inject(Generic[T]):
    """Class attribute declaring a field injected by the container.

    Create it with :func:`inject`. When the owning class is created the field is
    recorded in the class metadata; the container stores the resolved value on
    the instance, which then shadows this descriptor.
    """

    def __init__(self, identifier: Identifier) -> None:
        self.identifier = identifier
        self.name: str | None = None

    def __set_name__(self, owner: type[Any], name: str) -> None:
        self.name = name
        ensure_class_metadata(owner).add_dependency(name, self.identifier)

    @overload
    def __get__(self, instance: None, owner: type[Any]) -> Self: ...

    @overload
    def __get__(self, instance: object, owner: type[Any]) -> T: ...

    def __get__(self, instance: object | None, owner: type[Any]) -> Self | T:
        if instance is None:
            return self
        msg = (
            f"'{owner.__name__}' field '{self.name}' has not been injected; "
            f"resolve the instance through the container to fill it."
        )
        raise AttributeError(msg)

    def __repr__(self) -> str:
        return f"inject({identifier_name(self.identifier)})"


def inject(identifier: Any) -> Any:
    """Declare a class attribute as an injected dependency.

    Args:
        identifier: Token, class or ``lazy(...)`` reference to resolve for the field.

    Returns:
        An :class:`Inject` descriptor. The return type is ``Any`` so the
        attribute can be annotated with the dependency type.

    Raises:
        FieldWireInvalidInjectionError: If ``identifier`` is ``None`` or not an
            identifier.

    Examples:
        .. code-block:: python

            @injectable
            class Service:
                repository: Repository = inject(Repository)
                url: str = inject("database-url")

    """
    if identifier is None:
        msg = (
            "inject() received no identifier. This could mean a circular import "
            "left the name undefined; try `lazy(lambda: TheClass)`."
        )
        raise FieldWireInvalidInjectionError(msg)
    if not is_identifier(identifier):
        msg = f"{identifier!r} is not a valid identifier."
        raise FieldWireInvalidInjectionError(msg)
    return Inject(identifier)


@overload
def injectable(lifecycle: C, /) -> C: ...


@overload
def injectable(lifecycle: Lifecycle = Lifecycle.TRANSIENT, /) -> Callable[[C], C]: ...


def injectable(lifecycle: Lifecycle | C = Lifecycle.TRANSIENT, /) -> Callable[[C], C] | C:
    """Declare the lifecycle of a class.

    Works bare (``@injectable``) or called (``@injectable(Lifecycle.SINGLETON)``).
    When several lifecycle decorators are stacked the outermost one wins.

    Args:
        lifecycle: Lifecycle to record, or the class when used bare.

    Raises:
        FieldWireInvalidInjectionError: If applied to something that is not a class.

    """
    if is_runtime_class(lifecycle):
        return _set_lifecycle(lifecycle, Lifecycle.TRANSIENT)

    if not isinstance(lifecycle, Lifecycle):
        msg = f"{lifecycle!r} is not a Lifecycle; this decorator can only be applied to classes."
        raise FieldWireInvalidInjectionError(msg)

    def decorator(cls: C) -> C:
        return _set_lifecycle(cls, lifecycle)

    return decorator


@overload
def singleton(cls: C, /) -> C: ...


@overload
def singleton(cls: None = None, /) -> Callable[[C], C]: ...


def singleton(cls: C | None = None, /) -> Callable[[C], C] | C:
    """Shortcut for ``injectable(Lifecycle.SINGLETON)``, bare or called."""
    if cls is None:
        return injectable(Lifecycle.SINGLETON)
    return _set_lifecycle(cls, Lifecycle.SINGLETON)


def _set_lifecycle(cls: C, lifecycle: Lifecycle) -> C:
    if not is_runtime_class(cls):
        msg = f"{cls!r} is not a class; this decorator can only be applied to classes."
        raise FieldWireInvalidInjectionError(msg)
    ensure_class_metadata(cls).lifecycle = lifecycle
    return cls


__all__ = ["Inject", "inject", "injectable", "singleton"]
