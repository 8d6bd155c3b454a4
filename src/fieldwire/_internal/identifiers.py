from __future__ import annotations

from typing import Any, Generic, TypeAlias, TypeGuard, TypeVar

from fieldwire._internal.lazy import Lazy
from fieldwire._internal.type_checks import is_runtime_class

T = TypeVar("T")


class Token(Generic[T]):
    """Opaque registry key carrying only a debug description.

    Tokens compare and hash by identity: two tokens built from the same
    description are different keys. The type parameter is not used at runtime;
    it lets ``Container.resolve`` infer the resolved type.

    Examples:
        .. code-block:: python

            DatabaseUrl: Token[str] = Token("database-url")
            container.register(DatabaseUrl, ValueProvider("sqlite://"))
            url = container.resolve(DatabaseUrl)

    """

    __slots__ = ("description",)

    def __init__(self, description: str) -> None:
        self.description = description

    def __repr__(self) -> str:
        return f"Token({self.description!r})"

    def __str__(self) -> str:
        return self.description


TokenKey: TypeAlias = Token[Any] | str
"""A key that can be bound in the registry."""

Identifier: TypeAlias = TokenKey | type[Any] | Lazy[Any]
"""Anything ``Container.resolve`` accepts."""


def is_token(value: object) -> TypeGuard[TokenKey]:
    """Return whether value can be used as a registry key."""
    return isinstance(value, (Token, str))


def is_identifier(value: object) -> TypeGuard[Identifier]:
    """Return whether value is a token, a runtime class or a ``lazy`` reference.

    Args:
        value: Candidate identifier.

    """
    return is_token(value) or is_runtime_class(value) or isinstance(value, Lazy)


def identifier_name(identifier: object) -> str:
    """Render an identifier for diagnostics.

    Args:
        identifier: Identifier to render. Non-identifiers fall back to ``repr``.

    Returns:
        ``Token(<description>)`` for tokens, ``String(<value>)`` for strings,
        the class name for classes and ``Lazy(<callable name>)`` for forward
        references.

    """
    if isinstance(identifier, Token):
        return f"Token({identifier.description})"
    if isinstance(identifier, str):
        return f"String({identifier})"
    if isinstance(identifier, Lazy):
        return f"Lazy({identifier.name})"
    if is_runtime_class(identifier):
        return identifier.__name__
    return repr(identifier)


__all__ = [
    "Identifier",
    "Token",
    "TokenKey",
    "identifier_name",
    "is_identifier",
    "is_token",
]
