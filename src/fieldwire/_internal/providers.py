from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeAlias, TypeVar

from fieldwire._internal.identifiers import TokenKey, identifier_name, is_token
from fieldwire._internal.lazy import Lazy
from fieldwire._internal.type_checks import is_runtime_class
from fieldwire.exceptions import FieldWireInvalidProviderError, FieldWireRedirectCycleError

if TYPE_CHECKING:
    from fieldwire._internal.container import Container

T = TypeVar("T")


class _Absent:
    """Type of the ``ABSENT`` sentinel."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Any = _Absent()
"""Marker for "no value". A ``ValueProvider`` holding it is rejected at registration."""


class Lifecycle(str, Enum):
    """Define how instances of a class are reused."""

    TRANSIENT = "transient"
    """Build a new instance on every resolution."""

    SINGLETON = "singleton"
    """Build one instance and keep it on the container until ``reset()``."""

    RESOLUTION = "resolution"
    """Share one instance among every dependency of a single top-level ``resolve()`` call.

    For example, if ``A`` depends on ``B`` and ``C`` and ``B`` also depends on
    ``C``, a resolution-scoped ``C`` is the same object for ``A`` and ``B``,
    while two separate ``resolve(A)`` calls get two different ``C`` instances.
    """


@dataclass(frozen=True)
class ValueProvider(Generic[T]):
    """Bind a token to a pre-built value, returned as-is on every resolution."""

    value: T = ABSENT


@dataclass(frozen=True)
class FactoryProvider(Generic[T]):
    """Bind a token to a callable invoked with the container on every resolution.

    The result is never cached by the container; a factory that wants caching
    has to do it itself.
    """

    factory: Callable[[Container], T]


@dataclass(frozen=True)
class ClassProvider(Generic[T]):
    """Bind a token to a class resolved through the class's own metadata.

    The class keeps its lifecycle, so a singleton class bound to several tokens
    is still built once. If the class is a ``Lazy`` reference the token resolves
    to a deferred handle.
    """

    concrete_type: type[T] | Lazy[T]


@dataclass(frozen=True)
class TokenProvider(Generic[T]):
    """Redirect a token to another token."""

    token: TokenKey


Provider: TypeAlias = (
    ValueProvider[Any] | FactoryProvider[Any] | ClassProvider[Any] | TokenProvider[Any]
)
"""Any of the four binding strategies."""


def is_provider(value: object) -> bool:
    """Return whether value is a well-formed provider.

    Args:
        value: Candidate provider.

    """
    if isinstance(value, ValueProvider):
        return value.value is not ABSENT
    if isinstance(value, FactoryProvider):
        return callable(value.factory)
    if isinstance(value, ClassProvider):
        return is_runtime_class(value.concrete_type) or isinstance(value.concrete_type, Lazy)
    if isinstance(value, TokenProvider):
        return is_token(value.token)
    return False


def normalize_provider(provider: Provider | type[Any]) -> Provider:
    """Turn a bare class into a ``ClassProvider`` and validate the result.

    Args:
        provider: Provider or class passed to ``Container.register``.

    Returns:
        A well-formed provider.

    Raises:
        FieldWireInvalidProviderError: If the provider is malformed.

    """
    if is_runtime_class(provider):
        provider = ClassProvider(provider)
    if not is_provider(provider):
        msg = f"{provider!r} is not a valid provider."
        raise FieldWireInvalidProviderError(msg)
    return provider


class ProvidersRegistrations:
    """Store providers indexed by token.

    Registration keys are unique: adding a provider for an existing token
    replaces the previous one. Token redirects are checked for cycles before a
    ``TokenProvider`` is stored, so the stored redirect graph is always acyclic.
    """

    def __init__(self) -> None:
        self._providers_by_token: dict[TokenKey, Provider] = {}

    def add(self, token: TokenKey, provider: Provider) -> None:
        """Add or replace the provider for a token.

        Args:
            token: Registry key.
            provider: Validated provider.

        Raises:
            FieldWireRedirectCycleError: If ``provider`` redirects back to
                ``token`` through existing redirects.

        """
        if isinstance(provider, TokenProvider):
            self._check_redirect_cycle(token, provider)
        self._providers_by_token[token] = provider

    def get(self, token: object) -> Provider | None:
        """Return the provider bound to token, if any."""
        if not is_token(token):
            return None
        return self._providers_by_token.get(token)

    def clear(self) -> None:
        self._providers_by_token.clear()

    def _check_redirect_cycle(self, token: TokenKey, provider: TokenProvider[Any]) -> None:
        path: list[TokenKey] = [token]
        redirect: TokenProvider[Any] | None = provider
        while redirect is not None:
            current = redirect.token
            if current in path:
                raise FieldWireRedirectCycleError(
                    [identifier_name(key) for key in (*path, current)],
                )
            path.append(current)
            registered = self._providers_by_token.get(current)
            redirect = registered if isinstance(registered, TokenProvider) else None

    def __contains__(self, token: object) -> bool:
        return is_token(token) and token in self._providers_by_token

    def __iter__(self) -> Iterator[TokenKey]:
        return iter(self._providers_by_token)

    def __len__(self) -> int:
        return len(self._providers_by_token)


__all__ = [
    "ABSENT",
    "ClassProvider",
    "FactoryProvider",
    "Lifecycle",
    "Provider",
    "ProvidersRegistrations",
    "TokenProvider",
    "ValueProvider",
    "is_provider",
    "normalize_provider",
]
