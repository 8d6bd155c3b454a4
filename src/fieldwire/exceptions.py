from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class FieldWireError(Exception):
    """Represent a base class for all fieldwire-specific failures.

    Catch this type when you want to handle any fieldwire error path without
    matching each concrete exception class individually.
    """


class FieldWireInvalidRegistrationError(FieldWireError):
    """Signal an invalid ``Container.register`` call.

    Raised when the registration key is not a token. Only strings and
    ``Token`` instances can be bound; classes resolve through their own
    metadata and never live in the registry.
    """


class FieldWireInvalidProviderError(FieldWireInvalidRegistrationError):
    """Signal a malformed provider passed to ``Container.register``.

    Typical triggers are a ``ValueProvider`` left holding ``ABSENT``, a
    non-callable factory, a ``ClassProvider`` whose payload is not a class and
    a ``TokenProvider`` whose payload is not a token.
    """


class FieldWireRedirectCycleError(FieldWireInvalidRegistrationError):
    """Signal that a ``TokenProvider`` would close a loop of token redirects.

    The check runs before the binding is stored, so the registry is left
    exactly as it was before the failing call.
    """

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = tuple(chain)
        super().__init__(f"Token registration cycle detected! {' -> '.join(self.chain)}")


class FieldWireDependencyNotRegisteredError(FieldWireError):
    """Signal that a token has no provider.

    Tokens only resolve through the registry. Register the token with
    ``Container.register`` (or one of the ``add_*`` helpers) before resolving it.
    """

    def __init__(self, token: Any, name: str) -> None:
        self.token = token
        super().__init__(f'Attempted to resolve unregistered dependency token: "{name}"')


class FieldWireCircularDependencyError(FieldWireError):
    """Signal that resolution revisited an identifier that is still in progress.

    ``chain`` lists the identifier names from the first occurrence of the
    repeated identifier to the repeated identifier itself. Break the cycle by
    declaring one edge with ``lazy(...)``.
    """

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = tuple(chain)
        super().__init__(f"Circular dependency detected: {' -> '.join(self.chain)}")


class FieldWireNonInjectableConstructorError(FieldWireError):
    """Signal that a class cannot be instantiated without arguments.

    Only field injection is supported, so every constructor parameter must have
    a default value. Abstract classes and protocols are rejected the same way;
    bind a token to a concrete class instead.
    """

    def __init__(
        self,
        concrete_type: type[Any],
        parameters: Sequence[str] = (),
        *,
        reason: str | None = None,
    ) -> None:
        self.concrete_type = concrete_type
        self.parameters = tuple(parameters)
        if reason is None:
            reason = f"its constructor has required parameters: {', '.join(self.parameters)}"
        super().__init__(
            f"Class `{concrete_type.__name__}` cannot be instantiated because {reason}.",
        )


class FieldWireInvalidForwardRefError(FieldWireError):
    """Signal an invalid ``lazy(...)`` forward reference.

    Raised by ``lazy`` when it does not receive a callable, and by a deferred
    handle on first use when the callable does not return a class.
    """


class FieldWireInvalidInjectionError(FieldWireError):
    """Signal misuse of ``inject``, ``injectable`` or ``singleton``."""


class FieldWireUnrecognizedIdentifierError(FieldWireError):
    """Signal that a value is neither a token, a class nor a ``lazy`` reference."""


__all__ = [
    "FieldWireCircularDependencyError",
    "FieldWireDependencyNotRegisteredError",
    "FieldWireError",
    "FieldWireInvalidForwardRefError",
    "FieldWireInvalidInjectionError",
    "FieldWireInvalidProviderError",
    "FieldWireInvalidRegistrationError",
    "FieldWireNonInjectableConstructorError",
    "FieldWireRedirectCycleError",
    "FieldWireUnrecognizedIdentifierError",
]
