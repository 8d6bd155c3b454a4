from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any, TypeVar, overload

from fieldwire._internal.identifiers import Token, TokenKey, identifier_name, is_token
from fieldwire._internal.integrations.pydantic_settings import is_pydantic_settings_subclass
from fieldwire._internal.lazy import Lazy
from fieldwire._internal.lock_mode import LockMode
from fieldwire._internal.metadata import ServiceMetadata, get_class_metadata
from fieldwire._internal.providers import (
    ClassProvider,
    FactoryProvider,
    Lifecycle,
    Provider,
    ProvidersRegistrations,
    TokenProvider,
    ValueProvider,
    normalize_provider,
)
from fieldwire._internal.resolution_context import ResolutionContext
from fieldwire._internal.type_checks import abstract_reason, is_runtime_class
from fieldwire.exceptions import (
    FieldWireCircularDependencyError,
    FieldWireDependencyNotRegisteredError,
    FieldWireInvalidProviderError,
    FieldWireInvalidRegistrationError,
    FieldWireNonInjectableConstructorError,
    FieldWireUnrecognizedIdentifierError,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)

_VARIADIC_PARAMETER_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class Container:
    """Register providers and resolve fully wired object graphs.

    Tokens (strings and ``Token`` instances) resolve only through registered
    providers. Classes resolve through their own metadata: the container
    instantiates them with no arguments and injects every field declared with
    ``inject``, honoring the lifecycle declared with ``injectable`` or
    ``singleton``. ``lazy`` references resolve to deferred handles that build
    their target on first use.

    Cycles are detected in both graphs: token redirects are checked when a
    ``TokenProvider`` is registered, and class/provider cycles are reported
    during resolution instead of recursing forever.
    """

    def __init__(
        self,
        default_lifecycle: Lifecycle = Lifecycle.TRANSIENT,
        *,
        lock_mode: LockMode = LockMode.NONE,
    ) -> None:
        """Initialize an empty container.

        Args:
            default_lifecycle: Lifecycle of classes that do not declare one.
            lock_mode: Locking strategy; use ``LockMode.THREAD`` when several
                threads share the container.

        Raises:
            FieldWireInvalidRegistrationError: If an argument has the wrong type.

        Examples:
            .. code-block:: python

                container = Container()
                shared_container = Container(Lifecycle.SINGLETON)
                threaded_container = Container(lock_mode=LockMode.THREAD)

        """
        if not isinstance(default_lifecycle, Lifecycle):
            msg = f"default_lifecycle must be a Lifecycle, got {default_lifecycle!r}."
            raise FieldWireInvalidRegistrationError(msg)
        if not isinstance(lock_mode, LockMode):
            msg = f"lock_mode must be a LockMode, got {lock_mode!r}."
            raise FieldWireInvalidRegistrationError(msg)

        self._default_lifecycle = default_lifecycle
        self._lock_mode = lock_mode
        self._lock = lock_mode.create_lock()
        self._providers_registrations = ProvidersRegistrations()
        self._singletons: dict[type[Any], Any] = {}

    # region Registration Methods
    def register(self, token: TokenKey, provider: Provider | type[Any]) -> None:
        """Bind a token to a provider, replacing any previous binding.

        Args:
            token: String or ``Token`` to bind.
            provider: One of ``ValueProvider``, ``FactoryProvider``,
                ``ClassProvider`` or ``TokenProvider``. A bare class is
                shorthand for ``ClassProvider(cls)``.

        Raises:
            FieldWireInvalidRegistrationError: If ``token`` is not a token.
            FieldWireInvalidProviderError: If ``provider`` is malformed.
            FieldWireRedirectCycleError: If a ``TokenProvider`` would close a
                redirect loop. The registry is left unchanged.

        Examples:
            .. code-block:: python

                container.register("answer", ValueProvider(42))
                container.register("alias", TokenProvider("answer"))
                container.register("service", ServiceImpl)

        """
        if not is_token(token):
            msg = (
                f"Only strings and Token instances can be registered, got {identifier_name(token)}. "
                "Classes resolve through their own metadata."
            )
            raise FieldWireInvalidRegistrationError(msg)

        normalized = normalize_provider(provider)
        with self._lock:
            self._providers_registrations.add(token, normalized)
        logger.debug("Registered %s with %r", identifier_name(token), normalized)

    def add_value(self, token: TokenKey, value: Any) -> None:
        """Bind a token to a pre-built value."""
        self.register(token, ValueProvider(value))

    def add_factory(self, token: TokenKey, factory: Callable[[Container], Any]) -> None:
        """Bind a token to a factory called with the container on every resolution."""
        self.register(token, FactoryProvider(factory))

    def add_concrete(self, token: TokenKey, concrete_type: type[Any] | Lazy[Any]) -> None:
        """Bind a token to a class resolved with its own lifecycle."""
        self.register(token, ClassProvider(concrete_type))

    def add_alias(self, token: TokenKey, target: TokenKey) -> None:
        """Redirect a token to another token."""
        self.register(token, TokenProvider(target))

    def has(self, identifier: object) -> bool:
        """Return whether identifier is a token with a registered provider.

        Classes are never reported as registered, even when they appear as the
        payload of a ``ClassProvider``.
        """
        return identifier in self._providers_registrations

    def reset(self) -> None:
        """Drop every registration and every cached singleton."""
        with self._lock:
            self._providers_registrations.clear()
            self._singletons.clear()
        logger.debug("Container reset")

    # endregion Registration Methods

    # region Resolution
    @overload
    def resolve(self, identifier: Token[T]) -> T: ...

    @overload
    def resolve(self, identifier: type[T]) -> T: ...

    @overload
    def resolve(self, identifier: Lazy[T]) -> T: ...

    @overload
    def resolve(self, identifier: Any) -> Any: ...

    def resolve(self, identifier: Any) -> Any:
        """Resolve an identifier to an instance.

        Every call starts a new resolution context, so resolution-scoped
        instances are shared only within this call.

        Args:
            identifier: Token, class or ``lazy`` reference.

        Returns:
            The resolved value.

        Raises:
            FieldWireDependencyNotRegisteredError: If a token has no provider.
            FieldWireCircularDependencyError: If the graph contains a cycle not
                broken by ``lazy``.
            FieldWireNonInjectableConstructorError: If a class has required
                constructor parameters.
            FieldWireUnrecognizedIdentifierError: If ``identifier`` is not an
                identifier.

        Notes:
            A failed call leaves the singleton cache as it was: singletons
            created before the failure are discarded.

        """
        with self._lock:
            context = ResolutionContext()
            try:
                return self._resolve_delegate(identifier, context)
            except Exception:
                for concrete_type in context.created_singletons:
                    self._singletons.pop(concrete_type, None)
                raise

    def _resolve_delegate(self, identifier: Any, context: ResolutionContext) -> Any:
        if is_token(identifier):
            provider = self._providers_registrations.get(identifier)
            if provider is None:
                raise FieldWireDependencyNotRegisteredError(identifier, identifier_name(identifier))
            return self._resolve_provider_delegate(identifier, provider, context)

        if isinstance(identifier, Lazy):
            # The proxy counts as a finished instance; it resolves its target
            # with a new top-level resolve() on first use.
            entry = context.start(identifier)
            instance = identifier.create_proxy(self.resolve)
            context.finish(entry, instance)
            return instance

        if is_runtime_class(identifier):
            return self._resolve_constructor_delegate(identifier, context)

        msg = f"Unrecognized identifier {identifier_name(identifier)}."
        raise FieldWireUnrecognizedIdentifierError(msg)

    def _raise_if_circular(self, identifier: Any, context: ResolutionContext) -> None:
        if context.has_circular_dependency(identifier):
            raise FieldWireCircularDependencyError(context.circular_chain(identifier))

    def _resolve_constructor_delegate(
        self,
        concrete_type: type[T],
        context: ResolutionContext,
    ) -> T:
        self._raise_if_circular(concrete_type, context)
        entry = context.start(concrete_type)

        metadata = get_class_metadata(concrete_type)
        lifecycle = self._resolve_lifecycle(concrete_type, metadata)

        if lifecycle is Lifecycle.SINGLETON and concrete_type in self._singletons:
            instance = self._singletons[concrete_type]
            context.finish(entry, instance)
            return instance  # type: ignore[no-any-return]

        if lifecycle is Lifecycle.RESOLUTION and context.has_instance(concrete_type):
            instance = context.get_instance(concrete_type)
            context.finish(entry, instance)
            return instance  # type: ignore[no-any-return]

        instance = self._construct(concrete_type, metadata, context)
        context.finish(entry, instance)

        if lifecycle is Lifecycle.SINGLETON:
            self._singletons[concrete_type] = instance
            context.record_singleton(concrete_type)
            logger.debug("Created singleton %s", concrete_type.__qualname__)
        return instance

    def _resolve_lifecycle(
        self,
        concrete_type: type[Any],
        metadata: ServiceMetadata | None,
    ) -> Lifecycle:
        if metadata is not None and metadata.lifecycle is not None:
            return metadata.lifecycle
        if is_pydantic_settings_subclass(concrete_type):
            return Lifecycle.SINGLETON
        return self._default_lifecycle

    def _construct(
        self,
        concrete_type: type[T],
        metadata: ServiceMetadata | None,
        context: ResolutionContext,
    ) -> T:
        reason = abstract_reason(concrete_type)
        if reason is not None:
            raise FieldWireNonInjectableConstructorError(concrete_type, reason=reason)

        if not is_pydantic_settings_subclass(concrete_type):
            required = _required_constructor_parameters(concrete_type)
            if required:
                raise FieldWireNonInjectableConstructorError(concrete_type, required)

        instance = concrete_type()
        if metadata is None:
            return instance

        for dependency in metadata.dependencies:
            value = self._resolve_delegate(dependency.identifier, context.fork())
            dependency.setter(instance, value)
        return instance

    def _resolve_provider_delegate(
        self,
        token: TokenKey,
        provider: Provider,
        context: ResolutionContext,
    ) -> Any:
        self._raise_if_circular(token, context)
        entry = context.start(token)
        instance = self._resolve_provider(provider, context)
        context.finish(entry, instance)
        return instance

    def _resolve_provider(self, provider: Provider, context: ResolutionContext) -> Any:
        if isinstance(provider, ValueProvider):
            return provider.value
        if isinstance(provider, FactoryProvider):
            return provider.factory(self)
        if isinstance(provider, ClassProvider):
            # Full dispatch, not the constructor path: the payload may be a Lazy.
            return self._resolve_delegate(provider.concrete_type, context.fork())
        if isinstance(provider, TokenProvider):
            return self._resolve_delegate(provider.token, context.fork())

        msg = f"Unknown provider {provider!r}."
        raise FieldWireInvalidProviderError(msg)

    # endregion Resolution


def _required_constructor_parameters(concrete_type: type[Any]) -> list[str]:
    try:
        signature = inspect.signature(concrete_type)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); let the call decide.
        return []
    return [
        name
        for name, parameter in signature.parameters.items()
        if parameter.kind not in _VARIADIC_PARAMETER_KINDS
        and parameter.default is inspect.Parameter.empty
    ]


__all__ = ["Container"]
