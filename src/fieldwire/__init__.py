from fieldwire.container import Container
from fieldwire.container_context import ContainerContext, container_context
from fieldwire.deferred import Lazy, LazyProxy, is_lazy_proxy, lazy, unwrap_lazy_proxy
from fieldwire.exceptions import (
    FieldWireCircularDependencyError,
    FieldWireDependencyNotRegisteredError,
    FieldWireError,
    FieldWireInvalidForwardRefError,
    FieldWireInvalidInjectionError,
    FieldWireInvalidProviderError,
    FieldWireInvalidRegistrationError,
    FieldWireNonInjectableConstructorError,
    FieldWireRedirectCycleError,
    FieldWireUnrecognizedIdentifierError,
)
from fieldwire.identifiers import Token, identifier_name, is_identifier
from fieldwire.lock_mode import LockMode
from fieldwire.markers import inject, injectable, singleton
from fieldwire.metadata import ServiceMetadata, ensure_class_metadata, get_class_metadata
from fieldwire.providers import (
    ABSENT,
    ClassProvider,
    FactoryProvider,
    Lifecycle,
    TokenProvider,
    ValueProvider,
)

__all__ = [
    "ABSENT",
    "ClassProvider",
    "Container",
    "ContainerContext",
    "FactoryProvider",
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
    "Lazy",
    "LazyProxy",
    "Lifecycle",
    "LockMode",
    "ServiceMetadata",
    "Token",
    "TokenProvider",
    "ValueProvider",
    "container_context",
    "ensure_class_metadata",
    "get_class_metadata",
    "identifier_name",
    "inject",
    "injectable",
    "is_identifier",
    "is_lazy_proxy",
    "lazy",
    "singleton",
    "unwrap_lazy_proxy",
]
