from fieldwire._internal.providers import (
    ABSENT,
    ClassProvider,
    FactoryProvider,
    Lifecycle,
    Provider,
    TokenProvider,
    ValueProvider,
)

__all__ = [
    "ABSENT",
    "ClassProvider",
    "FactoryProvider",
    "Lifecycle",
    "Provider",
    "TokenProvider",
    "ValueProvider",
]
