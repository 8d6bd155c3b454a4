from fieldwire._internal.metadata import (
    DependencyMetadata,
    ServiceMetadata,
    ensure_class_metadata,
    get_class_metadata,
)

__all__ = ["DependencyMetadata", "ServiceMetadata", "ensure_class_metadata", "get_class_metadata"]
