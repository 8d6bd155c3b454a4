from fieldwire._internal.integrations.pydantic_settings import (
    SETTINGS_BASES,
    is_pydantic_settings_subclass,
)

__all__ = ["SETTINGS_BASES", "is_pydantic_settings_subclass"]
