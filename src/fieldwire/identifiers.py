from fieldwire._internal.identifiers import (
    Identifier,
    Token,
    TokenKey,
    identifier_name,
    is_identifier,
    is_token,
)

__all__ = ["Identifier", "Token", "TokenKey", "identifier_name", "is_identifier", "is_token"]
