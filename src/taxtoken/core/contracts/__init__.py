"""Contracts — JSON Schema валидация конфигурации и снапшотов токена."""

from .validators import (
    ContractValidator,
    SchemaLoader,
    TokenConfigValidator,
    TokenStateValidator,
    default_loader,
    load_token_config,
    validate_token_config,
    validate_token_state,
)

__all__ = [
    "SchemaLoader",
    "default_loader",
    "ContractValidator",
    "TokenConfigValidator",
    "TokenStateValidator",
    "validate_token_config",
    "validate_token_state",
    "load_token_config",
]
