"""
JSON Schema контракты токена

Схемы поставляются с пакетом (contracts/schema/*.json), Draft 2020-12:
- token_config — конфигурация конструирования (вход)
- token_state — наблюдаемый снапшот состояния запуска (выход)

Конфигурация проходит два уровня проверки: структура и форматы по схеме,
затем инварианты Pydantic модели (например, сумма долей).
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Union

import jsonschema
from jsonschema import Draft202012Validator

from taxtoken.core.domain.config import TokenConfig

SCHEMA_DIR = Path(__file__).parent / "schema"

TOKEN_CONFIG_SCHEMA = "token_config"
TOKEN_STATE_SCHEMA = "token_state"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Чтение схем из каталога с кэшем и meta-validation."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self.schema_dir = Path(schema_dir) if schema_dir is not None else SCHEMA_DIR
        if not self.schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self.schema_dir}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, name: str) -> Dict[str, Any]:
        """
        Схема по имени без расширения.

        Raises:
            FileNotFoundError: файла схемы нет
            ValueError: схема не проходит meta-validation
        """
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        path = self.schema_dir / f"{name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")
        schema = json.loads(path.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Schema {name} is not a valid Draft 2020-12 schema: {e.message}") from e

        self._cache[name] = schema
        return schema


_DEFAULT_LOADER: Optional[SchemaLoader] = None


def default_loader() -> SchemaLoader:
    """Общий загрузчик пакетных схем (создаётся при первом обращении)."""
    global _DEFAULT_LOADER
    if _DEFAULT_LOADER is None:
        _DEFAULT_LOADER = SchemaLoader()
    return _DEFAULT_LOADER


# =============================================================================
# VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка документа против одной схемы."""

    schema_name: str = ""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        self.schema = (loader or default_loader()).load_schema(self.schema_name)
        self._validator = Draft202012Validator(self.schema)

    def validate(self, document: Mapping[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: первое нарушение контракта
        """
        self._validator.validate(document)

    def is_valid(self, document: Mapping[str, Any]) -> bool:
        return self._validator.is_valid(document)

    def iter_errors(self, document: Mapping[str, Any]) -> Iterator[jsonschema.ValidationError]:
        return self._validator.iter_errors(document)


class TokenConfigValidator(ContractValidator):
    schema_name = TOKEN_CONFIG_SCHEMA


class TokenStateValidator(ContractValidator):
    schema_name = TOKEN_STATE_SCHEMA


def validate_token_config(document: Mapping[str, Any]) -> None:
    TokenConfigValidator().validate(document)


def validate_token_state(document: Mapping[str, Any]) -> None:
    TokenStateValidator().validate(document)


# =============================================================================
# CONFIG LOADING
# =============================================================================


def load_token_config(source: Union[Mapping[str, Any], str, Path]) -> TokenConfig:
    """
    TokenConfig из dict, JSON-строки или пути к JSON файлу.

    Raises:
        jsonschema.ValidationError: нарушение контракта token_config
        pydantic.ValidationError: нарушение инвариантов модели
    """
    if isinstance(source, Path):
        document = json.loads(source.read_text(encoding="utf-8"))
    elif isinstance(source, str):
        document = json.loads(source)
    else:
        document = dict(source)

    validate_token_config(document)
    return TokenConfig.model_validate(document)
