"""
JSON Schema Contract Validators

Контракт payload между численным ядром и слоем представления. Схема не
хранится отдельным файлом: она строится из pydantic модели
(model_json_schema) и проходит meta-validation как Draft 2020-12, поэтому
ограничения полей (offset в (0, 1), запрет лишних ключей) заданы в одном
месте, в самой модели.

Контракты:
- SQUEEZE_RESULT_CONTRACT (payload SqueezeResult.to_payload())
"""

from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from pydantic import BaseModel

from bohr_mollerup.core.domain.squeeze import SqueezeResult

DRAFT_2020_12_URI = "https://json-schema.org/draft/2020-12/schema"


# =============================================================================
# CONTRACT VALIDATOR
# =============================================================================


class ContractValidator:
    """
    Валидатор данных против JSON Schema.

    Схема проверяется на соответствие Draft 2020-12 при создании валидатора.
    """

    def __init__(self, schema: Dict[str, Any], name: str = "contract"):
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema for {name}: {e.message}") from e

        self.name = name
        self.schema = schema
        self.validator = Draft202012Validator(schema)

    @classmethod
    def from_model(cls, model: type[BaseModel]) -> "ContractValidator":
        """Контракт, выведенный из pydantic модели."""
        schema = {"$schema": DRAFT_2020_12_URI, **model.model_json_schema()}
        return cls(schema, name=model.__name__)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)


SQUEEZE_RESULT_CONTRACT = ContractValidator.from_model(SqueezeResult)


def validate_squeeze_result(data: Dict[str, Any]) -> None:
    """
    Валидация payload SqueezeResult.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    SQUEEZE_RESULT_CONTRACT.validate(data)


__all__ = [
    "ContractValidator",
    "SQUEEZE_RESULT_CONTRACT",
    "ValidationError",
    "validate_squeeze_result",
]
