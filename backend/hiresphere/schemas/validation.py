"""Input Parsing — turns dict-or-model operation inputs into validated models.

Invariants:
    - Store operations accept either a schema instance or a plain mapping
    - pydantic ValidationError never escapes a store; it becomes InputValidationError
    - Enum filters and status values are parsed the same way (unknown value -> 400)
"""

from enum import Enum
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from hiresphere.core.errors import InputValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_input(
    model: type[ModelT], data: ModelT | Mapping[str, Any] | None,
) -> ModelT:
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(dict(data or {}))
    except ValidationError as e:
        raise validation_failure(model.__name__, e) from e


def validation_failure(what: str, exc: ValidationError) -> InputValidationError:
    """Build InputValidationError with field-level details."""
    return InputValidationError(
        f"Invalid {what}",
        errors=[
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    )


EnumT = TypeVar("EnumT", bound=Enum)


def parse_enum(enum_cls: type[EnumT], value: EnumT | str, field: str) -> EnumT:
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InputValidationError(
            f"Invalid {field}",
            errors=[{
                "field": field,
                "message": f"Input should be one of: {allowed}",
                "type": "enum",
            }],
        ) from e
