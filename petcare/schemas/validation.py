"""
Explicit payload validation.

Request bodies are accepted as plain JSON objects and checked here instead of
in the route signature, so that every failure is reported through the standard
envelope with readable messages and so that callers control whether the first
or all problems are reported.
"""
from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

@dataclass
class ValidationResult(Generic[ModelT]):
    value: Optional[ModelT] = None
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

def format_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "__root__")
    if error.get("type") == "missing":
        return f'"{location}" is required'

    message = error.get("msg", "is invalid")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    if not location:
        return message
    return f'"{location}" {message[:1].lower()}{message[1:]}'

def validate(
    schema: Type[ModelT],
    payload: Any,
    abort_early: bool = True,
) -> ValidationResult[ModelT]:
    """Validate a payload against a schema without raising."""
    if not isinstance(payload, dict):
        return ValidationResult(errors=["Request body must be a JSON object"])

    try:
        return ValidationResult(value=schema.model_validate(payload))
    except PydanticValidationError as exc:
        messages = [format_error(error) for error in exc.errors()]
        if abort_early:
            messages = messages[:1]
        return ValidationResult(errors=messages)

def validate_or_raise(
    schema: Type[ModelT],
    payload: Any,
    abort_early: bool = True,
) -> ModelT:
    """Validate a payload, raising ValidationError on failure.

    With abort_early the first message is reported; otherwise all messages are
    joined with ", ".
    """
    result = validate(schema, payload, abort_early=abort_early)
    if not result.ok:
        raise ValidationError(", ".join(result.errors), errors=result.errors)
    return result.value
