# backend/xrayfix/schemas/__init__.py
from typing import Any, Type, TypeVar
from pydantic import BaseModel, ValidationError

from xrayfix.core.exceptions import PayloadError

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_payload(model: Type[ModelT], data: Any, source: str) -> ModelT:
    """Validate an inbound or upstream payload, raising PayloadError on contract breaks"""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise PayloadError(f"Malformed {source} payload: {e.error_count()} error(s): {e}") from e
