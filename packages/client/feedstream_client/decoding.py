from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from feedstream_client.errors import ResponseDecodeError

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_model(model: type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ResponseDecodeError(
            f"unexpected {model.__name__} payload: {exc.error_count()} error(s)"
        ) from exc
