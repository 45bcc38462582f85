# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    """Collapse pydantic errors into ``{"fields": {path: error_type}}``.

    Same shape as listing validation failures, so clients read one format.
    The first error per field wins; submitted values are never echoed back.
    """
    fields: dict[str, str] = {}
    for error in exc.errors(include_url=False, include_input=False):
        path = ".".join(str(part) for part in error.get("loc", ()) if part is not None)
        fields.setdefault(path or "body", error.get("type", "value_error"))
    return {"fields": dict(sorted(fields.items()))}


def parse_payload(model: type[ModelT], payload: Any) -> ModelT:
    if not isinstance(payload, dict):
        raise ValidationError(context={"fields": {"body": "object_expected"}})
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(context=format_pydantic_errors(exc)) from exc


__all__ = ["format_pydantic_errors", "parse_payload"]
