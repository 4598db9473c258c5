# roi_api/services/validation.py
# -----------------------------------------------------------------------------
# Raw input -> CalculationInput
# - every field is checked in one pass; all violations are reported together
# - framework independent: no FastAPI/HTTP imports here
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Any

import pydantic

from roi_api.core.errors import ValidationError
from roi_api.schemas.calculation import CalculationInput

BODY_KEY = "body"


def _field_messages(exc: pydantic.ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for err in exc.errors():
        loc = err.get("loc") or ()
        field = str(loc[0]) if loc else BODY_KEY
        # keep the first message per field
        errors.setdefault(field, err["msg"])
    return errors


def parse(raw: Any) -> CalculationInput:
    """
    Validate a deserialized request body.

    Numeric strings are converted to numbers; nothing else is coerced.
    Raises ValidationError mapping each offending field to a message.
    """
    if not isinstance(raw, dict):
        raise ValidationError({BODY_KEY: "Input should be an object"})
    try:
        return CalculationInput.model_validate(raw)
    except pydantic.ValidationError as e:
        raise ValidationError(_field_messages(e)) from e
