# roi_api/schemas/calculation.py
# -----------------------------------------------------------------------------
# Calculation request/response contract
# - camelCase on the wire, snake_case in Python
# - CalculationInput rejects unknown keys (extra="forbid")
# -----------------------------------------------------------------------------
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

MIN_MEMORY_MB = 128
MAX_MEMORY_MB = 10240
MAX_EXECUTION_MS = 900_000  # 15 minute function timeout
MAX_MONTHLY_INVOCATIONS = 1e12
MAX_SERVER_COST = 1e12  # USD/month


class CalculationInput(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, extra="forbid", frozen=True
    )

    monthly_invocations: float = Field(
        ge=1, le=MAX_MONTHLY_INVOCATIONS, allow_inf_nan=False
    )
    average_execution_time: float = Field(
        ge=1, le=MAX_EXECUTION_MS, allow_inf_nan=False
    )  # ms
    memory_size: float = Field(
        ge=MIN_MEMORY_MB, le=MAX_MEMORY_MB, allow_inf_nan=False
    )  # MB
    traditional_server_cost: float = Field(
        ge=0, le=MAX_SERVER_COST, allow_inf_nan=False
    )  # USD/month

    @field_validator("*", mode="before")
    @classmethod
    def _no_bools(cls, v):
        # bool is an int subclass; pydantic would happily turn True into 1.0
        if isinstance(v, bool):
            raise PydanticCustomError("float_type", "Input should be a valid number")
        return v


class CalculationResult(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    serverless_cost: float
    traditional_cost: float
    savings: float
    roi: float  # percent
    payback_period: Optional[float] = None  # months; None = never pays back


class CalculationRecord(BaseModel):
    """Stored calculation as returned by the API."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    created_at: datetime

    monthly_invocations: float
    average_execution_time: float
    memory_size: float
    traditional_server_cost: float

    serverless_cost: float
    traditional_cost: float
    savings: float
    roi: float
    payback_period: Optional[float] = None

    @property
    def input(self) -> CalculationInput:
        return CalculationInput.model_validate(
            self.model_dump(
                by_alias=True, include=set(CalculationInput.model_fields)
            )
        )

    @property
    def result(self) -> CalculationResult:
        return CalculationResult.model_validate(
            self.model_dump(include=set(CalculationResult.model_fields))
        )


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: str
    errors: Dict[str, str] = Field(default_factory=dict)
