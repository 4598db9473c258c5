# roi_api/services/roi.py
# -----------------------------------------------------------------------------
# ROI engine
# - pay-per-invocation pricing (AWS Lambda x86 list price, no free tier)
# - pure and deterministic; edge cases resolve to sentinels, never NaN/inf
# - the input caps in schemas.calculation keep every output finite
# -----------------------------------------------------------------------------
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Tuple

from roi_api.core.errors import ComputationError
from roi_api.schemas.calculation import CalculationInput, CalculationResult
from roi_api.services.validation import parse

ROI_SENTINEL = 0.0  # roi reported when the serverless cost is zero


@dataclass(frozen=True, slots=True)
class LambdaPricing:
    per_million_requests: float = 0.20  # USD
    per_gb_second: float = 0.0000166667  # USD

    def request_cost(self, invocations: float) -> float:
        return invocations / 1_000_000 * self.per_million_requests

    def compute_cost(self, invocations: float, duration_ms: float, memory_mb: float) -> float:
        gb_seconds = invocations * (duration_ms / 1000) * (memory_mb / 1024)
        return gb_seconds * self.per_gb_second


DEFAULT_PRICING = LambdaPricing()


def _finite(field: str, value: float) -> float:
    if not math.isfinite(value):
        raise ComputationError(field, value)
    return value


def serverless_cost(data: CalculationInput, pricing: LambdaPricing = DEFAULT_PRICING) -> float:
    """Monthly cost (USD) of running the workload on the serverless model."""
    return pricing.request_cost(data.monthly_invocations) + pricing.compute_cost(
        data.monthly_invocations, data.average_execution_time, data.memory_size
    )


def compute(
    data: CalculationInput,
    *,
    pricing: LambdaPricing = DEFAULT_PRICING,
    migration_cost: float = 0.0,
) -> CalculationResult:
    """
    Derive cost, savings, ROI and payback for one validated input.

    roi            = savings / serverless_cost * 100, or ROI_SENTINEL when the
                     serverless cost is zero
    payback_period = migration_cost / savings in months, or None when
                     savings <= 0 (the migration never pays for itself)
    """
    if not (math.isfinite(migration_cost) and migration_cost >= 0):
        raise ValueError(f"migration_cost must be a finite non-negative number: {migration_cost!r}")

    sl_cost = _finite("serverlessCost", serverless_cost(data, pricing))
    trad_cost = data.traditional_server_cost
    savings = _finite("savings", trad_cost - sl_cost)

    roi = savings / sl_cost * 100 if sl_cost > 0 else ROI_SENTINEL
    payback = migration_cost / savings if savings > 0 else None

    return CalculationResult(
        serverless_cost=sl_cost,
        traditional_cost=trad_cost,
        savings=savings,
        roi=_finite("roi", roi),
        payback_period=None if payback is None else _finite("paybackPeriod", payback),
    )


def parse_and_compute(
    raw: Any,
    *,
    pricing: LambdaPricing = DEFAULT_PRICING,
    migration_cost: float = 0.0,
) -> Tuple[CalculationInput, CalculationResult]:
    """validate_and_compute() that also hands back the parsed input (needed to store it)"""
    data = parse(raw)
    return data, compute(data, pricing=pricing, migration_cost=migration_cost)


def validate_and_compute(
    raw: Any,
    *,
    pricing: LambdaPricing = DEFAULT_PRICING,
    migration_cost: float = 0.0,
) -> CalculationResult:
    return parse_and_compute(raw, pricing=pricing, migration_cost=migration_cost)[1]
