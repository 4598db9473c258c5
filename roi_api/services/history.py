# roi_api/services/history.py
# -----------------------------------------------------------------------------
# Ordered calculation history
# - value object: append/remove/clear return a new history
# - insertion order == calculation order
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from roi_api.schemas.calculation import CalculationResult


class CalculationHistory(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: Tuple[CalculationResult, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    @property
    def current(self) -> Optional[CalculationResult]:
        """Most recent calculation, if any"""
        return self.items[-1] if self.items else None

    def append(self, result: CalculationResult) -> CalculationHistory:
        return CalculationHistory(items=self.items + (result,))

    def remove(self, index: int) -> CalculationHistory:
        if not -len(self.items) <= index < len(self.items):
            raise IndexError(f"history index out of range: {index}")
        index %= len(self.items)
        return CalculationHistory(items=self.items[:index] + self.items[index + 1 :])

    def clear(self) -> CalculationHistory:
        return CalculationHistory()
