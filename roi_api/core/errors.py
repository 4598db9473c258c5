# roi_api/core/errors.py
# -----------------------------------------------------------------------------
# Domain errors
# - ValidationError: bad caller input, one message per offending field
# - ComputationError: engine produced a non-finite value (a defect)
# - CalculationNotFound: storage lookup miss
# -----------------------------------------------------------------------------
from typing import Mapping


class RoiError(Exception):
    """Base class for errors raised by the ROI core."""


class ValidationError(RoiError):
    def __init__(self, errors: Mapping[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid calculation input: {fields}")


class ComputationError(RoiError):
    def __init__(self, field: str, value: float):
        self.field = field
        self.value = value
        super().__init__(f"{field} evaluated to a non-finite value ({value!r})")


class CalculationNotFound(RoiError):
    def __init__(self, calculation_id: int):
        self.calculation_id = calculation_id
        super().__init__(f"Calculation {calculation_id} not found")
