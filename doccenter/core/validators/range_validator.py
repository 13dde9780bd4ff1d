"""
RangeValidator - validates numeric values are within a specified range.
"""

from typing import Any

from .base_validator import BaseValidator
from .type_validator import parse_number


class RangeValidator(BaseValidator):
    """
    Validates that a numeric field is within a specified range.

    Form values usually arrive as strings, so the value is parsed first;
    a value that is not numeric fails this rule as well.

    Parameters:
    - min: Minimum value (inclusive)
    - max: Maximum value (inclusive)
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        self.min_value = self.parameters.get("min")
        self.max_value = self.parameters.get("max")

        if self.min_value is None and self.max_value is None:
            raise ValueError("RangeValidator requires at least one of: min, max")

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        if self.is_empty(value):
            return

        try:
            number = parse_number(value)
        except (ValueError, TypeError):
            self.fail(f"{self.field_name} must be a valid number")

        if self.min_value is not None and number < self.min_value:
            self.fail(f"Minimum value is {self.min_value}")

        if self.max_value is not None and number > self.max_value:
            self.fail(f"Maximum value is {self.max_value}")

    @property
    def rule_type(self) -> str:
        return "range"
