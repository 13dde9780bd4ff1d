"""
DateRangeValidator - validates dates fall within a window.
"""

from datetime import date
from typing import Any

from .base_validator import BaseValidator
from .type_validator import parse_date


class DateRangeValidator(BaseValidator):
    """
    Validates that a date field lies between two dates (inclusive).

    Parameters:
    - min_date: Earliest allowed date (date or ISO string)
    - max_date: Latest allowed date (date or ISO string)
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        min_date = self.parameters.get("min_date")
        max_date = self.parameters.get("max_date")
        if min_date is None and max_date is None:
            raise ValueError("DateRangeValidator requires at least one of: min_date, max_date")

        self.min_date: date | None = parse_date(min_date) if min_date is not None else None
        self.max_date: date | None = parse_date(max_date) if max_date is not None else None

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        if self.is_empty(value):
            return

        try:
            day = parse_date(value)
        except (ValueError, TypeError):
            self.fail(f"{self.field_name} must be a valid date")

        if self.min_date and day < self.min_date:
            self.fail(f"Date must be on or after {self.min_date.isoformat()}")
        if self.max_date and day > self.max_date:
            self.fail(f"Date must be on or before {self.max_date.isoformat()}")

    @property
    def rule_type(self) -> str:
        return "date_range"
