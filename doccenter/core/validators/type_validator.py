"""
TypeValidator - checks that a value can be read as the field's type.
"""

import math
from datetime import date, datetime
from typing import Any

from .base_validator import BaseValidator


def parse_number(value: Any) -> float:
    """
    Read a form value as a number.

    Raises:
        ValueError: If the value is not a finite number
    """
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool):
        raise ValueError(f"Cannot parse {value!r} as a number")
    if isinstance(value, int | float):
        number = float(value)
    else:
        text = str(value).strip()
        # float() accepts digit grouping ("1_000"); form input does not
        if "_" in text:
            raise ValueError(f"Cannot parse {value!r} as a number")
        number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"{value!r} is not a finite number")
    return number


def parse_date(value: Any) -> date:
    """
    Read a form value as a calendar date.

    Accepts date/datetime objects and ISO 8601 strings ("2024-03-18",
    "2024-03-18T10:30:00").

    Raises:
        ValueError: If the value is not a valid date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        return datetime.fromisoformat(text).date()


class TypeValidator(BaseValidator):
    """
    Validates that a field value parses as the expected type.

    Parameters:
    - expected_type: "number" or "date"
    """

    PARSERS = {
        "number": parse_number,
        "date": parse_date,
    }

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        expected_type = self.parameters.get("expected_type")
        if not expected_type:
            raise ValueError("TypeValidator requires 'expected_type' parameter")
        if expected_type not in self.PARSERS:
            raise ValueError(f"Unsupported type: {expected_type}")
        self.expected_type = expected_type

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        if self.is_empty(value):
            return

        try:
            self.PARSERS[self.expected_type](value)
        except (ValueError, TypeError):
            self.fail(f"{self.field_name} must be a valid {self.expected_type}")

    @property
    def rule_type(self) -> str:
        return "type_check"
