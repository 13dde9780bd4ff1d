"""
LengthValidator - bounds the length of text values.
"""

from typing import Any

from .base_validator import BaseValidator


class LengthValidator(BaseValidator):
    """
    Validates the trimmed length of a text value.

    Parameters:
    - min_length: Minimum number of characters (inclusive)
    - max_length: Maximum number of characters (inclusive)
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        self.min_length = self.parameters.get("min_length")
        self.max_length = self.parameters.get("max_length")

        if self.min_length is None and self.max_length is None:
            raise ValueError("LengthValidator requires at least one of: min_length, max_length")

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        if self.is_empty(value):
            return

        length = len(self.as_text(value))
        if self.min_length and length < self.min_length:
            self.fail(f"Minimum {self.min_length} characters required")
        if self.max_length and length > self.max_length:
            self.fail(f"Maximum {self.max_length} characters allowed")

    @property
    def rule_type(self) -> str:
        return "length"
