"""
RequiredFieldValidator - ensures a field is present and not empty.
"""

from typing import Any

from .base_validator import BaseValidator


class RequiredFieldValidator(BaseValidator):
    """
    Validates that a required field is filled.

    Fails if the value is None or a string that is empty after trimming.
    Numbers, including 0, count as filled.
    """

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        if self.is_empty(value):
            self.fail(f"{self.field_name} is required")

    @property
    def rule_type(self) -> str:
        return "required_field"
