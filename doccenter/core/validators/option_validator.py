"""
OptionValidator - restricts select fields to their listed options.
"""

from typing import Any

from .base_validator import BaseValidator


class OptionValidator(BaseValidator):
    """
    Validates that a value is one of the allowed options (exact, after trimming).

    Parameters:
    - options: List of allowed values
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        options = self.parameters.get("options")
        if not options:
            raise ValueError("OptionValidator requires a non-empty 'options' parameter")
        self.options = [str(option) for option in options]

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        if self.is_empty(value):
            return

        if self.as_text(value) not in self.options:
            self.fail("Please select a valid option")

    @property
    def rule_type(self) -> str:
        return "option"
