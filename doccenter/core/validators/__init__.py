"""
Field rule implementations.

Provides validators for required fields, type checking, text length,
regex patterns, numeric ranges, date windows and select options.
"""

from .base_validator import BaseValidator, ValidationError
from .date_range_validator import DateRangeValidator
from .length_validator import LengthValidator
from .option_validator import OptionValidator
from .range_validator import RangeValidator
from .regex_validator import RegexValidator
from .required_field_validator import RequiredFieldValidator
from .type_validator import TypeValidator, parse_date, parse_number

__all__ = [
    "BaseValidator",
    "ValidationError",
    "RequiredFieldValidator",
    "TypeValidator",
    "LengthValidator",
    "RegexValidator",
    "RangeValidator",
    "DateRangeValidator",
    "OptionValidator",
    "parse_number",
    "parse_date",
]
