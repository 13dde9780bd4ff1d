"""
FieldCheck and DocumentValidationResult models representing validation outcomes (ephemeral).
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


class FieldState(str, Enum):
    """Validation state of one field in a document instance."""

    UNTOUCHED = "untouched"
    VALID = "valid"
    INVALID = "invalid"


class FieldCheck(BaseModel):
    """
    Outcome of checking one field.

    Attributes:
        field_key: Canonical field key
        is_valid: Whether the value passed presence and shape checks
        error_message: Reason for failure (None when valid)
        failed_rule: Rule type that failed ("required_field", "regex", ...)
        required: Whether the field was required in this context
    """

    field_key: str
    is_valid: bool
    error_message: str | None = None
    failed_rule: str | None = None
    required: bool = False

    @model_validator(mode="after")
    def check_error_consistency(self) -> "FieldCheck":
        """A valid field carries no error; an invalid one always does."""
        if self.is_valid and self.error_message:
            raise ValueError("is_valid=True but error_message is set")
        if not self.is_valid and not self.error_message:
            raise ValueError("is_valid=False requires an error_message")
        return self

    @property
    def state(self) -> FieldState:
        return FieldState.VALID if self.is_valid else FieldState.INVALID


class DocumentValidationResult(BaseModel):
    """
    Aggregate outcome of validating every field of a document.

    Note: ephemeral, created on demand and never persisted.

    Attributes:
        document_type: Document type validated
        is_valid: True iff every checked field passed
        errors_by_field: Field key -> error message for failing fields
        field_results: Field key -> FieldCheck for every checked field
        profiled: Whether a document profile decided required-ness
    """

    document_type: str
    is_valid: bool
    errors_by_field: dict[str, str] = Field(default_factory=dict)
    field_results: dict[str, FieldCheck] = Field(default_factory=dict)
    profiled: bool = True

    @field_validator("errors_by_field")
    @classmethod
    def check_valid_consistency(cls, v, info):
        """Validate that is_valid=True implies errors_by_field is empty."""
        if info.data.get("is_valid") and len(v) > 0:
            raise ValueError("is_valid=True but errors_by_field is not empty")
        return v

    @property
    def error_count(self) -> int:
        return len(self.errors_by_field)

    @property
    def missing_required(self) -> list[str]:
        return [
            key for key, check in self.field_results.items()
            if check.required and check.failed_rule == "required_field"
        ]

    class Config:
        json_schema_extra = {
            "example": {
                "document_type": "COM_INV",
                "is_valid": False,
                "errors_by_field": {
                    "invoice_no": "Invoice number is required and must contain only letters, numbers, hyphens, and slashes"
                },
                "profiled": True,
            }
        }
