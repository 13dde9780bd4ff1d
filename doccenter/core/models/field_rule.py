"""
FieldRule and DocumentProfile models holding the validation configuration.
"""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator


class FieldRule(BaseModel):
    """
    Shape rule for one canonical field.

    Attributes:
        field_name: Canonical field key this rule applies to
        type: "text", "textarea", "number", "date" or "select"
        required: Default required flag, used when a document has no profile
        min_length / max_length: Length bounds for text and textarea
        pattern: Regular expression the trimmed value must match
        min / max: Numeric bounds (inclusive) for number
        min_date / max_date: Date bounds (inclusive) for date
        options: Allowed values for select
        error_message: Message reported for any failure of this field
    """

    field_name: str = Field(..., min_length=1)
    type: Literal["text", "textarea", "number", "date", "select"] = "text"
    required: bool = False
    min_length: int | None = Field(None, ge=0)
    max_length: int | None = Field(None, ge=0)
    pattern: str | None = None
    min: float | None = None
    max: float | None = None
    min_date: date | None = None
    max_date: date | None = None
    options: list[str] | None = None
    error_message: str | None = None

    @field_validator("options")
    @classmethod
    def check_options_not_empty(cls, v):
        """An options list, when given, must offer at least one choice."""
        if v is not None and len(v) == 0:
            raise ValueError("options must not be empty")
        return v

    @model_validator(mode="after")
    def check_bounds(self) -> "FieldRule":
        if self.min_length is not None and self.max_length is not None and self.min_length > self.max_length:
            raise ValueError(f"{self.field_name}: min_length exceeds max_length")
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"{self.field_name}: min exceeds max")
        if self.min_date and self.max_date and self.min_date > self.max_date:
            raise ValueError(f"{self.field_name}: min_date is after max_date")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "field_name": "invoice_no",
                "type": "text",
                "required": True,
                "min_length": 1,
                "max_length": 30,
                "pattern": "^[A-Z0-9\\-\\/]+$",
                "error_message": "Invoice number is required and must contain only letters, numbers, hyphens, and slashes",
            }
        }


class DocumentProfile(BaseModel):
    """
    Required and optional fields of a document type.

    Attributes:
        document_type: Document type identifier
        required: Fields that must be filled before generation
        optional: Fields checked only when filled
    """

    document_type: str = Field(..., min_length=1)
    required: list[str] = Field(default_factory=list)
    optional: list[str] = Field(default_factory=list)

    @property
    def all_fields(self) -> list[str]:
        seen = dict.fromkeys(self.required)
        seen.update(dict.fromkeys(self.optional))
        return list(seen)

    def is_required(self, field_name: str) -> bool:
        return field_name in self.required
