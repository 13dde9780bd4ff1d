"""
AutoFillResult model representing the outcome of one auto-fill request (ephemeral).
"""

from typing import Literal

from pydantic import BaseModel, model_validator

from .composite_record import CompositeRecord
from .resolution import ResolutionResult
from .validation_result import DocumentValidationResult


class AutoFillResult(BaseModel):
    """
    Outcome of locating, aggregating, resolving and validating for one reference.

    Attributes:
        reference: Normalised reference token that was searched
        document_type: Active document type
        status: "filled", "not_found" or "invalid_reference"
        message: User-facing summary of the outcome
        record_id: Identifier of the located primary record
        composite: Merged record used for resolution
        resolution: Resolved field values (None unless status is "filled")
        validation: Validation of the resulting form values
        can_generate: Whether document generation is allowed under the active mode
    """

    reference: str
    document_type: str
    status: Literal["filled", "not_found", "invalid_reference"]
    message: str
    record_id: str | None = None
    composite: CompositeRecord | None = None
    resolution: ResolutionResult | None = None
    validation: DocumentValidationResult | None = None
    can_generate: bool = False

    @model_validator(mode="after")
    def check_status_consistency(self) -> "AutoFillResult":
        if self.status == "filled" and self.resolution is None:
            raise ValueError("status='filled' requires a resolution")
        if self.status != "filled" and self.resolution is not None:
            raise ValueError(f"status='{self.status}' cannot carry a resolution")
        return self

    @property
    def filled_count(self) -> int:
        return self.resolution.filled_count if self.resolution else 0
