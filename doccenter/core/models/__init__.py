"""
Core data models for the document auto-fill engine.

All models use Pydantic for runtime validation and type safety.
"""

from .autofill_result import AutoFillResult
from .composite_record import CompositeRecord
from .document_schema import NON_INPUT_TYPES, DocumentField, DocumentSchema
from .field_rule import DocumentProfile, FieldRule
from .resolution import ResolutionResult, ResolvedValue
from .source_record import SourceRecord, fold_key, is_empty_value
from .validation_result import DocumentValidationResult, FieldCheck, FieldState

__all__ = [
    "SourceRecord",
    "CompositeRecord",
    "DocumentField",
    "DocumentSchema",
    "NON_INPUT_TYPES",
    "FieldRule",
    "DocumentProfile",
    "ResolvedValue",
    "ResolutionResult",
    "FieldCheck",
    "FieldState",
    "DocumentValidationResult",
    "AutoFillResult",
    "fold_key",
    "is_empty_value",
]
