"""
Field resolution from composite records.
"""

from .field_resolver import REFERENCE_FIELD, FieldResolver

__all__ = [
    "FieldResolver",
    "REFERENCE_FIELD",
]
