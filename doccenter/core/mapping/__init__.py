"""
Candidate-key table and case-insensitive key lookup.
"""

from .candidate_table import SCOPE_COMMON, SCOPE_DOCUMENT, CandidateKeyTable
from .key_lookup import KeyMatch, find_match, resolve_from_record
from .table_config import CandidateTableLoader

__all__ = [
    "CandidateKeyTable",
    "CandidateTableLoader",
    "KeyMatch",
    "find_match",
    "resolve_from_record",
    "SCOPE_COMMON",
    "SCOPE_DOCUMENT",
]
