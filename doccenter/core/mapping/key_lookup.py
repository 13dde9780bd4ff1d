"""
Case-insensitive lookup of the first non-empty value among candidate keys.
"""

from collections.abc import Iterable, Mapping
from typing import Any, NamedTuple

from doccenter.core.models import CompositeRecord, SourceRecord, is_empty_value


class KeyMatch(NamedTuple):
    """A candidate key that produced a value."""

    candidate: str
    source_key: str
    value: Any


def _as_source_record(record: SourceRecord | CompositeRecord | Mapping[str, Any]) -> SourceRecord:
    if isinstance(record, SourceRecord):
        return record
    if isinstance(record, CompositeRecord):
        return record.as_record()
    return SourceRecord.wrap(dict(record))


def find_match(
    record: SourceRecord | CompositeRecord | Mapping[str, Any],
    candidate_keys: Iterable[str],
) -> KeyMatch | None:
    """
    Find the first candidate key whose value in ``record`` is non-empty.

    Candidates are tried strictly in order. Keys are compared after
    case-folding, so ``"awb_number"`` matches a record key ``"AWB_NUMBER"``.
    Values that are None or blank after trimming are skipped and the search
    moves on to the next candidate.

    Args:
        record: Record to search (raw mappings are wrapped and folded once)
        candidate_keys: Ordered candidate source keys

    Returns:
        KeyMatch for the first non-empty candidate, or None
    """
    source = _as_source_record(record)
    for candidate in candidate_keys:
        value = source.get(candidate)
        if is_empty_value(value):
            continue
        return KeyMatch(
            candidate=candidate,
            source_key=source.original_key(candidate) or candidate,
            value=value,
        )
    return None


def resolve_from_record(
    record: SourceRecord | CompositeRecord | Mapping[str, Any],
    candidate_keys: Iterable[str],
) -> Any | None:
    """
    Resolve a value from ``record`` using an ordered list of candidate keys.

    Returns the first present-and-non-empty value, or None when no candidate
    yields one. String values are returned as stored (untrimmed).

    Examples:
        >>> resolve_from_record({"AWB_NUMBER": "123"}, ["awb_number", "AWB"])
        '123'
        >>> resolve_from_record({"REFERANCE": "", "INVOICE_NO": "INV1"}, ["REFERANCE", "INVOICE_NO"])
        'INV1'
    """
    match = find_match(record, candidate_keys)
    return match.value if match else None
