"""
Field resolver: produce a value for every field of a document from a composite record.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from doccenter.core.mapping import CandidateKeyTable, find_match
from doccenter.core.models import (
    CompositeRecord,
    DocumentField,
    ResolutionResult,
    ResolvedValue,
    SourceRecord,
)
from doccenter.observability.logger import get_logger
from doccenter.observability.metrics import record_unmapped_fields

logger = get_logger(__name__)

REFERENCE_FIELD = "reference_id"

FieldSpec = DocumentField | str


def _field_key(field: FieldSpec) -> str | None:
    if isinstance(field, DocumentField):
        return field.key if field.is_input else None
    return field


class FieldResolver:
    """
    Resolves document fields through the candidate-key table.

    For each field the document-specific candidates are used when the
    document has an entry for it, else the common ones; the first candidate
    with a non-empty value in the composite record wins. Resolution is
    additive: a field nothing resolves keeps its current value.
    """

    def __init__(self, table: CandidateKeyTable, reference_field: str = REFERENCE_FIELD):
        """
        Initialize the resolver.

        Args:
            table: Candidate-key table
            reference_field: Form field holding the reference the user typed;
                             it is never overwritten by resolution
        """
        self.table = table
        self.reference_field = reference_field

    def resolve_field(self, document_type: str, field_key: str, record: SourceRecord, composite: CompositeRecord) -> ResolvedValue:
        candidates = self.table.lookup_candidates(document_type, field_key)
        match = find_match(record, candidates)
        if match is None:
            return ResolvedValue.unresolved(field_key)
        return ResolvedValue(
            field_key=field_key,
            resolved=True,
            value=match.value,
            source_key=match.source_key,
            scope=self.table.scope_of(document_type, field_key),
            layer=composite.source_of(match.candidate),
        )

    def resolve_fields(
        self,
        document_type: str,
        fields: Iterable[FieldSpec],
        composite: CompositeRecord,
        current_values: Mapping[str, Any] | None = None,
    ) -> ResolutionResult:
        """
        Resolve every input field of a document type.

        Headings, line-item tables and the reference field are skipped.
        Calling this twice with the same inputs yields the same result; the
        composite record and ``current_values`` are not modified.

        Args:
            document_type: Active document type
            fields: Field list (DocumentField objects or plain field keys)
            composite: Merged record to resolve from
            current_values: Values already in the form

        Returns:
            ResolutionResult with per-field outcomes and the updated form values
        """
        current = dict(current_values or {})
        record = composite.as_record()

        values: dict[str, ResolvedValue] = {}
        form_values = dict(current)
        changed: list[str] = []

        for field in fields:
            key = _field_key(field)
            if key is None or key == self.reference_field or key in values:
                continue

            resolved = self.resolve_field(document_type, key, record, composite)
            values[key] = resolved

            if not resolved.resolved:
                if key not in form_values and isinstance(field, DocumentField) and field.default is not None:
                    form_values[key] = field.default
                continue

            if current.get(key) != resolved.value:
                changed.append(key)
            form_values[key] = resolved.value

        unmapped = self.table.find_unmapped(document_type, values)
        record_unmapped_fields(document_type, len(unmapped))

        result = ResolutionResult(
            document_type=document_type,
            values=values,
            form_values=form_values,
            changed_fields=changed,
            unmapped_fields=unmapped,
        )
        logger.debug(
            "Resolved document fields",
            extra={
                "document_type": document_type,
                "field_count": len(values),
                "filled_count": result.filled_count,
                "changed_count": len(changed),
            },
        )
        return result
