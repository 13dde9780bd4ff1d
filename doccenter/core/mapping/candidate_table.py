"""
Candidate-key table: which source keys may hold each canonical document field.

Two scopes exist. A document-specific scope holds entries for one document
type; the shared common scope is consulted only when the document has no
entry of its own for a field. Within a scope, candidates are ordered.
"""

from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from doccenter.config import CANDIDATE_KEYS_FILE, Settings
from doccenter.observability.logger import get_logger

from .table_config import CandidateTableLoader

logger = get_logger(__name__)

SCOPE_DOCUMENT = "document"
SCOPE_COMMON = "common"


class CandidateKeyTable:
    """
    Static mapping from canonical field key to ordered candidate source keys.

    The table is immutable after construction; lookups never mutate it.
    """

    def __init__(
        self,
        common: Mapping[str, Sequence[str]] | None = None,
        documents: Mapping[str, Mapping[str, Sequence[str]]] | None = None,
    ):
        """
        Initialize the table.

        Args:
            common: Field key -> candidate keys shared by every document type
            documents: Document type -> (field key -> candidate keys)
        """
        self._common: dict[str, tuple[str, ...]] = {
            field: tuple(candidates) for field, candidates in (common or {}).items()
        }
        self._documents: dict[str, dict[str, tuple[str, ...]]] = {
            doc_type: {field: tuple(candidates) for field, candidates in fields.items()}
            for doc_type, fields in (documents or {}).items()
        }

    @classmethod
    def from_yaml(cls, path: str | Path) -> "CandidateKeyTable":
        """Load a table from a candidate-keys YAML file."""
        common, documents = CandidateTableLoader(path).load_table()
        return cls(common=common, documents=documents)

    @classmethod
    def load_default(cls, settings: Settings | None = None) -> "CandidateKeyTable":
        """Load the configured table (the packaged one unless overridden)."""
        settings = settings or Settings()
        return cls.from_yaml(settings.config_path(CANDIDATE_KEYS_FILE))

    def lookup_candidates(self, document_type: str, field_key: str) -> list[str]:
        """
        Return the ordered candidate keys for a field of a document type.

        Document-specific entries win over common ones. A field with no entry
        in either scope yields an empty list (it cannot be auto-filled; this
        is not an error).
        """
        doc_fields = self._documents.get(document_type)
        if doc_fields is not None and field_key in doc_fields:
            return list(doc_fields[field_key])
        if field_key in self._common:
            return list(self._common[field_key])
        return []

    def scope_of(self, document_type: str, field_key: str) -> str | None:
        """Name the scope that lookup_candidates would answer from, or None."""
        if field_key in self._documents.get(document_type, {}):
            return SCOPE_DOCUMENT
        if field_key in self._common:
            return SCOPE_COMMON
        return None

    def has_candidates(self, document_type: str, field_key: str) -> bool:
        return bool(self.lookup_candidates(document_type, field_key))

    def find_unmapped(self, document_type: str, field_keys: Iterable[str]) -> list[str]:
        """
        List the fields that have no candidates in any scope.

        A schema field with zero candidates points at a configuration gap,
        so each one is logged as a warning.
        """
        unmapped = [key for key in field_keys if not self.has_candidates(document_type, key)]
        for key in unmapped:
            logger.warning(
                "No candidate keys configured for field",
                extra={"document_type": document_type, "field_key": key},
            )
        return unmapped

    @property
    def document_types(self) -> list[str]:
        return list(self._documents)

    @property
    def common_fields(self) -> list[str]:
        return list(self._common)

    def document_fields(self, document_type: str) -> list[str]:
        return list(self._documents.get(document_type, {}))

    def __repr__(self) -> str:
        return f"CandidateKeyTable(common={len(self._common)}, documents={len(self._documents)})"
