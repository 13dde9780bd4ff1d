"""
Schema registry: field lists per document type and the decision guide.
"""

from doccenter.config import DOCUMENT_SCHEMAS_FILE, Settings
from doccenter.core.mapping import CandidateKeyTable
from doccenter.core.models import DocumentField, DocumentSchema
from doccenter.observability.metrics import record_unmapped_fields

from .schema_config import GuideEntry, SchemaLoader


class SchemaRegistry:
    """
    Read-only registry of document schemas.

    Unknown document types are not an error: they have no schema and an
    empty field list.
    """

    def __init__(
        self,
        schemas: dict[str, DocumentSchema] | None = None,
        guide: list[GuideEntry] | None = None,
    ):
        self._schemas = dict(schemas or {})
        self._guide = list(guide or [])

    @classmethod
    def from_yaml(cls, path) -> "SchemaRegistry":
        schemas, guide = SchemaLoader(path).load()
        return cls(schemas=schemas, guide=guide)

    @classmethod
    def load_default(cls, settings: Settings | None = None) -> "SchemaRegistry":
        """Load the configured schemas (the packaged ones unless overridden)."""
        settings = settings or Settings()
        return cls.from_yaml(settings.config_path(DOCUMENT_SCHEMAS_FILE))

    def get(self, document_type: str) -> DocumentSchema | None:
        return self._schemas.get(document_type)

    def fields(self, document_type: str) -> list[DocumentField]:
        schema = self._schemas.get(document_type)
        return list(schema.fields) if schema else []

    def document_types(self) -> list[str]:
        return list(self._schemas)

    def decision_guide(self) -> list[GuideEntry]:
        return list(self._guide)

    def documents_for(self, condition: str) -> list[str]:
        """
        Document types suggested for a shipping situation.

        The condition is matched case-insensitively against the guide's
        conditions; an unknown condition yields an empty list.
        """
        wanted = condition.strip().lower()
        for entry in self._guide:
            if entry.condition.strip().lower() == wanted:
                return entry.document_ids
        return []

    def unmapped_fields(self, document_type: str, table: CandidateKeyTable) -> list[str]:
        """
        Input fields of a document type with no candidate keys in any scope.

        Each one is a configuration gap: the field can never be auto-filled.
        """
        schema = self._schemas.get(document_type)
        if schema is None:
            return []
        unmapped = table.find_unmapped(document_type, schema.field_keys)
        record_unmapped_fields(document_type, len(unmapped))
        return unmapped

    def __contains__(self, document_type: object) -> bool:
        return document_type in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)
