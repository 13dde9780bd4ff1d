"""
Document schema configuration loading.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from doccenter.core.models import DocumentField, DocumentSchema


class GuideDocument(BaseModel):
    """A document suggested by the decision guide."""

    id: str
    name: str


class GuideEntry(BaseModel):
    """
    One shipping situation and the documents it calls for.

    Attributes:
        condition: Situation described in plain words
        documents: Documents to prepare, in suggested order
    """

    condition: str
    documents: list[GuideDocument] = Field(default_factory=list)

    @property
    def document_ids(self) -> list[str]:
        return [d.id for d in self.documents]


class SchemaLoader:
    """
    Loads document field lists and the decision guide from YAML.

    Expected YAML format:
    ```yaml
    documents:
      COM_INV:
        title: 'Commercial Invoice'
        description: '...'
        fields:
          - {label: 'Parties', type: heading}
          - {key: invoice_no, label: 'Invoice No.', type: text, required: true}

    decision_guide:
      - condition: 'A standard commercial export'
        documents:
          - {id: COM_INV, name: 'Commercial-Invoice'}
    ```
    """

    def __init__(self, config_path: str | Path):
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Document schema file not found: {config_path}")

    def load(self) -> tuple[dict[str, DocumentSchema], list[GuideEntry]]:
        """
        Load schemas and the decision guide.

        Returns:
            Tuple of (document type -> DocumentSchema, guide entries)

        Raises:
            ValueError: If the YAML is invalid or a document definition is malformed
        """
        with open(self.config_path, encoding="utf-8") as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Document schema file {self.config_path} is not valid YAML: {e}") from e

        if not isinstance(config, dict) or "documents" not in config:
            raise ValueError("Configuration file must contain 'documents' section")

        schemas: dict[str, DocumentSchema] = {}
        for doc_type, definition in (config["documents"] or {}).items():
            schemas[str(doc_type)] = self._parse_document(str(doc_type), definition)

        try:
            guide = [GuideEntry(**entry) for entry in config.get("decision_guide") or []]
        except (PydanticValidationError, TypeError) as e:
            raise ValueError(f"Invalid decision guide entry: {e}") from e

        return schemas, guide

    def _parse_document(self, doc_type: str, definition: Any) -> DocumentSchema:
        if not isinstance(definition, dict):
            raise ValueError(f"Definition of document '{doc_type}' must be a mapping")

        fields = definition.get("fields") or []
        if not isinstance(fields, list):
            raise ValueError(f"Fields of document '{doc_type}' must be a list")

        try:
            return DocumentSchema(
                document_type=doc_type,
                title=definition.get("title", doc_type),
                description=definition.get("description", ""),
                fields=[DocumentField(**field) for field in fields],
            )
        except (PydanticValidationError, TypeError) as e:
            raise ValueError(f"Invalid field definition in document '{doc_type}': {e}") from e
