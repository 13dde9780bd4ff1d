"""
ResolvedValue and ResolutionResult models representing auto-fill output (ephemeral).
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class ResolvedValue(BaseModel):
    """
    Outcome of resolving one document field.

    Attributes:
        field_key: Canonical field key
        resolved: False when no candidate key produced a non-empty value
        value: Source-derived value (None when unresolved)
        source_key: Source key that matched, as spelled in the record
        scope: "document" or "common", the candidate scope that matched
        layer: Record layer ("primary", "product", "account") that supplied the key
    """

    field_key: str
    resolved: bool
    value: Any = None
    source_key: str | None = None
    scope: str | None = None
    layer: str | None = None

    @model_validator(mode="after")
    def check_unresolved_has_no_value(self) -> "ResolvedValue":
        if not self.resolved and self.value is not None:
            raise ValueError("unresolved field cannot carry a value")
        return self

    @classmethod
    def unresolved(cls, field_key: str) -> "ResolvedValue":
        return cls(field_key=field_key, resolved=False)


class ResolutionResult(BaseModel):
    """
    Field values produced for one document type from one composite record.

    Attributes:
        document_type: Document type the fields belong to
        values: Field key -> ResolvedValue, in field-list order
        form_values: Current form values with every resolved field applied;
                     unresolved fields keep their previous value
        changed_fields: Resolved fields whose value differs from the previous one
        unmapped_fields: Fields with no candidate keys in any scope
    """

    document_type: str
    values: dict[str, ResolvedValue] = Field(default_factory=dict)
    form_values: dict[str, Any] = Field(default_factory=dict)
    changed_fields: list[str] = Field(default_factory=list)
    unmapped_fields: list[str] = Field(default_factory=list)

    @property
    def filled_fields(self) -> list[str]:
        return [k for k, v in self.values.items() if v.resolved]

    @property
    def filled_count(self) -> int:
        return len(self.filled_fields)

    @property
    def unresolved_fields(self) -> list[str]:
        return [k for k, v in self.values.items() if not v.resolved]

    class Config:
        json_schema_extra = {
            "example": {
                "document_type": "COM_INV",
                "values": {
                    "invoice_no": {
                        "field_key": "invoice_no",
                        "resolved": True,
                        "value": "INV-2024-0042",
                        "source_key": "REFERANCE",
                        "scope": "common",
                        "layer": "primary",
                    },
                    "exporter_ref": {"field_key": "exporter_ref", "resolved": False},
                },
                "form_values": {"invoice_no": "INV-2024-0042", "exporter_ref": ""},
                "changed_fields": ["invoice_no"],
                "unmapped_fields": ["exporter_ref"],
            }
        }
