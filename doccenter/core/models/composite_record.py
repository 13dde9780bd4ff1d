"""
CompositeRecord model representing the merged view used for field resolution (ephemeral).
"""

from typing import Any

from pydantic import BaseModel, Field

from .source_record import SourceRecord, fold_key


class CompositeRecord(BaseModel):
    """
    Merge of one primary record with its related records (ephemeral, never persisted).

    Keys are stored case-folded. ``key_sources`` remembers which layer
    supplied each key, so callers can explain where a filled value came from.

    Attributes:
        values: Case-folded key -> value after all overlays
        key_sources: Case-folded key -> name of the layer that supplied it
        layers: Names of the layers that were actually merged, in order
        primary_id: record_id of the primary record
    """

    values: dict[str, Any] = Field(default_factory=dict)
    key_sources: dict[str, str] = Field(default_factory=dict)
    layers: list[str] = Field(default_factory=list)
    primary_id: str | None = None

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(fold_key(key), default)

    def source_of(self, key: str) -> str | None:
        return self.key_sources.get(fold_key(key))

    def as_record(self) -> SourceRecord:
        """View the composite as a SourceRecord for key lookup."""
        return SourceRecord(
            record_id=self.primary_id,
            collection="composite",
            payload=dict(self.values),
        )

    def __contains__(self, key: object) -> bool:
        return fold_key(key) in self.values
