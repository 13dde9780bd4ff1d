"""
SourceRecord model representing one row of a shipment, product or account collection.
"""

from typing import Any

from pydantic import BaseModel, Field, PrivateAttr


def fold_key(key: Any) -> str:
    """Case-fold a record key for comparison."""
    return str(key).strip().upper()


def is_empty_value(value: Any) -> bool:
    """
    Check whether a record value counts as absent.

    None and strings that are empty after trimming are absent; numbers
    (including 0) and booleans are present.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


class SourceRecord(BaseModel):
    """
    A single untyped record owned by the persistence layer (read-only).

    Keys are case-folded once on construction so that lookups by any
    casing become exact matches. When the raw payload holds keys that
    collide after folding, the first one in insertion order wins.

    Attributes:
        record_id: Opaque identifier of the record inside its collection
        collection: Name of the collection the record came from
        payload: Original unmodified key/value mapping
    """

    record_id: str | None = None
    collection: str = Field(default="orders", min_length=1)
    payload: dict[str, Any] = Field(default_factory=dict)

    _folded: dict[str, Any] = PrivateAttr(default_factory=dict)
    _original_keys: dict[str, str] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        for key, value in self.payload.items():
            folded = fold_key(key)
            if folded in self._folded:
                continue
            self._folded[folded] = value
            self._original_keys[folded] = str(key)

    @classmethod
    def wrap(
        cls,
        record: "SourceRecord | dict[str, Any]",
        record_id: str | None = None,
        collection: str = "orders",
    ) -> "SourceRecord":
        """Return ``record`` unchanged if already a SourceRecord, else wrap the mapping."""
        if isinstance(record, SourceRecord):
            return record
        return cls(record_id=record_id, collection=collection, payload=dict(record))

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by key, ignoring case."""
        return self._folded.get(fold_key(key), default)

    def has_value(self, key: str) -> bool:
        """True if ``key`` is present and its value is non-empty."""
        return not is_empty_value(self.get(key))

    def original_key(self, key: str) -> str | None:
        """Return the key as spelled in the raw payload."""
        return self._original_keys.get(fold_key(key))

    def folded(self) -> dict[str, Any]:
        """Return a copy of the case-folded key/value mapping."""
        return dict(self._folded)

    def __contains__(self, key: object) -> bool:
        return fold_key(key) in self._folded

    def __len__(self) -> int:
        return len(self._folded)

    class Config:
        json_schema_extra = {
            "example": {
                "record_id": "ord_000123",
                "collection": "orders",
                "payload": {
                    "REFERANCE": "INV-2024-0042",
                    "AWB_NUMBER": "78123456789",
                    "CONSIGNEE_NAME": "Acme Imports LLC",
                    "ORDER_DATE": "2024-03-18",
                    "CLIENT_CODE": "B2B-0007",
                },
            }
        }
