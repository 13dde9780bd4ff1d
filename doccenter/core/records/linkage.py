"""
Linkage configuration: which source keys identify and connect records.
"""

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field

from doccenter.core.models import SourceRecord

PRIMARY_LAYER = "primary"
PRODUCT_LAYER = "product"
ACCOUNT_LAYER = "account"

DEFAULT_PRECEDENCE = (PRIMARY_LAYER, PRODUCT_LAYER, ACCOUNT_LAYER)


class LinkageConfig(BaseModel):
    """
    Source keys used to locate a shipment and link its related records.

    Attributes:
        reference_fields: Primary-record keys holding the reference identifier
        tracking_fields: Primary-record keys holding the tracking identifier
        product_link_field: Product-record key holding the shipment reference
        account_field: Primary-record key holding the account code
        account_code_field: Account-record key holding the account code
        precedence: Layer names, lowest precedence first
    """

    reference_fields: tuple[str, ...] = ("REFERANCE", "REFERENCE")
    tracking_fields: tuple[str, ...] = ("AWB_NUMBER",)
    product_link_field: str = "REFERANCE"
    account_field: str = "CLIENT_CODE"
    account_code_field: str = "CLIENT_CODE"
    precedence: tuple[str, ...] = Field(default=DEFAULT_PRECEDENCE, min_length=1)

    class Config:
        frozen = True

    @property
    def locator_fields(self) -> tuple[str, ...]:
        return self.reference_fields + self.tracking_fields


RecordCollection = Mapping[str, Any] | Sequence[Any]


def iter_records(collection: RecordCollection | None, name: str) -> Iterator[SourceRecord]:
    """
    Iterate a collection as SourceRecords, in insertion order.

    A mapping is read as identifier -> record; a sequence uses the position
    as identifier. Entries that are not mappings are skipped.
    """
    if not collection:
        return
    if isinstance(collection, Mapping):
        entries = ((str(record_id), record) for record_id, record in collection.items())
    else:
        entries = ((str(position), record) for position, record in enumerate(collection))

    for record_id, record in entries:
        if isinstance(record, SourceRecord):
            yield record
        elif isinstance(record, Mapping):
            yield SourceRecord(record_id=record_id, collection=name, payload=dict(record))
