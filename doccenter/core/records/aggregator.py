"""
Record aggregator: merge a primary record with its related records.

Precedence is an explicit list of layer names handed to a generic
overlay merge, rather than an accident of assignment order.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from doccenter.core.mapping import resolve_from_record
from doccenter.core.models import CompositeRecord, SourceRecord, fold_key, is_empty_value
from doccenter.observability.logger import get_logger

from .linkage import (
    ACCOUNT_LAYER,
    PRIMARY_LAYER,
    PRODUCT_LAYER,
    LinkageConfig,
    RecordCollection,
    iter_records,
)

logger = get_logger(__name__)


def overlay_merge(
    layers: Iterable[tuple[str, SourceRecord | Mapping[str, Any] | None]],
    additive: bool = False,
) -> CompositeRecord:
    """
    Merge record layers, lowest precedence first.

    By default a later layer replaces keys already present. With
    ``additive=True`` a later layer only fills keys that are missing or
    empty. None layers are skipped. Inputs are never mutated. The
    composite takes its primary_id from the "primary" layer, else the first.

    Args:
        layers: (layer name, record) pairs in precedence order
        additive: Fill gaps only instead of overwriting

    Returns:
        CompositeRecord with case-folded keys

    Examples:
        >>> overlay_merge([("primary", {"NAME": "A"}), ("product", {"name": "B"})]).get("NAME")
        'B'
    """
    values: dict[str, Any] = {}
    key_sources: dict[str, str] = {}
    merged: list[str] = []
    primary_id = None

    for name, record in layers:
        if record is None:
            continue
        source = SourceRecord.wrap(record, collection=name)
        if not merged or name == PRIMARY_LAYER:
            primary_id = source.record_id
        merged.append(name)

        for key, value in source.folded().items():
            if additive and key in values and not is_empty_value(values[key]):
                continue
            values[key] = value
            key_sources[key] = name

    return CompositeRecord(
        values=values,
        key_sources=key_sources,
        layers=merged,
        primary_id=primary_id,
    )


class RecordAggregator:
    """
    Builds the composite record for one located shipment.

    The product record is linked by an exact, case-sensitive match of its
    link field against the primary record's reference (a system-generated
    identifier). The account record is linked by account code.
    """

    def __init__(self, linkage: LinkageConfig | None = None, additive: bool = False):
        self.linkage = linkage or LinkageConfig()
        self.additive = additive

    def find_product(self, primary: SourceRecord, products: RecordCollection | None) -> SourceRecord | None:
        reference = resolve_from_record(primary, self.linkage.reference_fields)
        if is_empty_value(reference):
            return None
        link_key = fold_key(self.linkage.product_link_field)
        for product in iter_records(products, PRODUCT_LAYER):
            # Exact comparison on purpose: no trimming or case folding
            if product.folded().get(link_key) == reference:
                return product
        return None

    def find_account(self, primary: SourceRecord, accounts: RecordCollection | None) -> SourceRecord | None:
        code = primary.get(self.linkage.account_field)
        if is_empty_value(code):
            return None
        for account in iter_records(accounts, ACCOUNT_LAYER):
            if account.get(self.linkage.account_code_field) == code:
                return account
        return None

    def aggregate(
        self,
        primary: SourceRecord | Mapping[str, Any],
        product_collection: RecordCollection | None = None,
        account_collection: RecordCollection | None = None,
    ) -> CompositeRecord:
        """
        Merge a primary record with its product and account records.

        A missing product or account match is not an error; the composite
        holds whatever was found.

        Args:
            primary: Located primary shipment record
            product_collection: Product collection
            account_collection: Account collection

        Returns:
            Fresh CompositeRecord (inputs are left untouched)
        """
        primary = SourceRecord.wrap(primary, collection=PRIMARY_LAYER)
        found = {
            PRIMARY_LAYER: primary,
            PRODUCT_LAYER: self.find_product(primary, product_collection),
            ACCOUNT_LAYER: self.find_account(primary, account_collection),
        }

        composite = overlay_merge(
            ((name, found.get(name)) for name in self.linkage.precedence),
            additive=self.additive,
        )
        logger.debug(
            "Aggregated composite record",
            extra={"primary_id": primary.record_id, "layers": composite.layers, "key_count": len(composite.values)},
        )
        return composite
