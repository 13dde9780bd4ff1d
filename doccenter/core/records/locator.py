"""
Record locator: find the primary shipment record for a reference token.
"""

from doccenter.core.models import SourceRecord, is_empty_value
from doccenter.observability.logger import get_logger
from doccenter.observability.metrics import record_duplicate_reference

from .linkage import LinkageConfig, RecordCollection, iter_records

logger = get_logger(__name__)


def normalize_token(token: object) -> str:
    """Upper-case and trim a reference token (None becomes "")."""
    if token is None:
        return ""
    return str(token).strip().upper()


class RecordLocator:
    """
    Linear search of the primary collection by reference or tracking identifier.

    A record matches when any of its reference fields OR any of its tracking
    fields equals the token, compared after trimming and upper-casing both
    sides. Collections are scanned in insertion order, so the first match
    is deterministic.
    """

    def __init__(self, linkage: LinkageConfig | None = None):
        self.linkage = linkage or LinkageConfig()

    def matches(self, record: SourceRecord, token: str) -> bool:
        """Check whether ``record`` is identified by the normalised ``token``."""
        for field in self.linkage.locator_fields:
            value = record.get(field)
            if is_empty_value(value):
                continue
            if normalize_token(value) == token:
                return True
        return False

    def locate_all(self, reference_token: object, collection: RecordCollection | None) -> list[SourceRecord]:
        """Return every record matching the token, in collection order."""
        token = normalize_token(reference_token)
        if not token:
            return []
        return [
            record for record in iter_records(collection, "orders")
            if self.matches(record, token)
        ]

    def locate(self, reference_token: object, collection: RecordCollection | None) -> SourceRecord | None:
        """
        Find the primary record for a reference token.

        Args:
            reference_token: Free-text reference (invoice reference or AWB number)
            collection: Primary shipment collection

        Returns:
            The first matching record, or None when nothing matches. Not
            finding a record is a normal outcome and never raises.
        """
        matches = self.locate_all(reference_token, collection)
        if not matches:
            logger.info("Reference not found", extra={"reference": normalize_token(reference_token)})
            return None

        if len(matches) > 1:
            # Ambiguous data: keep the first match but make it visible
            logger.warning(
                "Multiple records match reference; using the first",
                extra={
                    "reference": normalize_token(reference_token),
                    "match_count": len(matches),
                    "record_ids": [m.record_id for m in matches],
                },
            )
            record_duplicate_reference()

        return matches[0]
