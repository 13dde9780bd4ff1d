"""
Auto-fill pipeline: locate -> aggregate -> resolve -> validate.

One run takes a reference token typed by the user and returns the form
values for the active document type, with validation and the generation
gate decision. Runs share no state; each allocates its own composite
record and results.
"""

from collections.abc import Mapping
from typing import Any

from doccenter.core.mapping import CandidateKeyTable
from doccenter.core.models import AutoFillResult
from doccenter.core.records import LinkageConfig, RecordAggregator, RecordLocator
from doccenter.core.resolver import FieldResolver
from doccenter.core.rules import ValidationEngine
from doccenter.core.schema import SchemaRegistry
from doccenter.dataset import ShipmentDataset
from doccenter.observability.logger import get_logger, log_operation
from doccenter.observability.metrics import (
    autofill_duration_seconds,
    record_autofill,
    track_duration,
)
from doccenter.utils.validation import ValidationError, validate_reference_token

logger = get_logger(__name__)


class AutoFillPipeline:
    """
    Fills a document form from the shipment dataset.

    Usage:
        pipeline = AutoFillPipeline(
            CandidateKeyTable.load_default(),
            SchemaRegistry.load_default(),
            ValidationEngine.load_default(),
        )
        result = pipeline.run("INV-2024-0042", "COM_INV", dataset)
    """

    def __init__(
        self,
        table: CandidateKeyTable,
        registry: SchemaRegistry,
        engine: ValidationEngine,
        linkage: LinkageConfig | None = None,
        strict_mode: bool = False,
    ):
        """
        Initialize the pipeline.

        Args:
            table: Candidate-key table
            registry: Schema registry holding the document field lists
            engine: Validation engine
            linkage: Keys used to locate and link records
            strict_mode: Default generation gate mode for runs
        """
        self.table = table
        self.registry = registry
        self.engine = engine
        self.linkage = linkage or LinkageConfig()
        self.strict_mode = strict_mode

        self.locator = RecordLocator(self.linkage)
        self.aggregator = RecordAggregator(self.linkage)
        self.resolver = FieldResolver(table)

    def run(
        self,
        reference_token: str,
        document_type: str,
        dataset: ShipmentDataset,
        current_values: Mapping[str, Any] | None = None,
        strict_mode: bool | None = None,
    ) -> AutoFillResult:
        """
        Auto-fill one document from a reference token.

        Not finding the reference, or a malformed token, is reported in the
        result status rather than raised.

        Args:
            reference_token: Invoice reference or AWB number
            document_type: Active document type
            dataset: Shipment collections to search
            current_values: Values already in the form (kept where nothing resolves)
            strict_mode: Override the pipeline's generation gate mode

        Returns:
            AutoFillResult
        """
        strict = self.strict_mode if strict_mode is None else strict_mode

        with log_operation("Auto-fill", logger=logger, document_type=document_type), \
                track_duration(autofill_duration_seconds, document_type=document_type):
            try:
                token = validate_reference_token(reference_token)
            except ValidationError as e:
                record_autofill(document_type, "invalid_reference")
                return AutoFillResult(
                    reference=str(reference_token or "").strip(),
                    document_type=document_type,
                    status="invalid_reference",
                    message=str(e),
                )

            primary = self.locator.locate(token, dataset.orders)
            if primary is None:
                record_autofill(document_type, "not_found")
                return AutoFillResult(
                    reference=token,
                    document_type=document_type,
                    status="not_found",
                    message=f"Reference {token} not found",
                )

            composite = self.aggregator.aggregate(primary, dataset.products, dataset.accounts)
            resolution = self.resolver.resolve_fields(
                document_type,
                self.registry.fields(document_type),
                composite,
                current_values,
            )

            validation = self.engine.check_document(document_type, resolution.form_values)
            can_generate = self.engine.can_generate(validation, strict)

            record_autofill(document_type, "filled", resolution.filled_count)
            logger.info(
                "Auto-fill completed",
                extra={
                    "document_type": document_type,
                    "reference": token,
                    "record_id": primary.record_id,
                    "filled_count": resolution.filled_count,
                    "changed_count": len(resolution.changed_fields),
                    "is_valid": validation.is_valid,
                },
            )

            return AutoFillResult(
                reference=token,
                document_type=document_type,
                status="filled",
                message=f"Auto-filled {resolution.filled_count} fields from {token}",
                record_id=primary.record_id,
                composite=composite,
                resolution=resolution,
                validation=validation,
                can_generate=can_generate,
            )
