"""
Command-line interface for document auto-fill and validation.

Usage:
    doccenter fill --dataset <snapshot.json> --document <TYPE> --reference <TOKEN> [options]
    doccenter validate --document <TYPE> --values <values.json> [--strict]
    doccenter unmapped [--document <TYPE>]
    doccenter guide
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from doccenter.autofill import AutoFillPipeline
from doccenter.config import Settings, load_settings
from doccenter.core.mapping import CandidateKeyTable
from doccenter.core.rules import ValidationEngine
from doccenter.core.schema import SchemaRegistry
from doccenter.dataset import DatasetReader
from doccenter.observability.logger import configure_logging, get_logger
from doccenter.observability.metrics import start_metrics_server
from doccenter.utils.validation import validate_document_type, validate_file_path

logger = get_logger(__name__)


def _emit(payload: Any) -> None:
    """Write a JSON document to stdout."""
    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False, default=str)
    sys.stdout.write("\n")


def _load_values(path: str) -> dict[str, Any]:
    """
    Read current form values from a JSON file.

    Raises:
        ValueError: If the file is not a JSON object
    """
    values_path = Path(validate_file_path(path, "values"))
    if not values_path.exists():
        raise FileNotFoundError(f"Values file not found: {path}")
    try:
        with open(values_path, encoding="utf-8") as f:
            values = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Values file is not valid JSON: {e}") from e
    if not isinstance(values, dict):
        raise ValueError("Values file must contain a JSON object")
    return values


def _validation_payload(result) -> dict[str, Any]:
    return {
        "is_valid": result.is_valid,
        "error_count": result.error_count,
        "errors": result.errors_by_field,
        "missing_required": result.missing_required,
        "profiled": result.profiled,
    }


def fill_command(args, settings: Settings) -> int:
    """
    Auto-fill a document from the dataset snapshot.

    Args:
        args: Command-line arguments
        settings: Runtime settings

    Returns:
        Exit code
    """
    document_type = validate_document_type(args.document)
    dataset = DatasetReader(validate_file_path(args.dataset, "dataset")).read()
    current_values = _load_values(args.values) if args.values else None

    pipeline = AutoFillPipeline(
        CandidateKeyTable.load_default(settings),
        SchemaRegistry.load_default(settings),
        ValidationEngine.load_default(settings),
        strict_mode=settings.strict_mode,
    )
    result = pipeline.run(
        args.reference,
        document_type,
        dataset,
        current_values=current_values,
        strict_mode=args.strict or settings.strict_mode,
    )

    payload: dict[str, Any] = {
        "status": result.status,
        "message": result.message,
        "reference": result.reference,
        "document_type": result.document_type,
    }
    if result.resolution is not None:
        payload.update({
            "record_id": result.record_id,
            "filled_count": result.filled_count,
            "changed_fields": result.resolution.changed_fields,
            "unmapped_fields": result.resolution.unmapped_fields,
            "values": result.resolution.form_values,
            "sources": {
                key: {"source_key": v.source_key, "scope": v.scope, "layer": v.layer}
                for key, v in result.resolution.values.items() if v.resolved
            },
            "validation": _validation_payload(result.validation),
            "can_generate": result.can_generate,
        })
    _emit(payload)
    return 0


def validate_command(args, settings: Settings) -> int:
    """Validate form values for a document type."""
    document_type = validate_document_type(args.document)
    values = _load_values(args.values)

    engine = ValidationEngine.load_default(settings)
    result = engine.check_document(document_type, values)
    strict = args.strict or settings.strict_mode
    can_generate = engine.can_generate(result, strict)

    _emit({
        "document_type": document_type,
        **_validation_payload(result),
        "can_generate": can_generate,
        "can_save_draft": engine.can_save_draft(result),
    })
    return 0 if can_generate else 1


def unmapped_command(args, settings: Settings) -> int:
    """List schema fields that no candidate key can fill."""
    table = CandidateKeyTable.load_default(settings)
    registry = SchemaRegistry.load_default(settings)

    if args.document:
        document_types = [validate_document_type(args.document)]
    else:
        document_types = registry.document_types()

    _emit({doc_type: registry.unmapped_fields(doc_type, table) for doc_type in document_types})
    return 0


def guide_command(args, settings: Settings) -> int:
    """Print the document decision guide."""
    registry = SchemaRegistry.load_default(settings)
    _emit([entry.model_dump() for entry in registry.decision_guide()])
    return 0


COMMANDS = {
    "fill": fill_command,
    "validate": validate_command,
    "unmapped": unmapped_command,
    "guide": guide_command,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doccenter",
        description="Auto-fill and validate trade documents from the shipment database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Fill a commercial invoice from an AWB number
  doccenter fill --dataset data/snapshot.json --document COM_INV --reference 78123456789

  # Keep values already typed into the form
  doccenter fill --dataset data/snapshot.json --document SLI --reference INV-2024-0042 \\
      --values draft.json

  # Check a filled form, failing when generation would be blocked
  doccenter validate --document COM_INV --values draft.json --strict
        """
    )
    parser.add_argument(
        "--env-file",
        help="Read settings from a .env file first"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    fill_parser = subparsers.add_parser("fill", help="Auto-fill a document from a reference")
    fill_parser.add_argument("--dataset", required=True, help="Path to the dataset snapshot (JSON)")
    fill_parser.add_argument("--document", required=True, help="Document type, e.g. COM_INV")
    fill_parser.add_argument("--reference", required=True, help="Invoice reference or AWB number")
    fill_parser.add_argument("--values", help="JSON file with values already in the form")
    fill_parser.add_argument("--strict", action="store_true", help="Block generation while invalid")

    validate_parser = subparsers.add_parser("validate", help="Validate form values")
    validate_parser.add_argument("--document", required=True, help="Document type, e.g. COM_INV")
    validate_parser.add_argument("--values", required=True, help="JSON file with form values")
    validate_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with 1 when document generation would be blocked"
    )

    unmapped_parser = subparsers.add_parser("unmapped", help="List fields with no candidate keys")
    unmapped_parser.add_argument("--document", help="Limit to one document type")

    subparsers.add_parser("guide", help="Show which documents a shipment needs")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = load_settings(args.env_file)
        configure_logging(settings.log_level, settings.log_format)
        if settings.metrics_port:
            start_metrics_server(settings.metrics_port)
        return COMMANDS[args.command](args, settings)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot run '{args.command}': {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
