"""
Prometheus metrics for doccenter

Tracks auto-fill effectiveness (how many fields each request filled),
configuration gaps and validation outcomes.
"""
import os

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()


# =======================
# AUTO-FILL METRICS
# =======================

autofill_requests_total = Counter(
    name="doccenter_autofill_requests_total",
    documentation="Total number of auto-fill requests",
    labelnames=["document_type", "status"],  # status: filled, not_found, invalid_reference
    registry=REGISTRY,
)

fields_filled_total = Counter(
    name="doccenter_fields_filled_total",
    documentation="Total number of document fields filled from source records",
    labelnames=["document_type"],
    registry=REGISTRY,
)

unmapped_fields_total = Counter(
    name="doccenter_unmapped_fields_total",
    documentation="Schema fields seen with no candidate keys in any scope",
    labelnames=["document_type"],
    registry=REGISTRY,
)

duplicate_reference_matches_total = Counter(
    name="doccenter_duplicate_reference_matches_total",
    documentation="Lookups where more than one record matched the reference",
    registry=REGISTRY,
)

autofill_duration_seconds = Histogram(
    name="doccenter_autofill_duration_seconds",
    documentation="Time spent on one auto-fill request",
    labelnames=["document_type"],
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
    registry=REGISTRY,
)

# =======================
# VALIDATION METRICS
# =======================

validation_failures_total = Counter(
    name="doccenter_validation_failures_total",
    documentation="Total number of field validation failures",
    labelnames=["document_type", "rule_type", "field_name"],
    registry=REGISTRY,
)

generation_gate_total = Counter(
    name="doccenter_generation_gate_total",
    documentation="Document generation gate decisions",
    labelnames=["document_type", "outcome"],  # outcome: allowed, blocked
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    return CONTENT_TYPE_LATEST


def start_metrics_server(port: int | None = None) -> None:
    """
    Start HTTP server for Prometheus metrics

    Args:
        port: Port to listen on (defaults to env var METRICS_PORT or 8000)
    """
    # Lazy import: the HTTP server is only needed when the endpoint is enabled
    from prometheus_client import start_http_server

    metrics_port = port or int(os.getenv("METRICS_PORT", "8000"))
    start_http_server(metrics_port, registry=REGISTRY)


class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(autofill_duration_seconds, document_type="COM_INV"):
            ...
    """

    def __init__(self, histogram: Histogram, **labels):
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        self.timer = self.histogram.labels(**self.labels).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    if labels:
        counter.labels(**labels).inc(value)
    else:
        counter.inc(value)


# =======================
# DOMAIN HELPERS
# =======================

def record_autofill(document_type: str, status: str, filled_count: int = 0) -> None:
    """
    Record one auto-fill request and the number of fields it filled.

    Args:
        document_type: Active document type
        status: filled, not_found or invalid_reference
        filled_count: Fields filled from source records
    """
    increment_counter(autofill_requests_total, 1, document_type=document_type, status=status)
    if filled_count > 0:
        increment_counter(fields_filled_total, filled_count, document_type=document_type)


def record_unmapped_fields(document_type: str, count: int) -> None:
    if count > 0:
        increment_counter(unmapped_fields_total, count, document_type=document_type)


def record_duplicate_reference() -> None:
    increment_counter(duplicate_reference_matches_total)


def record_validation_failure(document_type: str, rule_type: str, field_name: str) -> None:
    """
    Record a validation failure.

    Args:
        document_type: Document type being validated
        rule_type: Type of validation rule that failed
        field_name: Name of field that failed validation
    """
    increment_counter(
        validation_failures_total, 1,
        document_type=document_type, rule_type=rule_type, field_name=field_name,
    )


def record_generation_gate(document_type: str, allowed: bool) -> None:
    outcome = "allowed" if allowed else "blocked"
    increment_counter(generation_gate_total, 1, document_type=document_type, outcome=outcome)
