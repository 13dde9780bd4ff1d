"""
Pytest configuration and fixtures for doccenter tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
import contextlib
import io
import json
import os

import pytest

from doccenter.autofill import AutoFillPipeline
from doccenter.core.mapping import CandidateKeyTable
from doccenter.core.rules import ValidationEngine
from doccenter.core.schema import SchemaRegistry
from doccenter.dataset import ShipmentDataset
from doccenter.observability.logger import configure_logging


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that run several components together"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests through the command line"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds to run"
    )


# =======================
# DATASET FIXTURES
# =======================

@pytest.fixture
def sample_orders() -> dict:
    """Primary shipment collection with inconsistent key casing"""
    return {
        "ord_001": {
            "REFERANCE": "INV-2024-0042",
            "AWB_NUMBER": "78123456789",
            "CONSIGNOR_NAME": "Sunrise Textiles Pvt Ltd",
            "CONSIGNEE_NAME": "Acme Imports LLC",
            "DESTINATION_COUNTRY": "USA",
            "ORDER_DATE": "2024-03-18",
            "ORIGIN_CITY": "MUMBAI",
            "DESTINATION_CITY": "NEW YORK",
            "FLIGHT_NO": "AI-101",
            "CLIENT_CODE": "B2B-0007",
        },
        "ord_002": {
            "referance": "INV-2024-0043",
            "awb_number": "78123456790",
            "consignor_name": "Blue Ocean Exports",
            "consignee_name": "Nordic Trade AB",
            "destination_country": "SWEDEN",
            "order_date": "2024-04-02",
        },
        "ord_003": {
            "REFERANCE": "",
            "AWB_NUMBER": "99900011122",
            "CONSIGNOR_NAME": "Walk-in Customer",
        },
    }


@pytest.fixture
def sample_products() -> dict:
    """Product collection linked to orders by REFERANCE"""
    return {
        "prd_001": {
            "REFERANCE": "INV-2024-0042",
            "PRODUCT": "Cotton shirts",
            "INCOTERMS": "FOB",
            "WEIGHT": "12.5",
        },
        "prd_002": {
            "REFERANCE": "inv-2024-0043",
            "PRODUCT": "Should not link (case differs)",
        },
    }


@pytest.fixture
def sample_accounts() -> dict:
    """B2B client collection linked to orders by CLIENT_CODE"""
    return {
        "acc_007": {
            "CLIENT_CODE": "B2B-0007",
            "IEC": "0123456789",
            "GSTIN": "27AAACS1234F1Z5",
            "B2B_NAME": "Sunrise Textiles Pvt Ltd",
        },
    }


@pytest.fixture
def dataset(sample_orders, sample_products, sample_accounts) -> ShipmentDataset:
    return ShipmentDataset(
        orders=sample_orders,
        products=sample_products,
        accounts=sample_accounts,
    )


@pytest.fixture
def snapshot_file(tmp_path, sample_orders, sample_products, sample_accounts):
    """
    Write the sample collections in the synced snapshot layout

    Returns:
        Path to the snapshot JSON file
    """
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({
        "SHIPMENTS": {"ORDERS": sample_orders, "PRODUCT": sample_products},
        "CHANNEL": {"B2B": sample_accounts},
    }), encoding="utf-8")
    return path


# =======================
# CONFIGURATION FIXTURES
# =======================

@pytest.fixture(scope="session")
def candidate_table() -> CandidateKeyTable:
    """Candidate-key table shipped with the package"""
    return CandidateKeyTable.load_default()


@pytest.fixture(scope="session")
def validation_engine() -> ValidationEngine:
    """Validation engine with the packaged rules and profiles"""
    return ValidationEngine.load_default()


@pytest.fixture(scope="session")
def schema_registry() -> SchemaRegistry:
    """Schema registry with the packaged document schemas"""
    return SchemaRegistry.load_default()


@pytest.fixture
def pipeline(candidate_table, schema_registry, validation_engine) -> AutoFillPipeline:
    return AutoFillPipeline(candidate_table, schema_registry, validation_engine)


SETTINGS_ENV_VARS = ("DOCCENTER_STRICT_MODE", "DOCCENTER_CONFIG_DIR", "LOG_LEVEL", "LOG_FORMAT", "METRICS_PORT")


@pytest.fixture
def clean_env(monkeypatch):
    """
    Remove doccenter settings from the environment for a test

    Variables a test loads from a .env file are dropped afterwards; the
    original values come back through monkeypatch.
    """
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield os.environ
    for name in SETTINGS_ENV_VARS:
        os.environ.pop(name, None)


# =======================
# LOGGING FIXTURES
# =======================

@pytest.fixture
def restore_logging():
    """Point doccenter loggers back at the real stderr once capture has ended."""
    yield
    configure_logging()


@pytest.fixture
def json_logs(restore_logging):
    """
    Capture doccenter log records as parsed JSON

    Returns a callable that drains captured stderr and yields one dict per
    log line, optionally filtered by message.

    pytest swaps capsys buffers between the setup and call phases, so the
    handlers are bound to a buffer owned by this fixture instead.
    """
    stream = io.StringIO()
    with contextlib.redirect_stderr(stream):
        configure_logging("DEBUG", "json")

    def read(message: str | None = None) -> list[dict]:
        lines = stream.getvalue().strip().splitlines()
        stream.seek(0)
        stream.truncate()
        records = [json.loads(line) for line in lines if line.startswith("{")]
        if message is not None:
            records = [r for r in records if r["message"] == message]
        return records

    return read
