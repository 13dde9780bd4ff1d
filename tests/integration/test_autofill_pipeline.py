"""
Integration tests for the auto-fill pipeline.

Runs locate -> aggregate -> resolve -> validate against the packaged
candidate keys, schemas, rules and profiles.
"""

import pytest

from doccenter.autofill import AutoFillPipeline
from doccenter.core.records import LinkageConfig
from doccenter.dataset import ShipmentDataset
from doccenter.observability.metrics import REGISTRY


def sample(name: str, **labels) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


@pytest.mark.integration
def test_fills_commercial_invoice_from_invoice_reference(pipeline, dataset):
    """Test that primary, product and account layers all feed the form."""
    result = pipeline.run("INV-2024-0042", "COM_INV", dataset)

    assert result.status == "filled"
    assert result.record_id == "ord_001"
    assert result.message == "Auto-filled 11 fields from INV-2024-0042"

    values = result.resolution.form_values
    assert values["exporter_details"] == "Sunrise Textiles Pvt Ltd"
    assert values["consignee_details"] == "Acme Imports LLC"
    assert values["invoice_no"] == "INV-2024-0042"
    assert values["buyer_order"] == "INV-2024-0042"
    assert values["invoice_date"] == "2024-03-18"
    assert values["country_dest"] == "USA"
    assert values["vessel_flight_no"] == "AI-101"
    assert values["port_loading"] == "MUMBAI"
    assert values["port_discharge"] == "NEW YORK"
    assert values["terms"] == "FOB"
    assert values["iec"] == "0123456789"


@pytest.mark.integration
def test_sources_name_scope_and_layer(pipeline, dataset):
    """Test that each filled field reports where its value came from."""
    resolved = pipeline.run("INV-2024-0042", "COM_INV", dataset).resolution.values

    assert resolved["terms"].source_key == "INCOTERMS"
    assert resolved["terms"].scope == "document"
    assert resolved["terms"].layer == "product"

    assert resolved["iec"].layer == "account"
    assert resolved["exporter_details"].scope == "common"
    assert resolved["exporter_details"].layer == "primary"


@pytest.mark.integration
def test_unresolved_fields_take_schema_defaults(pipeline, dataset):
    """Test that defaults fill fields no record supplies."""
    result = pipeline.run("INV-2024-0042", "COM_INV", dataset)

    values = result.resolution.form_values
    assert values["country_origin"] == "INDIA"
    assert values["declaration"].startswith("We declare")
    assert "country_origin" not in result.resolution.filled_fields
    assert "exporter_ref" in result.resolution.unmapped_fields
    assert "reference_id" not in result.resolution.values


@pytest.mark.integration
def test_filled_invoice_passes_validation(pipeline, dataset):
    """Test that the filled commercial invoice validates and can be generated."""
    result = pipeline.run("INV-2024-0042", "COM_INV", dataset, strict_mode=True)

    assert result.validation.is_valid is True
    assert result.validation.profiled is True
    assert result.can_generate is True


@pytest.mark.integration
def test_lookup_by_tracking_number_ignores_case_and_spacing(pipeline, dataset):
    """Test that AWB numbers and lower-case tokens locate the same record."""
    by_awb = pipeline.run(" 78123456789 ", "COM_INV", dataset)
    by_ref = pipeline.run("inv-2024-0042", "COM_INV", dataset)

    assert by_awb.record_id == by_ref.record_id == "ord_001"
    assert by_ref.reference == "INV-2024-0042"


@pytest.mark.integration
def test_lower_case_source_keys_resolve(pipeline, dataset):
    """Test records whose keys are spelled in lower case."""
    result = pipeline.run("INV-2024-0043", "COM_INV", dataset)

    values = result.resolution.form_values
    assert result.record_id == "ord_002"
    assert values["country_dest"] == "SWEDEN"
    assert values["exporter_details"] == "Blue Ocean Exports"
    assert result.resolution.values["country_dest"].source_key == "DESTINATION_COUNTRY"
    # Product reference differs in case, so no product layer was linked
    assert "terms" not in values
    assert result.composite.layers == ["primary"]


@pytest.mark.integration
def test_reference_not_found(pipeline, dataset):
    before = sample("doccenter_autofill_requests_total", document_type="COM_INV", status="not_found")

    result = pipeline.run("INV-9999", "COM_INV", dataset)

    assert result.status == "not_found"
    assert result.message == "Reference INV-9999 not found"
    assert result.resolution is None
    assert result.filled_count == 0
    assert sample(
        "doccenter_autofill_requests_total", document_type="COM_INV", status="not_found"
    ) == before + 1


@pytest.mark.integration
@pytest.mark.parametrize("token", ["", "   ", "INV\x0042", "INV\n42", None])
def test_invalid_reference(pipeline, dataset, token):
    result = pipeline.run(token, "COM_INV", dataset)

    assert result.status == "invalid_reference"
    assert result.resolution is None
    assert result.can_generate is False


@pytest.mark.integration
def test_strict_mode_blocks_invalid_documents(pipeline, dataset):
    """Test the generation gate on a record missing required fields."""
    lenient = pipeline.run("99900011122", "COM_INV", dataset)
    strict = pipeline.run("99900011122", "COM_INV", dataset, strict_mode=True)

    assert lenient.record_id == "ord_003"
    assert lenient.validation.is_valid is False
    assert "invoice_no" in lenient.validation.missing_required
    assert "consignee_details" in lenient.validation.missing_required
    assert lenient.can_generate is True
    assert strict.can_generate is False


@pytest.mark.integration
def test_pipeline_default_strict_mode(candidate_table, schema_registry, validation_engine, dataset):
    strict_pipeline = AutoFillPipeline(
        candidate_table, schema_registry, validation_engine, strict_mode=True
    )

    assert strict_pipeline.run("99900011122", "COM_INV", dataset).can_generate is False
    assert strict_pipeline.run("99900011122", "COM_INV", dataset, strict_mode=False).can_generate is True


@pytest.mark.integration
def test_current_values_are_kept_where_nothing_resolves(pipeline, dataset):
    """Test that typed values survive and unchanged fields are not reported as changed."""
    current = {
        "exporter_ref": "EXP/77",
        "country_origin": "SRI LANKA",
        "invoice_no": "INV-2024-0042",
        "country_dest": "CANADA",
    }

    result = pipeline.run("INV-2024-0042", "COM_INV", dataset, current_values=current)

    values = result.resolution.form_values
    assert values["exporter_ref"] == "EXP/77"
    assert values["country_origin"] == "SRI LANKA"
    assert values["country_dest"] == "USA"
    assert "country_dest" in result.resolution.changed_fields
    assert "invoice_no" not in result.resolution.changed_fields
    assert current["country_dest"] == "CANADA"


@pytest.mark.integration
def test_run_is_repeatable(pipeline, dataset, sample_orders):
    """Test that runs share no state and leave the dataset untouched."""
    first = pipeline.run("INV-2024-0042", "SLI", dataset)
    second = pipeline.run("INV-2024-0042", "SLI", dataset)

    assert first.resolution.form_values == second.resolution.form_values
    assert dataset.orders["ord_001"] == sample_orders["ord_001"]
    assert first.resolution.form_values["shipper_name"] == "Sunrise Textiles Pvt Ltd"
    assert first.resolution.form_values["incoterms"] == "FOB"


@pytest.mark.integration
def test_custom_linkage(pipeline, candidate_table, schema_registry, validation_engine, dataset):
    """Test locating by a different tracking field."""
    linkage = LinkageConfig(reference_fields=("REFERANCE",), tracking_fields=("FLIGHT_NO",))
    custom = AutoFillPipeline(candidate_table, schema_registry, validation_engine, linkage=linkage)

    assert custom.run("AI-101", "COM_INV", dataset).record_id == "ord_001"
    assert custom.run("78123456789", "COM_INV", dataset).status == "not_found"
    assert pipeline.run("AI-101", "COM_INV", dataset).status == "not_found"


@pytest.mark.integration
def test_metrics_count_filled_fields(pipeline, dataset):
    requests_before = sample("doccenter_autofill_requests_total", document_type="COM_INV", status="filled")
    fields_before = sample("doccenter_fields_filled_total", document_type="COM_INV")

    pipeline.run("INV-2024-0042", "COM_INV", dataset)

    assert sample(
        "doccenter_autofill_requests_total", document_type="COM_INV", status="filled"
    ) == requests_before + 1
    assert sample("doccenter_fields_filled_total", document_type="COM_INV") == fields_before + 11


@pytest.mark.integration
def test_free_text_reference_is_looked_up(pipeline):
    """Test that punctuation in a reference is matched rather than rejected."""
    ds = ShipmentDataset(orders={"o1": {"REFERANCE": "INV#42", "DESTINATION_COUNTRY": "USA"}})

    result = pipeline.run("inv#42", "COM_INV", ds)

    assert result.status == "filled"
    assert result.record_id == "o1"


@pytest.mark.integration
def test_long_reference_is_not_found(pipeline, dataset):
    result = pipeline.run("R" * 150, "COM_INV", dataset)

    assert result.status == "not_found"
