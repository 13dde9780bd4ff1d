"""
End-to-end tests for the doccenter command line.

Tests the complete flow: snapshot file -> auto-fill -> JSON on stdout
"""

import json
import socket

import pytest

from doccenter.cli.autofill_cli import build_parser, main
from doccenter.observability.logger import configure_logging


@pytest.fixture(autouse=True)
def reset_logging():
    """main() points every logger at the captured stderr; point them back afterwards."""
    yield
    configure_logging()


@pytest.fixture
def valid_values(tmp_path):
    path = tmp_path / "values.json"
    path.write_text(json.dumps({
        "exporter_details": "Sunrise Textiles Pvt Ltd, Mumbai",
        "invoice_no": "INV-2024-0042",
        "invoice_date": "2024-03-18",
        "consignee_details": "Acme Imports LLC, New York",
        "country_dest": "USA",
        "items": [{"description": "Cotton shirts", "qty": 40}],
    }), encoding="utf-8")
    return path


def run_cli(capsys, *argv):
    exit_code = main(list(argv))
    out = capsys.readouterr().out
    return exit_code, (json.loads(out) if out.strip() else None)


@pytest.mark.e2e
def test_fill_prints_values_and_sources(clean_env, capsys, snapshot_file):
    """
    Test the fill command end to end.

    Steps:
    1. Read the snapshot in the synced SHIPMENTS/CHANNEL layout
    2. Locate the order by AWB number
    3. Verify filled values, their sources and the validation summary
    """
    exit_code, payload = run_cli(
        capsys,
        "fill", "--dataset", str(snapshot_file), "--document", "com_inv", "--reference", "78123456789",
    )

    assert exit_code == 0
    assert payload["status"] == "filled"
    assert payload["document_type"] == "COM_INV"
    assert payload["record_id"] == "ord_001"
    assert payload["filled_count"] == 11
    assert payload["values"]["invoice_no"] == "INV-2024-0042"
    assert payload["values"]["terms"] == "FOB"
    assert payload["sources"]["terms"] == {"source_key": "INCOTERMS", "scope": "document", "layer": "product"}
    assert "exporter_ref" in payload["unmapped_fields"]
    assert payload["validation"]["is_valid"] is True
    assert payload["can_generate"] is True


@pytest.mark.e2e
def test_fill_keeps_values_file(clean_env, capsys, snapshot_file, tmp_path):
    values = tmp_path / "draft.json"
    values.write_text(json.dumps({"exporter_ref": "EXP/77", "country_dest": "CANADA"}), encoding="utf-8")

    _, payload = run_cli(
        capsys,
        "fill", "--dataset", str(snapshot_file), "--document", "COM_INV",
        "--reference", "INV-2024-0042", "--values", str(values),
    )

    assert payload["values"]["exporter_ref"] == "EXP/77"
    assert payload["values"]["country_dest"] == "USA"
    assert "country_dest" in payload["changed_fields"]


@pytest.mark.e2e
def test_fill_reference_not_found(clean_env, capsys, snapshot_file):
    exit_code, payload = run_cli(
        capsys,
        "fill", "--dataset", str(snapshot_file), "--document", "COM_INV", "--reference", "NOPE-1",
    )

    assert exit_code == 0
    assert payload == {
        "status": "not_found",
        "message": "Reference NOPE-1 not found",
        "reference": "NOPE-1",
        "document_type": "COM_INV",
    }


@pytest.mark.e2e
def test_fill_strict_flag_blocks_generation(clean_env, capsys, snapshot_file):
    _, payload = run_cli(
        capsys,
        "fill", "--dataset", str(snapshot_file), "--document", "COM_INV",
        "--reference", "99900011122", "--strict",
    )

    assert payload["validation"]["is_valid"] is False
    assert "invoice_no" in payload["validation"]["missing_required"]
    assert payload["can_generate"] is False


@pytest.mark.e2e
def test_env_file_enables_strict_mode(clean_env, capsys, snapshot_file, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("DOCCENTER_STRICT_MODE=true\n")

    _, payload = run_cli(
        capsys,
        "--env-file", str(env_file),
        "fill", "--dataset", str(snapshot_file), "--document", "COM_INV", "--reference", "99900011122",
    )

    assert payload["can_generate"] is False


@pytest.mark.e2e
def test_validate_valid_values(clean_env, capsys, valid_values):
    exit_code, payload = run_cli(
        capsys, "validate", "--document", "COM_INV", "--values", str(valid_values), "--strict",
    )

    assert exit_code == 0
    assert payload["is_valid"] is True
    assert payload["errors"] == {}
    assert payload["can_generate"] is True
    assert payload["can_save_draft"] is True


@pytest.mark.e2e
def test_validate_exit_code_follows_generation_gate(clean_env, capsys, tmp_path):
    """Invalid values fail only in strict mode; drafts can always be saved."""
    values = tmp_path / "values.json"
    values.write_text(json.dumps({"invoice_no": "inv 42", "iec": "123"}), encoding="utf-8")

    lenient_code, lenient = run_cli(capsys, "validate", "--document", "COM_INV", "--values", str(values))
    strict_code, strict = run_cli(
        capsys, "validate", "--document", "COM_INV", "--values", str(values), "--strict",
    )

    assert lenient_code == 0
    assert strict_code == 1
    assert lenient["is_valid"] is False
    assert lenient["errors"]["iec"] == "IEC code must be exactly 10 digits"
    assert "exporter_details" in lenient["missing_required"]
    assert strict["can_generate"] is False
    assert strict["can_save_draft"] is True


@pytest.mark.e2e
def test_unmapped_for_one_document(clean_env, capsys):
    exit_code, payload = run_cli(capsys, "unmapped", "--document", "COM_INV")

    assert exit_code == 0
    assert list(payload) == ["COM_INV"]
    assert "exporter_ref" in payload["COM_INV"]
    assert "invoice_no" not in payload["COM_INV"]


@pytest.mark.e2e
def test_unmapped_uses_config_dir_override(clean_env, capsys, tmp_path):
    """A candidate table in DOCCENTER_CONFIG_DIR replaces the packaged one."""
    (tmp_path / "candidate_keys.yaml").write_text(
        "common:\n  invoice_no: ['REFERANCE']\ndocuments: {}\n", encoding="utf-8"
    )
    clean_env["DOCCENTER_CONFIG_DIR"] = str(tmp_path)

    _, payload = run_cli(capsys, "unmapped", "--document", "COM_INV")

    assert "invoice_no" not in payload["COM_INV"]
    assert "exporter_details" in payload["COM_INV"]
    assert "iec" in payload["COM_INV"]


@pytest.mark.e2e
def test_unmapped_for_all_documents(clean_env, capsys):
    _, payload = run_cli(capsys, "unmapped")

    assert "COM_INV" in payload
    assert "SLI" in payload


@pytest.mark.e2e
def test_guide(clean_env, capsys):
    exit_code, payload = run_cli(capsys, "guide")

    assert exit_code == 0
    assert payload[0]["condition"] == "A standard commercial export"
    assert payload[0]["documents"][0] == {"id": "COM_INV", "name": "Commercial-Invoice"}


@pytest.mark.e2e
@pytest.mark.parametrize("argv", [
    ["fill", "--dataset", "missing.json", "--document", "COM_INV", "--reference", "X1"],
    ["fill", "--dataset", "../snapshot.json", "--document", "COM_INV", "--reference", "X1"],
    ["validate", "--document", "COM INV", "--values", "values.json"],
])
def test_errors_exit_with_one(clean_env, capsys, argv):
    exit_code, payload = run_cli(capsys, *argv)

    assert exit_code == 1
    assert payload is None


@pytest.mark.e2e
def test_malformed_snapshot(clean_env, capsys, tmp_path):
    snapshot = tmp_path / "snapshot.json"
    snapshot.write_text("{not json", encoding="utf-8")

    exit_code = main(["fill", "--dataset", str(snapshot), "--document", "COM_INV", "--reference", "X1"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert "not valid JSON" in captured.err


@pytest.mark.e2e
def test_malformed_candidate_table(clean_env, capsys, tmp_path):
    """A broken YAML table in DOCCENTER_CONFIG_DIR is reported, not raised."""
    (tmp_path / "candidate_keys.yaml").write_text("common: [unclosed\n", encoding="utf-8")
    clean_env["DOCCENTER_CONFIG_DIR"] = str(tmp_path)

    exit_code = main(["unmapped"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert "not valid YAML" in captured.err


@pytest.mark.e2e
@pytest.mark.parametrize("port", ["abc", "0", "70000"])
def test_bad_metrics_port(clean_env, capsys, port):
    clean_env["METRICS_PORT"] = port

    exit_code = main(["guide"])

    assert exit_code == 1
    assert capsys.readouterr().out == ""


@pytest.mark.e2e
def test_metrics_port_in_use(clean_env, capsys):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
        busy.bind(("0.0.0.0", 0))
        busy.listen(1)
        clean_env["METRICS_PORT"] = str(busy.getsockname()[1])

        exit_code = main(["guide"])

    assert exit_code == 1
    assert capsys.readouterr().out == ""


@pytest.mark.e2e
def test_no_command_prints_help(clean_env, capsys):
    assert main([]) == 1
    assert "usage: doccenter" in capsys.readouterr().out


@pytest.mark.e2e
def test_missing_required_argument():
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args(["fill", "--document", "COM_INV"])
    assert exc_info.value.code == 2
