"""
Unit tests for the shipment dataset and its snapshot reader.
"""

import json

import pytest

from doccenter.dataset import DatasetReader, ShipmentDataset


class TestShipmentDataset:
    """Tests for ShipmentDataset"""

    def test_list_collections_use_positions(self):
        dataset = ShipmentDataset(orders=[{"REFERANCE": "A"}, {"REFERANCE": "B"}])
        assert list(dataset.orders) == ["0", "1"]

    def test_order_is_preserved(self):
        dataset = ShipmentDataset(orders={"z": {"A": 1}, "a": {"A": 2}})
        assert list(dataset.orders) == ["z", "a"]

    def test_non_record_entries_dropped(self):
        dataset = ShipmentDataset(orders={"a": {"A": 1}, "b": "junk"})
        assert list(dataset.orders) == ["a"]

    def test_scalar_collection_rejected(self):
        with pytest.raises(ValueError):
            ShipmentDataset(orders="not a collection")

    def test_empty(self):
        dataset = ShipmentDataset()
        assert dataset.is_empty is True
        assert dataset.summary() == {"orders": 0, "products": 0, "accounts": 0}

    def test_from_snapshot(self, sample_orders, sample_accounts):
        dataset = ShipmentDataset.from_snapshot({
            "SHIPMENTS": {"ORDERS": sample_orders},
            "CHANNEL": {"B2B": sample_accounts},
        })
        assert dataset.summary() == {"orders": 3, "products": 0, "accounts": 1}

    def test_from_snapshot_bad_group(self):
        with pytest.raises(ValueError, match="SHIPMENTS"):
            ShipmentDataset.from_snapshot({"SHIPMENTS": ["wrong"]})


class TestDatasetReader:
    """Tests for DatasetReader"""

    def test_read(self, snapshot_file):
        dataset = DatasetReader(snapshot_file).read()
        assert dataset.summary() == {"orders": 3, "products": 2, "accounts": 1}
        assert dataset.orders["ord_001"]["AWB_NUMBER"] == "78123456789"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DatasetReader(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="not valid JSON"):
            DatasetReader(path).read()

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text(json.dumps([1, 2]), encoding="utf-8")
        with pytest.raises(ValueError, match="JSON object"):
            DatasetReader(path).read()

    def test_missing_collections_are_empty(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"SHIPMENTS": {"ORDERS": []}}), encoding="utf-8")
        assert DatasetReader(path).read().is_empty is True
