"""
Reader for the JSON snapshot of the synced shipment database.
"""

import json
from pathlib import Path

from doccenter.observability.logger import get_logger

from .snapshot import ShipmentDataset

logger = get_logger(__name__)


class DatasetReader:
    """
    Reads a shipment snapshot file into a ShipmentDataset.

    Expected layout:
    ```json
    {
      "SHIPMENTS": {"ORDERS": {...}, "PRODUCT": {...}},
      "CHANNEL": {"B2B": {...}}
    }
    ```
    Missing groups or collections read as empty.
    """

    def __init__(self, path: str | Path):
        """
        Initialize dataset reader.

        Args:
            path: Path to the JSON snapshot
        """
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"Dataset snapshot not found: {path}")

    def read(self) -> ShipmentDataset:
        """
        Read the snapshot.

        Returns:
            ShipmentDataset

        Raises:
            ValueError: If the file is not valid JSON or has the wrong shape
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                snapshot = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Dataset snapshot is not valid JSON: {e}") from e

        if not isinstance(snapshot, dict):
            raise ValueError("Dataset snapshot must be a JSON object")

        dataset = ShipmentDataset.from_snapshot(snapshot)
        logger.info("Loaded dataset snapshot", extra={"path": str(self.path), **dataset.summary()})
        return dataset
