"""
Shipment dataset snapshot and its reader.
"""

from .reader import DatasetReader
from .snapshot import ACCOUNTS_PATH, ORDERS_PATH, PRODUCTS_PATH, ShipmentDataset

__all__ = [
    "DatasetReader",
    "ShipmentDataset",
    "ORDERS_PATH",
    "PRODUCTS_PATH",
    "ACCOUNTS_PATH",
]
