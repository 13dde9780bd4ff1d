"""
Record location and aggregation over the shipment collections.
"""

from .aggregator import RecordAggregator, overlay_merge
from .linkage import (
    ACCOUNT_LAYER,
    DEFAULT_PRECEDENCE,
    PRIMARY_LAYER,
    PRODUCT_LAYER,
    LinkageConfig,
    iter_records,
)
from .locator import RecordLocator, normalize_token

__all__ = [
    "LinkageConfig",
    "RecordLocator",
    "RecordAggregator",
    "overlay_merge",
    "iter_records",
    "normalize_token",
    "PRIMARY_LAYER",
    "PRODUCT_LAYER",
    "ACCOUNT_LAYER",
    "DEFAULT_PRECEDENCE",
]
