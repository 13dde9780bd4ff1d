"""
ShipmentDataset: the cached collections the auto-fill engine reads from.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

# (group, collection) paths inside the synced snapshot
ORDERS_PATH = ("SHIPMENTS", "ORDERS")
PRODUCTS_PATH = ("SHIPMENTS", "PRODUCT")
ACCOUNTS_PATH = ("CHANNEL", "B2B")


def _as_id_mapping(collection: Any) -> dict[str, dict[str, Any]]:
    """Normalise a collection to identifier -> record, keeping order."""
    if collection is None:
        return {}
    if isinstance(collection, dict):
        items = ((str(k), v) for k, v in collection.items())
    elif isinstance(collection, list):
        items = ((str(i), v) for i, v in enumerate(collection))
    else:
        raise ValueError(f"Collection must be an object or a list, got {type(collection).__name__}")
    return {record_id: dict(record) for record_id, record in items if isinstance(record, dict)}


class ShipmentDataset(BaseModel):
    """
    Read-only snapshot of the shipment, product and account collections.

    Each collection maps an opaque identifier to an untyped record. A list
    is accepted too; its positions become the identifiers.

    Attributes:
        orders: Primary shipment collection
        products: Product collection, linked to orders by reference
        accounts: Client/account collection, linked by account code
    """

    orders: dict[str, dict[str, Any]] = Field(default_factory=dict)
    products: dict[str, dict[str, Any]] = Field(default_factory=dict)
    accounts: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @field_validator("orders", "products", "accounts", mode="before")
    @classmethod
    def normalize_collection(cls, v):
        return _as_id_mapping(v)

    @classmethod
    def from_snapshot(cls, snapshot: dict[str, Any]) -> "ShipmentDataset":
        """Build a dataset from the nested snapshot layout (``SHIPMENTS.ORDERS`` ...)."""

        def pick(path: tuple[str, str]) -> Any:
            group = snapshot.get(path[0]) or {}
            if not isinstance(group, dict):
                raise ValueError(f"Snapshot group '{path[0]}' must be an object")
            return group.get(path[1])

        return cls(
            orders=pick(ORDERS_PATH),
            products=pick(PRODUCTS_PATH),
            accounts=pick(ACCOUNTS_PATH),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.orders or self.products or self.accounts)

    def summary(self) -> dict[str, int]:
        return {
            "orders": len(self.orders),
            "products": len(self.products),
            "accounts": len(self.accounts),
        }
