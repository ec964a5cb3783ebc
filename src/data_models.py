"""
Shared data structures for the economy inventory ledger.

Item identifiers, the tagged catalogue keys used to address the catalogue
document, and the persisted inventory record.
"""

from dataclasses import dataclass
import time
from typing import Optional, Union


# =============================================================================
# ITEM IDENTIFIERS
# =============================================================================

# High nibble of an item id selects its type bucket
TYPE_MASK = 0xF000

# Width of the identifier range covered by one type bucket
TYPE_RANGE = 0x1000

Currency = Union[int, float]


def as_currency(amount: Currency) -> Currency:
    """Report whole amounts as ints; stored values come back from SQLite as floats."""
    if isinstance(amount, float) and amount.is_integer():
        return int(amount)
    return amount


def type_bucket_of(item_id: int) -> int:
    """Extract the type bucket from an item identifier."""
    return item_id & TYPE_MASK


def type_range_of(item_type: int) -> tuple[int, int]:
    """
    Get the half-open identifier range covered by a type bucket.

    Args:
        item_type: The type bucket (e.g. 0x1000)

    Returns:
        (low, high) such that low <= item_id < high for every item of the type
    """
    return item_type, item_type + TYPE_RANGE


# =============================================================================
# CATALOGUE KEYS
# =============================================================================


@dataclass(frozen=True)
class NameKey:
    """Addresses the identifier entry of a named item ("{name}_id")."""
    name: str

    @property
    def raw(self) -> str:
        return f"{self.name}_id"


@dataclass(frozen=True)
class IdKey:
    """Addresses the display name entry of an item identifier."""
    item_id: int

    @property
    def raw(self) -> int:
        return self.item_id


@dataclass(frozen=True)
class BucketKey:
    """Addresses the price key entry of a type bucket."""
    bucket: int

    @property
    def raw(self) -> int:
        return self.bucket


CatalogueKey = Union[NameKey, IdKey, BucketKey]


# =============================================================================
# INVENTORY RECORDS
# =============================================================================


@dataclass(frozen=True)
class InventoryRecord:
    """
    One ownership fact: a user, an item, and its value when acquired.

    Fields match the econ_user_inventory table. Records are never updated;
    changing an owned item means removing it and adding a new one.
    """
    entry_id: int
    owner_user_id: int
    item_id: int
    timestamp: int  # Seconds since epoch
    expiration: Optional[int] = None  # Informational only, never enforced
    value: Currency = 0  # Snapshot from the catalogue at insertion time

    @property
    def item_type(self) -> int:
        """Type bucket of this record's item."""
        return type_bucket_of(self.item_id)

    def is_expired(self, at: Optional[float] = None) -> bool:
        """
        Check whether the record's expiration has passed.

        Args:
            at: Time to check against (default: now)

        Returns:
            True if the record has an expiration at or before the given time
        """
        if self.expiration is None:
            return False
        if at is None:
            at = time.time()
        return self.expiration <= at

    @classmethod
    def from_row(cls, row: dict) -> "InventoryRecord":
        """Build a record from a store row keyed by column name."""
        return cls(
            entry_id=row["entry_id"],
            owner_user_id=row["owner_user_id"],
            item_id=row["item_id"],
            timestamp=row["timestamp"],
            expiration=row.get("expiration"),
            value=as_currency(row.get("value") or 0),
        )
