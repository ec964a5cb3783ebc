"""
Inventory ledger for the economy.

Records which users own which catalogue items, and what each item was worth
when it was acquired.

Value resolution is deliberately lenient: an item whose price cannot be
resolved is recorded with value zero rather than rejected, so inventories
stay writable while the catalogue is incomplete. The only hard failure is
an item name that does not exist in the catalogue.
"""

import logging
import time
from typing import Callable, Optional

from src.catalogue.catalogue_resolver import CatalogueResolver
from src.data_models import Currency, InventoryRecord, type_range_of
from src.inventory.inventory_store import InventoryStore

logger = logging.getLogger(__name__)


class InvalidItemNameError(ValueError):
    """Raised when an item name has no entry in the catalogue."""

    def __init__(self, item_name: str):
        self.item_name = item_name
        super().__init__(f"Invalid item name specified: {item_name}")


class InventoryLedger:
    """
    Adds, removes and queries items in user inventories.

    The ledger holds no state of its own. Records live in the store and
    item metadata comes from the resolver on every call.
    """

    def __init__(
        self,
        resolver: CatalogueResolver,
        store: Optional[InventoryStore] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the ledger.

        Args:
            resolver: Catalogue resolver used for item ids and values
            store: Record store (default: in-memory SQLite store)
            clock: Source of the current time in seconds since epoch
        """
        self.resolver = resolver
        self.store = store or InventoryStore()
        self.clock = clock

    # =========================================================================
    # ADDING AND REMOVING
    # =========================================================================

    def add_item(
        self,
        user_id: int,
        item_id: int,
        expiration: Optional[int] = None,
    ) -> bool:
        """
        Add an item to the user's inventory.

        The item's current catalogue value is stored with the record. An id
        the catalogue cannot price is still added, with value zero.

        Args:
            user_id: Owning user
            item_id: Item identifier
            expiration: Optional time when the item expires

        Returns:
            True once the record has been stored
        """
        timestamp = int(self.clock())
        value = self.resolver.value_of_identifier(item_id)

        entry_id = self.store.insert(
            owner_user_id=user_id,
            item_id=item_id,
            timestamp=timestamp,
            expiration=expiration,
            value=value,
        )
        logger.info(f"Added item {item_id:#06x} to user {user_id} as entry {entry_id}")
        return True

    def add_item_by_name(
        self,
        user_id: int,
        item_name: str,
        expiration: Optional[int] = None,
    ) -> bool:
        """
        Add an item to the user's inventory by catalogue name.

        Args:
            user_id: Owning user
            item_name: Name of the item in the catalogue
            expiration: Optional time when the item expires

        Returns:
            True once the record has been stored

        Raises:
            InvalidItemNameError: If the catalogue has no such item
        """
        item_id = self.resolver.item_id_from_name(item_name)
        if item_id is None:
            raise InvalidItemNameError(item_name)

        return self.add_item(user_id, item_id, expiration)

    def remove_item(self, entry_id: int) -> bool:
        """
        Remove the specified entry from inventory.

        Removing an entry that does not exist is not an error.

        Returns:
            Always True
        """
        deleted = self.store.delete(entry_id)
        if deleted:
            logger.info(f"Removed inventory entry {entry_id}")
        else:
            logger.debug(f"Inventory entry {entry_id} not found, nothing removed")
        return True

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_inventory(
        self,
        user_id: int,
        item_type: Optional[int] = None,
    ) -> list[InventoryRecord]:
        """
        Get the user's inventory.

        Args:
            user_id: Owning user
            item_type: Optional type bucket; only items in
                [item_type, item_type + 0x1000) are returned

        Returns:
            Records the user owns
        """
        item_id_range = None if item_type is None else type_range_of(item_type)
        return self.store.select(user_id, item_id_range)

    def get_inventory_of_type(self, user_id: int, item_name: str) -> list[InventoryRecord]:
        """
        Get the user's items that share a type with the named item.

        Raises:
            InvalidItemNameError: If the catalogue has no such item
        """
        item_type = self.resolver.type_bucket_of_name(item_name)
        if item_type is None:
            raise InvalidItemNameError(item_name)
        return self.get_inventory(user_id, item_type)

    def get_expired_items(
        self,
        user_id: int,
        at: Optional[float] = None,
    ) -> list[InventoryRecord]:
        """
        Get the user's items whose expiration has passed.

        Expired items are only reported; they stay in the inventory until
        removed explicitly.
        """
        if at is None:
            at = self.clock()
        return [record for record in self.get_inventory(user_id) if record.is_expired(at)]

    def get_inventory_value(self, user_id: int) -> Currency:
        """Get the total recorded value of the user's inventory (0 if empty)."""
        return self.store.sum_value(user_id)

    def get_users_with_inventory(self) -> set[int]:
        """
        Get every user that has an inventory.

        Intended for batch jobs that iterate over all inventories.
        """
        return self.store.distinct_owners()

    def get_display_name(self, record: InventoryRecord) -> Optional[str]:
        """Get the catalogue display name of a record's item, if any."""
        return self.resolver.display_name_of_identifier(record.item_id)
