"""
User inventories for the economy.

This module provides:
- InventoryLedger: Adds, removes and values items owned by users
- InventoryStore: SQLite storage for inventory records
"""

from src.inventory.inventory_ledger import InvalidItemNameError, InventoryLedger
from src.inventory.inventory_store import InventoryStore

__all__ = ["InvalidItemNameError", "InventoryLedger", "InventoryStore"]
