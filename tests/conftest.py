"""
Pytest fixtures for the economy inventory test suite.

Provides an in-memory record store, a mutable in-memory catalogue, a
recording appraiser and a ledger wired from them.
"""

import pytest

from src.catalogue.catalogue_resolver import CatalogueResolver
from src.catalogue.catalogue_source import DictCatalogueSource
from src.inventory.inventory_ledger import InventoryLedger
from src.inventory.inventory_store import InventoryStore


# Fixed "now" used by the ledger clock
FIXED_NOW = 1_700_000_000


# =============================================================================
# CATALOGUE FIXTURES
# =============================================================================


class RecordingAppraiser:
    """Appraiser stub that prices keys from a dict and records every call."""

    def __init__(self, prices=None):
        self.prices = dict(prices or {})
        self.calls: list[str] = []

    def __call__(self, point_value_key):
        self.calls.append(point_value_key)
        return self.prices.get(point_value_key, 0)


@pytest.fixture
def catalogue_data():
    """Catalogue document with a sword, a shield and an unpriced trinket."""
    return {
        "sword_id": 0x1005,
        "dagger_id": 0x1010,
        "shield_id": "0x2001",
        "trinket_id": 0x3001,
        0x1005: "Sword of Oak",
        0x2001: "Round Shield",
        0x1000: "priceKeySword",
        0x2000: "priceKeyShield",
    }


@pytest.fixture
def catalogue_source(catalogue_data):
    """Mutable in-memory catalogue source."""
    return DictCatalogueSource(catalogue_data)


@pytest.fixture
def appraiser():
    """Appraiser pricing swords at 50 and shields at 30."""
    return RecordingAppraiser({"priceKeySword": 50, "priceKeyShield": 30})


@pytest.fixture
def resolver(catalogue_source, appraiser):
    """CatalogueResolver over the in-memory catalogue."""
    return CatalogueResolver(catalogue_source, appraiser)


# =============================================================================
# INVENTORY FIXTURES
# =============================================================================


@pytest.fixture
def store():
    """Empty in-memory inventory store."""
    inventory_store = InventoryStore()
    yield inventory_store
    inventory_store.close()


@pytest.fixture
def fixed_now():
    """Time reported by the ledger clock."""
    return FIXED_NOW


@pytest.fixture
def ledger(resolver, store, fixed_now):
    """InventoryLedger with a fixed clock."""
    return InventoryLedger(resolver, store, clock=lambda: fixed_now)
