"""
Catalogue resolution and item valuation.

Maps item names to identifiers, identifiers to type buckets, and type
buckets to currency values through the appraiser. Every lookup goes through
the catalogue source, so the resolver never holds a stale document.

Lookups that can miss return None. The only place a miss becomes a default
is value_of_bucket, where an unpriced bucket is worth zero.
"""

import logging
from typing import Any, Optional

from src.catalogue.appraisal import Appraiser
from src.catalogue.catalogue_source import CatalogueSource
from src.data_models import (
    BucketKey,
    Currency,
    IdKey,
    NameKey,
    type_bucket_of,
)

logger = logging.getLogger(__name__)


class CatalogueResolver:
    """
    Resolves catalogue entries for items.

    Three typed lookups address the catalogue document:
    - NameKey   -> item identifier
    - IdKey     -> display name
    - BucketKey -> point value key
    """

    def __init__(self, source: CatalogueSource, appraiser: Appraiser):
        """
        Initialize the resolver.

        Args:
            source: Provides the current catalogue document
            appraiser: Converts a point value key into a currency amount
        """
        self.source = source
        self.appraiser = appraiser

    # =========================================================================
    # TYPED LOOKUPS
    # =========================================================================

    def get_value(self, key: Any) -> Optional[Any]:
        """Get a raw catalogue value, or None if the key is absent."""
        return self.source.load().get(key)

    def lookup_item_id(self, key: NameKey) -> Optional[int]:
        value = self.get_value(key.raw)
        if value is None:
            return None
        if not isinstance(value, int) or isinstance(value, bool):
            logger.warning(f"Catalogue entry '{key.raw}' is not an item id: {value!r}")
            return None
        return value

    def lookup_display_name(self, key: IdKey) -> Optional[str]:
        value = self.get_value(key.raw)
        return None if value is None else str(value)

    def lookup_price_key(self, key: BucketKey) -> Optional[str]:
        value = self.get_value(key.raw)
        return None if value is None else str(value)

    # =========================================================================
    # IDENTIFIERS AND TYPES
    # =========================================================================

    def item_id_from_name(self, item_name: str) -> Optional[int]:
        """
        Get an item's identifier from its catalogue name.

        Args:
            item_name: Item name as used in the catalogue (without "_id")

        Returns:
            Item identifier, or None if the catalogue has no such item
        """
        return self.lookup_item_id(NameKey(item_name))

    @staticmethod
    def type_bucket_of(item_id: int) -> int:
        """Get the type bucket of an item identifier."""
        return type_bucket_of(item_id)

    def type_bucket_of_name(self, item_name: str) -> Optional[int]:
        """Get the type bucket of a named item, or None if the name is unknown."""
        item_id = self.item_id_from_name(item_name)
        if item_id is None:
            return None
        return type_bucket_of(item_id)

    # =========================================================================
    # VALUATION
    # =========================================================================

    def price_key_for_bucket(self, item_type: int) -> Optional[str]:
        """Get the point value key configured for a type bucket."""
        return self.lookup_price_key(BucketKey(item_type))

    def value_of_bucket(self, item_type: int) -> Currency:
        """
        Get the current value of a type of item.

        Unpriced buckets are worth zero and the appraiser is not consulted.
        Appraisals that come back empty or negative are also recorded as zero
        so stored values never go below zero.

        Args:
            item_type: Type bucket

        Returns:
            Currency value, zero if it cannot be resolved
        """
        point_value_key = self.price_key_for_bucket(item_type)
        if point_value_key is None:
            logger.debug(f"No point value key for item type {item_type:#06x}")
            return 0

        value = self.appraiser(point_value_key)
        if value is None:
            logger.warning(f"Appraiser returned no value for '{point_value_key}'")
            return 0
        if value < 0:
            logger.warning(
                f"Appraiser returned negative value {value} for '{point_value_key}'"
            )
            return 0
        return value

    def value_of_identifier(self, item_id: int) -> Currency:
        """Get an item's current value from its identifier."""
        return self.value_of_bucket(type_bucket_of(item_id))

    def value_of_name(self, item_name: str) -> Currency:
        """Get an item's current value from its name; unknown names are worth zero."""
        item_type = self.type_bucket_of_name(item_name)
        if item_type is None:
            logger.debug(f"Unknown item name '{item_name}' valued at zero")
            return 0
        return self.value_of_bucket(item_type)

    # =========================================================================
    # DISPLAY NAMES
    # =========================================================================

    def display_name_of_identifier(self, item_id: int) -> Optional[str]:
        """Get an item's display name from its identifier."""
        return self.lookup_display_name(IdKey(item_id))

    def display_name_of_name(self, item_name: str) -> Optional[str]:
        """Get an item's display name from its catalogue name."""
        item_id = self.item_id_from_name(item_name)
        if item_id is None:
            return None
        return self.display_name_of_identifier(item_id)
