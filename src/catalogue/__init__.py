"""
Item catalogue for the economy.

This module provides:
- CatalogueResolver: Resolves item names, types, values and display names
- JsonCatalogueSource / DictCatalogueSource: Supply the catalogue document
- PointValueAppraiser: Converts point value keys into currency
"""

from src.catalogue.appraisal import Appraiser, PointValueAppraiser
from src.catalogue.catalogue_resolver import CatalogueResolver
from src.catalogue.catalogue_source import (
    CatalogueFormatError,
    CatalogueSource,
    DictCatalogueSource,
    JsonCatalogueSource,
)

__all__ = [
    "Appraiser",
    "PointValueAppraiser",
    "CatalogueResolver",
    "CatalogueFormatError",
    "CatalogueSource",
    "DictCatalogueSource",
    "JsonCatalogueSource",
]
