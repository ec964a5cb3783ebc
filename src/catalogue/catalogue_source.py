"""
Catalogue document sources.

A catalogue source hands out the current catalogue document as a plain
mapping. The document maps:

    "{name}_id"   -> item identifier       e.g. "sword_id": "0x1005"
    item id       -> display name          e.g. "0x1005": "Sword of Oak"
    type bucket   -> point value key       e.g. "0x1000": "sword_points"

Keys written as decimal or hex integer strings are normalised to ints so
identifier lookups work with the JSON format.
"""

import hashlib
import json
import logging
import re
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol

logger = logging.getLogger(__name__)

_INTEGER_PATTERN = re.compile(r"^(0[xX][0-9a-fA-F]+|\d+)$")


class CatalogueFormatError(ValueError):
    """Raised when a catalogue file does not hold a JSON object."""


class CatalogueSource(Protocol):
    """Anything that can produce the current catalogue document."""

    def load(self) -> Mapping[Any, Any]:
        ...


def _parse_integer(value: Any) -> Any:
    """Convert decimal/hex integer strings to int, leaving anything else alone."""
    if isinstance(value, str) and _INTEGER_PATTERN.match(value.strip()):
        return int(value.strip(), 0)
    return value


def normalize_document(data: Mapping[Any, Any]) -> dict[Any, Any]:
    """
    Normalise a raw catalogue document.

    Integer-like keys become ints, and identifier values ("*_id" keys) given
    as integer strings become ints.

    Args:
        data: Raw document as parsed from disk

    Returns:
        New dictionary with normalised keys and identifier values
    """
    document: dict[Any, Any] = {}
    for raw_key, value in data.items():
        key = _parse_integer(raw_key)
        if isinstance(key, str) and key.endswith("_id"):
            value = _parse_integer(value)
        if key in document:
            logger.warning(f"Duplicate catalogue key '{raw_key}' - overwriting")
        document[key] = value
    return document


class DictCatalogueSource:
    """
    In-memory catalogue source.

    The mapping is read on every load, so callers that mutate it see the
    change on the next lookup.
    """

    def __init__(self, data: Optional[Mapping[Any, Any]] = None):
        self.data: dict[Any, Any] = dict(data or {})

    def load(self) -> Mapping[Any, Any]:
        return normalize_document(self.data)


class JsonCatalogueSource:
    """
    Catalogue source backed by a JSON file on disk.

    The file is read on every load and the parsed document is cached against
    a SHA-256 hash of its bytes, so any edit is seen on the next lookup no
    matter how coarse the filesystem's timestamps are.

    A file that cannot be parsed (for example one caught half-written) is
    logged and the last good document keeps being served.
    """

    def __init__(self, catalogue_path: Path):
        """
        Initialize the source.

        Args:
            catalogue_path: Path to the catalogue JSON file
        """
        self.catalogue_path = Path(catalogue_path)
        self._document: dict[Any, Any] = {}
        self._file_hash: Optional[str] = None
        self._failed_hash: Optional[str] = None
        self._missing = False

    def load(self) -> Mapping[Any, Any]:
        """Return the current document, re-parsing the file if it changed."""
        try:
            with open(self.catalogue_path, "rb") as f:
                raw = f.read()
        except FileNotFoundError:
            if not self._missing:
                logger.warning(f"Catalogue file not found: {self.catalogue_path}")
                self._missing = True
            self._document = {}
            self._file_hash = None
            return self._document

        self._missing = False

        file_hash = hashlib.sha256(raw).hexdigest()
        if file_hash in (self._file_hash, self._failed_hash):
            return self._document

        try:
            self._document = self._parse(raw)
        except ValueError as e:
            # JSONDecodeError, UnicodeDecodeError and CatalogueFormatError
            logger.error(f"Error loading catalogue {self.catalogue_path}: {e}")
            self._failed_hash = file_hash
            return self._document

        self._file_hash = file_hash
        return self._document

    def _parse(self, raw: bytes) -> dict[Any, Any]:
        data = json.loads(raw.decode("utf-8"))

        if not isinstance(data, dict):
            raise CatalogueFormatError(
                f"Catalogue must be a JSON object: {self.catalogue_path}"
            )

        document = normalize_document(data)
        logger.info(f"Loaded {len(document)} catalogue entries from {self.catalogue_path}")
        return document
