"""
Item appraisal.

The ledger never prices items itself. It resolves a type bucket to a point
value key through the catalogue and hands that key to an appraiser, any
callable taking the key and returning a currency amount.
"""

import json
import logging
from pathlib import Path
from typing import Callable, Mapping, Optional

from src.data_models import Currency

logger = logging.getLogger(__name__)

Appraiser = Callable[[str], Currency]


class PointValueAppraiser:
    """
    Appraiser backed by a table of point values.

    Each point value key is worth a number of points; points convert to
    currency at a fixed exchange rate.
    """

    def __init__(
        self,
        point_values: Optional[Mapping[str, Currency]] = None,
        exchange_rate: Currency = 1,
    ):
        """
        Initialize the appraiser.

        Args:
            point_values: point value key -> number of points
            exchange_rate: Currency per point
        """
        self.point_values: dict[str, Currency] = dict(point_values or {})
        self.exchange_rate = exchange_rate

    @classmethod
    def from_json(cls, file_path: Path) -> "PointValueAppraiser":
        """
        Load an appraiser from a JSON file.

        Expected format:
            {"exchange_rate": 1, "point_values": {"sword_points": 50}}

        A missing file gives an appraiser that values everything at zero.
        """
        file_path = Path(file_path)
        if not file_path.exists():
            logger.warning(f"Point value table not found: {file_path}")
            return cls()

        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        appraiser = cls(
            point_values=data.get("point_values", {}),
            exchange_rate=data.get("exchange_rate", 1),
        )
        logger.info(f"Loaded {len(appraiser.point_values)} point values from {file_path}")
        return appraiser

    def __call__(self, point_value_key: str) -> Currency:
        points = self.point_values.get(point_value_key)
        if points is None:
            logger.warning(f"No point value for key '{point_value_key}'")
            return 0
        return points * self.exchange_rate
