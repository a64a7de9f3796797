"""Store registry for resolving store locations.

This module provides the store-side collaborators of the forecast pipeline:
the ``StoreLocation`` precondition and a file-backed registry that loads
store profiles from a JSON file such as::

    {
      "kopi-senja": {"name": "Kopi Senja", "latitude": -6.2, "longitude": 106.8},
      "warung-baru": {"name": "Warung Baru", "latitude": null, "longitude": null}
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pos_forecast.exceptions import DataQualityError, StoreNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreLocation:
    """Geographic coordinates of a store."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class StoreProfile:
    """Store record as returned by a store reader.

    Attributes:
        store_id: Identifier used to look up transactions.
        name: Display name.
        latitude: Latitude in decimal degrees, or None when not set.
        longitude: Longitude in decimal degrees, or None when not set.
    """

    store_id: str
    name: str = ""
    latitude: float | None = None
    longitude: float | None = None

    @property
    def location(self) -> StoreLocation | None:
        """Return the store location, or None when either coordinate is missing.

        A coordinate of exactly 0 counts as missing, matching how the back
        office stores an unset location.
        """
        if not self.latitude or not self.longitude:
            return None
        return StoreLocation(latitude=float(self.latitude), longitude=float(self.longitude))


def _coerce_coordinate(value: Any, field_name: str, store_id: str) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise DataQualityError(
            f"Store '{store_id}' has an invalid {field_name}: {value!r}"
        ) from e


class StoreRegistry:
    """Registry of store profiles loaded from a JSON file.

    Implements the ``StoreReader`` protocol used by the forecast pipeline.

    Example:
        >>> registry = StoreRegistry.from_json("stores.json")
        >>> registry.get_store("kopi-senja").location
        StoreLocation(latitude=-6.2, longitude=106.8)
    """

    def __init__(self, stores: dict[str, StoreProfile]) -> None:
        self._stores = stores

    @classmethod
    def from_json(cls, path: str | Path) -> StoreRegistry:
        """Load store profiles from a JSON object keyed by store id.

        Raises:
            FileNotFoundError: If the file does not exist.
            DataQualityError: If the file is not a JSON object of store records.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Stores file not found: {path}")

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise DataQualityError(f"Invalid stores JSON in {path}: {e}") from e

        if not isinstance(raw, dict):
            raise DataQualityError(f"Stores JSON must be an object keyed by store id: {path}")

        stores: dict[str, StoreProfile] = {}
        for store_id, record in raw.items():
            if not isinstance(record, dict):
                raise DataQualityError(f"Store '{store_id}' must be a JSON object")
            stores[store_id] = StoreProfile(
                store_id=store_id,
                name=str(record.get("name", store_id)),
                latitude=_coerce_coordinate(record.get("latitude"), "latitude", store_id),
                longitude=_coerce_coordinate(record.get("longitude"), "longitude", store_id),
            )

        logger.debug("Loaded %d stores from %s", len(stores), path)
        return cls(stores)

    def list_stores(self) -> list[str]:
        """List all store ids."""
        return sorted(self._stores.keys())

    def get_store(self, store_id: str) -> StoreProfile:
        """Return the profile for ``store_id``.

        Raises:
            StoreNotFoundError: If the store id is unknown.
        """
        if store_id not in self._stores:
            raise StoreNotFoundError(f"Store '{store_id}' not found in registry")
        return self._stores[store_id]
