# city_catalog.py
# Immutable, ordered list of capitals the predictor searches.
# Builds from raw records, a JSON file, or a CSV export.
#
# Raw record format:
#   {"coordinates": [longitude, latitude], "capital": "Paris"}
#
# Note the longitude-first pair; it is remapped to Coord(lat, lon) here
# and nowhere else.

import json
import logging
import math
from numbers import Real
from typing import Any, Iterable, Iterator, Mapping, Sequence, Tuple

import pandas as pd

from .models import CityEntry, Coord

logger = logging.getLogger(__name__)


CSV_COLUMNS: Tuple[str, ...] = ("capital", "longitude", "latitude")


class DataFormatError(ValueError):
    """Catalog data is malformed; the whole load is rejected."""


# ---------------------------------------------------------------------------
# Record parsing
# ---------------------------------------------------------------------------

def _parse_coordinate(value: Any, index: int, axis: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise DataFormatError(f"Record {index}: {axis} must be a number, got {value!r}.")
    value = float(value)
    if math.isnan(value):
        raise DataFormatError(f"Record {index}: {axis} is missing.")
    return value


def _parse_record(record: Any, index: int) -> CityEntry:
    """Convert one raw record into a CityEntry or raise DataFormatError."""
    if not isinstance(record, Mapping):
        raise DataFormatError(f"Record {index}: expected a mapping, got {type(record).__name__}.")

    pair = record.get("coordinates")
    if pair is None:
        raise DataFormatError(f"Record {index}: missing 'coordinates'.")
    if isinstance(pair, (str, bytes)) or not isinstance(pair, Sequence) or len(pair) != 2:
        raise DataFormatError(
            f"Record {index}: 'coordinates' must be a [longitude, latitude] pair, got {pair!r}."
        )

    name = record.get("capital")
    if not isinstance(name, str) or not name.strip():
        raise DataFormatError(f"Record {index}: missing capital name.")

    lon = _parse_coordinate(pair[0], index, "longitude")
    lat = _parse_coordinate(pair[1], index, "latitude")
    return CityEntry(coord=Coord(lat=lat, lon=lon), name=name)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class CityCatalog:
    """
    Read-only sequence of CityEntry objects, in the order they were given.

    No sorting and no deduplication: order only matters for breaking exact
    distance ties. Build one with load(), from_json() or from_csv(); to
    change the data, build a new catalog and swap the reference.
    """

    __slots__ = ["_entries"]

    def __init__(self, entries: Iterable[CityEntry] = ()) -> None:
        self._entries: Tuple[CityEntry, ...] = tuple(entries)

    # ------------------------------------------------------------------
    # Loaders
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, records: Iterable[Any]) -> "CityCatalog":
        """
        Build a catalog from raw records.

        Args:
            records: Mappings with 'coordinates' ([lon, lat]) and 'capital'.

        Returns:
            A new CityCatalog.

        Raises:
            DataFormatError: If any record is malformed. Partial loads are
                never returned.
        """
        if isinstance(records, (str, bytes, Mapping)):
            raise DataFormatError("Catalog data must be a sequence of records.")
        catalog = cls(_parse_record(record, i) for i, record in enumerate(records))
        logger.info(f"[CityCatalog] Loaded {len(catalog)} capitals.")
        return catalog

    @classmethod
    def from_json(cls, path: str) -> "CityCatalog":
        """
        Load a catalog from a JSON file holding a list of raw records.

        Raises:
            FileNotFoundError: If path does not exist.
            DataFormatError:   If the file is not valid JSON or a record is malformed.
        """
        logger.info(f"[CityCatalog] Reading {path}")
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise DataFormatError(f"{path}: invalid JSON ({e}).") from e
        return cls.load(data)

    @classmethod
    def from_csv(cls, path: str) -> "CityCatalog":
        """
        Load a catalog from a CSV file with capital, longitude and latitude columns.

        Raises:
            FileNotFoundError: If path does not exist.
            DataFormatError:   If a column is missing or a row is malformed.
        """
        logger.info(f"[CityCatalog] Reading {path}")
        try:
            df = pd.read_csv(path)
        except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
            raise DataFormatError(f"{path}: invalid CSV ({e}).") from e
        missing = [c for c in CSV_COLUMNS if c not in df.columns]
        if missing:
            raise DataFormatError(f"{path}: missing column(s) {missing}.")

        records = []
        for row in df.itertuples(index=False):
            name = row.capital if isinstance(row.capital, str) else None
            records.append({
                "coordinates": [row.longitude, row.latitude],
                "capital": name,
            })
        return cls.load(records)

    # ------------------------------------------------------------------
    # Read-only access
    # ------------------------------------------------------------------

    def entries(self) -> Tuple[CityEntry, ...]:
        return self._entries

    def to_records(self) -> list:
        return [entry.to_dict() for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CityEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"CityCatalog({len(self._entries)} entries)"
