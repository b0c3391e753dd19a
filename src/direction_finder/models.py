# models.py
# Shared data structures and enums used across all modules.

from dataclasses import dataclass
from enum import Enum


# ---------------------------------------------------------------------------
# Coordinate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Coord:
    """Immutable geographic coordinate in decimal degrees."""
    lat: float
    lon: float


# ---------------------------------------------------------------------------
# Catalog entry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CityEntry:
    """A single capital in the catalog."""
    coord: Coord
    name: str

    def to_dict(self) -> dict:
        # Same [longitude, latitude] order the catalog loader reads.
        return {
            "coordinates": [self.coord.lon, self.coord.lat],
            "capital": self.name,
        }


# ---------------------------------------------------------------------------
# Prediction results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PredictionCandidate:
    """Best-matching capital for a bearing query."""
    city: CityEntry
    angular_deviation: float     # degrees, [0, 180]
    distance_km: int             # rounded to whole kilometres

    @property
    def matched(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"{self.city.name}, {self.distance_km} km away"


@dataclass(frozen=True)
class NoMatch:
    """No capital lies within the angle threshold of the queried bearing."""
    query_bearing: float
    angle_threshold_deg: float

    @property
    def matched(self) -> bool:
        return False

    def __str__(self) -> str:
        return "No capital found in that direction."


# ---------------------------------------------------------------------------
# Heading stages
# ---------------------------------------------------------------------------

class Stage(Enum):
    AWAITING_SENSORS   = "awaiting_sensors"
    AWAITING_GESTURE   = "awaiting_gesture"
    AWAITING_APPROVAL  = "awaiting_approval"
    RESOLVED           = "resolved"
