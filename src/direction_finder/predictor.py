# predictor.py
# Finds the capital lying along a compass bearing from the user.
#
# Angular alignment is the primary key: a far but exactly aligned capital
# beats a near one that is off-axis. Distance only breaks ties among the
# capitals sharing the smallest deviation.
#
# Usage:
#   predictor = DirectionPredictor(CityCatalog.from_json("capitals.json"))
#   result = predictor.predict(Coord(48.85, 2.35), 90.0)
#   if result.matched:
#       print(result.city.name, result.distance_km)

import logging
import math
from typing import List, Optional, Tuple, Union

from .angle_math import angular_difference, normalize
from .city_catalog import CityCatalog
from .finder_config import ANGLE_THRESHOLD_DEG, FinderConfig
from .geo_utils import haversine_km, true_bearing
from .models import CityEntry, Coord, NoMatch, PredictionCandidate

logger = logging.getLogger(__name__)

PredictionResult = Union[PredictionCandidate, NoMatch]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _round_km(distance_km: float) -> int:
    """Round half up to whole kilometres."""
    return int(math.floor(distance_km + 0.5))


def _aligned(
    user_location: Coord,
    query_bearing: float,
    catalog: CityCatalog,
    angle_threshold_deg: float,
) -> List[Tuple[CityEntry, float]]:
    """Catalog entries whose bearing deviates less than the threshold, in catalog order."""
    kept: List[Tuple[CityEntry, float]] = []
    for city in catalog.entries():
        deviation = angular_difference(true_bearing(user_location, city.coord), query_bearing)
        if deviation < angle_threshold_deg:
            kept.append((city, deviation))
    return kept


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def predict(
    user_location: Coord,
    query_bearing: float,
    catalog: CityCatalog,
    angle_threshold_deg: float = ANGLE_THRESHOLD_DEG,
) -> PredictionResult:
    """
    Best capital along query_bearing as seen from user_location.

    Args:
        user_location:       Where the user stands.
        query_bearing:       Bearing in degrees, in the frame of true_bearing()
                             (0 = increasing longitude, 90 = increasing latitude).
        catalog:             Capitals to search.
        angle_threshold_deg: Deviations at or above this are discarded.

    Returns:
        PredictionCandidate with the distance rounded to whole km, or
        NoMatch when nothing lies within the threshold.
    """
    kept = _aligned(user_location, query_bearing, catalog, angle_threshold_deg)
    if not kept:
        logger.info(
            f"[Predictor] No capital within {angle_threshold_deg} deg of bearing {query_bearing:.1f}."
        )
        return NoMatch(query_bearing=normalize(query_bearing), angle_threshold_deg=angle_threshold_deg)

    best_deviation = min(deviation for _, deviation in kept)
    finalists = [city for city, deviation in kept if deviation == best_deviation]

    # Distances only for finalists; strict < keeps the first on exact ties.
    winner: Optional[CityEntry] = None
    winner_km = float("inf")
    for city in finalists:
        d = haversine_km(user_location, city.coord)
        if d < winner_km:
            winner, winner_km = city, d

    result = PredictionCandidate(
        city=winner,
        angular_deviation=best_deviation,
        distance_km=_round_km(winner_km),
    )
    logger.info(f"[Predictor] Bearing {query_bearing:.1f} -> {result} ({len(finalists)} finalist(s)).")
    return result


def rank_candidates(
    user_location: Coord,
    query_bearing: float,
    catalog: CityCatalog,
    angle_threshold_deg: float = ANGLE_THRESHOLD_DEG,
) -> List[PredictionCandidate]:
    """
    Every capital within the threshold, best first.

    Sorted by deviation, then distance, then catalog order, so the first
    element always agrees with predict().
    """
    ranked = []
    for order, (city, deviation) in enumerate(
        _aligned(user_location, query_bearing, catalog, angle_threshold_deg)
    ):
        d = haversine_km(user_location, city.coord)
        ranked.append((deviation, d, order, city))
    ranked.sort(key=lambda r: r[:3])
    return [
        PredictionCandidate(city=city, angular_deviation=deviation, distance_km=_round_km(d))
        for deviation, d, _, city in ranked
    ]


class DirectionPredictor:
    """
    Owns a catalog and answers bearing queries against it.

    Stateless apart from the catalog reference. replace_catalog() swaps the
    whole snapshot at once, so a query always sees a single consistent catalog.

    Args:
        catalog: CityCatalog to search.
        config:  Optional FinderConfig; defaults to FinderConfig().
    """

    def __init__(self, catalog: CityCatalog, config: Optional[FinderConfig] = None) -> None:
        self.config = config or FinderConfig()
        self._catalog = catalog

    @property
    def catalog(self) -> CityCatalog:
        return self._catalog

    def replace_catalog(self, catalog: CityCatalog) -> None:
        """Publish a new catalog snapshot."""
        self._catalog = catalog
        logger.info(f"[Predictor] Catalog replaced ({len(catalog)} capitals).")

    def predict(self, user_location: Coord, query_bearing: float) -> PredictionResult:
        return predict(user_location, query_bearing, self._catalog, self.config.angle_threshold_deg)

    def rank(self, user_location: Coord, query_bearing: float) -> List[PredictionCandidate]:
        return rank_candidates(user_location, query_bearing, self._catalog, self.config.angle_threshold_deg)
