"""Point the device, draw a direction, and name the capital that lies along it."""

from .angle_math import angular_difference, bearing_from_orientation, bearing_from_vector, normalize
from .city_catalog import CityCatalog, DataFormatError
from .finder import DirectionFinder
from .finder_config import FinderConfig
from .geo_utils import haversine_km, true_bearing
from .heading_aggregator import HeadingAggregator
from .models import CityEntry, Coord, NoMatch, PredictionCandidate, Stage
from .predictor import DirectionPredictor, predict, rank_candidates

__all__ = [
    "CityCatalog",
    "CityEntry",
    "Coord",
    "DataFormatError",
    "DirectionFinder",
    "DirectionPredictor",
    "FinderConfig",
    "HeadingAggregator",
    "NoMatch",
    "PredictionCandidate",
    "Stage",
    "angular_difference",
    "bearing_from_orientation",
    "bearing_from_vector",
    "haversine_km",
    "normalize",
    "predict",
    "rank_candidates",
    "true_bearing",
]
