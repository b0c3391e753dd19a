# finder.py
# Public entry point for the direction finder.
# Owns no math of its own; delegates everything to specialist modules.

import json
import logging
from typing import List, Optional, Sequence

from .city_catalog import CityCatalog
from .compass import CompassFeed
from .finder_config import FinderConfig
from .gesture import Swipe, SwipeTracker
from .heading_aggregator import HeadingAggregator
from .models import Coord, PredictionCandidate, Stage
from .predictor import DirectionPredictor, PredictionResult

logger = logging.getLogger(__name__)


class DirectionFinder:
    """
    High-level facade the UI drives.

    Bearings follow true_bearing(): a resolved bearing of 0 looks along
    increasing longitude, so with the packaged real-world catalog "straight
    ahead" at 0 deg device heading means geographic east.

    Typical lifecycle:
        finder = DirectionFinder()
        finder.sensors_ready()

        # Sensor loop:
        finder.update_orientation([x, y, z, w])

        # Gesture:
        finder.swipe_start(200, 600)
        finder.swipe_end(200, 300)

        result = finder.approve(Coord(48.85, 2.35))
        print(finder.describe(result))

    Args:
        catalog: Optional CityCatalog; loaded from config.catalog_filepath if omitted.
        config:  Optional FinderConfig; defaults to FinderConfig().
    """

    def __init__(
        self,
        catalog: Optional[CityCatalog] = None,
        config: Optional[FinderConfig] = None,
    ) -> None:
        self.config = config or FinderConfig()

        if catalog is None:
            catalog = CityCatalog.from_json(self.config.catalog_filepath)

        # Specialist modules
        self._predictor  = DirectionPredictor(catalog, self.config)
        self._aggregator = HeadingAggregator()
        self._compass    = CompassFeed(self._aggregator)
        self._swipes     = SwipeTracker(self.config.min_swipe_length_px)

    # ------------------------------------------------------------------
    # Sensor input
    # ------------------------------------------------------------------

    def sensors_ready(self) -> None:
        """Location and orientation permissions granted and streams live."""
        if self._aggregator.sensors_ready():
            logger.info("Sensors ready. Waiting for a gesture.")

    def update_orientation(self, quaternion: Sequence[float]) -> float:
        """Feed one orientation reading. Returns the device heading."""
        return self._compass.on_reading(quaternion)

    # ------------------------------------------------------------------
    # Gesture input
    # ------------------------------------------------------------------

    def swipe_start(self, x: float, y: float) -> None:
        self._swipes.start(x, y)

    def swipe_end(self, x: float, y: float) -> Optional[Swipe]:
        """
        Finish a swipe and hand its heading to the aggregator.

        Returns:
            The accepted Swipe, or None if it was too short or no gesture
            was expected.
        """
        swipe = self._swipes.end(x, y)
        if swipe is None:
            logger.debug("Swipe too short, ignored.")
            return None
        if not self._aggregator.record_gesture(swipe.heading):
            return None
        logger.info(f"Gesture recorded: {swipe.heading:.1f} deg relative to device.")
        return swipe

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def approve(self, position: Coord) -> Optional[PredictionResult]:
        """
        Resolve the bearing and look for a capital along it.

        Args:
            position: Current user location.

        Returns:
            PredictionCandidate or NoMatch; None if there was nothing to approve.
        """
        bearing = self._aggregator.approve()
        if bearing is None:
            return None
        result = self._predictor.predict(position, bearing)
        if not result.matched:
            logger.warning(f"No capital within {self.config.angle_threshold_deg} deg of {bearing:.1f}.")
        return result

    def deny(self) -> None:
        """Discard the current gesture or result and draw again."""
        self._aggregator.deny()

    def alternatives(self, position: Coord) -> List[PredictionCandidate]:
        """All candidates along the resolved bearing, best first."""
        bearing = self._aggregator.resolved_bearing
        if bearing is None:
            return []
        return self._predictor.rank(position, bearing)

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def reload_catalog(self, path: Optional[str] = None) -> int:
        """
        Load a new catalog and publish it. The old one stays in place if
        loading fails.

        Returns:
            Number of capitals in the new catalog.
        """
        path = path or self.config.catalog_filepath
        if path.lower().endswith(".csv"):
            catalog = CityCatalog.from_csv(path)
        else:
            catalog = CityCatalog.from_json(path)
        self._predictor.replace_catalog(catalog)
        return len(catalog)

    def export_catalog(self, path: str) -> int:
        """
        Write the active catalog as JSON in the same record format it loads from.

        Returns:
            Number of capitals written.
        """
        records = self.catalog.to_records()
        with open(path, "w", encoding="utf-8") as f:
            json.dump(records, f, ensure_ascii=False, indent=2)
        logger.info(f"Catalog written to {path} ({len(records)} capitals).")
        return len(records)

    # ------------------------------------------------------------------
    # Presentation helpers
    # ------------------------------------------------------------------

    @staticmethod
    def describe(result: Optional[PredictionResult]) -> str:
        if result is None:
            return "Draw a direction first."
        return str(result)

    # ------------------------------------------------------------------
    # Convenience read-only properties
    # ------------------------------------------------------------------

    @property
    def stage(self) -> Stage:
        return self._aggregator.stage

    @property
    def aggregator(self) -> HeadingAggregator:
        return self._aggregator

    @property
    def catalog(self) -> CityCatalog:
        return self._predictor.catalog
