# compass.py
# Adapter between an absolute-orientation sensor and the heading aggregator.
# The sensor handle itself stays with the caller; this only converts and
# forwards each reading.

import logging
from typing import Optional, Sequence

from .angle_math import bearing_from_orientation
from .heading_aggregator import HeadingAggregator

logger = logging.getLogger(__name__)


class CompassFeed:
    """
    Forwards quaternion readings to a HeadingAggregator as compass headings.

    Readings are fire-and-forget: the most recent one wins and no smoothing
    is applied.

    Args:
        aggregator: Destination for the converted headings.
    """

    def __init__(self, aggregator: HeadingAggregator) -> None:
        self._aggregator = aggregator
        self._readings: int = 0
        self._last_heading: Optional[float] = None

    @property
    def readings(self) -> int:
        return self._readings

    @property
    def last_heading(self) -> Optional[float]:
        return self._last_heading

    def on_reading(self, quaternion: Sequence[float]) -> float:
        """
        Handle one sensor reading.

        Args:
            quaternion: [x, y, z, w] in the device reference frame.

        Returns:
            The heading that was recorded.
        """
        heading = bearing_from_orientation(quaternion)
        self._aggregator.record_device_heading(heading)
        self._readings += 1
        self._last_heading = heading
        if self._readings == 1:
            logger.info(f"[Compass] First reading: {heading:.1f} deg")
        return heading
