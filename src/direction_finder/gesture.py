# gesture.py
# Turns a press/release pair on the screen into a directional swipe.
# Swipes no longer than the configured minimum are not gestures and
# never reach the heading aggregator.

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .angle_math import bearing_from_vector
from .finder_config import MIN_SWIPE_LENGTH_PX


Point = Tuple[float, float]


@dataclass(frozen=True)
class Swipe:
    """A completed screen gesture in pixel coordinates (+y downward)."""
    start: Point
    end: Point

    @property
    def dx(self) -> float:
        return self.end[0] - self.start[0]

    @property
    def dy(self) -> float:
        return self.end[1] - self.start[1]

    @property
    def length(self) -> float:
        return math.hypot(self.dx, self.dy)

    @property
    def heading(self) -> float:
        """Bearing relative to the top of the screen."""
        return bearing_from_vector(self.dx, self.dy)


class SwipeTracker:
    """
    Pairs start() and end() calls from touch or mouse events.

    Args:
        min_length_px: A swipe must be strictly longer than this.
    """

    def __init__(self, min_length_px: float = MIN_SWIPE_LENGTH_PX) -> None:
        self.min_length_px = min_length_px
        self._start: Optional[Point] = None

    @property
    def in_progress(self) -> bool:
        return self._start is not None

    def start(self, x: float, y: float) -> None:
        self._start = (x, y)

    def end(self, x: float, y: float) -> Optional[Swipe]:
        """
        Finish the gesture.

        Returns:
            The Swipe if it was long enough, otherwise None.
        """
        if self._start is None:
            return None
        swipe = Swipe(start=self._start, end=(x, y))
        self._start = None
        if swipe.length > self.min_length_px:
            return swipe
        return None
