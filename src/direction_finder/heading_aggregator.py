# heading_aggregator.py
# State machine that merges the live device heading with a one-shot
# gesture heading into a single resolved bearing.
#
#   AWAITING_SENSORS -> AWAITING_GESTURE -> AWAITING_APPROVAL -> RESOLVED
#                              ^                   |                |
#                              +------ deny -------+---- reset -----+
#
# Out-of-order calls are ignored, never raised. Single writer only: the
# owner (an event loop or one task) serializes every call.

import logging
from typing import Callable, List, Optional

from .angle_math import normalize
from .models import Stage

logger = logging.getLogger(__name__)

StageListener = Callable[[Stage, Stage], None]


class HeadingAggregator:
    """
    Combines device and gesture headings.

    The gesture is drawn relative to where the device is facing, so the
    resolved bearing is normalize(device_heading + gesture_heading).

    Usage:
        aggregator = HeadingAggregator()
        aggregator.sensors_ready()

        # Inside the sensor callback:
        aggregator.record_device_heading(heading)

        aggregator.record_gesture(swipe_heading)
        aggregator.approve()
        bearing = aggregator.resolved_bearing
    """

    def __init__(self) -> None:
        self._stage: Stage = Stage.AWAITING_SENSORS
        self._device_heading: float = 0.0
        self._gesture_heading: Optional[float] = None
        self._resolved: Optional[float] = None
        self._listeners: List[StageListener] = []

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def add_listener(self, listener: StageListener) -> None:
        """Call listener(previous, current) after every stage change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: StageListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def stage(self) -> Stage:
        return self._stage

    @property
    def device_heading(self) -> float:
        return self._device_heading

    @property
    def gesture_heading(self) -> Optional[float]:
        return self._gesture_heading

    @property
    def resolved_bearing(self) -> Optional[float]:
        """Final bearing, only available while RESOLVED."""
        if self._stage is Stage.RESOLVED:
            return self._resolved
        return None

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def sensors_ready(self) -> bool:
        """Location and orientation are live. Repeated signals are no-ops."""
        if self._stage is not Stage.AWAITING_SENSORS:
            return False
        self._transition(Stage.AWAITING_GESTURE)
        return True

    def record_device_heading(self, bearing: float) -> None:
        """Store the latest device heading. Valid in any stage."""
        self._device_heading = normalize(bearing)

    def record_gesture(self, bearing: float) -> bool:
        """
        Store the gesture heading and wait for approval.

        Returns:
            True if accepted, False if not currently awaiting a gesture.
        """
        if self._stage is not Stage.AWAITING_GESTURE:
            logger.debug(f"[HeadingAggregator] Gesture ignored in {self._stage.name}.")
            return False
        self._gesture_heading = normalize(bearing)
        self._transition(Stage.AWAITING_APPROVAL)
        return True

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def approve(self) -> Optional[float]:
        """
        Resolve the bearing from the current device and gesture headings.

        Returns:
            The resolved bearing, or None if nothing is awaiting approval.
        """
        if self._stage is not Stage.AWAITING_APPROVAL or self._gesture_heading is None:
            logger.debug(f"[HeadingAggregator] Approve ignored in {self._stage.name}.")
            return None
        self._resolved = normalize(self._device_heading + self._gesture_heading)
        self._transition(Stage.RESOLVED)
        logger.info(
            f"[HeadingAggregator] Resolved {self._resolved:.1f} deg "
            f"(device {self._device_heading:.1f} + gesture {self._gesture_heading:.1f})."
        )
        return self._resolved

    def deny(self) -> bool:
        """Drop the gesture and wait for a new one."""
        if self._stage not in (Stage.AWAITING_APPROVAL, Stage.RESOLVED):
            logger.debug(f"[HeadingAggregator] Deny ignored in {self._stage.name}.")
            return False
        self._gesture_heading = None
        self._resolved = None
        self._transition(Stage.AWAITING_GESTURE)
        return True

    def reset(self) -> bool:
        """Start over after a result ("report more")."""
        return self.deny()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _transition(self, stage: Stage) -> None:
        previous, self._stage = self._stage, stage
        logger.debug(f"[HeadingAggregator] {previous.name} -> {stage.name}")
        for listener in list(self._listeners):
            listener(previous, stage)
