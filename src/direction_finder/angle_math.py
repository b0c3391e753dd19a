# angle_math.py
# Pure angle helpers: normalization, screen vectors and sensor quaternions
# to compass bearings, and bearing comparison.
# No side effects, no imports from other project modules.

import math
from typing import Sequence, Union

import numpy as np


FULL_TURN = 360.0


def normalize(degrees: float) -> float:
    """
    Wrap an angle into the bearing range [0, 360).

    Works for any finite float, including large negative values
    (normalize(-450) == 270).

    Args:
        degrees: Angle in degrees.

    Returns:
        Equivalent bearing in degrees.
    """
    wrapped = float(degrees) % FULL_TURN
    # A tiny negative input rounds up to exactly 360.0
    if wrapped >= FULL_TURN:
        return 0.0
    return wrapped


def bearing_from_vector(dx: float, dy: float) -> float:
    """
    Compass bearing of an on-screen delta vector.

    Screen coordinates grow downward, so straight up is 0, right is 90,
    down is 180 and left is 270. No domain inversion is applied here.

    Args:
        dx: Horizontal change (positive to the right).
        dy: Vertical change (positive downward).

    Returns:
        Bearing in degrees [0, 360).
    """
    return normalize(math.degrees(math.atan2(dy, dx)) + 90.0)


def bearing_from_orientation(quaternion: Union[Sequence[float], np.ndarray]) -> float:
    """
    Azimuth of a device absolute-orientation quaternion.

    The quaternion is [x, y, z, w] in the sensor's device reference frame.
    Readings are used as-is; smoothing is up to the caller.

    Args:
        quaternion: Four components [x, y, z, w].

    Returns:
        Bearing in degrees [0, 360).

    Raises:
        ValueError: If the input does not have exactly four components.
    """
    q = np.asarray(quaternion, dtype=float).ravel()
    if q.shape != (4,):
        raise ValueError(f"Expected quaternion [x, y, z, w], got {q.size} components.")
    x, y, z, w = q
    azimuth = np.arctan2(2 * (x * y + z * w), 1 - 2 * (y * y + z * z))
    return normalize(float(np.degrees(azimuth)))


def angular_difference(a: float, b: float) -> float:
    """
    Minimal unsigned separation between two bearings, in [0, 180].

    Use this whenever two bearings are compared: a plain abs(a - b) is
    wrong across the 0/360 seam (10 vs 350 is 20 degrees apart, not 340).
    """
    diff = abs(normalize(a) - normalize(b))
    return min(diff, FULL_TURN - diff)
