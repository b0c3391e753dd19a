# main.py
# Entry point: simulates a sensor stream and one swipe feeding DirectionFinder.
# In production, replace the simulated readings with the real orientation
# sensor and touch events of the UI.
#
# Bearings use the catalog's flat lat/lon frame: 0 deg is increasing
# longitude (geographic east for the packaged capitals), 90 deg is
# increasing latitude (north).

import argparse
import logging
import math
import time
from typing import List

from .finder import DirectionFinder
from .finder_config import FinderConfig
from .models import Coord


def _yaw_quaternion(degrees: float) -> List[float]:
    """Quaternion [x, y, z, w] for a pure rotation about the z axis."""
    half = math.radians(degrees) / 2
    return [0.0, 0.0, math.sin(half), math.cos(half)]


def main() -> None:
    parser = argparse.ArgumentParser(description="Name the capital along a drawn direction.")
    parser.add_argument("--lat", type=float, default=47.0707, help="User latitude")
    parser.add_argument("--lon", type=float, default=15.4395, help="User longitude")
    parser.add_argument("--device-heading", type=float, default=0.0, help="Simulated device heading (deg)")
    parser.add_argument("--catalog", default=None, help="Catalog file (.json or .csv)")
    parser.add_argument("--threshold", type=float, default=None, help="Angle threshold (deg)")
    parser.add_argument("--dump-catalog", default=None, help="Write the active catalog to this JSON file")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    # ------------------------------------------------------------------
    # Logging setup: configure once here, all modules inherit
    # ------------------------------------------------------------------
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    config = FinderConfig()
    if args.threshold is not None:
        config.angle_threshold_deg = args.threshold

    finder = DirectionFinder(config=config)
    if args.catalog:
        finder.reload_catalog(args.catalog)
    if args.dump_catalog:
        finder.export_catalog(args.dump_catalog)

    position = Coord(args.lat, args.lon)

    # 1. Permissions granted, streams live
    finder.sensors_ready()

    # 2. A few jittery sensor readings at the sensor rate; the last one wins
    for jitter in (-2.0, 1.5, 0.0):
        finder.update_orientation(_yaw_quaternion(args.device_heading + jitter))
        time.sleep(1.0 / config.sensor_frequency_hz)

    # 3. Swipe straight up the screen
    finder.swipe_start(200, 600)
    if finder.swipe_end(200, 300) is None:
        print("[Main] Swipe was not accepted.")
        return

    # 4. Approve and predict
    result = finder.approve(position)
    print(f"[Main] {finder.describe(result)}")

    for candidate in finder.alternatives(position)[1:]:
        print(f"    also: {candidate} ({candidate.angular_deviation:.1f} deg off)")


if __name__ == "__main__":
    main()
