# finder_config.py
# All tuneable constants in one place.
# Pass a FinderConfig instance to every module that needs settings.

import os
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

ANGLE_THRESHOLD_DEG: float = 20.0     # max deviation between query and city bearing
MIN_SWIPE_LENGTH_PX: float = 100.0    # shorter swipes are not directional gestures
SENSOR_FREQUENCY_HZ: int = 30         # orientation sensor polling rate

PACKAGE_DATA_DIR: str = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")


# ---------------------------------------------------------------------------
# Main config
# ---------------------------------------------------------------------------

@dataclass
class FinderConfig:
    # Prediction
    angle_threshold_deg: float = ANGLE_THRESHOLD_DEG

    # Gesture / sensor input
    min_swipe_length_px: float = MIN_SWIPE_LENGTH_PX
    sensor_frequency_hz: int = SENSOR_FREQUENCY_HZ

    # Catalog
    catalog_dir: str = PACKAGE_DATA_DIR
    catalog_filename: str = "capitals.json"

    @property
    def catalog_filepath(self) -> str:
        return os.path.join(self.catalog_dir, self.catalog_filename)
