import json
import math

import pytest

from direction_finder.city_catalog import CityCatalog, DataFormatError
from direction_finder.finder import DirectionFinder
from direction_finder.finder_config import FinderConfig
from direction_finder.models import Coord, NoMatch, Stage


USER = Coord(lat=-73.984, lon=40.76)
CITIES = [
    {"capital": "north", "coordinates": [40.788601, -73.984]},
    {"capital": "east", "coordinates": [40.759937, -73.9458984]},
    {"capital": "south", "coordinates": [40.7311399, -73.984]},
    {"capital": "west", "coordinates": [40.7599937, -74.0221016]},
]


def _yaw(degrees):
    half = math.radians(degrees) / 2
    return [0.0, 0.0, math.sin(half), math.cos(half)]


@pytest.fixture
def finder():
    f = DirectionFinder(catalog=CityCatalog.load(CITIES))
    f.sensors_ready()
    return f


def _swipe(finder, start, end):
    finder.swipe_start(*start)
    return finder.swipe_end(*end)


def test_swipe_up_with_device_facing_north(finder):
    finder.update_orientation(_yaw(0))
    assert _swipe(finder, (200, 600), (200, 300)) is not None
    assert finder.stage is Stage.AWAITING_APPROVAL

    result = finder.approve(USER)

    assert result.city.name == "north"
    assert finder.stage is Stage.RESOLVED


def test_gesture_is_relative_to_device_heading(finder):
    finder.update_orientation(_yaw(90))
    _swipe(finder, (200, 600), (200, 300))

    assert finder.approve(USER).city.name == "east"


def test_swipe_left_with_device_facing_south(finder):
    finder.update_orientation(_yaw(180))
    _swipe(finder, (300, 300), (100, 300))

    # 180 + 270 wraps to 90
    assert finder.approve(USER).city.name == "east"


def test_short_swipe_keeps_waiting(finder):
    assert _swipe(finder, (200, 300), (200, 250)) is None
    assert finder.stage is Stage.AWAITING_GESTURE
    assert finder.approve(USER) is None


def test_swipe_before_sensors_ready_is_ignored():
    f = DirectionFinder(catalog=CityCatalog.load(CITIES))

    assert _swipe(f, (200, 600), (200, 300)) is None
    assert f.stage is Stage.AWAITING_SENSORS


def test_deny_then_redraw(finder):
    _swipe(finder, (200, 600), (200, 300))
    finder.deny()

    assert finder.approve(USER) is None
    _swipe(finder, (100, 300), (400, 300))
    assert finder.approve(USER).city.name == "east"


def test_no_match_is_described(finder):
    finder.update_orientation(_yaw(45))
    _swipe(finder, (200, 600), (200, 300))

    result = finder.approve(USER)

    assert isinstance(result, NoMatch)
    assert finder.describe(result) == "No capital found in that direction."


def test_describe_match_and_nothing():
    catalog = CityCatalog.load([{"capital": "near", "coordinates": [0.01, 0.0]}])
    f = DirectionFinder(catalog=catalog)
    f.sensors_ready()
    _swipe(f, (200, 600), (200, 300))

    assert f.describe(f.approve(Coord(0.0, 0.0))) == "near, 1 km away"
    assert f.describe(None) == "Draw a direction first."


def test_alternatives_only_after_resolution(finder):
    assert finder.alternatives(USER) == []
    _swipe(finder, (200, 600), (200, 300))
    finder.approve(USER)

    assert [c.city.name for c in finder.alternatives(USER)] == ["north"]


def test_default_catalog_is_packaged():
    f = DirectionFinder()
    assert len(f.catalog) == 30
    assert f.catalog.entries()[0].name == "Paris"


def test_reload_catalog(finder, tmp_path):
    path = tmp_path / "capitals.json"
    path.write_text(json.dumps([{"capital": "only", "coordinates": [40.8, -73.984]}]), encoding="utf-8")

    assert finder.reload_catalog(str(path)) == 1
    assert [c.name for c in finder.catalog] == ["only"]


def test_reload_csv_catalog(finder, tmp_path):
    path = tmp_path / "capitals.csv"
    path.write_text("capital,longitude,latitude\nonly,40.8,-73.984\n", encoding="utf-8")

    assert finder.reload_catalog(str(path)) == 1


def test_failed_reload_keeps_previous_catalog(finder, tmp_path):
    path = tmp_path / "capitals.json"
    path.write_text(json.dumps([{"capital": "broken"}]), encoding="utf-8")

    with pytest.raises(DataFormatError):
        finder.reload_catalog(str(path))
    assert len(finder.catalog) == 4


def test_config_threshold_and_swipe_length():
    config = FinderConfig(angle_threshold_deg=0.01, min_swipe_length_px=400)
    f = DirectionFinder(catalog=CityCatalog.load(CITIES), config=config)
    f.sensors_ready()

    assert _swipe(f, (200, 600), (200, 300)) is None
    assert _swipe(f, (200, 800), (200, 300)) is not None
    # east is ~0.095 deg off axis
    f.deny()
    _swipe(f, (0, 300), (500, 300))
    assert not f.approve(USER).matched


# ---------------------------------------------------------------------------
# Packaged catalog: bearings in the flat lat/lon frame, 0 = increasing longitude
# ---------------------------------------------------------------------------

GRAZ = Coord(47.0707, 15.4395)


def test_packaged_catalog_zero_looks_along_longitude():
    f = DirectionFinder()
    f.sensors_ready()
    _swipe(f, (200, 600), (200, 300))

    result = f.approve(GRAZ)

    # Budapest lies to the geographic east of Graz
    assert f.describe(result) == "Budapest, 276 km away"


def test_packaged_catalog_ninety_looks_along_latitude():
    f = DirectionFinder()
    f.sensors_ready()
    _swipe(f, (100, 300), (400, 300))

    assert f.describe(f.approve(GRAZ)) == "Stockholm, 1374 km away"


def test_export_catalog_round_trips(finder, tmp_path):
    path = tmp_path / "dump.json"

    assert finder.export_catalog(str(path)) == 4

    assert json.loads(path.read_text(encoding="utf-8")) == CITIES
    assert CityCatalog.from_json(str(path)).entries() == finder.catalog.entries()
