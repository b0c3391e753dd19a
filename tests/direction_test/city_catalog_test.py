import json

import pytest

from direction_finder.city_catalog import CityCatalog, DataFormatError
from direction_finder.models import CityEntry, Coord


def test_load_remaps_longitude_first_pair():
    catalog = CityCatalog.load([{"coordinates": [2.3522, 48.8566], "capital": "Paris"}])

    (paris,) = catalog.entries()
    assert paris == CityEntry(coord=Coord(lat=48.8566, lon=2.3522), name="Paris")


def test_load_preserves_order_and_duplicates():
    records = [
        {"coordinates": [1, 2], "capital": "B"},
        {"coordinates": [3, 4], "capital": "A"},
        {"coordinates": [1, 2], "capital": "B"},
    ]
    catalog = CityCatalog.load(records)

    assert [c.name for c in catalog] == ["B", "A", "B"]
    assert len(catalog) == 3


def test_entries_are_read_only():
    catalog = CityCatalog.load([{"coordinates": [1, 2], "capital": "X"}])
    assert isinstance(catalog.entries(), tuple)
    with pytest.raises(AttributeError):
        catalog.entries()[0].name = "Y"


def test_to_records_round_trips_input_format():
    records = [{"coordinates": [2.3522, 48.8566], "capital": "Paris"}]
    assert CityCatalog.load(records).to_records() == records


@pytest.mark.parametrize(
    "bad",
    [
        {"capital": "Nowhere"},
        {"coordinates": None, "capital": "Nowhere"},
        {"coordinates": [1.0], "capital": "Nowhere"},
        {"coordinates": [1.0, 2.0, 3.0], "capital": "Nowhere"},
        {"coordinates": ["1.0", 2.0], "capital": "Nowhere"},
        {"coordinates": "1,2", "capital": "Nowhere"},
        {"coordinates": [True, 2.0], "capital": "Nowhere"},
        {"coordinates": [float("nan"), 2.0], "capital": "Nowhere"},
        {"coordinates": [1.0, 2.0]},
        {"coordinates": [1.0, 2.0], "capital": "   "},
        {"coordinates": [1.0, 2.0], "capital": 42},
        ["not", "a", "mapping"],
    ],
)
def test_malformed_record_fails_whole_load(bad):
    records = [{"coordinates": [1, 2], "capital": "Fine"}, bad]
    with pytest.raises(DataFormatError, match="Record 1"):
        CityCatalog.load(records)


def test_data_format_error_is_value_error():
    assert issubclass(DataFormatError, ValueError)


def test_load_rejects_non_sequence():
    with pytest.raises(DataFormatError):
        CityCatalog.load({"coordinates": [1, 2], "capital": "X"})


def test_out_of_range_coordinates_are_accepted():
    catalog = CityCatalog.load([{"coordinates": [500.0, -200.0], "capital": "Odd"}])
    assert catalog.entries()[0].coord == Coord(lat=-200.0, lon=500.0)


# ---------------------------------------------------------------------------
# File loaders
# ---------------------------------------------------------------------------

def test_from_json(tmp_path):
    path = tmp_path / "capitals.json"
    path.write_text(json.dumps([
        {"coordinates": [16.3738, 48.2082], "capital": "Vienna"},
        {"coordinates": [19.0402, 47.4979], "capital": "Budapest"},
    ]), encoding="utf-8")

    catalog = CityCatalog.from_json(str(path))

    assert [c.name for c in catalog] == ["Vienna", "Budapest"]
    assert catalog.entries()[1].coord.lat == pytest.approx(47.4979)


def test_from_json_invalid_content(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(DataFormatError):
        CityCatalog.from_json(str(path))


def test_from_json_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        CityCatalog.from_json(str(tmp_path / "nope.json"))


def test_from_csv(tmp_path):
    path = tmp_path / "capitals.csv"
    path.write_text(
        "capital,longitude,latitude\n"
        "Vienna,16.3738,48.2082\n"
        "Budapest,19.0402,47.4979\n",
        encoding="utf-8",
    )

    catalog = CityCatalog.from_csv(str(path))

    assert [c.name for c in catalog] == ["Vienna", "Budapest"]
    vienna = catalog.entries()[0].coord
    assert (vienna.lat, vienna.lon) == pytest.approx((48.2082, 16.3738))


def test_from_csv_missing_column(tmp_path):
    path = tmp_path / "capitals.csv"
    path.write_text("capital,longitude\nVienna,16.3738\n", encoding="utf-8")
    with pytest.raises(DataFormatError, match="latitude"):
        CityCatalog.from_csv(str(path))


def test_from_csv_blank_name(tmp_path):
    path = tmp_path / "capitals.csv"
    path.write_text(
        "capital,longitude,latitude\n"
        "Vienna,16.3738,48.2082\n"
        ",19.0402,47.4979\n",
        encoding="utf-8",
    )
    with pytest.raises(DataFormatError):
        CityCatalog.from_csv(str(path))


def test_from_csv_empty_file(tmp_path):
    path = tmp_path / "capitals.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(DataFormatError, match="invalid CSV"):
        CityCatalog.from_csv(str(path))


def test_from_csv_ragged_row(tmp_path):
    path = tmp_path / "capitals.csv"
    path.write_text(
        "capital,longitude,latitude\n"
        "Vienna,16.37,48.2\n"
        "X,1,2,3,4\n",
        encoding="utf-8",
    )
    with pytest.raises(DataFormatError, match="invalid CSV"):
        CityCatalog.from_csv(str(path))
