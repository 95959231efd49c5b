import pytest

from wiki_facets.core.models import Coordinates
from wiki_facets.parsing.coordinates import dms_to_decimal, parse_coord_template, parse_coordinates


class TestDmsToDecimal:
    @pytest.mark.parametrize(
        "args,hemisphere,expected",
        [
            ((51, 30, 0), "N", 51.5),
            ((0, 7, 39), "W", -0.1275),
            ((33, 52, 0), "S", -33.866667),
            ((10,), None, 10.0),
            ((-10, 30), None, -10.5),
        ],
    )
    def test_conversion(self, args, hemisphere, expected):
        assert dms_to_decimal(*args, hemisphere=hemisphere) == pytest.approx(expected)


class TestParseCoordTemplate:
    def test_decimal_form(self):
        assert parse_coord_template("{{coord|40.7128|-74.0060|type:city}}") == Coordinates(lat=40.7128, lon=-74.006)

    def test_dms_form(self):
        coordinates = parse_coord_template("{{Coord|51|30|26|N|0|7|39|W|display=inline,title}}")

        assert coordinates is not None
        assert coordinates.lat == pytest.approx(51.507222)
        assert coordinates.lon == pytest.approx(-0.1275)

    def test_degrees_minutes_form(self):
        coordinates = parse_coord_template("{{coord|29|58|N|31|08|E}}")

        assert coordinates is not None
        assert coordinates.lat == pytest.approx(29.966667)
        assert coordinates.lon == pytest.approx(31.133333)

    @pytest.mark.parametrize("text", ["{{coord missing|Egypt}}", "{{convert|3|km}}", "no templates"])
    def test_unusable_templates(self, text):
        assert parse_coord_template(text) is None


class TestParseCoordinates:
    """Test coordinate extraction from infobox field sets"""

    def test_coordinates_field(self):
        fields = {"name": "Giza", "coordinates": "{{coord|29|58|N|31|08|E}}"}

        coordinates = parse_coordinates(fields)

        assert coordinates is not None
        assert coordinates.lat == pytest.approx(29.966667)

    def test_deprecated_split_fields(self):
        fields = {"latd": "30", "latm": "16", "latNS": "N", "longd": "97", "longm": "44", "longEW": "W"}

        coordinates = parse_coordinates(fields)

        assert coordinates is not None
        assert coordinates.lat == pytest.approx(30.266667)
        assert coordinates.lon == pytest.approx(-97.733333)

    def test_underscored_split_fields(self):
        fields = {"lat_d": "48", "lat_NS": "N", "long_d": "2", "long_EW": "E"}

        assert parse_coordinates(fields) == Coordinates(lat=48.0, lon=2.0)

    def test_no_location(self):
        assert parse_coordinates({"name": "Batman", "image": "Batman.png"}) is None

    def test_latitude_without_longitude(self):
        assert parse_coordinates({"latd": "30"}) is None
