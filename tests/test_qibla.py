"""Tests for the Qibla bearing calculator."""
import pytest

from salahtimes.errors import InvalidCoordinate, UndefinedBearing
from salahtimes.models import GeoCoordinate
from salahtimes.qibla import KAABA, compass_point, qibla_bearing


class TestQiblaBearing:

    def test_due_north_of_kaaba_points_south(self):
        bearing = qibla_bearing(GeoCoordinate(60.0, KAABA.longitude))
        assert bearing == pytest.approx(180.0, abs=1e-9)

    def test_due_south_of_kaaba_points_north(self):
        bearing = qibla_bearing(GeoCoordinate(-30.0, KAABA.longitude))
        assert bearing == pytest.approx(0.0, abs=1e-9)

    def test_london(self):
        """London faces roughly east-south-east (~119 deg)."""
        bearing = qibla_bearing(GeoCoordinate(51.5074, -0.1278))
        assert bearing == pytest.approx(119.0, abs=0.5)

    def test_new_york(self):
        """New York faces north-east (~58.5 deg)."""
        bearing = qibla_bearing(GeoCoordinate(40.7128, -74.0060))
        assert bearing == pytest.approx(58.5, abs=0.5)

    def test_jakarta(self):
        """Jakarta faces west-north-west (~295 deg)."""
        bearing = qibla_bearing(GeoCoordinate(-6.2088, 106.8456))
        assert bearing == pytest.approx(295.0, abs=1.0)

    def test_range_over_grid(self):
        for lat in range(-90, 91, 15):
            for lng in range(-180, 181, 20):
                coord = GeoCoordinate(float(lat), float(lng))
                bearing = qibla_bearing(coord)
                assert 0.0 <= bearing < 360.0

    def test_undefined_at_kaaba(self):
        with pytest.raises(UndefinedBearing):
            qibla_bearing(KAABA)

    def test_defined_near_kaaba(self):
        bearing = qibla_bearing(GeoCoordinate(KAABA.latitude + 0.01, KAABA.longitude))
        assert bearing == pytest.approx(180.0, abs=1e-6)

    def test_invalid_coordinate(self):
        with pytest.raises(InvalidCoordinate):
            qibla_bearing(GeoCoordinate(91.0, 0.0))


class TestCompassPoint:

    @pytest.mark.parametrize(
        "bearing,label",
        [(0.0, "N"), (359.0, "N"), (45.0, "NE"), (90.0, "E"), (119.0, "ESE"),
         (180.0, "S"), (247.5, "WSW"), (295.0, "WNW")],
    )
    def test_labels(self, bearing, label):
        assert compass_point(bearing) == label
