from math import cos, radians

import pytest

from rentscout.core.geo import EARTH_RADIUS_METERS, calculate_bounding_box


def test_bounding_box_contains_center_with_symmetric_longitude_span():
    box = calculate_bounding_box(43.6449636, -79.3846864, 1500)

    assert box.min_lat < 43.6449636 < box.max_lat
    assert (-79.3846864 - box.min_lon) == pytest.approx(box.max_lon - (-79.3846864))
    assert (box.max_lat - 43.6449636) == pytest.approx(43.6449636 - box.min_lat)


def test_equator_longitude_delta_equals_latitude_delta():
    box = calculate_bounding_box(0.0, 10.0, 1000)

    lat_delta = box.max_lat - 0.0
    lon_delta = box.max_lon - 10.0
    assert lat_delta == pytest.approx(1000 / EARTH_RADIUS_METERS * 180 / 3.141592653589793)
    assert lon_delta == pytest.approx(lat_delta)


def test_longitude_delta_widens_away_from_equator():
    box = calculate_bounding_box(60.0, 0.0, 1000)

    lat_delta = box.max_lat - 60.0
    assert box.max_lon == pytest.approx(lat_delta / cos(radians(60.0)))


def test_pole_falls_back_to_full_longitude_range(monkeypatch):
    monkeypatch.setattr("rentscout.core.geo.cos", lambda _: 0.0)

    box = calculate_bounding_box(90.0, 12.0, 1000)

    assert box.min_lon == -180.0
    assert box.max_lon == 180.0


def test_antimeridian_wrap_is_single_step_and_leaves_inverted_box():
    # Known limitation: the wrapped box has min_lon > max_lon rather than being split.
    box = calculate_bounding_box(0.0, 179.99, 5000)

    assert -180 <= box.max_lon <= 180
    assert box.max_lon < 0
    assert box.min_lon > box.max_lon


def test_non_positive_radius_is_rejected():
    with pytest.raises(ValueError):
        calculate_bounding_box(43.0, -79.0, 0)
