import math

import pytest
from pytest import approx

from gridlatlon import Coordinate, ConvergenceError
from gridlatlon.conversion import *
from gridlatlon._const import NATIONAL_GRID

from tests.functions import assert_coordinates_equal, dms_to_degrees


def test_utm_central_meridian():
    assert utm_central_meridian(1) == -177.
    assert utm_central_meridian(30) == -3.
    assert utm_central_meridian(31) == 3.
    assert utm_central_meridian(60) == 177.


def test_utm_central_meridian_out_of_range(caplog):
    assert utm_central_meridian(61) == 183.
    assert 'UTM zone 61 is outside the range 1-60.' in caplog.text


def test_utm_footpoint_latitude():
    assert utm_footpoint_latitude(0.) == 0.
    # Footpoint of a full quadrant is the pole
    assert utm_footpoint_latitude(10_001_965.729 * 0.9996) == approx(math.pi / 2, abs=1e-7)


def test_convert_utm_to_latlon():
    # Reference values from an exact (Kruger series) inverse, checked against PROJ
    # CN Tower, Toronto
    actual = convert_utm_to_latlon(630084., 4833438., 17, True)
    assert_coordinates_equal(actual, Coordinate(43.6425617813, -79.3871428695), abs_tol=1e-6)

    # Near the equator in zone 30N
    actual = convert_utm_to_latlon(651409.903, 313177.270, 30, True)
    assert_coordinates_equal(actual, Coordinate(2.8325850010, -1.6377926228), abs_tol=1e-6)

    # Far from the central meridian at high latitude
    actual = convert_utm_to_latlon(300000., 7_000_000., 33, True)
    assert_coordinates_equal(actual, Coordinate(63.0739966029, 11.0396479968), abs_tol=1e-6)

    actual = convert_utm_to_latlon(500000., 5_000_000., 31, True)
    assert_coordinates_equal(actual, Coordinate(45.1534771834, 3.), abs_tol=1e-6)

    # Mirror of the 30N point in the southern hemisphere
    actual = convert_utm_to_latlon(651409.903, 9_686_822.73, 30, False)
    assert_coordinates_equal(actual, Coordinate(-2.8325850010, -1.6377926228), abs_tol=1e-6)

    # Published DMS for the CN Tower, to the precision given
    expected = Coordinate(dms_to_degrees(43, 38, 33.24), -dms_to_degrees(79, 23, 13.7))
    actual = convert_utm_to_latlon(630084., 4833438., 17, True)
    assert_coordinates_equal(actual, expected, abs_tol=5e-5)


def test_convert_utm_to_latlon_unpacks_lat_lon():
    lat, lon = convert_utm_to_latlon(630084., 4833438., 17, True)
    assert lat == approx(43.6425617813, abs=1e-6)
    assert lon == approx(-79.3871428695, abs=1e-6)


def test_convert_utm_to_latlon_hemisphere_symmetry():
    for easting, northing in [(651409.903, 313177.270), (420000., 2_500_000.), (500000., 6_000_000.)]:
        north = convert_utm_to_latlon(easting, northing, 30, True)
        south = convert_utm_to_latlon(easting, 10_000_000. - northing, 30, False)

        assert south.latitude == approx(-north.latitude, abs=1e-9)
        assert south.longitude == approx(north.longitude, abs=1e-9)


def test_convert_utm_to_latlon_zone_offset():
    for easting, northing in [(651409.903, 313177.270), (300000., 7_000_000.)]:
        previous = convert_utm_to_latlon(easting, northing, 1, True)
        for zone in range(2, 61):
            current = convert_utm_to_latlon(easting, northing, zone, True)
            assert current.longitude - previous.longitude == approx(6., abs=1e-9)
            assert current.latitude == previous.latitude
            previous = current


def test_convert_utm_to_latlon_false_origin():
    assert convert_utm_to_latlon(500000., 0., 31, True) == Coordinate(0., 3.)

    # No easting offset lies on the central meridian
    actual = convert_utm_to_latlon(500000., 5_000_000., 31, True)
    assert actual.is_finite
    assert actual.longitude == 3.

    actual = convert_utm_to_latlon(500000., 10_000_000., 31, False)
    assert actual.is_finite


def test_convert_utm_to_latlon_near_pole():
    # Not a valid UTM reference, but must not raise
    actual = convert_utm_to_latlon(501000., 9_997_964., 31, True)
    assert isinstance(actual, Coordinate)


def test_convert_utm_to_latlon_deterministic():
    results = {convert_utm_to_latlon(651409.903, 313177.270, 30, True) for _ in range(5)}
    assert len(results) == 1


def test_meridional_arc():
    assert meridional_arc(NATIONAL_GRID.lat0_rad) == 0.

    # Roughly 111km per degree at these latitudes
    assert meridional_arc(math.radians(50.)) == approx(111_200., abs=300.)
    assert meridional_arc(math.radians(48.)) < 0.


def test_bng_latitude_from_northing():
    lat, iterations = bng_latitude_from_northing(-100_000.)
    assert lat == NATIONAL_GRID.lat0_rad
    assert iterations == 0

    for northing in range(0, 1_300_001, 50_000):
        lat, iterations = bng_latitude_from_northing(float(northing))
        assert 0 < iterations < 20
        assert math.radians(49.) < lat < math.radians(62.)


def test_bng_latitude_from_northing_not_converged(caplog):
    with pytest.raises(ConvergenceError) as e:
        bng_latitude_from_northing(313177.270, max_iterations=1)

    assert e.value.iterations == 1
    assert e.value.northing == 313177.270
    assert e.value.easting is None
    assert e.value.residual >= 1e-5
    assert 'Latitude iteration exceeded 1 iterations' in caplog.text


def test_convert_bng_to_latlon():
    # Ordnance Survey worked example: TG 51409 13177
    expected = Coordinate(
        dms_to_degrees(52, 39, 27.2531),
        dms_to_degrees(1, 43, 4.5177)
    )
    actual = convert_bng_to_latlon(651409.903, 313177.270)
    assert_coordinates_equal(actual, expected, abs_tol=1e-6)


def test_convert_bng_to_latlon_true_origin():
    actual = convert_bng_to_latlon(400000., -100000.)
    assert_coordinates_equal(actual, Coordinate(49., -2.), abs_tol=1e-12)

    # Zero iterations are needed at the true origin
    actual = convert_bng_to_latlon(400000., -100000., max_iterations=0)
    assert_coordinates_equal(actual, Coordinate(49., -2.), abs_tol=1e-12)


def test_convert_bng_to_latlon_false_origin():
    actual = convert_bng_to_latlon(0., 0.)
    assert actual.is_finite
    assert 49. < actual.latitude < 50.
    assert actual.longitude < -7.

    actual = convert_bng_to_latlon(400000., 500000.)
    assert actual.longitude == approx(-2., abs=1e-12)


def test_convert_bng_to_latlon_not_converged():
    with pytest.raises(ConvergenceError) as e:
        convert_bng_to_latlon(651409.903, 313177.270, max_iterations=1)

    assert e.value.easting == 651409.903
    assert e.value.northing == 313177.270
    assert e.value.iterations == 1
    assert '(651409.903, 313177.27)' in str(e.value)

    with pytest.raises(ConvergenceError) as e:
        convert_bng_to_latlon(651409.903, 313177.270, max_iterations=0)

    assert e.value.easting == 651409.903
    assert e.value.iterations == 0


def test_bng_latitude_from_northing_tolerance():
    # Any residual under the tolerance is accepted without iterating
    lat, iterations = bng_latitude_from_northing(313177.270, tolerance=1e6)
    assert lat == NATIONAL_GRID.lat0_rad
    assert iterations == 0

    _, default_iterations = bng_latitude_from_northing(313177.270)
    lat, iterations = bng_latitude_from_northing(313177.270, tolerance=1.)
    assert 0 < iterations <= default_iterations
    assert lat == approx(bng_latitude_from_northing(313177.270)[0], abs=1e-6)


def test_convert_bng_to_latlon_tolerance():
    expected = convert_bng_to_latlon(651409.903, 313177.270)
    actual = convert_bng_to_latlon(651409.903, 313177.270, tolerance=1e-3)
    assert_coordinates_equal(actual, expected, abs_tol=1e-7)

    # A loose tolerance lets a small iteration cap succeed
    actual = convert_bng_to_latlon(651409.903, 313177.270, max_iterations=0, tolerance=1e6)
    assert actual.is_finite


def test_convert_bng_to_latlon_nan_northing():
    actual = convert_bng_to_latlon(400000., float('nan'))
    assert_coordinates_equal(actual, Coordinate(49., -2.), abs_tol=1e-12)


def test_convert_bng_to_latlon_deterministic():
    first = convert_bng_to_latlon(530000., 180000.)
    for _ in range(5):
        again = convert_bng_to_latlon(530000., 180000.)
        assert again.to_float() == first.to_float()
