"""
Inverse Transverse Mercator conversions from grid references (easting/northing)
to geodetic coordinates (latitude/longitude)
"""

__all__ = [
    'bng_latitude_from_northing', 'convert_bng_to_latlon', 'convert_utm_to_latlon',
    'meridional_arc', 'utm_central_meridian', 'utm_footpoint_latitude',
]

import math
from typing import Tuple

from gridlatlon._const import (
    CONVERGENCE_TOLERANCE, MAX_ITERATIONS, NATIONAL_GRID, UTM,
    GridProjection, UTMProjection
)
from gridlatlon.coordinates import Coordinate
from gridlatlon.exceptions import ConvergenceError
from gridlatlon.utils.logging import LOGGER, warn_once


# -------------------------------------------------------------------------
# Universal Transverse Mercator (WGS84)
# -------------------------------------------------------------------------

def utm_central_meridian(zone_number: int, projection: UTMProjection = UTM) -> float:
    """
    The longitude (degrees) of the central meridian of a UTM zone.

    Zone numbers outside 1-60 are not rejected, but will log a warning.

    Args:
        zone_number:
            The UTM zone number

        projection:
            (Default UTM) The UTM parameters

    Returns:
        float
    """
    if not 1 <= zone_number <= 60:
        warn_once(f'UTM zone {zone_number} is outside the range 1-60.')

    return (zone_number - 1) * projection.zone_width - 180 + projection.zone_width / 2


def utm_footpoint_latitude(y: float, projection: UTMProjection = UTM) -> float:
    """
    Calculates the footpoint latitude (radians) for a distance north of the
    equator, using the rectifying latitude series.

    Args:
        y:
            Northing in meters, with any false northing removed

        projection:
            (Default UTM) The UTM parameters

    Returns:
        float
    """
    a, e2 = projection.ellipsoid.a, projection.ellipsoid.e2
    e1 = (1 - math.sqrt(1 - e2)) / (1 + math.sqrt(1 - e2))

    arc = y / projection.scale_factor
    mu = arc / (a * (1 - e2 / 4 - 3 * e2 ** 2 / 64 - 5 * e2 ** 3 / 256))

    return (
        mu
        + (3 * e1 / 2 - 27 * e1 ** 3 / 32) * math.sin(2 * mu)
        + (21 * e1 ** 2 / 16 - 55 * e1 ** 4 / 32) * math.sin(4 * mu)
        + (151 * e1 ** 3 / 96) * math.sin(6 * mu)
    )


def convert_utm_to_latlon(
    easting: float,
    northing: float,
    zone_number: int,
    is_northern: bool = True,
    projection: UTMProjection = UTM,
) -> Coordinate:
    """
    Converts a UTM grid reference to latitude/longitude on the WGS84 ellipsoid.

    Closed-form series; no error is raised for out-of-domain input (e.g. near the
    poles), which may instead produce non-finite values.

    Args:
        easting:
            Easting in meters, including the 500km false easting

        northing:
            Northing in meters, including the false northing for the southern hemisphere

        zone_number:
            The UTM zone number (1-60)

        is_northern:
            (Default True) Whether the grid reference is in the northern hemisphere

        projection:
            (Default UTM) The UTM parameters

    Returns:
        Coordinate
    """
    e2, k0 = projection.ellipsoid.e2, projection.scale_factor

    x = easting - projection.false_easting
    y = northing if is_northern else northing - projection.false_northing_south

    phi1 = utm_footpoint_latitude(y, projection)
    sin_phi1, cos_phi1, tan_phi1 = math.sin(phi1), math.cos(phi1), math.tan(phi1)

    # Radii of curvature in the prime vertical and along the meridian
    n1 = projection.ellipsoid.a / math.sqrt(1 - e2 * sin_phi1 ** 2)
    r1 = projection.ellipsoid.a * (1 - e2) / (1 - e2 * sin_phi1 ** 2) ** 1.5
    t1 = tan_phi1 ** 2
    c1 = e2 * cos_phi1 ** 2 / (1 - e2)
    d = x / (n1 * k0)

    lat = phi1 - (n1 * tan_phi1 / r1) * (
        d ** 2 / 2
        - (5 + 3 * t1 + 10 * c1 - 4 * c1 ** 2 - 9 * e2) * d ** 4 / 24
        + (61 + 90 * t1 + 298 * c1 + 45 * t1 ** 2 - 252 * e2 - 3 * c1 ** 2) * d ** 6 / 720
    )
    lon = (
        d
        - (1 + 2 * t1 + c1) * d ** 3 / 6
        + (5 - 2 * c1 + 28 * t1 - 3 * c1 ** 2 + 8 * e2 + 24 * t1 ** 2) * d ** 5 / 120
    ) / cos_phi1

    return Coordinate(
        math.degrees(lat),
        math.degrees(lon) + utm_central_meridian(zone_number, projection)
    )


# -------------------------------------------------------------------------
# British National Grid (OSGB36)
# -------------------------------------------------------------------------

def meridional_arc(lat: float, projection: GridProjection = NATIONAL_GRID) -> float:
    """
    Calculates the scaled meridional arc (meters) from the projection's true
    origin latitude to a given latitude.

    Args:
        lat:
            The latitude, in radians

        projection:
            (Default NATIONAL_GRID) The grid parameters

    Returns:
        float
    """
    n = projection.ellipsoid.n
    lat0 = projection.lat0_rad
    d_lat, s_lat = lat - lat0, lat + lat0

    ma = (1 + n + (5 / 4) * n ** 2 + (5 / 4) * n ** 3) * d_lat
    mb = (3 * n + 3 * n ** 2 + (21 / 8) * n ** 3) * math.sin(d_lat) * math.cos(s_lat)
    mc = ((15 / 8) * n ** 2 + (15 / 8) * n ** 3) * math.sin(2 * d_lat) * math.cos(2 * s_lat)
    md = (35 / 24) * n ** 3 * math.sin(3 * d_lat) * math.cos(3 * s_lat)

    return projection.ellipsoid.b * projection.scale_factor * (ma - mb + mc - md)


def bng_latitude_from_northing(
    northing: float,
    projection: GridProjection = NATIONAL_GRID,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = CONVERGENCE_TOLERANCE,
) -> Tuple[float, int]:
    """
    Iteratively solves for the latitude (radians) at which the meridional arc
    from the true origin matches the northing.

    Args:
        northing:
            Northing in meters

        projection:
            (Default NATIONAL_GRID) The grid parameters

        max_iterations:
            (Default 20) Iterations permitted before a ConvergenceError is raised

        tolerance:
            (Default 1e-5) Iteration stops once the northing residual is below this many meters

    Returns:
        (latitude in radians, number of iterations performed)
    """
    a_f0 = projection.ellipsoid.a * projection.scale_factor

    lat, iterations = projection.lat0_rad, 0
    residual = northing - projection.false_northing
    while residual >= tolerance:
        if iterations >= max_iterations:
            LOGGER.error(
                'Latitude iteration exceeded %d iterations for northing %s (residual %s m)',
                max_iterations, northing, residual
            )
            raise ConvergenceError(northing, iterations, residual)

        lat += residual / a_f0
        residual = northing - projection.false_northing - meridional_arc(lat, projection)
        iterations += 1

    return lat, iterations


def convert_bng_to_latlon(
    easting: float,
    northing: float,
    projection: GridProjection = NATIONAL_GRID,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = CONVERGENCE_TOLERANCE,
) -> Coordinate:
    """
    Converts a British National Grid reference to latitude/longitude.

    The result is on the OSGB36 (Airy 1830) ellipsoid; no datum shift to WGS84
    is applied.

    Args:
        easting:
            Easting in meters

        northing:
            Northing in meters

        projection:
            (Default NATIONAL_GRID) The grid parameters

        max_iterations:
            (Default 20) Iterations permitted when solving for latitude

        tolerance:
            (Default 1e-5) Northing residual, in meters, at which the latitude is accepted

    Returns:
        Coordinate

    Raises:
        ConvergenceError: the latitude did not converge within max_iterations
    """
    try:
        lat, iterations = bng_latitude_from_northing(
            northing, projection, max_iterations, tolerance
        )
    except ConvergenceError as e:
        raise ConvergenceError(northing, e.iterations, e.residual, easting=easting) from e

    LOGGER.debug(
        'Latitude for northing %s converged after %d iterations', northing, iterations
    )

    a_f0 = projection.ellipsoid.a * projection.scale_factor
    e2 = projection.ellipsoid.e2
    sin_lat, cos_lat, tan_lat = math.sin(lat), math.cos(lat), math.tan(lat)

    nu = a_f0 / math.sqrt(1 - e2 * sin_lat ** 2)
    rho = a_f0 * (1 - e2) / (1 - e2 * sin_lat ** 2) ** 1.5
    eta2 = nu / rho - 1

    # Redfearn series terms
    vii = tan_lat / (2 * rho * nu)
    viii = tan_lat / (24 * rho * nu ** 3) * (
        5 + 3 * tan_lat ** 2 + eta2 - 9 * tan_lat ** 2 * eta2
    )
    ix = tan_lat / (720 * rho * nu ** 5) * (61 + 90 * tan_lat ** 2 + 45 * tan_lat ** 4)

    sec_lat = 1 / cos_lat
    x = sec_lat / nu
    xi = sec_lat / (6 * nu ** 3) * (nu / rho + 2 * tan_lat ** 2)
    xii = sec_lat / (120 * nu ** 5) * (5 + 28 * tan_lat ** 2 + 24 * tan_lat ** 4)

    d_e = easting - projection.false_easting
    lat = lat - vii * d_e ** 2 + viii * d_e ** 4 - ix * d_e ** 6
    lon = projection.lon0_rad + x * d_e - xi * d_e ** 3 + xii * d_e ** 5

    return Coordinate(math.degrees(lat), math.degrees(lon))
