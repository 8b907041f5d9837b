"""
Vectorised grid conversions, for converting many grid references at once.

Each function accepts scalars or array-likes (which are broadcast against each
other) and returns a pair of float64 numpy arrays (latitudes, longitudes) in
decimal degrees.
"""

__all__ = ['bng_to_latlon_arrays', 'utm_to_latlon_arrays']

from typing import Tuple

import numpy as np

from gridlatlon._const import (
    CONVERGENCE_TOLERANCE, MAX_ITERATIONS, NATIONAL_GRID, UTM,
    GridProjection, UTMProjection
)
from gridlatlon.conversion import utm_central_meridian
from gridlatlon.exceptions import ConvergenceError
from gridlatlon.utils.logging import LOGGER


def _as_arrays(eastings, northings) -> Tuple[np.ndarray, np.ndarray]:
    return np.broadcast_arrays(
        np.asarray(eastings, dtype=np.float64),
        np.asarray(northings, dtype=np.float64),
    )


def utm_to_latlon_arrays(
    eastings,
    northings,
    zone_number: int,
    is_northern: bool = True,
    projection: UTMProjection = UTM,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Converts UTM grid references within a single zone to latitudes/longitudes.

    Args:
        eastings:
            Eastings in meters, including the false easting

        northings:
            Northings in meters

        zone_number:
            The UTM zone number shared by every grid reference

        is_northern:
            (Default True) Whether the grid references are in the northern hemisphere

        projection:
            (Default UTM) The UTM parameters

    Returns:
        (latitudes, longitudes)
    """
    eastings, northings = _as_arrays(eastings, northings)
    a, e2, k0 = projection.ellipsoid.a, projection.ellipsoid.e2, projection.scale_factor
    e1 = (1 - np.sqrt(1 - e2)) / (1 + np.sqrt(1 - e2))

    x = eastings - projection.false_easting
    y = northings if is_northern else northings - projection.false_northing_south

    mu = (y / k0) / (a * (1 - e2 / 4 - 3 * e2 ** 2 / 64 - 5 * e2 ** 3 / 256))
    phi1 = (
        mu
        + (3 * e1 / 2 - 27 * e1 ** 3 / 32) * np.sin(2 * mu)
        + (21 * e1 ** 2 / 16 - 55 * e1 ** 4 / 32) * np.sin(4 * mu)
        + (151 * e1 ** 3 / 96) * np.sin(6 * mu)
    )
    sin_phi1, cos_phi1, tan_phi1 = np.sin(phi1), np.cos(phi1), np.tan(phi1)

    n1 = a / np.sqrt(1 - e2 * sin_phi1 ** 2)
    r1 = a * (1 - e2) / (1 - e2 * sin_phi1 ** 2) ** 1.5
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

    return np.degrees(lat), np.degrees(lon) + utm_central_meridian(zone_number, projection)


def _meridional_arcs(lat: np.ndarray, projection: GridProjection) -> np.ndarray:
    n = projection.ellipsoid.n
    lat0 = projection.lat0_rad
    d_lat, s_lat = lat - lat0, lat + lat0

    ma = (1 + n + (5 / 4) * n ** 2 + (5 / 4) * n ** 3) * d_lat
    mb = (3 * n + 3 * n ** 2 + (21 / 8) * n ** 3) * np.sin(d_lat) * np.cos(s_lat)
    mc = ((15 / 8) * n ** 2 + (15 / 8) * n ** 3) * np.sin(2 * d_lat) * np.cos(2 * s_lat)
    md = (35 / 24) * n ** 3 * np.sin(3 * d_lat) * np.cos(3 * s_lat)

    return projection.ellipsoid.b * projection.scale_factor * (ma - mb + mc - md)


def bng_to_latlon_arrays(
    eastings,
    northings,
    projection: GridProjection = NATIONAL_GRID,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = CONVERGENCE_TOLERANCE,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Converts British National Grid references to OSGB36 latitudes/longitudes.

    The latitude of each grid reference is refined until its own residual falls
    below tolerance; converged elements are not updated further.

    Args:
        eastings:
            Eastings in meters

        northings:
            Northings in meters

        projection:
            (Default NATIONAL_GRID) The grid parameters

        max_iterations:
            (Default 20) Iterations permitted when solving for latitude

        tolerance:
            (Default 1e-5) Northing residual, in meters, at which a latitude is accepted

    Returns:
        (latitudes, longitudes)

    Raises:
        ConvergenceError: any latitude did not converge within max_iterations
    """
    eastings, northings = _as_arrays(eastings, northings)
    a_f0 = projection.ellipsoid.a * projection.scale_factor
    e2 = projection.ellipsoid.e2

    lat = np.full(northings.shape, projection.lat0_rad)
    residual = northings - projection.false_northing
    active = residual >= tolerance

    iterations = 0
    while active.any():
        if iterations >= max_iterations:
            idx = np.flatnonzero(active)[0]
            LOGGER.error(
                'Latitude iteration exceeded %d iterations for %d of %d northings',
                max_iterations, np.count_nonzero(active), active.size
            )
            raise ConvergenceError(
                float(northings.flat[idx]), iterations, float(residual.flat[idx]),
                easting=float(eastings.flat[idx]),
            )

        lat = np.where(active, lat + residual / a_f0, lat)
        residual = np.where(
            active,
            northings - projection.false_northing - _meridional_arcs(lat, projection),
            residual
        )
        active &= residual >= tolerance
        iterations += 1

    LOGGER.debug('Latitudes for %d northings converged after %d iterations', lat.size, iterations)

    sin_lat, cos_lat, tan_lat = np.sin(lat), np.cos(lat), np.tan(lat)
    nu = a_f0 / np.sqrt(1 - e2 * sin_lat ** 2)
    rho = a_f0 * (1 - e2) / (1 - e2 * sin_lat ** 2) ** 1.5
    eta2 = nu / rho - 1

    vii = tan_lat / (2 * rho * nu)
    viii = tan_lat / (24 * rho * nu ** 3) * (
        5 + 3 * tan_lat ** 2 + eta2 - 9 * tan_lat ** 2 * eta2
    )
    ix = tan_lat / (720 * rho * nu ** 5) * (61 + 90 * tan_lat ** 2 + 45 * tan_lat ** 4)

    sec_lat = 1 / cos_lat
    x = sec_lat / nu
    xi = sec_lat / (6 * nu ** 3) * (nu / rho + 2 * tan_lat ** 2)
    xii = sec_lat / (120 * nu ** 5) * (5 + 28 * tan_lat ** 2 + 24 * tan_lat ** 4)

    d_e = eastings - projection.false_easting
    lat = lat - vii * d_e ** 2 + viii * d_e ** 4 - ix * d_e ** 6
    lon = projection.lon0_rad + x * d_e - xi * d_e ** 3 + xii * d_e ** 5

    return np.degrees(lat), np.degrees(lon)
