from gridlatlon._version import __version__  # noqa: F401
from gridlatlon.utils.logging import LOGGER
from gridlatlon._const import NATIONAL_GRID, OSGB36, UTM, WGS84, Ellipsoid, GridProjection
from gridlatlon.coordinates import Coordinate
from gridlatlon.conversion import convert_bng_to_latlon, convert_utm_to_latlon
from gridlatlon.exceptions import ConvergenceError


__all__ = [
    'ConvergenceError',
    'Coordinate',
    'Ellipsoid',
    'GridProjection',
    'NATIONAL_GRID',
    'OSGB36',
    'UTM',
    'WGS84',
    'convert_bng_to_latlon',
    'convert_utm_to_latlon',
    'LOGGER',
]
