"""
Constants declarations for gridlatlon
"""

__all__ = [
    'CONVERGENCE_TOLERANCE', 'Ellipsoid', 'GridProjection', 'MAX_ITERATIONS',
    'NATIONAL_GRID', 'OSGB36', 'UTM', 'UTMProjection', 'WGS84',
]

from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Ellipsoid:
    """
    A reference ellipsoid, described by its semi-major and semi-minor axes (meters)
    """
    name: str
    a: float
    b: float

    @classmethod
    def from_flattening(cls, name: str, a: float, f: float) -> 'Ellipsoid':
        """Create an Ellipsoid from its semi-major axis and flattening"""
        return cls(name, a, (1 - f) * a)

    @property
    def f(self) -> float:
        """Flattening"""
        return (self.a - self.b) / self.a

    @property
    def e2(self) -> float:
        """Eccentricity squared"""
        return 1 - (self.b ** 2) / (self.a ** 2)

    @property
    def n(self) -> float:
        """Third flattening, (a - b) / (a + b)"""
        return (self.a - self.b) / (self.a + self.b)


@dataclass(frozen=True)
class GridProjection:
    """
    A Transverse Mercator national grid: its ellipsoid, central meridian scale
    factor, true origin (degrees) and false origin (meters)
    """
    ellipsoid: Ellipsoid
    scale_factor: float
    lat0: float
    lon0: float
    false_easting: float
    false_northing: float

    @property
    def lat0_rad(self) -> float:
        return math.radians(self.lat0)

    @property
    def lon0_rad(self) -> float:
        return math.radians(self.lon0)


@dataclass(frozen=True)
class UTMProjection:
    """
    Zone-independent UTM parameters. The central meridian is derived per zone.
    """
    ellipsoid: Ellipsoid
    scale_factor: float
    false_easting: float
    false_northing_south: float
    zone_width: float = 6.0


# WGS84 Ellipsoid Constants
WGS84 = Ellipsoid.from_flattening('WGS84', 6378137.0, 1 / 298.257223563)

# Airy 1830 Ellipsoid, as used by OSGB36
OSGB36 = Ellipsoid('Airy 1830', 6377563.396, 6356256.909)

UTM = UTMProjection(
    ellipsoid=WGS84,
    scale_factor=0.9996,
    false_easting=500_000.0,
    false_northing_south=10_000_000.0,
)

# Ordnance Survey National Grid, true origin 49N 2W
NATIONAL_GRID = GridProjection(
    ellipsoid=OSGB36,
    scale_factor=0.9996012717,
    lat0=49.0,
    lon0=-2.0,
    false_easting=400_000.0,
    false_northing=-100_000.0,
)

# Latitude iteration stops once the meridional arc is within this many meters
CONVERGENCE_TOLERANCE = 1e-5
MAX_ITERATIONS = 20
