"""
Representation of a geodetic position (latitude/longitude) produced by a grid conversion
"""

__all__ = ['Coordinate']

import math
from typing import Iterator, Tuple, Union

from gridlatlon.utils.functions import format_degrees, round_half_up

_MAP_URL = 'https://www.google.com/maps?q={lat},{lon}'


class Coordinate:
    """
    Representation of a coordinate on the globe (i.e., a lat/lon pair), in decimal degrees.

    Coordinates are immutable and are not wrapped or bounded; a conversion of an
    out-of-domain grid reference may yield non-finite values, which are kept as-is.
    Iterating a Coordinate yields (latitude, longitude).
    """

    __slots__ = ('_latitude', '_longitude')

    def __init__(
        self,
        latitude: Union[float, int, str],
        longitude: Union[float, int, str],
    ):
        object.__setattr__(self, '_latitude', float(latitude))
        object.__setattr__(self, '_longitude', float(longitude))

    def __setattr__(self, key, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __delattr__(self, item):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    @property
    def latitude(self) -> float:
        return self._latitude

    @property
    def longitude(self) -> float:
        return self._longitude

    def __eq__(self, other):
        if not isinstance(other, Coordinate):
            return False

        return (
            self.latitude == other.latitude and
            self.longitude == other.longitude
        )

    def __hash__(self):
        return hash((self.latitude, self.longitude))

    def __iter__(self) -> Iterator[float]:
        return iter((self.latitude, self.longitude))

    def __repr__(self):
        return f'<Coordinate({self.latitude}, {self.longitude})>'

    def __str__(self):
        return self.to_str()

    @property
    def is_finite(self) -> bool:
        """True if both latitude and longitude are finite numbers"""
        return math.isfinite(self.latitude) and math.isfinite(self.longitude)

    @classmethod
    def from_dms(cls, lat: Tuple[int, int, float, str], lon: Tuple[int, int, float, str]):
        """
        Creates a Coordinate from a Degree Minutes Seconds (lat, lon) pair.

        The quadrant value should consist of either 'N'/'S' (latitude) or 'E'/'W' (longitude)

        Args:
            lat:
                Latitude, as a 4-tuple of
                ( <degrees> (float),  <minutes> (float), <seconds> (float), <quadrant> (str) )
            lon:
                Longitude, as a 4-tuple of
                ( <degrees> (float),  <minutes> (float), <seconds> (float), <quadrant> (str))

        Returns:
            Coordinate
        """
        def convert(dms: Tuple[int, int, float, str]):
            mult = -1 if dms[3] in ('S', 'W') else 1
            return mult * (dms[0] + (dms[1] / 60) + (dms[2] / 3600))

        return Coordinate(convert(lat), convert(lon))

    def map_url(self, precision: int = 6) -> str:
        """
        Builds a Google Maps link centred on this coordinate.

        Args:
            precision: (int)
                (Default 6) The number of decimal places written for each value

        Returns:
            str
        """
        return _MAP_URL.format(
            lat=format_degrees(self.latitude, precision),
            lon=format_degrees(self.longitude, precision),
        )

    def to_dms(self) -> Tuple[Tuple[int, int, float, str], Tuple[int, int, float, str]]:
        """
        Convert this coordinate to a pair of tuples of
        degrees, minutes, seconds, hemisphere

        Returns:
            converted values as ((degrees, minutes, seconds, 'N'|'S'), (degrees, minutes, seconds, 'E'|'W'))
        """
        def convert(dd: float) -> Tuple[int, int, float]:
            """Converts a Decimal Degree to Degrees Minutes Seconds"""
            minutes, seconds = divmod(abs(dd) * 3600, 60)
            degrees, minutes = divmod(minutes, 60)
            return int(degrees), int(minutes), round_half_up(seconds, 5)

        return (
            (*convert(self.latitude), 'N' if self.latitude >= 0 else 'S'),
            (*convert(self.longitude), 'E' if self.longitude >= 0 else 'W'),
        )

    def to_float(self, reverse: bool = False) -> Tuple[float, float]:
        """
        Converts the coordinate to a tuple of floats (latitude, longitude).

        Args:
            reverse: (bool)
                (Default False) If True, reverses the coordinate order to (longitude, latitude)

        Returns:
            Tuple of (latitude, longitude)
        """
        if reverse:
            return self.longitude, self.latitude

        return self.latitude, self.longitude

    def to_str(self, precision: int = 8) -> str:
        """
        Formats the coordinate for display, e.g. 'Lat: 52.65757030°, Lon: 1.71792158°'

        Args:
            precision: (int)
                (Default 8) The number of decimal places written for each value

        Returns:
            str
        """
        return (
            f'Lat: {format_degrees(self.latitude, precision)}°, '
            f'Lon: {format_degrees(self.longitude, precision)}°'
        )
