"""Module for miscellaneous multi-use functions"""

__all__ = ['format_degrees', 'round_half_up']

import math


def round_half_up(value: float, precision) -> float:
    """
    Rounds numbers to the nearest whole, where a value exactly between the two nearest
    wholes is rounded to the higher whole.

    Args:
        value:
            The float value to be rounded
        precision:
            The precision to round the float value to

    """
    mod = value + 10 ** -(precision + 12)

    return round(mod, precision)


def format_degrees(value: float, precision: int) -> str:
    """
    Formats a decimal degree value to a fixed number of decimal places.
    Non-finite values are passed through as 'nan'/'inf'.

    Args:
        value:
            The value, in decimal degrees

        precision:
            The number of decimal places

    Returns:
        str
    """
    if not math.isfinite(value):
        return str(value)

    return f'{round_half_up(value, precision):.{precision}f}'
