"""Exceptions raised by gridlatlon"""

__all__ = ['ConvergenceError']

from typing import Optional


class ConvergenceError(ArithmeticError):
    """
    Raised when the National Grid latitude iteration does not reach the
    convergence tolerance within the permitted number of iterations.

    The easting is None when only the latitude was being solved for.
    """

    def __init__(
        self,
        northing: float,
        iterations: int,
        residual: float,
        easting: Optional[float] = None,
    ):
        self.easting = easting
        self.northing = northing
        self.iterations = iterations
        self.residual = residual

        ref = f'northing {northing}' if easting is None else f'grid reference ({easting}, {northing})'
        super().__init__(
            f'Latitude failed to converge for {ref} '
            f'after {iterations} iterations (residual {residual} m)'
        )
