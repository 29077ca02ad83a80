"""Axis-aligned rectangular neighborhoods in any dimensionality.

The rectangle centered on ``c`` with span ``s`` holds every integer position
``p`` with ``|p[d] - c[d]| <= s[d]`` on every axis, ``prod(2 * s[d] + 1)``
positions in total. Cursors visit them in raster order, axis 0 fastest.
"""

from __future__ import annotations

import math

from neighborhoods.errors import DimensionMismatchError
from neighborhoods.nbr_logging import method_logger
from neighborhoods.out_of_bounds import OutOfBoundsFactory, OutOfBoundsPeriodicFactory
from neighborhoods.shapes.neighborhood import Neighborhood, NeighborhoodCursor
from neighborhoods.source import as_source


class RectangleNeighborhood[T](Neighborhood[T]):
    """A movable nD rectangle.

    The rectangle is initiated centered on the origin and spans a single
    position. It can be built in three ways::

        RectangleNeighborhood(num_dimensions=3, out_of_bounds=factory)  # unbound
        RectangleNeighborhood(image, out_of_bounds=factory)
        RectangleNeighborhood(image)  # periodic out-of-bounds policy

    """

    @method_logger(__name__)
    def __init__(
        self,
        source=None,
        out_of_bounds: OutOfBoundsFactory | None = None,
        num_dimensions: int | None = None,
    ) -> None:
        """Instantiate a rectangular neighborhood.

        Args:
            source: the array or bounded source to read from, or None for an
                    unbound neighborhood
            out_of_bounds: the factory used to extend the source. Defaults to
                           a periodic policy when a source is given.
            num_dimensions: the dimensionality of an unbound neighborhood
        """
        if source is not None:
            source = as_source(source)
            if num_dimensions is not None and num_dimensions != source.num_dimensions():
                raise DimensionMismatchError(num_dimensions, source.num_dimensions(), "source")
            if out_of_bounds is None:
                out_of_bounds = OutOfBoundsPeriodicFactory()
            super().__init__(source.num_dimensions(), out_of_bounds)
            self.update_source(source)
        else:
            if num_dimensions is None or out_of_bounds is None:
                raise TypeError(
                    "an unbound RectangleNeighborhood needs num_dimensions and out_of_bounds"
                )
            super().__init__(num_dimensions, out_of_bounds)

    def size(self) -> int:
        """Number of positions, ``prod(2 * span[d] + 1)``."""
        # python ints do not overflow, unlike an int64 product over numpy
        return math.prod(2 * int(s) + 1 for s in self.span)

    def cursor(self) -> RectangleCursor[T]:
        """Return a fresh cursor visiting the rectangle in raster order."""
        return RectangleCursor(self)

    def copy(self) -> RectangleNeighborhood[T]:
        """Return a rectangle with the same span, center, source and policy."""
        if self.source is not None:
            other = RectangleNeighborhood(self.source, self.out_of_bounds)
        else:
            other = RectangleNeighborhood(
                num_dimensions=self.n, out_of_bounds=self.out_of_bounds
            )
        other.set_span(self.span)
        other.set_position(self.center)
        return other


class RectangleCursor[T](NeighborhoodCursor[T]):
    """Raster order cursor over a rectangle, axis 0 fastest."""

    def _reset_shape(self) -> None:
        self._min = self._center - self._span
        self._max = self._center + self._span
        self._position[:] = self._min
        # one step before the first position
        self._position[0] -= 1

    def _fwd(self) -> None:
        position = self._position
        for d in range(len(position)):
            position[d] += 1
            if position[d] <= self._max[d]:
                return
            position[d] = self._min[d]
