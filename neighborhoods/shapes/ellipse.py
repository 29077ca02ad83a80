"""Two-dimensional elliptic neighborhoods.

An ellipse with semi-axes ``(rx, ry)`` is discretized row by row: every row
offset ``y`` in ``[-ry, ry]`` holds the contiguous run ``[-w(|y|), w(|y|)]``
where ``w`` is a table of ``ry + 1`` half-widths, index 0 being the middle
row. Rows ``+i`` and ``-i`` share ``w(i)``, so the size is
``(2 * w(0) + 1) + sum(2 * (2 * w(i) + 1) for i in 1..ry)``.

The default table comes from :func:`ellipse_bounds`; any callable with the
same contract can be injected.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import lru_cache

import numpy as np

from neighborhoods.errors import InvalidSpanError, ShapeDimensionError
from neighborhoods.nbr_logging import create_module_logger, method_logger
from neighborhoods.out_of_bounds import (
    DEFAULT_BOUNDARY,
    OutOfBoundsFactory,
    OutOfBoundsMirrorFactory,
)
from neighborhoods.protocols import Coordinate
from neighborhoods.shapes.neighborhood import Neighborhood, NeighborhoodCursor
from neighborhoods.source import as_source

_nbr_logger = create_module_logger()

EllipseBounds = Callable[[int, int], Sequence[int]]


@lru_cache(maxsize=128)
def ellipse_bounds(rx: int, ry: int) -> tuple[int, ...]:
    """Half-widths of the rows of an ellipse with semi-axes ``rx`` and ``ry``.

    Midpoint ellipse algorithm. The first pass walks the flat arc from the
    pole ``(0, ry)`` and keeps the widest x it reaches on every row. The
    second pass walks the steep arc from ``(rx, 0)`` upward and fills the rows
    the first pass never reached.

    Args:
        rx: semi-axis along x, non-negative
        ry: semi-axis along y, non-negative

    Returns:
        ``ry + 1`` non-increasing half-widths, index 0 being the middle row.
    """
    rx, ry = int(rx), int(ry)
    if rx < 0 or ry < 0:
        raise InvalidSpanError([rx, ry])
    if ry == 0:
        return (rx,)
    if rx == 0:
        return (0,) * (ry + 1)

    a2 = rx * rx
    b2 = ry * ry
    fa2 = 4 * a2
    fb2 = 4 * b2
    lut = [-1] * (ry + 1)

    # flat arc, from the pole towards the middle
    x, y = 0, ry
    sigma = 2 * b2 + a2 * (1 - 2 * ry)
    while b2 * x <= a2 * y:
        lut[y] = x
        if sigma >= 0:
            sigma += fa2 * (1 - y)
            y -= 1
        sigma += b2 * (4 * x + 6)
        x += 1

    # steep arc, from the middle towards the pole
    x, y = rx, 0
    sigma = 2 * a2 + b2 * (1 - 2 * rx)
    while y <= ry and a2 * y <= b2 * x:
        if lut[y] < 0:
            lut[y] = x
        if sigma >= 0:
            sigma += fb2 * (1 - x)
            x -= 1
        sigma += a2 * (4 * y + 6)
        y += 1

    # rows reached by neither pass, and rows wider than the one below, are
    # clamped so the table stays non-increasing
    for y in range(1, ry + 1):
        if lut[y] < 0 or lut[y] > lut[y - 1]:
            lut[y] = lut[y - 1]

    _nbr_logger.debug(f"computed ellipse bounds for ({rx}, {ry}): {lut}")
    return tuple(lut)


class EllipseNeighborhood[T](Neighborhood[T]):
    """A movable 2D ellipse.

    Attributes:
        bounds (EllipseBounds): the row half-width table function
    """

    @method_logger(__name__)
    def __init__(
        self,
        source,
        center: Coordinate,
        radiuses: Coordinate,
        out_of_bounds: OutOfBoundsFactory | None = None,
        bounds: EllipseBounds = ellipse_bounds,
    ) -> None:
        """Instantiate an elliptic neighborhood.

        Args:
            source: the 2D array or bounded source to read from
            center: the center of the ellipse
            radiuses: the semi-axes ``(rx, ry)``
            out_of_bounds: the factory used to extend the source. Defaults to
                           mirroring with edge duplication.
            bounds: the row half-width table function
        """
        source = as_source(source)
        if source.num_dimensions() != 2:
            raise ShapeDimensionError("ellipse", 2, source.num_dimensions())
        if out_of_bounds is None:
            out_of_bounds = OutOfBoundsMirrorFactory(DEFAULT_BOUNDARY)
        super().__init__(2, out_of_bounds)
        self.bounds = bounds
        self.set_span(radiuses)
        self.set_position(center)
        self.update_source(source)

    def row_bounds(self) -> tuple[int, ...]:
        """Half-widths of the rows for the current span, index 0 the middle row."""
        rx, ry = (int(s) for s in self.span)
        widths = tuple(int(w) for w in self.bounds(rx, ry))
        if len(widths) != ry + 1:
            raise ValueError(
                f"ellipse bounds returned {len(widths)} rows, expected {ry + 1}"
            )
        return widths

    def size(self) -> int:
        """Number of positions in the ellipse."""
        widths = self.row_bounds()
        pixel_count = 2 * widths[0] + 1  # middle line
        for w in widths[1:]:
            pixel_count += 2 * (2 * w + 1)  # twice because we mirror
        return pixel_count

    def cursor(self) -> EllipseCursor[T]:
        """Return a fresh cursor visiting the ellipse row by row."""
        return EllipseCursor(self)

    def copy(self) -> EllipseNeighborhood[T]:
        """Return an ellipse with the same span, center, source and policy."""
        return EllipseNeighborhood(
            self.source, self.center, self.span, self.out_of_bounds, self.bounds
        )


class EllipseCursor[T](NeighborhoodCursor[T]):
    """Cursor over an ellipse.

    Rows go from ``-ry`` to ``+ry``; within a row x runs left to right.
    """

    def _reset_shape(self) -> None:
        self._widths = np.asarray(self.owner.row_bounds(), dtype=np.int64)
        self._ry = len(self._widths) - 1
        self._dy = -self._ry
        self._dx = -self._widths[self._ry] - 1
        self._sync_position()

    def _fwd(self) -> None:
        self._dx += 1
        if self._dx > self._widths[abs(self._dy)]:
            self._dy += 1
            self._dx = -self._widths[abs(self._dy)]
        self._sync_position()

    def _sync_position(self) -> None:
        self._position[0] = self._center[0] + self._dx
        self._position[1] = self._center[1] + self._dy
