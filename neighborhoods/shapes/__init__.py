"""Neighborhood shapes and their cursors.

- RectangleNeighborhood: axis-aligned box in any dimensionality, raster order cursor
- EllipseNeighborhood: 2D ellipse, row by row cursor

Both share the Neighborhood base class, which owns center, span, source and
out-of-bounds policy.
"""

from neighborhoods.shapes.ellipse import EllipseCursor, EllipseNeighborhood, ellipse_bounds
from neighborhoods.shapes.neighborhood import Neighborhood, NeighborhoodCursor
from neighborhoods.shapes.rectangle import RectangleCursor, RectangleNeighborhood

__all__ = [
    "EllipseCursor",
    "EllipseNeighborhood",
    "Neighborhood",
    "NeighborhoodCursor",
    "RectangleCursor",
    "RectangleNeighborhood",
    "ellipse_bounds",
]
