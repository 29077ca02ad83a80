"""neighborhoods: movable local windows over N-dimensional arrays.

Core Objects: RectangleNeighborhood, EllipseNeighborhood, ArraySource and the
out-of-bounds factories.
"""

__title__ = "neighborhoods"
__version__ = "0.1.0"
__license__ = "Apache 2.0"
__copyright__ = "Copyright neighborhoods contributors"

from neighborhoods.out_of_bounds import (  # noqa: E402
    Boundary,
    OutOfBoundsConstantValueFactory,
    OutOfBoundsCustomFactory,
    OutOfBoundsFactory,
    OutOfBoundsMirrorFactory,
    OutOfBoundsPeriodicFactory,
)
from neighborhoods.shapes import (  # noqa: E402
    EllipseNeighborhood,
    Neighborhood,
    RectangleNeighborhood,
    ellipse_bounds,
)
from neighborhoods.source import ArraySource, as_source  # noqa: E402

__all__ = [
    "ArraySource",
    "Boundary",
    "EllipseNeighborhood",
    "Neighborhood",
    "OutOfBoundsConstantValueFactory",
    "OutOfBoundsCustomFactory",
    "OutOfBoundsFactory",
    "OutOfBoundsMirrorFactory",
    "OutOfBoundsPeriodicFactory",
    "RectangleNeighborhood",
    "as_source",
    "ellipse_bounds",
]
