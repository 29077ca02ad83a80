"""Structural interfaces shared by sources and neighborhoods.

This module provides:
- ``Coordinate``: the type alias for integer grid positions
- ``BoundedSource``: a Protocol for anything a neighborhood can read from
- ``Positionable``: a Protocol for objects that have an integer grid position,
  such as cursors and neighborhoods; ``set_position`` accepts one

Neighborhoods never copy their source. Any object satisfying
``BoundedSource`` can back a neighborhood, regardless of class hierarchy;
plain numpy arrays are wrapped into an ``ArraySource`` on the way in.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray

# Type alias for integer positions.
# - tuple[int, ...] for coordinates handed out by cursors
# - Sequence[int] for coordinates accepted from callers
# - NDArray[np.integer] for vectors kept internally
Coordinate = tuple[int, ...] | Sequence[int] | NDArray[np.integer]


@runtime_checkable
class BoundedSource(Protocol):
    """Protocol for an N-dimensional bounded array accessor.

    A bounded source only has to answer for in-bounds coordinates. Reads
    outside its ``dimensions`` are handled by an out-of-bounds policy.

    Examples:
        Any class with these members satisfies the protocol::

            class Checkerboard:
                dimensions = (8, 8)

                def num_dimensions(self):
                    return 2

                def __getitem__(self, position):
                    return sum(position) % 2

            assert isinstance(Checkerboard(), BoundedSource)

    """

    @property
    def dimensions(self) -> tuple[int, ...]:
        """The extent of the source along every axis."""
        ...

    def num_dimensions(self) -> int:
        """The number of axes of the source."""
        ...

    def __getitem__(self, position: tuple[int, ...]) -> Any:
        """Value at an in-bounds integer coordinate."""
        ...


@runtime_checkable
class Positionable(Protocol):
    """Protocol for any object that has an integer position on a grid."""

    @property
    def position(self) -> tuple[int, ...]:
        """The current position as a coordinate tuple."""
        ...

    def num_dimensions(self) -> int:
        """The number of axes of the position."""
        ...
