"""Base classes for movable, resizable neighborhoods and their cursors.

A Neighborhood owns the state every shape shares:
- the center position and the per-axis half-extent (span)
- a reference to the bounded source (never copied)
- the out-of-bounds factory and the extended accessor built from it

Concrete shapes (rectangle, ellipse) only have to say how many positions they
contain and in which order a cursor visits them. A cursor snapshots the shape
at ``reset()`` so that resizing the owner mid-traversal can make it stale but
never makes it index outside its own tables.
"""

from __future__ import annotations

import numbers
from abc import ABC, abstractmethod
from collections.abc import Iterator

import numpy as np

from neighborhoods.errors import (
    DimensionMismatchError,
    InvalidSpanError,
    UnboundSourceError,
)
from neighborhoods.nbr_logging import create_module_logger
from neighborhoods.out_of_bounds import ExtendedAccess, OutOfBoundsFactory
from neighborhoods.protocols import BoundedSource, Coordinate, Positionable
from neighborhoods.source import as_source

_nbr_logger = create_module_logger()

_INT64 = np.iinfo(np.int64)


def _as_int_vector(values: Coordinate, n: int, what: str) -> np.ndarray:
    values = np.asarray(values)
    if values.ndim != 1 or len(values) != n:
        raise DimensionMismatchError(n, values.shape[0] if values.ndim == 1 else values.shape, what)
    if len(values) and not all(
        isinstance(v, numbers.Integral) or float(v).is_integer() for v in values.tolist()
    ):
        raise TypeError(f"{what} must contain integers, got {values.tolist()}")
    if any(not _INT64.min <= int(v) <= _INT64.max for v in values.tolist()):
        raise OverflowError(f"{what} {values.tolist()} does not fit in int64 coordinates")
    return values.astype(np.int64)


class Neighborhood[T](ABC):
    """Base class for all neighborhood shapes.

    Attributes:
        n (int): the dimensionality, fixed at construction
        center (np.ndarray): the current center, int64
        span (np.ndarray): the half-extent per axis, int64, never negative
        source (BoundedSource | None): the source values are read from
        out_of_bounds (OutOfBoundsFactory): the policy for reads outside the source

    Notes:
        The source is shared, not owned. It has to outlive every neighborhood
        and cursor referencing it.

    """

    def __init__(self, num_dimensions: int, out_of_bounds: OutOfBoundsFactory):
        """Instantiate a neighborhood spanning a single position at the origin.

        Args:
            num_dimensions: the dimensionality of the neighborhood
            out_of_bounds: the factory used to extend the source
        """
        if not isinstance(num_dimensions, numbers.Integral) or num_dimensions < 1:
            raise DimensionMismatchError(">= 1", num_dimensions, "neighborhood")
        if not isinstance(out_of_bounds, OutOfBoundsFactory):
            raise TypeError(
                f"out_of_bounds must be an OutOfBoundsFactory, got {type(out_of_bounds).__name__}"
            )
        self.n = int(num_dimensions)
        self.center = np.zeros(self.n, dtype=np.int64)
        self.span = np.zeros(self.n, dtype=np.int64)
        self.source: BoundedSource | None = None
        self._out_of_bounds = out_of_bounds
        self._access: ExtendedAccess | None = None

    @property
    def out_of_bounds(self) -> OutOfBoundsFactory:
        """The out-of-bounds factory, fixed for the lifetime of the neighborhood."""
        return self._out_of_bounds

    @property
    def position(self) -> tuple[int, ...]:
        """The current center as a coordinate tuple."""
        return tuple(int(c) for c in self.center)

    @property
    def extended(self) -> ExtendedAccess:
        """The total accessor cursors read values through."""
        if self._access is None:
            raise UnboundSourceError()
        return self._access

    def num_dimensions(self) -> int:
        """The dimensionality of the neighborhood."""
        return self.n

    def set_span(self, radiuses: Coordinate) -> None:
        """Set the half-extent along every axis.

        Args:
            radiuses: one non-negative integer per dimension
        """
        try:
            span = _as_int_vector(radiuses, self.n, "span")
        except TypeError as e:
            raise InvalidSpanError(list(np.asarray(radiuses).tolist()), "must be integers") from e
        if np.any(span < 0):
            raise InvalidSpanError(span.tolist())
        self.span[:] = span

    def set_position(self, center: Coordinate | Positionable) -> None:
        """Move the center to an absolute position.

        The window may lie partly or fully outside the source. A cursor or
        another neighborhood can be given, its position is used.
        """
        if isinstance(center, Positionable):
            center = center.position
        self.center[:] = _as_int_vector(center, self.n, "center")

    def move(self, offset: Coordinate) -> None:
        """Translate the center by ``offset``.

        Raises:
            OverflowError: if the new center leaves the int64 coordinate range
        """
        offset = _as_int_vector(offset, self.n, "offset")
        target = [int(c) + int(o) for c, o in zip(self.center, offset)]
        self.center[:] = _as_int_vector(target, self.n, "center")

    def update_source(self, source) -> None:
        """Rebind the neighborhood to another source of the same dimensionality.

        Span and center are left untouched.
        """
        source = as_source(source)
        if source.num_dimensions() != self.n:
            raise DimensionMismatchError(self.n, source.num_dimensions(), "source")
        self.source = source
        self._access = self._out_of_bounds.create(source)
        _nbr_logger.debug(
            f"{type(self).__name__} bound to source with dimensions {tuple(source.dimensions)}"
        )

    def min(self, d: int) -> int:
        """Smallest coordinate of the bounding box along axis ``d``."""
        return int(self.center[d] - self.span[d])

    def max(self, d: int) -> int:
        """Largest coordinate of the bounding box along axis ``d``."""
        return int(self.center[d] + self.span[d])

    def dimensions(self) -> tuple[int, ...]:
        """Extent of the bounding box along every axis."""
        return tuple(int(2 * s + 1) for s in self.span)

    @abstractmethod
    def size(self) -> int:
        """Number of positions in the shape for the current span."""

    @abstractmethod
    def cursor(self) -> NeighborhoodCursor[T]:
        """Return a fresh, reset cursor over the shape."""

    @abstractmethod
    def copy(self) -> Neighborhood[T]:
        """Return an independent neighborhood sharing the source."""

    def localizing_cursor(self) -> NeighborhoodCursor[T]:
        """Return a fresh, reset cursor over the shape.

        Cursors always track their position, so this is :meth:`cursor`.
        """
        return self.cursor()

    def iterator(self) -> NeighborhoodCursor[T]:
        """Return a fresh, reset cursor over the shape."""
        return self.cursor()

    def first_element(self) -> T:
        """Value at the first position a cursor visits."""
        return self.cursor().next()

    def positions(self) -> np.ndarray:
        """All positions of the shape as a ``(size, n)`` array, in cursor order."""
        cursor = self.cursor()
        out = np.empty((self.size(), self.n), dtype=np.int64)
        for i in range(len(out)):
            cursor.fwd()
            out[i] = cursor._position
        return out

    def values(self) -> np.ndarray:
        """Values at :meth:`positions`, read through the out-of-bounds policy."""
        return self.extended.get_many(self.positions())

    def __iter__(self) -> Iterator[T]:
        """Iterate over the values in the shape."""
        return iter(self.cursor())

    def __len__(self) -> int:
        """Return :meth:`size`."""
        return self.size()

    def __copy__(self) -> Neighborhood[T]:  # noqa: D105
        return self.copy()

    def __repr__(self) -> str:  # noqa: D105
        return (
            f"{type(self).__name__}(center={self.position}, "
            f"span={tuple(int(s) for s in self.span)}, out_of_bounds={self._out_of_bounds!r})"
        )


class NeighborhoodCursor[T](ABC):
    """Restartable traversal over the positions of a neighborhood.

    A cursor starts before the first position: call :meth:`fwd` (or
    :meth:`next`) before reading. It also works as a Python iterator, which
    resets it and yields values.

    Attributes:
        owner (Neighborhood): the neighborhood being traversed, never owned
    """

    def __init__(self, owner: Neighborhood[T]):  # noqa: D107
        self.owner = owner
        self._position = np.zeros(owner.n, dtype=np.int64)
        self._size = 0
        self._index = 0
        self.reset()

    def reset(self) -> None:
        """Snapshot the owner's shape and move before the first position."""
        self._center = self.owner.center.copy()
        self._span = self.owner.span.copy()
        self._size = self.owner.size()
        self._index = 0
        self._reset_shape()

    @abstractmethod
    def _reset_shape(self) -> None: ...

    @abstractmethod
    def _fwd(self) -> None: ...

    def has_next(self) -> bool:
        """Whether another :meth:`fwd` is valid."""
        return self._index < self._size

    def fwd(self) -> None:
        """Advance to the next position."""
        if not self.has_next():
            raise IndexError("cursor is exhausted, call reset() first")
        self._fwd()
        self._index += 1

    def jump_fwd(self, steps: int) -> None:
        """Advance ``steps`` positions."""
        for _ in range(steps):
            self.fwd()

    def get(self) -> T:
        """Value at the current position, through the out-of-bounds policy."""
        access = self.owner._access
        if access is None:
            raise UnboundSourceError(self.localize())
        return access.get(self._position)

    def next(self) -> T:
        """Advance and return the value at the new position."""
        self.fwd()
        return self.get()

    def localize(self) -> tuple[int, ...]:
        """The current position as a tuple."""
        return tuple(int(p) for p in self._position)

    @property
    def position(self) -> tuple[int, ...]:
        """The current position as a tuple."""
        return self.localize()

    def get_position(self, d: int) -> int:
        """The current position along axis ``d``."""
        return int(self._position[d])

    def num_dimensions(self) -> int:
        """The dimensionality of the traversed neighborhood."""
        return self.owner.n

    def copy(self) -> NeighborhoodCursor[T]:
        """Return an independent cursor in the same state."""
        other = object.__new__(type(self))
        other.__dict__.update(self.__dict__)
        for key, value in self.__dict__.items():
            if isinstance(value, np.ndarray):
                other.__dict__[key] = value.copy()
        return other

    def __iter__(self) -> Iterator[T]:
        """Reset and iterate over values."""
        self.reset()
        return self

    def __next__(self) -> T:  # noqa: D105
        if not self.has_next():
            raise StopIteration
        return self.next()

    def __len__(self) -> int:
        """Number of positions visited in one traversal."""
        return self._size

    def iter_positions(self) -> Iterator[tuple[int, ...]]:
        """Reset and iterate over positions instead of values."""
        self.reset()
        while self.has_next():
            self.fwd()
            yield self.localize()


