"""Out-of-bounds policies that turn a bounded source into a total function.

A policy is chosen through a factory:
- OutOfBoundsMirrorFactory: reflect at the borders, with (DOUBLE) or without
  (SINGLE) repeating the edge element
- OutOfBoundsPeriodicFactory: wrap around, as on a torus
- OutOfBoundsConstantValueFactory: a fixed value everywhere outside
- OutOfBoundsCustomFactory: a caller supplied ``func(source, position)``

``factory.create(source)`` returns an :class:`ExtendedAccess`. In-bounds
positions are read from the source directly; every other integer position
goes through the policy, so reads never fail and never leave the array.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum
from typing import Any

import numpy as np

from neighborhoods.protocols import BoundedSource, Coordinate
from neighborhoods.source import ArraySource


class Boundary(Enum):
    """How a mirror treats the edge element."""

    SINGLE = "single"  # -1 -> 1, the edge element is not repeated
    DOUBLE = "double"  # -1 -> 0, the edge element is repeated


DEFAULT_BOUNDARY = Boundary.DOUBLE


class ExtendedAccess(ABC):
    """Unbounded read access over a bounded source.

    Attributes:
        source: the bounded source being extended
    """

    def __init__(self, source: BoundedSource):
        """Extend ``source`` beyond its dimensions."""
        self.source = source
        self._shape = tuple(int(d) for d in source.dimensions)
        self._dims = np.asarray(self._shape, dtype=np.int64)

    def in_bounds(self, position: Coordinate) -> bool:
        """Whether ``position`` lies inside the source."""
        return all(0 <= p < d for p, d in zip(position, self._shape))

    def get(self, position: Coordinate) -> Any:
        """Value at any integer position, in or out of bounds."""
        position = tuple(int(p) for p in position)
        if self.in_bounds(position):
            return self.source[position]
        return self._out_of_bounds(position)

    def get_many(self, positions) -> np.ndarray:
        """Values at a ``(k, n)`` block of positions, in row order."""
        positions = np.asarray(positions, dtype=np.int64).reshape(-1, len(self._shape))
        return np.array([self.get(p) for p in positions])

    @abstractmethod
    def _out_of_bounds(self, position: tuple[int, ...]) -> Any: ...


class IndexMappingAccess(ExtendedAccess):
    """Extended access for policies that map every position back into the source."""

    @abstractmethod
    def map_index(self, positions: np.ndarray) -> np.ndarray:
        """Map positions (last axis is the dimension) onto in-bounds positions."""

    def _out_of_bounds(self, position):
        mapped = self.map_index(np.asarray(position, dtype=np.int64))
        return self.source[tuple(int(i) for i in mapped)]

    def get_many(self, positions) -> np.ndarray:  # noqa: D102
        positions = np.asarray(positions, dtype=np.int64).reshape(-1, len(self._shape))
        if not isinstance(self.source, ArraySource):
            return super().get_many(positions)
        mapped = self.map_index(positions)
        return self.source.data[tuple(mapped.T)]


class PeriodicAccess(IndexMappingAccess):
    """Wraps positions around every axis."""

    def map_index(self, positions):  # noqa: D102
        return np.mod(positions, self._dims)


class MirrorAccess(IndexMappingAccess):
    """Reflects positions at the borders of every axis."""

    def __init__(self, source: BoundedSource, boundary: Boundary = DEFAULT_BOUNDARY):
        """Mirror ``source`` with the given edge behavior."""
        super().__init__(source)
        self.boundary = boundary
        if boundary is Boundary.DOUBLE:
            self._period = 2 * self._dims
        else:
            # a single element axis has nothing to reflect
            self._period = np.maximum(2 * self._dims - 2, 1)

    def map_index(self, positions):  # noqa: D102
        m = np.mod(positions, self._period)
        if self.boundary is Boundary.DOUBLE:
            return np.where(m < self._dims, m, self._period - 1 - m)
        return np.where(m < self._dims, m, self._period - m)


class ConstantValueAccess(ExtendedAccess):
    """Returns the same value for every out-of-bounds position."""

    def __init__(self, source: BoundedSource, value):
        """Extend ``source`` with ``value``."""
        super().__init__(source)
        self.value = value

    def _out_of_bounds(self, position):
        return self.value

    def get_many(self, positions) -> np.ndarray:  # noqa: D102
        positions = np.asarray(positions, dtype=np.int64).reshape(-1, len(self._shape))
        if not isinstance(self.source, ArraySource):
            return super().get_many(positions)
        data = self.source.data
        inside = np.all((positions >= 0) & (positions < self._dims), axis=1)
        # the result dtype has to hold the constant as well as the data
        dtype = np.result_type(data.dtype, np.asarray(self.value).dtype)
        values = np.full(len(positions), self.value, dtype=dtype)
        values[inside] = data[tuple(positions[inside].T)]
        return values


class CustomAccess(ExtendedAccess):
    """Delegates every out-of-bounds read to a caller supplied function."""

    def __init__(self, source: BoundedSource, func: Callable[[BoundedSource, tuple[int, ...]], Any]):
        """Extend ``source`` with ``func(source, position)``."""
        super().__init__(source)
        self.func = func

    def _out_of_bounds(self, position):
        return self.func(self.source, position)


class OutOfBoundsFactory(ABC):
    """Creates the extended access a neighborhood reads through."""

    @abstractmethod
    def create(self, source: BoundedSource) -> ExtendedAccess:
        """Return a total accessor over ``source``."""

    def __call__(self, source: BoundedSource) -> ExtendedAccess:  # noqa: D102
        return self.create(source)

    def __repr__(self):  # noqa: D105
        return f"{type(self).__name__}()"


class OutOfBoundsMirrorFactory(OutOfBoundsFactory):
    """Mirror policy, with (DOUBLE) or without (SINGLE) edge duplication."""

    def __init__(self, boundary: Boundary = DEFAULT_BOUNDARY):  # noqa: D107
        self.boundary = Boundary(boundary)

    def create(self, source):  # noqa: D102
        return MirrorAccess(source, self.boundary)

    def __repr__(self):  # noqa: D105
        return f"{type(self).__name__}({self.boundary.name})"


class OutOfBoundsPeriodicFactory(OutOfBoundsFactory):
    """Periodic policy."""

    def create(self, source):  # noqa: D102
        return PeriodicAccess(source)


class OutOfBoundsConstantValueFactory(OutOfBoundsFactory):
    """Constant policy."""

    def __init__(self, value):  # noqa: D107
        self.value = value

    def create(self, source):  # noqa: D102
        return ConstantValueAccess(source, self.value)

    def __repr__(self):  # noqa: D105
        return f"{type(self).__name__}({self.value!r})"


class OutOfBoundsCustomFactory(OutOfBoundsFactory):
    """Caller supplied policy.

    The function receives the bounded source and an out-of-bounds position
    tuple and must return a value; it is never called for in-bounds reads.
    """

    def __init__(self, func: Callable[[BoundedSource, tuple[int, ...]], Any]):  # noqa: D107
        if not callable(func):
            raise TypeError(f"func must be callable, got {type(func).__name__}")
        self.func = func

    def create(self, source):  # noqa: D102
        return CustomAccess(source, self.func)
