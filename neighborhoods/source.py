"""Bounded array access over numpy arrays.

ArraySource is the thin accessor neighborhoods read from. It keeps a
reference to the wrapped array (no copy), exposes its dimensionality and
answers "value at integer coordinate vector" for in-bounds coordinates only.
Anything outside the array is the business of an out-of-bounds policy.
"""

import warnings
from collections.abc import Sequence
from typing import Any

import numpy as np

from neighborhoods.errors import OutOfBoundsError
from neighborhoods.protocols import BoundedSource, Coordinate


class ArraySource:
    """A bounded, N-dimensional source of values backed by a NumPy array.

    Attributes:
        data: The wrapped NumPy array. It is shared, never copied.
        dimensions: The shape of the array.
    """

    def __init__(self, data: np.ndarray):
        """Wrap an existing array.

        Args:
            data: an array with at least one dimension.
        """
        data = np.asarray(data)
        if data.ndim < 1:
            raise ValueError("A source needs at least one dimension.")
        self.data = data

    @classmethod
    def from_shape(
        cls, dimensions: Sequence[int], default_value=0.0, dtype=float
    ) -> "ArraySource":
        """Allocate a new source filled with a default value.

        Args:
            dimensions: the shape of the new array.
            default_value: The value every element starts with. Should ideally
                           be of the same type as specified by the dtype parameter.
            dtype (data-type, optional): The desired data-type for the elements. Default is float.

        Notes:
            An exception is raised if the default_value is not of a type compatible with dtype.
            A UserWarning is raised if the conversion would result in a loss of precision.
        """
        try:
            if dtype(default_value) != default_value:
                warnings.warn(
                    f"Default value {default_value} will lose precision when converted to {dtype.__name__}.",
                    UserWarning,
                    stacklevel=2,
                )
        except (ValueError, TypeError) as e:
            raise TypeError(
                f"Default value {default_value} is incompatible with dtype={dtype.__name__}."
            ) from e

        return cls(np.full(tuple(dimensions), default_value, dtype=dtype))

    @property
    def dimensions(self) -> tuple[int, ...]:
        """The extent of the source along every axis."""
        return self.data.shape

    def num_dimensions(self) -> int:
        """The number of axes of the source."""
        return self.data.ndim

    def in_bounds(self, position: Coordinate) -> bool:
        """Whether ``position`` lies inside the array."""
        return len(position) == self.data.ndim and all(
            0 <= p < d for p, d in zip(position, self.data.shape)
        )

    # NumPy Array Interface

    def __array__(self, dtype=None, copy=None):
        """Allow the source to be passed directly to NumPy functions."""
        return np.array(self.data, dtype=dtype, copy=copy)

    def __getitem__(self, position: Coordinate) -> Any:
        """Value at an in-bounds coordinate vector."""
        position = tuple(int(p) for p in position)
        if not self.in_bounds(position):
            raise OutOfBoundsError(position, self.dimensions)
        return self.data[position]

    def __setitem__(self, position: Coordinate, value):
        """Write a value at an in-bounds coordinate vector."""
        position = tuple(int(p) for p in position)
        if not self.in_bounds(position):
            raise OutOfBoundsError(position, self.dimensions)
        self.data[position] = value

    def __len__(self):
        """Return the number of elements in the source."""
        return self.data.size

    def __repr__(self):  # noqa: D105
        return f"{type(self).__name__}(dimensions={self.dimensions}, dtype={self.data.dtype})"


def as_source(obj) -> BoundedSource:
    """Return ``obj`` as something a neighborhood can read from.

    ArraySources and objects satisfying :class:`BoundedSource` are returned
    as is, anything else goes through ``np.asarray`` into an ArraySource.
    """
    if isinstance(obj, ArraySource | BoundedSource):
        return obj
    return ArraySource(np.asarray(obj))
