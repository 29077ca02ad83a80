"""Exception hierarchy for neighborhoods.

Every error raised here is a precondition violation made by the caller. None
of them is transient, so nothing in the package retries or suppresses them.
Reading outside a source through an out-of-bounds policy is *not* an error.
"""

import neighborhoods


class NeighborhoodError(Exception):
    """Base class for all neighborhoods-specific exceptions.

    It automatically prepends the package version to help with debugging reports.
    """

    def __init__(self, message: str):
        self.package_version = getattr(neighborhoods, "__version__", "unknown")
        # Store the original message cleanly for programmatic access
        self.original_message = message
        full_message = f"[neighborhoods {self.package_version}] {message}"
        super().__init__(full_message)


class DimensionMismatchError(NeighborhoodError, ValueError):
    """Raised when a span, center or source disagrees with the fixed dimensionality."""

    def __init__(self, expected, actual, what: str = "argument"):
        self.expected = expected
        self.actual = actual
        message = f"Expected {what} of dimensionality {expected}, got {actual}."
        super().__init__(message)


class ShapeDimensionError(DimensionMismatchError):
    """Raised when a shape only defined in some dimensionality is built in another.

    Example: an ellipse neighborhood over a 3D source.
    """

    def __init__(self, shape: str, expected, actual):
        self.shape = shape
        super().__init__(expected, actual, what=f"source for {shape}")


class InvalidSpanError(NeighborhoodError, ValueError):
    """Raised when a half-extent is negative or not an integer."""

    def __init__(self, span, reason: str = "must be non-negative integers"):
        self.span = span
        super().__init__(f"Invalid span {span}: {reason}.")


class UnboundSourceError(NeighborhoodError):
    """Raised when a value is read from a neighborhood that has no source."""

    def __init__(self, position=None):
        self.position = position
        if position is None:
            message = "Neighborhood is not bound to a source."
        else:
            message = f"Cannot read value at {position}: neighborhood is not bound to a source."
        super().__init__(message)


class OutOfBoundsError(NeighborhoodError, IndexError):
    """Raised when a bounded source is read directly outside its dimensions."""

    def __init__(self, pos, dimensions):
        self.pos = pos
        self.dimensions = dimensions
        message = f"Position {pos} is out of bounds for source dimensions {dimensions}."
        super().__init__(message)
