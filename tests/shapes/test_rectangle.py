"""Tests for RectangleNeighborhood and RectangleCursor."""

import copy
import math

import numpy as np
import pytest

from neighborhoods.errors import (
    DimensionMismatchError,
    InvalidSpanError,
    UnboundSourceError,
)
from neighborhoods.out_of_bounds import (
    OutOfBoundsConstantValueFactory,
    OutOfBoundsMirrorFactory,
    OutOfBoundsPeriodicFactory,
)
from neighborhoods.shapes import RectangleCursor, RectangleNeighborhood


def traverse(nbh):
    """Positions visited by one full cursor traversal."""
    return list(nbh.cursor().iter_positions())


class TestRectangleNeighborhood:
    """Tests for the RectangleNeighborhood class."""

    def test_unbound_initialization(self):
        """An unbound rectangle is a single point at the origin."""
        nbh = RectangleNeighborhood(num_dimensions=3, out_of_bounds=OutOfBoundsPeriodicFactory())
        assert nbh.num_dimensions() == 3
        assert nbh.source is None
        assert nbh.position == (0, 0, 0)
        assert nbh.size() == 1

    def test_unbound_needs_dimensions_and_policy(self):
        """Without a source, dimensionality and policy are required."""
        with pytest.raises(TypeError, match="num_dimensions and out_of_bounds"):
            RectangleNeighborhood(num_dimensions=2)
        with pytest.raises(TypeError):
            RectangleNeighborhood(out_of_bounds=OutOfBoundsPeriodicFactory())

    def test_bound_initialization(self):
        """A bound rectangle takes its dimensionality from the source."""
        factory = OutOfBoundsMirrorFactory()
        nbh = RectangleNeighborhood(np.zeros((4, 5)), factory)
        assert nbh.num_dimensions() == 2
        assert nbh.out_of_bounds is factory
        assert nbh.source.dimensions == (4, 5)

    def test_default_policy_is_periodic(self):
        """A rectangle built from a source alone wraps around."""
        data = np.arange(9).reshape(3, 3)
        nbh = RectangleNeighborhood(data)
        assert isinstance(nbh.out_of_bounds, OutOfBoundsPeriodicFactory)

        nbh.set_span((1, 1))
        nbh.set_position((0, 0))
        assert list(nbh) == [8, 2, 5, 6, 0, 3, 7, 1, 4]
        assert nbh.values().tolist() == [8, 2, 5, 6, 0, 3, 7, 1, 4]

    def test_num_dimensions_must_match_source(self):
        """A dimensionality disagreeing with the source fails fast."""
        with pytest.raises(DimensionMismatchError):
            RectangleNeighborhood(np.zeros((2, 2)), num_dimensions=3)

    @pytest.mark.parametrize(
        "span",
        [(0,), (3,), (0, 0), (1, 1), (2, 0), (0, 3), (1, 2, 3), (2, 0, 1, 1), (0, 0, 0, 0, 0)],
    )
    def test_size_matches_traversal(self, span):
        """size() equals the traversal count, wherever the rectangle sits."""
        nbh = RectangleNeighborhood(num_dimensions=len(span), out_of_bounds=OutOfBoundsPeriodicFactory())
        nbh.set_span(span)

        expected = math.prod(2 * s + 1 for s in span)
        assert nbh.size() == expected
        assert len(nbh) == expected

        at_origin = traverse(nbh)
        assert len(at_origin) == expected
        assert len(set(at_origin)) == expected

        offset = tuple(7 - 5 * d for d in range(len(span)))
        nbh.set_position(offset)
        assert nbh.size() == expected
        moved = traverse(nbh)
        assert len(moved) == expected
        for position in moved:
            assert all(abs(p - c) <= s for p, c, s in zip(position, offset, span))

    def test_size_does_not_overflow(self):
        """Huge spans give the exact product."""
        nbh = RectangleNeighborhood(num_dimensions=4, out_of_bounds=OutOfBoundsPeriodicFactory())
        nbh.set_span((10**6,) * 4)
        assert nbh.size() == 2_000_001**4
        assert nbh.size() > np.iinfo(np.int64).max

    def test_raster_order(self):
        """Axis 0 varies fastest."""
        nbh = RectangleNeighborhood(np.zeros((3, 3)))
        nbh.set_span((1, 1))
        nbh.set_position((0, 0))
        assert traverse(nbh) == [
            (-1, -1), (0, -1), (1, -1),
            (-1, 0), (0, 0), (1, 0),
            (-1, 1), (0, 1), (1, 1),
        ]  # fmt: skip

    def test_raster_order_3d(self):
        """The last axis only moves once the earlier ones wrap."""
        nbh = RectangleNeighborhood(np.zeros((2, 2, 2)))
        nbh.set_span((1, 1, 1))
        positions = traverse(nbh)
        assert positions[:4] == [(-1, -1, -1), (0, -1, -1), (1, -1, -1), (-1, 0, -1)]
        assert positions[9] == (-1, -1, 0)
        assert positions[-1] == (1, 1, 1)

    def test_positions_array(self):
        """positions() lists the traversal as an int array."""
        nbh = RectangleNeighborhood(np.zeros((3, 3)))
        nbh.set_span((1, 0))
        nbh.set_position((5, -2))
        assert nbh.positions().tolist() == [[4, -2], [5, -2], [6, -2]]

    def test_set_span_validation(self):
        """Span length, sign and type are checked."""
        nbh = RectangleNeighborhood(np.zeros((3, 3)))
        with pytest.raises(DimensionMismatchError):
            nbh.set_span((1, 1, 1))
        with pytest.raises(InvalidSpanError, match="non-negative"):
            nbh.set_span((1, -1))
        with pytest.raises(InvalidSpanError, match="integers"):
            nbh.set_span((1.5, 1))
        assert nbh.span.tolist() == [0, 0]

    def test_set_position_validation(self):
        """Center length is checked, magnitude is not."""
        nbh = RectangleNeighborhood(np.zeros((3, 3)))
        with pytest.raises(DimensionMismatchError):
            nbh.set_position((1,))
        nbh.set_position((-10**9, 10**9))
        assert nbh.position == (-10**9, 10**9)

    def test_copy_bound(self):
        """A bound copy shares source and policy, with its own span and center."""
        nbh = RectangleNeighborhood(np.zeros((5, 5)), OutOfBoundsMirrorFactory())
        nbh.set_span((2, 1))
        nbh.set_position((3, 4))

        other = nbh.copy()
        assert isinstance(other, RectangleNeighborhood)
        assert other.source is nbh.source
        assert other.out_of_bounds is nbh.out_of_bounds
        assert other.size() == nbh.size()
        assert other.position == (3, 4)
        assert other.span.tolist() == [2, 1]

        other.set_span((0, 0))
        other.set_position((0, 0))
        assert nbh.span.tolist() == [2, 1]
        assert nbh.position == (3, 4)

        nbh.set_span((1, 1))
        assert other.span.tolist() == [0, 0]

    def test_copy_unbound(self):
        """An unbound copy stays unbound."""
        nbh = RectangleNeighborhood(num_dimensions=2, out_of_bounds=OutOfBoundsPeriodicFactory())
        nbh.set_span((1, 3))
        other = copy.copy(nbh)
        assert other.source is None
        assert other.num_dimensions() == 2
        assert other.span.tolist() == [1, 3]
        assert other.size() == nbh.size() == 21

    def test_update_source(self):
        """Rebinding keeps span, center and size."""
        nbh = RectangleNeighborhood(np.zeros((3, 3)))
        nbh.set_span((1, 2))
        nbh.set_position((1, 1))
        size = nbh.size()

        nbh.update_source(np.ones((6, 6)))
        assert nbh.span.tolist() == [1, 2]
        assert nbh.position == (1, 1)
        assert nbh.size() == size
        assert set(nbh) == {1.0}

        with pytest.raises(DimensionMismatchError):
            nbh.update_source(np.ones(6))

    def test_bounding_box(self):
        """min, max and dimensions describe the bounding box."""
        nbh = RectangleNeighborhood(np.zeros((3, 3)))
        nbh.set_span((1, 2))
        nbh.set_position((4, -1))
        assert (nbh.min(0), nbh.max(0)) == (3, 5)
        assert (nbh.min(1), nbh.max(1)) == (-3, 1)
        assert nbh.dimensions() == (3, 5)

    def test_constant_policy_window_outside_source(self):
        """A window entirely outside the source reads the constant only."""
        nbh = RectangleNeighborhood(np.ones((3, 3)), OutOfBoundsConstantValueFactory(0.0))
        nbh.set_span((1, 1))
        nbh.set_position((100, 100))
        assert list(nbh) == [0.0] * 9
        assert nbh.values().tolist() == [0.0] * 9


class TestRectangleCursor:
    """Tests for the RectangleCursor class."""

    def test_cursor_protocol(self):
        """reset, fwd, has_next and get walk the rectangle once."""
        data = np.arange(9).reshape(3, 3)
        nbh = RectangleNeighborhood(data)
        nbh.set_span((1, 0))
        nbh.set_position((1, 1))

        cursor = nbh.cursor()
        assert isinstance(cursor, RectangleCursor)
        assert len(cursor) == 3

        values = []
        while cursor.has_next():
            cursor.fwd()
            values.append(cursor.get())
        assert values == [data[0, 1], data[1, 1], data[2, 1]]

        with pytest.raises(IndexError, match="exhausted"):
            cursor.fwd()

        cursor.reset()
        assert cursor.next() == data[0, 1]

    def test_cursor_variants_are_equivalent(self):
        """cursor, localizing_cursor and iterator traverse the same positions."""
        nbh = RectangleNeighborhood(np.zeros((3, 3)))
        nbh.set_span((1, 1))
        expected = traverse(nbh)
        assert list(nbh.localizing_cursor().iter_positions()) == expected
        assert list(nbh.iterator().iter_positions()) == expected
        assert nbh.cursor() is not nbh.cursor()

    def test_localize_and_jump(self):
        """jump_fwd advances several steps; localize reports the position."""
        nbh = RectangleNeighborhood(np.zeros((3, 3)))
        nbh.set_span((1, 1))
        cursor = nbh.cursor()
        cursor.jump_fwd(6)
        assert cursor.localize() == (1, 0)
        assert cursor.get_position(0) == 1
        assert cursor.get_position(1) == 0
        assert cursor.num_dimensions() == 2

    def test_copy_is_independent(self):
        """A copied cursor continues from the same state on its own."""
        nbh = RectangleNeighborhood(np.zeros((3, 3)))
        nbh.set_span((1, 1))
        cursor = nbh.cursor()
        cursor.jump_fwd(2)

        other = cursor.copy()
        other.fwd()
        assert cursor.localize() == (0, -1)
        assert other.localize() == (1, -1)

    def test_stale_cursor_keeps_its_snapshot(self):
        """Resizing the owner does not affect a cursor until it is reset."""
        nbh = RectangleNeighborhood(np.zeros((3, 3)))
        nbh.set_span((1, 1))
        cursor = nbh.cursor()
        cursor.fwd()

        nbh.set_span((3, 3))
        count = 1
        while cursor.has_next():
            cursor.fwd()
            count += 1
        assert count == 9

        cursor.reset()
        assert len(list(cursor.iter_positions())) == 49

    def test_unbound_cursor_fails_on_first_read(self):
        """Position enumeration works without a source; reading does not."""
        nbh = RectangleNeighborhood(num_dimensions=2, out_of_bounds=OutOfBoundsPeriodicFactory())
        nbh.set_span((1, 1))
        cursor = nbh.cursor()
        assert len(list(cursor.iter_positions())) == 9

        cursor.reset()
        cursor.fwd()
        with pytest.raises(UnboundSourceError):
            cursor.get()
        with pytest.raises(UnboundSourceError):
            nbh.values()

    def test_python_iteration_resets(self):
        """Iterating a cursor twice yields the same values."""
        nbh = RectangleNeighborhood(np.arange(4).reshape(2, 2), OutOfBoundsMirrorFactory())
        nbh.set_span((1, 1))
        cursor = nbh.cursor()
        first = list(cursor)
        assert len(first) == 9
        assert list(cursor) == first
