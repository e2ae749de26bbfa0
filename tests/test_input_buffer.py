"""Tests for input_buffer.py - the intent mailbox and swipe mapping."""

import pytest

from gridsnake.input_buffer import InputBuffer, direction_from_swipe
from gridsnake.model import Direction


class TestInputBuffer:
    """Tests for the single-slot intent buffer."""

    def test_empty_buffer(self):
        """Nothing buffered yet means no intent."""
        assert InputBuffer().consume_intent() is None

    def test_intent_persists_after_consume(self):
        """Reading the intent does not clear it."""
        buf = InputBuffer()
        buf.set_intent(Direction.LEFT)
        assert buf.consume_intent() is Direction.LEFT
        assert buf.consume_intent() is Direction.LEFT

    def test_latest_intent_wins(self):
        """Only the most recent request before a tick survives."""
        buf = InputBuffer()
        buf.set_intent(Direction.LEFT)
        buf.set_intent(Direction.DOWN)
        buf.set_intent(Direction.RIGHT)
        assert buf.consume_intent() is Direction.RIGHT

    def test_reversals_are_not_filtered_here(self):
        """The buffer stores any real direction; legality is the engine's job."""
        buf = InputBuffer()
        assert buf.set_intent(Direction.DOWN) is True
        assert buf.consume_intent() is Direction.DOWN

    @pytest.mark.parametrize("junk", [None, Direction.NONE, "up", (0, 1), 3])
    def test_junk_is_ignored(self, junk):
        """Malformed input leaves the previous intent in place."""
        buf = InputBuffer()
        buf.set_intent(Direction.UP)
        assert buf.set_intent(junk) is False
        assert buf.consume_intent() is Direction.UP

    def test_clear(self):
        buf = InputBuffer()
        buf.set_intent(Direction.UP)
        buf.clear()
        assert buf.consume_intent() is None


class TestSwipe:
    """Tests for mapping gestures to directions."""

    @pytest.mark.parametrize("dx, dy, expected", [
        (80, 5, Direction.RIGHT),
        (-80, 10, Direction.LEFT),
        (3, 60, Direction.DOWN),
        (-20, -45, Direction.UP),
    ])
    def test_dominant_axis_wins(self, dx, dy, expected):
        """The larger displacement picks the axis, its sign the way."""
        assert direction_from_swipe(dx, dy) is expected

    @pytest.mark.parametrize("dx, dy", [(0, 0), (29, 3), (-30, 0), (10, 30)])
    def test_short_gestures_are_ignored(self, dx, dy):
        """The dominant displacement must exceed 30 units."""
        assert direction_from_swipe(dx, dy) is None

    def test_just_over_threshold(self):
        assert direction_from_swipe(31, 0) is Direction.RIGHT

    def test_diagonal_tie_goes_vertical(self):
        assert direction_from_swipe(50, -50) is Direction.UP

    def test_custom_threshold(self):
        assert direction_from_swipe(12, 0, threshold=10) is Direction.RIGHT
        assert direction_from_swipe(12, 0) is None
