"""
input_buffer.py — Single-slot mailbox between input events and ticks.

Key presses and swipes can land at any moment between two ticks; they
only ever write here. The clock reads the slot once per tick and hands
it to the engine, which decides whether the turn is legal.
"""

import logging
from typing import Optional

from .config import SWIPE_THRESHOLD
from .model import Direction

logger = logging.getLogger(__name__)


class InputBuffer:
    """Holds the most recent directional intent."""

    def __init__(self):
        self._intent: Optional[Direction] = None

    def set_intent(self, direction) -> bool:
        """
        Overwrite the buffered intent. Anything that is not a real
        direction (None, the zero sentinel, a stray value) is ignored.
        Returns True when the intent was stored.
        """
        if not isinstance(direction, Direction) or direction.is_zero():
            logger.debug("Ignoring direction intent %r", direction)
            return False
        self._intent = direction
        return True

    def consume_intent(self) -> Optional[Direction]:
        # Not cleared: an untouched keyboard means "keep going".
        return self._intent

    def clear(self) -> None:
        self._intent = None


def direction_from_swipe(
    dx: float,
    dy: float,
    threshold: float = SWIPE_THRESHOLD,
) -> Optional[Direction]:
    """
    Turn a finished drag/swipe into a direction.

    The axis with the larger displacement wins and must move more than
    `threshold` units, otherwise the gesture counts as a tap and yields None.
    Ties go to the vertical axis.
    """
    if abs(dx) > abs(dy):
        if abs(dx) <= threshold:
            return None
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    if abs(dy) <= threshold:
        return None
    return Direction.DOWN if dy > 0 else Direction.UP
