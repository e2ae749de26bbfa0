"""Shared fixtures: a hand-cranked event loop and a predictable food placer."""

import os
import random

# pygame reads these when a subsystem starts; keep the suite headless.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from gridsnake.model import RandomFoodPlacer


class FakeHandle:
    def __init__(self, when: float, seq: int, callback):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeLoop:
    """Just enough of asyncio's loop for the clock: call_soon / call_later."""

    def __init__(self):
        self.now = 0.0
        self._seq = 0
        self._handles: list[FakeHandle] = []

    def call_soon(self, callback):
        return self.call_later(0, callback)

    def call_later(self, delay: float, callback):
        self._seq += 1
        handle = FakeHandle(self.now + delay, self._seq, callback)
        self._handles.append(handle)
        return handle

    def pending(self) -> list[FakeHandle]:
        return [h for h in self._handles if not h.cancelled]

    def advance(self, seconds: float) -> None:
        """Run every callback due within the next `seconds`, in time order."""
        target = self.now + seconds + 1e-9
        while True:
            due = [h for h in self.pending() if h.when <= target]
            if not due:
                break
            handle = min(due, key=lambda h: (h.when, h.seq))
            self._handles.remove(handle)
            self.now = max(self.now, handle.when)
            handle.callback()
        self.now = max(self.now, target)


class FixedFoodPlacer(RandomFoodPlacer):
    """Puts food on the first free in-bounds cell of `cells`, randomly after that."""

    def __init__(self, *cells):
        super().__init__(random.Random(7))
        self.cells = list(cells)

    def place(self, width, height, occupied):
        for x, y in self.cells:
            if (x, y) not in occupied and 0 <= x < width and 0 <= y < height:
                return (x, y)
        return super().place(width, height, occupied)


@pytest.fixture
def loop():
    return FakeLoop()


@pytest.fixture
def corner_food():
    """Food parked in the bottom-left corner, away from the starting column."""
    return FixedFoodPlacer((0, 19))


@pytest.fixture
def food_at():
    """Factory for placers that drop food on chosen cells."""
    return FixedFoodPlacer
