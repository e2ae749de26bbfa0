"""
clock.py — Tick scheduling.

The clock runs on the same asyncio loop as the pygame event pump, so
ticks, input and rendering never overlap. Exactly one tick is pending
at any time; the next one is only booked after the current tick's
simulation and render work has returned.
"""

import logging
from typing import Callable

from .config import (
    BASE_INTERVAL_MS, SPEED_STEP_MS, SCORE_PER_SPEEDUP, MIN_INTERVAL_MS,
)

logger = logging.getLogger(__name__)


def tick_interval_ms(score: int) -> int:
    """Milliseconds between ticks: 5 ms faster per 50 points, never under 50 ms."""
    return max(MIN_INTERVAL_MS, BASE_INTERVAL_MS - (score // SCORE_PER_SPEEDUP) * SPEED_STEP_MS)


class GameClock:
    """
    Drives `on_tick` at a cadence derived from `score()`.

    `on_tick` returns True to keep the clock going. Returning False (game
    over) or calling stop() leaves nothing scheduled.
    """

    def __init__(
        self,
        loop,
        on_tick: Callable[[], bool],
        score: Callable[[], int],
        interval: Callable[[int], int] = tick_interval_ms,
    ):
        self._loop = loop
        self._on_tick = on_tick
        self._score = score
        self._interval = interval
        self._handle = None
        self._running: bool = False

    # ── Accessors ────────────────────────────────────────────────
    @property
    def running(self) -> bool:
        return self._running

    @property
    def pending(self) -> bool:
        return self._handle is not None

    # ── Commands ─────────────────────────────────────────────────
    def start(self) -> None:
        """Tick right away, then keep ticking. Missed ticks are not replayed."""
        self._cancel()
        self._running = True
        self._handle = self._loop.call_soon(self._fire)

    def stop(self) -> None:
        self._running = False
        self._cancel()

    # ── Private helpers ──────────────────────────────────────────
    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        if not self._running:
            return
        keep_going = self._on_tick()
        # on_tick may have stopped or restarted the clock itself.
        if not self._running or self._handle is not None:
            return
        if keep_going:
            self._schedule_next()
        else:
            self._running = False

    def _schedule_next(self) -> None:
        delay_ms = self._interval(self._score())
        logger.debug("Next tick in %d ms", delay_ms)
        self._handle = self._loop.call_later(delay_ms / 1000.0, self._fire)
