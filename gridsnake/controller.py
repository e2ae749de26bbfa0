"""
controller.py — Controller layer.

Responsibilities:
  - Own the SimulationEngine of the current game and replace it on restart.
  - Own the best score across games and persist it on improvement.
  - Drive the engine from the GameClock, feeding it the InputBuffer.
  - Publish engine events to whoever subscribed (view, audio, HUD).
  - Know nothing about pygame, drawing or sound (frontend/view/audio do).

Published events and the single argument handlers receive:
    direction_changed  DirectionChanged
    food_eaten         FoodEaten(cell, score)
    new_high_score     NewHighScore(value)
    game_over          GameOver(final_score)
    tick               Snapshot, after every tick
    phase_changed      the new phase name
"""

import dataclasses
import logging
from collections import defaultdict
from typing import Callable, Optional

from .clock import GameClock
from .config import (
    COLS, ROWS,
    PHASE_IDLE, PHASE_RUNNING, PHASE_PAUSED, PHASE_OVER,
)
from .highscore import MemoryHighScoreStore
from .input_buffer import InputBuffer, direction_from_swipe
from .model import Direction, GameOver, RandomFoodPlacer, SimulationEngine, Snapshot

logger = logging.getLogger(__name__)

EVENTS = (
    "direction_changed",
    "food_eaten",
    "new_high_score",
    "game_over",
    "tick",
    "phase_changed",
)


class GameController:
    """
    Top-level orchestrator.
    Glues input, clock and engine without them knowing about each other.
    """

    def __init__(
        self,
        loop,
        store=None,
        width: int = COLS,
        height: int = ROWS,
        placer: Optional[RandomFoodPlacer] = None,
    ):
        self.width = width
        self.height = height
        self.placer = placer or RandomFoodPlacer()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.high_score: int = self.store.read()
        self.engine: Optional[SimulationEngine] = None
        self.input = InputBuffer()
        self.clock = GameClock(loop, self._tick, self._current_score)
        self._handlers: dict[str, list[Callable]] = defaultdict(list)
        self._preview: Optional[Snapshot] = None

    # ── Subscriptions ─────────────────────────────────────────────
    def subscribe(self, event: str, handler: Callable) -> None:
        if event not in EVENTS:
            raise ValueError(f"Unknown event: {event}")
        self._handlers[event].append(handler)

    def _publish(self, event: str, payload) -> None:
        for handler in self._handlers[event]:
            handler(payload)

    # ── Queries ───────────────────────────────────────────────────
    @property
    def phase(self) -> str:
        return PHASE_IDLE if self.engine is None else self.engine.phase

    def snapshot(self) -> Snapshot:
        """Current game, or a board waiting to be started while idle."""
        if self.engine is not None:
            return self.engine.current_state()
        if self._preview is None:
            board = SimulationEngine(self.width, self.height, self.high_score, self.placer)
            self._preview = dataclasses.replace(board.current_state(), phase=PHASE_IDLE)
        return self._preview

    # ── Commands ──────────────────────────────────────────────────
    def start(self) -> bool:
        if self.phase != PHASE_IDLE:
            return False
        self._new_game()
        return True

    def restart(self) -> None:
        """Throw the current game away and begin a fresh one."""
        self._new_game()

    def pause(self) -> bool:
        if self.engine is None or not self.engine.pause():
            return False
        self.clock.stop()
        self._set_phase(PHASE_PAUSED)
        return True

    def resume(self) -> bool:
        if self.engine is None or not self.engine.resume():
            return False
        self._set_phase(PHASE_RUNNING)
        self.clock.start()
        return True

    def toggle_pause(self) -> bool:
        if self.phase == PHASE_PAUSED:
            return self.resume()
        return self.pause()

    def set_direction_intent(self, direction) -> bool:
        """Buffer a turn for the next tick. Accepts a Direction or its name."""
        if isinstance(direction, str):
            direction = Direction.from_name(direction)
        if self.phase != PHASE_RUNNING:
            return False
        return self.input.set_intent(direction)

    def swipe(self, dx: float, dy: float) -> bool:
        direction = direction_from_swipe(dx, dy)
        if direction is None:
            return False
        return self.set_direction_intent(direction)

    def shutdown(self) -> None:
        self.clock.stop()

    # ── Private helpers ───────────────────────────────────────────
    def _new_game(self) -> None:
        self.clock.stop()
        self.engine = SimulationEngine(self.width, self.height, self.high_score, self.placer)
        self.input = InputBuffer()
        self._preview = None
        self._set_phase(PHASE_RUNNING)
        self.clock.start()

    def _set_phase(self, phase: str) -> None:
        logger.info("Phase -> %s", phase)
        self._publish("phase_changed", phase)

    def _current_score(self) -> int:
        return self.engine.score if self.engine is not None else 0

    def _tick(self) -> bool:
        engine = self.engine
        result = engine.advance(self.input.consume_intent())
        # Record first, so a handler that restarts carries it into the new game.
        if engine.high_score > self.high_score:
            self.high_score = engine.high_score
            self.store.write(self.high_score)
            logger.info("New high score: %d", self.high_score)
        for event in result.events:
            if isinstance(event, GameOver):
                self._set_phase(PHASE_OVER)
            self._publish(event.name, event)
        # A handler may already have replaced the game.
        if self.engine is engine:
            self._publish("tick", engine.current_state())
        return result.phase == PHASE_RUNNING
