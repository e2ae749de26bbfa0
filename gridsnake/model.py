"""
model.py — Model layer.

Owns ALL game state and rules. Zero rendering, zero input handling,
zero timing. One SimulationEngine is built per game and thrown away
on restart, so nothing leaks from one game into the next.

Classes:
    Direction         — immutable (dx, dy) value object
    RandomFoodPlacer  — picks a free cell for the food
    Snapshot          — read-only view of a game for collaborators
    TickResult        — phase + events produced by one advance()
    SimulationEngine  — snake, food, score, phase; the per-tick transition
"""

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import ClassVar, Optional

from .config import (
    START_LENGTH, POINTS_PER_FOOD,
    PHASE_RUNNING, PHASE_PAUSED, PHASE_OVER,
)

logger = logging.getLogger(__name__)

Cell = tuple[int, int]


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction."""
    LEFT  = None  # filled below after class definition
    RIGHT = None
    UP    = None
    DOWN  = None
    NONE  = None  # "not moving yet" sentinel

    __slots__ = ("x", "y")

    def __init__(self, x: int, y: int):
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    def __setattr__(self, name, value):
        raise AttributeError("Direction is immutable")

    def is_opposite(self, other: "Direction") -> bool:
        return self.x == -other.x and self.y == -other.y

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    @classmethod
    def from_name(cls, name: str) -> Optional["Direction"]:
        """Map 'up' / 'DOWN' / ... to a direction; None when unrecognised."""
        if not isinstance(name, str):
            return None
        return _BY_NAME.get(name.strip().upper())

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction({self.x}, {self.y})"


Direction.LEFT  = Direction(-1,  0)
Direction.RIGHT = Direction( 1,  0)
Direction.UP    = Direction( 0, -1)
Direction.DOWN  = Direction( 0,  1)
Direction.NONE  = Direction( 0,  0)
ALL_DIRS = [Direction.RIGHT, Direction.LEFT, Direction.DOWN, Direction.UP]

_BY_NAME = {
    "UP": Direction.UP,
    "DOWN": Direction.DOWN,
    "LEFT": Direction.LEFT,
    "RIGHT": Direction.RIGHT,
}


# ─────────────────────────── Food placement ──────────────────────
class RandomFoodPlacer:
    """
    Uniform choice among free cells by rejection sampling.

    The caller guarantees at least one free cell; breaking that is a
    programming error and trips the assertion instead of spinning forever.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def place(self, width: int, height: int, occupied) -> Cell:
        taken = sum(1 for (x, y) in occupied if 0 <= x < width and 0 <= y < height)
        assert taken < width * height, "no free cell left for food"
        while True:
            pos = (self.rng.randrange(width), self.rng.randrange(height))
            if pos not in occupied:
                return pos


# ─────────────────────────── Events ──────────────────────────────
@dataclass(frozen=True)
class DirectionChanged:
    name: ClassVar[str] = "direction_changed"


@dataclass(frozen=True)
class FoodEaten:
    cell: Cell
    score: int
    name: ClassVar[str] = "food_eaten"


@dataclass(frozen=True)
class NewHighScore:
    value: int
    name: ClassVar[str] = "new_high_score"


@dataclass(frozen=True)
class GameOver:
    final_score: int
    name: ClassVar[str] = "game_over"


# ─────────────────────────── Snapshots ───────────────────────────
@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer may look at. Never aliases engine internals."""
    snake: tuple[Cell, ...]
    food: Cell
    score: int
    high_score: int
    phase: str
    direction: Direction
    width: int
    height: int

    @property
    def head(self) -> Cell:
        return self.snake[0]


@dataclass(frozen=True)
class TickResult:
    phase: str
    events: tuple = ()


# ─────────────────────────── SimulationEngine ────────────────────
class SimulationEngine:
    """
    Authoritative state of one game and its one-tick transition.

    The controller calls advance() once per clock tick with whatever
    direction the input buffer currently holds.
    """

    def __init__(
        self,
        width: int,
        height: int,
        high_score: int = 0,
        placer: Optional[RandomFoodPlacer] = None,
    ):
        self.placer = placer or RandomFoodPlacer()
        self.high_score: int = high_score
        self.initialize(width, height)

    # ── Setup ────────────────────────────────────────────────────
    def initialize(self, width: int, height: int) -> None:
        """Fresh 3-segment snake at the centre heading up, score 0, running."""
        if width < 1 or height < 1:
            raise ValueError(f"grid must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        cx, cy = width // 2, height // 2
        self.body: deque[Cell] = deque((cx, cy + i) for i in range(START_LENGTH))
        self.direction: Direction = Direction.UP
        self.score: int = 0
        self.phase: str = PHASE_RUNNING
        self.food: Cell = self.placer.place(width, height, set(self.body))

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> Cell:
        return self.body[0]

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def current_state(self) -> Snapshot:
        return Snapshot(
            snake=tuple(self.body),
            food=self.food,
            score=self.score,
            high_score=self.high_score,
            phase=self.phase,
            direction=self.direction,
            width=self.width,
            height=self.height,
        )

    # ── Commands ─────────────────────────────────────────────────
    def pause(self) -> bool:
        if self.phase != PHASE_RUNNING:
            return False
        self.phase = PHASE_PAUSED
        return True

    def resume(self) -> bool:
        if self.phase != PHASE_PAUSED:
            return False
        self.phase = PHASE_RUNNING
        return True

    def advance(self, requested: Optional[Direction] = None) -> TickResult:
        """
        Move the snake one cell.

        Reversals of the committed direction are dropped, as are None and
        the zero sentinel; the snake then keeps going straight. Hitting a
        wall or any body cell, the current tail included, ends the game.
        """
        if self.phase != PHASE_RUNNING:
            return TickResult(self.phase)

        events = []
        if (
            requested is not None
            and not requested.is_zero()
            and not requested.is_opposite(self.direction)
            and requested != self.direction
        ):
            self.direction = requested
            events.append(DirectionChanged())

        hx, hy = self.head
        new_head = (hx + self.direction.x, hy + self.direction.y)

        if not self.in_bounds(new_head) or new_head in self.body:
            self.phase = PHASE_OVER
            events.append(GameOver(self.score))
            logger.info("Game over at %s with score %d", new_head, self.score)
            return TickResult(self.phase, tuple(events))

        self.body.appendleft(new_head)
        if new_head == self.food:
            self.score += POINTS_PER_FOOD
            events.append(FoodEaten(new_head, self.score))
            if self.score > self.high_score:
                self.high_score = self.score
                events.append(NewHighScore(self.high_score))
            self.food = self.placer.place(self.width, self.height, set(self.body))
            logger.debug("Ate food at %s, score %d, next food %s",
                         new_head, self.score, self.food)
        else:
            self.body.pop()

        return TickResult(self.phase, tuple(events))
