"""
frontend.py — pygame front end.

Responsibilities:
  - Own the window and the asyncio main loop the game clock runs on.
  - Translate raw keyboard, mouse-drag and finger-swipe events into
    controller commands.
  - Hand the latest snapshot to the view once per frame.
  - Plug the view and sound board into the controller's events.

This is the only module that pumps pygame events.
"""

import asyncio
import logging
from typing import Optional

import pygame

from .audio import SoundBoard
from .config import (
    AUDIO_CHANNELS, AUDIO_RATE, FPS,
    PHASE_IDLE, PHASE_RUNNING, PHASE_PAUSED, PHASE_OVER,
)
from .controller import GameController
from .model import Direction, Snapshot
from .view import GameView, window_size

logger = logging.getLogger(__name__)

KEY_TO_DIRECTION = {
    pygame.K_UP:    Direction.UP,
    pygame.K_w:     Direction.UP,
    pygame.K_DOWN:  Direction.DOWN,
    pygame.K_s:     Direction.DOWN,
    pygame.K_LEFT:  Direction.LEFT,
    pygame.K_a:     Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d:     Direction.RIGHT,
}


class PygameFrontend:
    """Owns the main loop until the player quits."""

    def __init__(self, cols: int, rows: int, store, mute: bool = False):
        self.cols = cols
        self.rows = rows
        self.store = store
        self.mute = mute
        self.controller: Optional[GameController] = None
        self.view: Optional[GameView] = None
        self.audio: Optional[SoundBoard] = None
        self._snapshot: Optional[Snapshot] = None
        self._press_at: Optional[tuple[float, float]] = None
        self._running = False

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        asyncio.run(self._main())

    async def _main(self) -> None:
        # pygame.init opens the mixer; fix its format before that happens.
        pygame.mixer.pre_init(AUDIO_RATE, -16, AUDIO_CHANNELS)
        pygame.init()
        screen = pygame.display.set_mode(window_size(self.cols, self.rows))
        pygame.display.set_caption("Snake")

        self.bind(GameController(
            asyncio.get_running_loop(), self.store, self.cols, self.rows,
        ))
        self.view = GameView(screen)
        self.view.attach(self.controller)
        self.audio = SoundBoard(enabled=not self.mute)
        self.audio.attach(self.controller)
        self.audio.play_music()
        logger.info("Window open, %dx%d board", self.cols, self.rows)
        try:
            while self._running:
                self._handle_events()
                self.view.render(self._snapshot)
                await asyncio.sleep(1 / FPS)
        finally:
            self.controller.shutdown()
            self.audio.close()
            pygame.quit()

    # ── Controller events ─────────────────────────────────────────
    def bind(self, controller: GameController) -> None:
        """Route input to `controller` and follow its snapshots."""
        self.controller = controller
        controller.subscribe("tick", self._on_tick)
        controller.subscribe("phase_changed", self._on_phase_changed)
        self._snapshot = controller.snapshot()
        self._running = True

    def _on_tick(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot

    def _on_phase_changed(self, _phase: str) -> None:
        self._snapshot = self.controller.snapshot()

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            self._handle_event(event)

    def _handle_event(self, event) -> None:
        if event.type == pygame.QUIT:
            self._running = False
        elif event.type == pygame.KEYDOWN:
            self._handle_keydown(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN and not getattr(event, "touch", False):
            self._press(*event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and not getattr(event, "touch", False):
            self._release(*event.pos)
        elif event.type == pygame.FINGERDOWN:
            self._press(*self._finger_pos(event))
        elif event.type == pygame.FINGERUP:
            self._release(*self._finger_pos(event))

    def _handle_keydown(self, key: int) -> None:
        # Q / Esc quit from any phase
        if key in (pygame.K_q, pygame.K_ESCAPE):
            self._running = False
            return

        phase = self.controller.phase

        if phase == PHASE_IDLE:
            self._handle_idle_keys(key)
        elif phase == PHASE_RUNNING:
            self._handle_running_keys(key)
        elif phase == PHASE_PAUSED:
            self._handle_paused_keys(key)
        elif phase == PHASE_OVER:
            self._handle_over_keys(key)

    # ── Per-phase key handlers ────────────────────────────────────
    def _handle_idle_keys(self, key: int) -> None:
        if key in (pygame.K_RETURN, pygame.K_SPACE):
            self.controller.start()

    def _handle_running_keys(self, key: int) -> None:
        if key in KEY_TO_DIRECTION:
            self.controller.set_direction_intent(KEY_TO_DIRECTION[key])
        elif key == pygame.K_p:
            self.controller.pause()
        elif key == pygame.K_r:
            self.controller.restart()

    def _handle_paused_keys(self, key: int) -> None:
        if key in (pygame.K_p, pygame.K_SPACE):
            self.controller.resume()
        elif key == pygame.K_r:
            self.controller.restart()

    def _handle_over_keys(self, key: int) -> None:
        if key in (pygame.K_r, pygame.K_SPACE, pygame.K_RETURN):
            self.controller.restart()

    # ── Pointer gestures ──────────────────────────────────────────
    def _finger_pos(self, event) -> tuple[float, float]:
        w, h = pygame.display.get_surface().get_size()
        return event.x * w, event.y * h

    def _press(self, x: float, y: float) -> None:
        self._press_at = (x, y)
        phase = self.controller.phase
        if phase == PHASE_IDLE:
            self.controller.start()
        elif phase == PHASE_OVER:
            self.controller.restart()

    def _release(self, x: float, y: float) -> None:
        if self._press_at is None:
            return
        sx, sy = self._press_at
        self._press_at = None
        self.controller.swipe(x - sx, y - sy)
