"""
view.py — View layer.

Draws a Snapshot; never touches the engine. Cosmetics that live between
ticks (food pulse, particle bursts, score pop, screen shake) are kept
here and advanced once per rendered frame.

Public API:
    window_size(cols, rows)   — pixel size of the window for a board
    GameView(screen)          — bind to a pygame surface
    view.attach(controller)   — subscribe to bursts / shake triggers
    view.render(snapshot)     — draw the current frame
"""

import math
import random

import pygame

from .config import (
    PANEL_H, MARGIN, CELL,
    BG, GRID_COL, SNAKE_COL, SNAKE_DIM, FOOD_COL, SCORE_HOT, UI_COL, BLACK,
    PANEL_BG, BORDER_COL,
    PARTICLE_FOOD_COUNT, SHAKE_MS,
    PHASE_IDLE, PHASE_OVER, PHASE_PAUSED,
)
from .model import FoodEaten, Snapshot


def window_size(cols: int, rows: int) -> tuple[int, int]:
    return cols * CELL + 2 * MARGIN, PANEL_H + rows * CELL + 2 * MARGIN


# ─────────────────────── colour helpers ──────────────────────────
def _lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    t = max(0.0, min(1.0, t))
    return tuple(int(c1[i] + (c2[i] - c1[i]) * t) for i in range(3))


def _with_alpha(color: tuple, alpha: int) -> tuple:
    return (*color[:3], max(0, min(255, alpha)))


def _brighten(color: tuple, factor: float) -> tuple:
    return tuple(min(255, int(c * factor)) for c in color[:3])


# ─────────────────────────── Particle ────────────────────────────
class Particle:
    """Visual-only spark thrown out when food is eaten."""

    def __init__(self, x: float, y: float, color: tuple):
        self.x = x
        self.y = y
        self.vx = (random.random() - 0.5) * 8
        self.vy = (random.random() - 0.5) * 8
        self.life: float = 1.0
        self.size: float = random.random() * 4 + 2
        self.color = color

    @property
    def alive(self) -> bool:
        return self.life > 0

    def update(self) -> None:
        self.x += self.vx
        self.y += self.vy
        self.life -= 0.05
        self.size *= 0.9


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders the complete game frame from a Snapshot."""

    # ── Construction ─────────────────────────────────────────────
    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.width, self.height = screen.get_size()
        self.scene = pygame.Surface((self.width, self.height))
        self._init_fonts()
        self._grid_surf = None
        self._grid_dims = None
        self.particles: list[Particle] = []
        self._shake_until: int = 0
        self._score_pop: float = 0.0
        self._controller = None
        self._engine = None

    def attach(self, controller) -> None:
        self._controller = controller
        controller.subscribe("food_eaten", self.burst)
        controller.subscribe("game_over", lambda _event: self.shake())
        controller.subscribe("phase_changed", self._on_phase_changed)

    # ── Triggers ─────────────────────────────────────────────────
    def burst(self, event: FoodEaten) -> None:
        x, y = self._cell_center(event.cell)
        for _ in range(PARTICLE_FOOD_COUNT):
            self.particles.append(Particle(x, y, FOOD_COL))
        self._score_pop = 1.0

    def shake(self) -> None:
        self._shake_until = pygame.time.get_ticks() + SHAKE_MS

    def _on_phase_changed(self, phase: str) -> None:
        if phase not in (PHASE_OVER, PHASE_PAUSED):
            self._shake_until = 0
        # Sparks survive a pause but not a new game.
        engine = self._controller.engine if self._controller is not None else None
        if phase == PHASE_IDLE or engine is not self._engine:
            self.particles = []
        self._engine = engine

    # ── Main entry ───────────────────────────────────────────────
    def render(self, snap: Snapshot) -> None:
        now = pygame.time.get_ticks()
        self._update_particles()
        self._score_pop = max(0.0, self._score_pop - 0.1)

        scene = self.scene
        scene.fill(BG)
        scene.blit(self._grid_for(snap), (MARGIN, PANEL_H + MARGIN))

        self._draw_particles()
        if snap.phase != PHASE_IDLE:
            self._draw_snake(snap)
        self._draw_food(snap.food, now)
        self._draw_border(snap)
        self._draw_panel(snap)

        if snap.phase == PHASE_IDLE:
            self._draw_idle_overlay(now)
        elif snap.phase == PHASE_PAUSED:
            self._draw_paused_overlay(now)
        elif snap.phase == PHASE_OVER:
            self._draw_game_over_overlay(snap, now)

        self.screen.fill(BLACK)
        self.screen.blit(scene, self._shake_offset(now))
        pygame.display.flip()

    # ── Geometry ─────────────────────────────────────────────────
    @staticmethod
    def _cell_center(cell: tuple[int, int]) -> tuple[int, int]:
        return (MARGIN + cell[0] * CELL + CELL // 2,
                PANEL_H + MARGIN + cell[1] * CELL + CELL // 2)

    def _shake_offset(self, now: int) -> tuple[int, int]:
        if now >= self._shake_until:
            return 0, 0
        strength = 6 * (self._shake_until - now) / SHAKE_MS
        return (int(math.sin(now * 0.09) * strength),
                int(math.cos(now * 0.13) * strength))

    # ── Static surface pre-builds ─────────────────────────────────
    def _grid_for(self, snap: Snapshot) -> pygame.Surface:
        dims = (snap.width, snap.height)
        if self._grid_surf is None or self._grid_dims != dims:
            game_w, game_h = snap.width * CELL, snap.height * CELL
            surf = pygame.Surface((game_w, game_h), pygame.SRCALPHA)
            for x in range(snap.width + 1):
                pygame.draw.line(surf, GRID_COL, (x * CELL, 0), (x * CELL, game_h))
            for y in range(snap.height + 1):
                pygame.draw.line(surf, GRID_COL, (0, y * CELL), (game_w, y * CELL))
            self._grid_surf, self._grid_dims = surf, dims
        return self._grid_surf

    # ── Food ─────────────────────────────────────────────────────
    def _draw_food(self, food: tuple[int, int], now: int) -> None:
        pulse = math.sin(now / 200) * 2
        r = max(2, int(CELL / 2 - 2 + pulse / 4))
        x, y = self._cell_center(food)

        glow_r = r + int(10 + pulse)
        glow = pygame.Surface((glow_r * 2, glow_r * 2), pygame.SRCALPHA)
        for gr in range(glow_r, r, -1):
            a = int(90 * (1 - (gr - r) / max(1, glow_r - r)))
            pygame.draw.circle(glow, _with_alpha(FOOD_COL, a), (glow_r, glow_r), gr)
        self.scene.blit(glow, (x - glow_r, y - glow_r))
        pygame.draw.circle(self.scene, FOOD_COL, (x, y), r)

    # ── Snake ────────────────────────────────────────────────────
    def _draw_snake(self, snap: Snapshot) -> None:
        length = len(snap.snake)
        hx, hy = self._cell_center(snap.head)

        # Head glow first, additive
        glow_size = 20
        glow = pygame.Surface((glow_size * 2, glow_size * 2), pygame.SRCALPHA)
        for gr in range(glow_size, 0, -2):
            a = int(30 * (gr / glow_size) ** 0.6)
            pygame.draw.circle(glow, _with_alpha(SNAKE_COL, a), (glow_size, glow_size), gr)
        self.scene.blit(glow, (hx - glow_size, hy - glow_size),
                        special_flags=pygame.BLEND_RGBA_ADD)

        for i, (sx, sy) in reversed(list(enumerate(snap.snake))):
            rect = pygame.Rect(MARGIN + sx * CELL + 1,
                               PANEL_H + MARGIN + sy * CELL + 1,
                               CELL - 2, CELL - 2)
            if i == 0:
                pygame.draw.rect(self.scene, SNAKE_COL, rect, border_radius=CELL // 4)
                hi = pygame.Rect(rect.x + 2, rect.y + 2, rect.w - 4, max(2, rect.h // 3))
                pygame.draw.rect(self.scene, _brighten(SNAKE_COL, 1.3), hi, border_radius=2)
            else:
                fade = 1 - i / (length + 8)
                color = _lerp_color(SNAKE_DIM, SNAKE_COL, fade)
                pygame.draw.rect(self.scene, color, rect, border_radius=CELL // 6)

        self._draw_eyes(snap)

    def _draw_eyes(self, snap: Snapshot) -> None:
        cx, cy = self._cell_center(snap.head)
        dx, dy = snap.direction.x, snap.direction.y
        px, py = -dy, dx  # perpendicular
        for sign in (+1, -1):
            ex = int(cx + dx * 4 + sign * px * 4)
            ey = int(cy + dy * 4 + sign * py * 4)
            pygame.draw.rect(self.scene, (230, 230, 230), (ex - 2, ey - 2, 4, 4))
            pygame.draw.rect(self.scene, BLACK, (ex - 1, ey - 1, 2, 2))

    # ── Particles ────────────────────────────────────────────────
    def _update_particles(self) -> None:
        for p in self.particles:
            p.update()
        self.particles = [p for p in self.particles if p.alive]

    def _draw_particles(self) -> None:
        for p in self.particles:
            size = max(1, int(p.size))
            s = pygame.Surface((size * 2, size * 2), pygame.SRCALPHA)
            pygame.draw.circle(s, _with_alpha(p.color, int(p.life * 255)), (size, size), size)
            self.scene.blit(s, (int(p.x) - size, int(p.y) - size))

    # ── Border ───────────────────────────────────────────────────
    def _draw_border(self, snap: Snapshot) -> None:
        pygame.draw.rect(self.scene, BORDER_COL,
                         (MARGIN - 1, PANEL_H + MARGIN - 1,
                          snap.width * CELL + 2, snap.height * CELL + 2), 1)

    # ── HUD Panel ─────────────────────────────────────────────────
    def _draw_panel(self, snap: Snapshot) -> None:
        pygame.draw.rect(self.scene, PANEL_BG, (0, 0, self.width, PANEL_H))
        pygame.draw.line(self.scene, BORDER_COL,
                         (0, PANEL_H - 1), (self.width, PANEL_H - 1), 1)

        score_col = _lerp_color(SNAKE_COL, SCORE_HOT, self._score_pop)
        self.scene.blit(self.font_small.render("SCORE", True, UI_COL), (16, 6))
        score_font = self.font_pop if self._score_pop > 0.5 else self.font_big
        self.scene.blit(score_font.render(str(snap.score), True, score_col), (16, 22))

        best = self.font_small.render("BEST", True, UI_COL)
        self.scene.blit(best, best.get_rect(topright=(self.width - 16, 6)))
        value = self.font_big.render(str(snap.high_score), True, SCORE_HOT)
        self.scene.blit(value, value.get_rect(topright=(self.width - 16, 22)))

        if snap.phase == PHASE_PAUSED:
            badge = self.font_tiny.render("[ PAUSED ]", True, SCORE_HOT)
            self.scene.blit(badge, badge.get_rect(center=(self.width // 2, PANEL_H // 2)))

    # ── Overlay infrastructure ────────────────────────────────────
    def _draw_overlay_base(self) -> None:
        surf = pygame.Surface((self.width, self.height - PANEL_H), pygame.SRCALPHA)
        surf.fill((5, 5, 12, 200))
        self.scene.blit(surf, (0, PANEL_H))

    def _draw_animated_title(self, title: str, color: tuple, cy: int, now: int) -> int:
        pulse = 0.82 + 0.18 * math.sin(now * 0.003)
        surf = self.font_title.render(title, True, _brighten(color, pulse))
        self.scene.blit(surf, surf.get_rect(center=(self.width // 2, cy + surf.get_height() // 2)))
        return cy + surf.get_height() + 14

    def _draw_text_line(self, text: str, color: tuple, cy: int, font: pygame.font.Font) -> int:
        surf = font.render(text, True, color)
        self.scene.blit(surf, surf.get_rect(center=(self.width // 2, cy)))
        return cy + surf.get_height() + 8

    def _draw_controls_hint(self, cy: int) -> None:
        hints = [("ARROWS/WASD", "MOVE"), ("P", "PAUSE"), ("R", "RESTART")]
        slot = min(150, self.width // len(hints))
        sx = self.width // 2 - (len(hints) * slot) // 2
        for i, (key, action) in enumerate(hints):
            x = sx + i * slot + slot // 2
            k_surf = self.font_tiny.render(key, True, (200, 200, 255))
            a_surf = self.font_tiny.render(action, True, UI_COL)
            kw, kh = k_surf.get_width() + 12, k_surf.get_height() + 4
            pygame.draw.rect(self.scene, (28, 28, 48), (x - kw // 2, cy, kw, kh), border_radius=3)
            self.scene.blit(k_surf, k_surf.get_rect(center=(x, cy + kh // 2)))
            self.scene.blit(a_surf, a_surf.get_rect(center=(x, cy + kh + 10)))

    # ── Phase overlays ────────────────────────────────────────────
    def _draw_idle_overlay(self, now: int) -> None:
        self._draw_overlay_base()
        cy = PANEL_H + (self.height - PANEL_H) // 3
        cy = self._draw_animated_title("SNAKE", SNAKE_COL, cy, now)
        cy = self._draw_text_line("SPACE / ENTER OR TAP TO START", UI_COL, cy, self.font_med)
        self._draw_controls_hint(cy + 24)

    def _draw_paused_overlay(self, now: int) -> None:
        self._draw_overlay_base()
        cy = PANEL_H + (self.height - PANEL_H) // 2 - 36
        cy = self._draw_animated_title("PAUSED", SCORE_HOT, cy, now)
        self._draw_text_line("PRESS  P  TO RESUME", UI_COL, cy, self.font_med)

    def _draw_game_over_overlay(self, snap: Snapshot, now: int) -> None:
        self._draw_overlay_base()
        cy = PANEL_H + (self.height - PANEL_H) // 3
        cy = self._draw_animated_title("GAME OVER", FOOD_COL, cy, now)
        cy = self._draw_text_line(f"SCORE {snap.score}", SNAKE_COL, cy, self.font_med)
        if snap.score > 0 and snap.score >= snap.high_score:
            cy = self._draw_text_line("NEW HIGH SCORE", SCORE_HOT, cy, self.font_small)
        else:
            cy = self._draw_text_line(f"BEST {snap.high_score}", UI_COL, cy, self.font_tiny)
        self._draw_text_line("R / ENTER / TAP  TO PLAY AGAIN", UI_COL, cy + 10, self.font_small)

    # ── Font init ─────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        specs = [
            ("font_title", "courier", 40, True),
            ("font_pop",   "courier", 30, True),
            ("font_big",   "courier", 24, True),
            ("font_med",   "courier", 16, False),
            ("font_small", "courier", 13, True),
            ("font_tiny",  "courier", 11, False),
        ]
        for attr, name, size, bold in specs:
            try:
                setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
            except (pygame.error, OSError):
                setattr(self, attr, pygame.font.SysFont(None, size))
