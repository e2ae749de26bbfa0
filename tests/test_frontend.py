"""
Tests for frontend.py - keyboard, mouse and finger events routed to a
controller on the hand-cranked loop. Runs on SDL's dummy video driver.
"""

import pygame
import pytest

from gridsnake.config import PHASE_IDLE, PHASE_RUNNING, PHASE_PAUSED, PHASE_OVER
from gridsnake.controller import GameController
from gridsnake.frontend import KEY_TO_DIRECTION, PygameFrontend
from gridsnake.highscore import MemoryHighScoreStore
from gridsnake.model import Direction
from gridsnake.view import window_size


@pytest.fixture
def screen():
    pygame.display.init()
    yield pygame.display.set_mode(window_size(20, 20))
    pygame.display.quit()


@pytest.fixture
def frontend(screen, loop, corner_food):
    store = MemoryHighScoreStore()
    front = PygameFrontend(20, 20, store, mute=True)
    front.bind(GameController(loop, store, 20, 20, placer=corner_food))
    return front


def key(front, code):
    front._handle_event(pygame.event.Event(pygame.KEYDOWN, key=code))


def drag(front, start, end):
    front._handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=start, button=1))
    front._handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, pos=end, button=1))


def finger_swipe(front, start, end):
    front._handle_event(pygame.event.Event(pygame.FINGERDOWN, x=start[0], y=start[1]))
    front._handle_event(pygame.event.Event(pygame.FINGERUP, x=end[0], y=end[1]))


def run_ticks(loop, count):
    loop.advance(0)
    for _ in range(count - 1):
        loop.advance(0.1)


class TestIdleKeys:
    """Tests for keys before the first game."""

    @pytest.mark.parametrize("code", [pygame.K_SPACE, pygame.K_RETURN])
    def test_start_keys(self, frontend, code):
        key(frontend, code)
        assert frontend.controller.phase == PHASE_RUNNING

    @pytest.mark.parametrize("code", [pygame.K_UP, pygame.K_p, pygame.K_r])
    def test_other_keys_do_nothing(self, frontend, code):
        key(frontend, code)
        assert frontend.controller.phase == PHASE_IDLE
        assert frontend.controller.engine is None


class TestRunningKeys:
    """Tests for steering and commands mid-game."""

    @pytest.mark.parametrize("code,direction", [
        (pygame.K_LEFT, Direction.LEFT),
        (pygame.K_a, Direction.LEFT),
        (pygame.K_RIGHT, Direction.RIGHT),
        (pygame.K_d, Direction.RIGHT),
        (pygame.K_UP, Direction.UP),
        (pygame.K_w, Direction.UP),
    ])
    def test_direction_keys_buffer_intent(self, frontend, code, direction):
        key(frontend, pygame.K_SPACE)
        key(frontend, code)
        assert frontend.controller.input.consume_intent() == direction

    def test_keymap_covers_arrows_and_wasd(self):
        assert KEY_TO_DIRECTION[pygame.K_DOWN] == Direction.DOWN
        assert KEY_TO_DIRECTION[pygame.K_s] == Direction.DOWN
        assert len(KEY_TO_DIRECTION) == 8

    def test_p_pauses(self, frontend, loop):
        key(frontend, pygame.K_SPACE)
        key(frontend, pygame.K_p)
        assert frontend.controller.phase == PHASE_PAUSED
        assert loop.pending() == []

    def test_r_restarts(self, frontend, loop):
        key(frontend, pygame.K_SPACE)
        run_ticks(loop, 2)
        engine = frontend.controller.engine
        key(frontend, pygame.K_r)
        assert frontend.controller.engine is not engine
        assert frontend.controller.phase == PHASE_RUNNING


class TestPausedKeys:
    """Tests for keys while paused."""

    @pytest.fixture
    def paused(self, frontend):
        key(frontend, pygame.K_SPACE)
        key(frontend, pygame.K_p)
        return frontend

    @pytest.mark.parametrize("code", [pygame.K_p, pygame.K_SPACE])
    def test_resume_keys(self, paused, code):
        key(paused, code)
        assert paused.controller.phase == PHASE_RUNNING

    def test_r_restarts(self, paused):
        engine = paused.controller.engine
        key(paused, pygame.K_r)
        assert paused.controller.engine is not engine
        assert paused.controller.phase == PHASE_RUNNING

    def test_arrows_ignored(self, paused):
        key(paused, pygame.K_LEFT)
        assert paused.controller.phase == PHASE_PAUSED
        assert paused.controller.input.consume_intent() is None


class TestOverKeys:
    """Tests for keys after the snake has died."""

    @pytest.fixture
    def over(self, frontend, loop):
        key(frontend, pygame.K_SPACE)
        run_ticks(loop, 11)
        assert frontend.controller.phase == PHASE_OVER
        return frontend

    @pytest.mark.parametrize("code", [pygame.K_r, pygame.K_SPACE, pygame.K_RETURN])
    def test_restart_keys(self, over, code):
        engine = over.controller.engine
        key(over, code)
        assert over.controller.phase == PHASE_RUNNING
        assert over.controller.engine is not engine

    def test_p_does_nothing(self, over):
        key(over, pygame.K_p)
        assert over.controller.phase == PHASE_OVER

    def test_tap_restarts(self, over):
        engine = over.controller.engine
        drag(over, (50, 50), (50, 50))
        assert over.controller.phase == PHASE_RUNNING
        assert over.controller.engine is not engine


class TestQuitting:
    """Tests for leaving the main loop."""

    @pytest.mark.parametrize("code", [pygame.K_ESCAPE, pygame.K_q])
    def test_quit_keys(self, frontend, code):
        key(frontend, code)
        assert frontend._running is False

    def test_quit_keys_work_mid_game(self, frontend):
        key(frontend, pygame.K_SPACE)
        key(frontend, pygame.K_ESCAPE)
        assert frontend._running is False

    def test_window_close(self, frontend):
        frontend._handle_event(pygame.event.Event(pygame.QUIT))
        assert frontend._running is False


class TestPointer:
    """Tests for taps and swipes."""

    def test_tap_starts(self, frontend):
        drag(frontend, (100, 100), (100, 100))
        assert frontend.controller.phase == PHASE_RUNNING
        assert frontend.controller.input.consume_intent() is None

    def test_mouse_swipe_on_release(self, frontend):
        key(frontend, pygame.K_SPACE)
        frontend._handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(100, 100), button=1))
        assert frontend.controller.input.consume_intent() is None
        frontend._handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(20, 110), button=1))
        assert frontend.controller.input.consume_intent() == Direction.LEFT

    def test_short_drag_ignored(self, frontend):
        key(frontend, pygame.K_SPACE)
        drag(frontend, (100, 100), (110, 105))
        assert frontend.controller.input.consume_intent() is None

    def test_finger_swipe_scaled_to_window(self, frontend):
        key(frontend, pygame.K_SPACE)
        finger_swipe(frontend, (0.5, 0.5), (0.9, 0.5))
        assert frontend.controller.input.consume_intent() == Direction.RIGHT

    def test_finger_tap_starts(self, frontend):
        finger_swipe(frontend, (0.5, 0.5), (0.5, 0.5))
        assert frontend.controller.phase == PHASE_RUNNING

    def test_mouse_events_from_touch_ignored(self, frontend):
        frontend._handle_event(
            pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(100, 100), button=1, touch=True))
        assert frontend.controller.phase == PHASE_IDLE

    def test_release_without_press(self, frontend):
        key(frontend, pygame.K_SPACE)
        frontend._handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(20, 110), button=1))
        assert frontend.controller.input.consume_intent() is None


class TestEventPump:
    """Tests for the queue pump and snapshot tracking."""

    def test_posted_keys_are_handled(self, frontend):
        pygame.event.clear()
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE))
        frontend._handle_events()
        assert frontend.controller.phase == PHASE_RUNNING

    def test_snapshot_follows_ticks(self, frontend, loop):
        assert frontend._snapshot.phase == PHASE_IDLE
        key(frontend, pygame.K_SPACE)
        run_ticks(loop, 2)
        assert frontend._snapshot.head == (10, 8)
        assert frontend._snapshot.phase == PHASE_RUNNING

    def test_snapshot_follows_phase(self, frontend):
        key(frontend, pygame.K_SPACE)
        key(frontend, pygame.K_p)
        assert frontend._snapshot.phase == PHASE_PAUSED
