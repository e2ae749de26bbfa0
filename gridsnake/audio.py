"""
audio.py — Sound cues and background music.

Three short procedurally rendered cues (eat, die, move) plus an optional
looping music file that pauses together with the game. If the mixer
cannot start, or the music file is missing, the game runs silently.
"""

import logging
import math
from array import array
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import pygame

from .config import AUDIO_CHANNELS, AUDIO_RATE, MUSIC_PATH, PHASE_PAUSED, PHASE_RUNNING

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tone:
    waveform: str      # "sine", "sawtooth" or "triangle"
    start_hz: float
    end_hz: float      # exponential glide from start_hz
    duration_ms: int
    gain: float        # peak level, decays exponentially to 0.01


TONES: Dict[str, Tone] = {
    "eat":  Tone("sine",     600, 1000, 100, 0.10),
    "die":  Tone("sawtooth", 200,   50, 500, 0.20),
    "move": Tone("triangle", 100,  100,  50, 0.05),
}


class SoundBoard:
    """Owns the pygame mixer so the sound lifecycle stays in one place."""

    def __init__(self, enabled: bool = True, music_path: Optional[Path] = MUSIC_PATH):
        self.enabled = False
        self.sample_rate: int = AUDIO_RATE
        self.channels: int = AUDIO_CHANNELS
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self._music_path = music_path
        self._music_ok = False
        if enabled:
            self._init_audio()

    # ── Wiring ────────────────────────────────────────────────────
    def attach(self, controller) -> None:
        controller.subscribe("direction_changed", lambda _event: self.play("move"))
        controller.subscribe("food_eaten", lambda _event: self.play("eat"))
        controller.subscribe("game_over", lambda _event: self.play("die"))
        controller.subscribe("phase_changed", self._on_phase_changed)

    def _on_phase_changed(self, phase: str) -> None:
        if phase == PHASE_PAUSED:
            self.pause_music()
        elif phase == PHASE_RUNNING:
            self.resume_music()

    # ── Setup ─────────────────────────────────────────────────────
    def _init_audio(self) -> None:
        try:
            pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=self.channels)
        except pygame.error as exc:
            logger.warning("Audio disabled, mixer unavailable: %s", exc)
            return
        # A mixer opened earlier (e.g. by pygame.init) keeps its own format.
        mixer_info = pygame.mixer.get_init()
        if mixer_info:
            self.sample_rate, size, self.channels = mixer_info
            if size != -16:
                logger.warning("Audio disabled, unsupported mixer sample size %d", size)
                return
        self.enabled = True
        self.sounds = {name: self._render(tone) for name, tone in TONES.items()}
        self._music_ok = self._load_music()

    def _render(self, tone: Tone) -> pygame.mixer.Sound:
        """Render a tone with an exponential pitch glide and decay.

        Each sample is repeated once per mixer channel, since Sound buffers
        are read as interleaved frames.
        """
        sample_rate = self.sample_rate
        count = max(1, int(sample_rate * tone.duration_ms / 1000))
        ratio = tone.end_hz / tone.start_hz
        floor = 0.01 / tone.gain
        phase = 0.0
        samples = array("h")
        for idx in range(count):
            progress = idx / count
            freq = tone.start_hz * ratio ** progress
            phase = (phase + freq / sample_rate) % 1.0
            if tone.waveform == "sawtooth":
                wave = 2.0 * phase - 1.0
            elif tone.waveform == "triangle":
                wave = 4.0 * abs(phase - 0.5) - 1.0
            else:
                wave = math.sin(2.0 * math.pi * phase)
            env = tone.gain * floor ** progress
            value = int(max(-32767, min(32767, wave * env * 32767)))
            samples.extend([value] * self.channels)
        return pygame.mixer.Sound(buffer=samples)

    # ── Cues ──────────────────────────────────────────────────────
    def play(self, name: str) -> None:
        if not self.enabled:
            return
        sound = self.sounds.get(name)
        if sound is not None:
            sound.play()

    # ── Music helpers ─────────────────────────────────────────────
    def _load_music(self) -> bool:
        """Load the music file. Returns True on success, False on any failure."""
        if self._music_path is None or not Path(self._music_path).is_file():
            logger.info("No music file at %s, running without music", self._music_path)
            return False
        try:
            pygame.mixer.music.load(str(self._music_path))
            pygame.mixer.music.set_volume(0.6)
            return True
        except pygame.error as exc:
            logger.warning("Could not load music: %s", exc)
            return False

    def play_music(self) -> None:
        if self._music_ok:
            pygame.mixer.music.play(loops=-1)

    def pause_music(self) -> None:
        if self._music_ok and pygame.mixer.music.get_busy():
            pygame.mixer.music.pause()

    def resume_music(self) -> None:
        if self._music_ok:
            pygame.mixer.music.unpause()

    def close(self) -> None:
        if self._music_ok:
            pygame.mixer.music.stop()
        if self.enabled:
            pygame.mixer.quit()
            self.enabled = False
