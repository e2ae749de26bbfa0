"""
highscore.py — Best-score persistence.

The controller only needs read() and write(value); anything with those two
methods can be injected. A broken or missing file never stops the game,
the best score then simply lives in memory for the session.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from .config import HIGHSCORE_FILE, HIGHSCORE_KEY

logger = logging.getLogger(__name__)


def _coerce(value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        return 0
    try:
        score = int(value)
    except ValueError:
        return 0
    return max(0, score)


class MemoryHighScoreStore:
    """Keeps the best score for the lifetime of the process only."""

    def __init__(self, value: int = 0):
        self.value = value
        self.writes = 0

    def read(self) -> int:
        return self.value

    def write(self, value: int) -> None:
        self.value = value
        self.writes += 1


class FileHighScoreStore:
    """JSON file holding {"snakeHighScore": <int>}."""

    def __init__(self, path: Optional[Path] = None, key: str = HIGHSCORE_KEY):
        self.path = Path(path) if path is not None else HIGHSCORE_FILE
        self.key = key

    def read(self) -> int:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return 0
        except OSError as exc:
            logger.warning("Could not read high score from %s: %s", self.path, exc)
            return 0
        try:
            data = json.loads(text or "{}")
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt high score file %s", self.path)
            return 0
        if not isinstance(data, dict):
            return 0
        return _coerce(data.get(self.key, 0))

    def write(self, value: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({self.key: int(value)}), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not save high score to %s: %s", self.path, exc)
            return
        logger.debug("Saved high score %d to %s", value, self.path)
