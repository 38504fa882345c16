# jumprunner/game/highscore.py
"""
High-score persistence, keyed by mode name.

A missing or unreadable store reads as 0 for every mode. Write failures are
logged and otherwise ignored so a broken disk never ends a session.
"""
from __future__ import annotations
import json
import logging
import os
from typing import Dict
from .config import HIGHSCORE_FILE

logger = logging.getLogger(__name__)


class MemoryHighScoreStore:
    """In-process store (headless runs and tests)."""

    def __init__(self, initial: Dict[str, int] | None = None):
        self.scores: Dict[str, int] = dict(initial or {})
        self.saves = 0

    def load(self, mode: str) -> int:
        return max(0, int(self.scores.get(mode, 0)))

    def save(self, mode: str, value: int) -> None:
        self.scores[mode] = int(value)
        self.saves += 1


class JsonHighScoreStore:
    """One JSON object on disk: {"<mode>": <int>, ...}."""

    def __init__(self, path: str = HIGHSCORE_FILE):
        self.path = path

    def _read_all(self) -> Dict[str, int]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable high-score file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed high-score file %s", self.path)
            return {}
        scores = {}
        for k, v in data.items():
            try:
                scores[str(k)] = max(0, int(v))
            except (TypeError, ValueError):
                continue
        return scores

    def load(self, mode: str) -> int:
        return self._read_all().get(mode, 0)

    def save(self, mode: str, value: int) -> None:
        scores = self._read_all()
        scores[mode] = int(value)
        try:
            folder = os.path.dirname(self.path)
            if folder:
                os.makedirs(folder, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(scores, f, indent=2, sort_keys=True)
        except OSError as e:
            logger.warning("Could not save high score to %s: %s", self.path, e)
