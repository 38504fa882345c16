# jumprunner/game/difficulty.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union
from .config import MODES, KIND_UNLOCK_ORDER
from .obstacles import ObstacleKind


class GameMode(Enum):
    CLASSIC = "classic"      # constant speed, distance-gated spawns
    MARATHON = "marathon"
    CHALLENGE = "challenge"  # ramps faster toward a higher ceiling


@dataclass(frozen=True)
class DifficultyLevel:
    level: int
    scroll_speed: float                 # px per nominal frame
    spawn_frequency: float              # obstacles per second
    pool: Tuple[ObstacleKind, ...]

    @property
    def spawn_interval_ms(self) -> float:
        if self.spawn_frequency <= 0:
            return float("inf")
        return 1000.0 / self.spawn_frequency


def mode_params(mode: Union[GameMode, str]) -> dict:
    return MODES[GameMode(mode).value]


def difficulty_for(score: float, mode: Union[GameMode, str]) -> DifficultyLevel:
    """
    Speed and frequency climb linearly with score and stop at the mode ceiling.
    The obstacle pool grows one kind per level, up to the mode's max_kinds.
    """
    p = mode_params(mode)
    s = max(0.0, float(score))

    speed = min(p["speed"] + p["speed_gain"] * s, p["max_speed"])
    freq = min(p["frequency"] + p["frequency_gain"] * s, p["max_frequency"])

    level = int(s // p["level_every"]) if p["level_every"] else 0
    unlocked = min(level + 1, p["max_kinds"], len(KIND_UNLOCK_ORDER))
    pool = tuple(ObstacleKind(name) for name in KIND_UNLOCK_ORDER[:unlocked])

    return DifficultyLevel(level=level, scroll_speed=speed, spawn_frequency=freq, pool=pool)
