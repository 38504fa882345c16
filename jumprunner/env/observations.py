# jumprunner/env/observations.py
from __future__ import annotations
from typing import List
import numpy as np

from jumprunner.game.config import WIDTH, HEIGHT, JUMP_STRENGTH, MAX_SCROLL_SPEED

# Number of upcoming obstacles described in the observation
LOOKAHEAD = 2
# vy is clipped to +/- this before scaling to [-1, 1]
VY_SCALE = 2.0 * JUMP_STRENGTH

OBS_SIZE = 5 + 4 * LOOKAHEAD
OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0] + [0.0, 0.0, 0.0, 0.0] * LOOKAHEAD, dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0, 1.0, 1.0] + [1.0, 1.0, 1.0, 1.0] * LOOKAHEAD, dtype=np.float32)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def build_observation(snap) -> np.ndarray:
    """
    Fixed float32 vector from a session snapshot:
      [ y_top, vy, grounded, can_double_jump, scroll_speed,
        (dx, top, bottom, width) x LOOKAHEAD ]
    - y_top, top, bottom normalized by HEIGHT; dx, width by WIDTH
    - vy in [-1, 1] (negative = rising)
    - dx = gap from the character's right edge to the obstacle's left edge (0 if overlapping)
    - missing obstacle sentinel: dx=1, top=1, bottom=1, width=0
    """
    x, y, w, _h = snap.character
    speed = snap.difficulty.scroll_speed if snap.difficulty is not None else 0.0

    feats: List[float] = [
        _clamp01(y / HEIGHT),
        max(-1.0, min(snap.vy / VY_SCALE, 1.0)),
        1.0 if snap.grounded else 0.0,
        1.0 if snap.can_double_jump else 0.0,
        _clamp01(speed / MAX_SCROLL_SPEED),
    ]

    ahead = sorted((ob for ob in snap.obstacles if ob.x + ob.width > x), key=lambda ob: ob.x)
    for i in range(LOOKAHEAD):
        if i < len(ahead):
            ob = ahead[i]
            feats.extend([
                _clamp01((ob.x - (x + w)) / WIDTH),
                _clamp01(ob.y / HEIGHT),
                _clamp01((ob.y + ob.height) / HEIGHT),
                _clamp01(ob.width / WIDTH),
            ])
        else:
            feats.extend([1.0, 1.0, 1.0, 0.0])

    return np.asarray(feats, dtype=np.float32)
