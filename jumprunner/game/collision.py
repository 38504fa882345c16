# jumprunner/game/collision.py
from __future__ import annotations
from typing import Iterable, Optional, Tuple

Bounds = Tuple[float, float, float, float]  # x, y, w, h


def overlaps(a: Bounds, b: Bounds) -> bool:
    """Strict AABB test: touching edges do not count as a hit."""
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return (ax < bx + bw and ax + aw > bx and
            ay < by + bh and ay + ah > by)


def first_hit(character, obstacles: Iterable) -> Optional[object]:
    """Return the first obstacle overlapping the character, or None."""
    me = character.bounds
    for ob in obstacles:
        if overlaps(me, ob.bounds):
            return ob
    return None
