# jumprunner/game/character.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
from .config import (
    CHARACTER_X, CHARACTER_W, CHARACTER_H, GROUND_Y, GRAVITY,
    JUMP_STRENGTH, DOUBLE_JUMP_FACTOR, FRAME_MS
)


class JumpState(Enum):
    GROUNDED = "grounded"
    JUMPING = "jumping"                # airborne, double jump still available
    DOUBLE_JUMPING = "double_jumping"  # airborne, double jump used


@dataclass
class Character:
    """
    Runner at a fixed x. y is the TOP of the body (screen coords, y grows down),
    so the body rests on the ground when y == ground_line.
    """
    x: float = float(CHARACTER_X)
    y: Optional[float] = None
    vy: float = 0.0
    width: float = float(CHARACTER_W)
    height: float = float(CHARACTER_H)
    ground_y: float = float(GROUND_Y)
    gravity: float = GRAVITY
    jump_strength: float = JUMP_STRENGTH
    double_jump_factor: float = DOUBLE_JUMP_FACTOR
    state: JumpState = JumpState.GROUNDED

    def __post_init__(self):
        if self.y is None:
            self.y = self.ground_line

    @property
    def ground_line(self) -> float:
        return self.ground_y - self.height

    @property
    def grounded(self) -> bool:
        return self.state is JumpState.GROUNDED

    @property
    def can_double_jump(self) -> bool:
        return self.state is JumpState.JUMPING

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return self.x, self.y, self.width, self.height

    def reset(self):
        self.y = self.ground_line
        self.vy = 0.0
        self.state = JumpState.GROUNDED

    def jump(self) -> bool:
        """Jump from the ground, or double jump once while airborne. Returns True if performed."""
        if self.state is JumpState.GROUNDED:
            self.vy = -self.jump_strength
            self.state = JumpState.JUMPING
            return True
        if self.state is JumpState.JUMPING:
            self.vy = -self.jump_strength * self.double_jump_factor
            self.state = JumpState.DOUBLE_JUMPING
            return True
        return False

    def advance(self, elapsed_ms: float):
        """Explicit Euler step, scaled to the nominal frame so motion is frame-rate independent."""
        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must be >= 0, got {elapsed_ms}")
        k = elapsed_ms / FRAME_MS

        self.vy += self.gravity * k
        self.y += self.vy * k

        # Landing: clamp to the ground line. A body still rising off it has not landed.
        if self.y >= self.ground_line and self.vy >= 0:
            self.y = self.ground_line
            self.vy = 0.0
            self.state = JumpState.GROUNDED
