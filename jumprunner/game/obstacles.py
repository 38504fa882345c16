# jumprunner/game/obstacles.py
from __future__ import annotations
import logging
import math
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, List, Optional, Sequence, Tuple
from .config import (
    FRAME_MS, GROUND_Y, SPAWN_X, MAX_JUMP_HEIGHT, MIN_OBSTACLE_DISTANCE,
    MOVING_AMPLITUDE, MOVING_OMEGA, ON_RAMP_SCORE, ANTI_REPEAT_RUN,
    OBSTACLE_GEOMETRY
)

logger = logging.getLogger(__name__)


class ObstacleKind(Enum):
    STANDARD = "standard"
    TALL = "tall"
    LOW = "low"
    MOVING = "moving"


@dataclass(frozen=True)
class KindGeometry:
    width: float
    height_frac: float      # fraction of the max single-jump height
    airborne: bool = False  # floats above the ground and oscillates

    def height(self, max_jump_height: float = MAX_JUMP_HEIGHT) -> float:
        return self.height_frac * max_jump_height


KIND_GEOMETRY: Dict[ObstacleKind, KindGeometry] = {
    kind: KindGeometry(
        width=float(OBSTACLE_GEOMETRY[kind.value]["width"]),
        height_frac=float(OBSTACLE_GEOMETRY[kind.value]["height_frac"]),
        airborne=(kind is ObstacleKind.MOVING),
    )
    for kind in ObstacleKind
}


@dataclass
class Obstacle:
    kind: ObstacleKind
    x: float
    y: float
    width: float
    height: float
    base_y: float  # resting y; moving obstacles oscillate around it

    def oscillate(self, now_ms: float):
        if self.kind is ObstacleKind.MOVING:
            self.y = self.base_y + MOVING_AMPLITUDE * math.sin(MOVING_OMEGA * now_ms / 1000.0)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return self.x, self.y, self.width, self.height


# --- Spawn gates ---

@dataclass(frozen=True)
class SpawnContext:
    since_spawn_ms: float
    since_spawn_px: float
    live_count: int
    spawn_interval_ms: float


class TimeGate:
    """Spawn once more than one spawn interval has elapsed since the last spawn."""
    name = "time"

    def should_spawn(self, ctx: SpawnContext) -> bool:
        return ctx.since_spawn_ms > ctx.spawn_interval_ms


class DistanceGate:
    """Spawn when the field is empty or the last spawn has scrolled far enough."""
    name = "distance"

    def __init__(self, min_distance: float = MIN_OBSTACLE_DISTANCE):
        self.min_distance = float(min_distance)

    def should_spawn(self, ctx: SpawnContext) -> bool:
        return ctx.live_count == 0 or ctx.since_spawn_px > self.min_distance


def make_gate(name: str):
    if name == "time":
        return TimeGate()
    if name == "distance":
        return DistanceGate()
    raise ValueError(f"Unknown spawn gate {name!r}")


class ObstacleGenerator:
    """
    Owns the live obstacles of one run: scrolls them left, drops them once fully
    off the left edge and spawns new ones at the right edge when the gate opens.
    """
    def __init__(self, gate, seed: int | None = None,
                 spawn_x: float = SPAWN_X, ground_y: float = GROUND_Y,
                 max_jump_height: float = MAX_JUMP_HEIGHT):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.gate = gate
        self.spawn_x = float(spawn_x)
        self.ground_y = float(ground_y)
        self.max_jump_height = float(max_jump_height)

        self.obstacles: List[Obstacle] = []
        self.history: Deque[ObstacleKind] = deque(maxlen=ANTI_REPEAT_RUN)
        self.distance_px = 0.0
        self.last_spawn_ms = 0.0
        self.last_spawn_px = 0.0
        self.spawned = 0

    def advance(self, elapsed_ms: float, now_ms: float, scroll_speed: float):
        """Scroll every obstacle left and drop those with x + width < 0."""
        dx = scroll_speed * (elapsed_ms / FRAME_MS)
        self.distance_px += dx
        for ob in self.obstacles:
            ob.x -= dx
            ob.oscillate(now_ms)
        self.obstacles = [ob for ob in self.obstacles if ob.x + ob.width >= 0]

    def maybe_spawn(self, now_ms: float, difficulty, score: float) -> Optional[Obstacle]:
        ctx = SpawnContext(
            since_spawn_ms=now_ms - self.last_spawn_ms,
            since_spawn_px=self.distance_px - self.last_spawn_px,
            live_count=len(self.obstacles),
            spawn_interval_ms=difficulty.spawn_interval_ms,
        )
        if not self.gate.should_spawn(ctx):
            return None

        kind = self.choose_kind(difficulty.pool, score)
        ob = self._build(kind, now_ms)
        self.obstacles.append(ob)
        self.history.append(kind)
        self.last_spawn_ms = now_ms
        self.last_spawn_px = self.distance_px
        self.spawned += 1
        logger.debug("spawned %s at t=%.0fms via %s gate (pool=%s)",
                     kind.value, now_ms, self.gate.name, [k.value for k in difficulty.pool])
        return ob

    def choose_kind(self, pool: Sequence[ObstacleKind], score: float) -> ObstacleKind:
        """Uniform draw from the pool, excluding a kind that just ran ANTI_REPEAT_RUN times."""
        if score < ON_RAMP_SCORE or not pool:
            return ObstacleKind.STANDARD

        candidates = list(pool)
        repeated = self._repeating()
        if len(candidates) > 1 and repeated is not None:
            candidates = [k for k in candidates if k is not repeated] or candidates
        return self.rng.choice(candidates)

    def _repeating(self) -> Optional[ObstacleKind]:
        if len(self.history) < ANTI_REPEAT_RUN:
            return None
        first = self.history[0]
        return first if all(k is first for k in self.history) else None

    def _build(self, kind: ObstacleKind, now_ms: float) -> Obstacle:
        geo = KIND_GEOMETRY[kind]
        h = geo.height(self.max_jump_height)
        base_y = self.ground_y - h
        if geo.airborne:
            # bottom sweeps between the ground and 2*amplitude above it
            base_y -= MOVING_AMPLITUDE
        ob = Obstacle(kind=kind, x=self.spawn_x, y=base_y,
                      width=geo.width, height=h, base_y=base_y)
        ob.oscillate(now_ms)
        return ob
