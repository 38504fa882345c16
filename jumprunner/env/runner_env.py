# jumprunner/env/runner_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from jumprunner.game.config import WIDTH, HEIGHT, FRAME_MS, DEFAULT_MODE
from jumprunner.game.difficulty import GameMode
from jumprunner.game.highscore import MemoryHighScoreStore
from jumprunner.game.session import GameSession, GameState
from jumprunner.game.game import draw_snapshot
from jumprunner.env.observations import build_observation, OBS_LOW, OBS_HIGH


class RunnerEnv(gym.Env):
    """
    Jump Runner Gymnasium environment (vector observations).
    - Simulation in fixed 16 ms ticks.
    - Agent acts every `frame_skip` ticks (default 4).
    - Actions: 0 = NOOP, 1 = JUMP (double jump when already airborne).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 mode: str = DEFAULT_MODE,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.mode = GameMode(mode)
        self.tick_ms = FRAME_MS

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(time_limit_seconds * 1000.0 / (self.tick_ms * self.frame_skip))

        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.session: Optional[GameSession] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None
        self.font = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Seeding policy:
        # - If a seed is provided, the obstacle generator uses it directly.
        # - If not, the generator randomizes internally (None).
        run_seed = int(seed) if seed is not None else None

        if options and "mode" in options:
            self.mode = GameMode(options["mode"])

        self.session = GameSession(store=MemoryHighScoreStore(), seed=run_seed)
        self.session.select_mode(self.mode)
        self.timestep = 0
        # Freeze the seed actually used (if None -> generator randomized it)
        self.current_seed = self.session.generator.seed

        return self._get_obs(), self._info()

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.session is not None, "Call reset() before step()"

        if action == 1:
            self.session.on_jump()

        for _ in range(self.frame_skip):
            self.session.tick(self.tick_ms)
            if self.session.state is not GameState.PLAYING:
                break

        alive = self.session.state is GameState.PLAYING
        reward = 1.0 if alive else -1.0

        self.timestep += 1
        terminated = not alive
        truncated = bool(self.time_limit_decisions is not None
                         and self.timestep >= self.time_limit_decisions
                         and not terminated)

        obs = self._get_obs()
        info = self._info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        return build_observation(self.session.snapshot())

    def _info(self) -> Dict[str, Any]:
        s = self.session
        hit = s.last_hit
        return {
            "seed": self.current_seed,
            "mode": self.mode.value,
            "score": s.score,
            "timestep": self.timestep,
            "grounded": s.character.grounded,
            "obstacles_spawned": s.generator.spawned if s.generator else 0,
            "hit_kind": hit.kind.value if hit is not None else None,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None:
            return

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Jump Runner - Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()
            self.font = pygame.font.SysFont("jetbrainsmono", 18)

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()

        if self.session is not None:
            draw_snapshot(self.screen, self.session.snapshot(), self.font)

        if self.render_mode == "human":
            pygame.display.flip()
            self.clock.tick(self.metadata.get("render_fps", 60))
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.font = None
