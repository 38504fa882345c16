# jumprunner/game/session.py
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union
import pygame
from .config import (
    WIDTH, MIN_FRAME_MS, DEFAULT_MODE, MODES,
    BUTTON_W, BUTTON_H, BUTTON_GAP, MENU_TOP
)
from .character import Character
from .collision import first_hit
from .difficulty import GameMode, DifficultyLevel, difficulty_for, mode_params
from .highscore import MemoryHighScoreStore
from .obstacles import ObstacleGenerator, ObstacleKind, make_gate

logger = logging.getLogger(__name__)


class GameState(Enum):
    MENU = "menu"
    PLAYING = "playing"
    GAME_OVER = "game_over"


def _menu_buttons() -> Dict[GameMode, pygame.Rect]:
    left = (WIDTH - BUTTON_W) // 2
    return {
        GameMode(name): pygame.Rect(left, MENU_TOP + i * (BUTTON_H + BUTTON_GAP), BUTTON_W, BUTTON_H)
        for i, name in enumerate(MODES)
    }


def _game_over_buttons() -> Dict[str, pygame.Rect]:
    top = MENU_TOP + 2 * (BUTTON_H + BUTTON_GAP)
    left = WIDTH // 2 - BUTTON_W - BUTTON_GAP // 2
    return {
        "restart": pygame.Rect(left, top, BUTTON_W, BUTTON_H),
        "menu": pygame.Rect(WIDTH // 2 + BUTTON_GAP // 2, top, BUTTON_W, BUTTON_H),
    }


MENU_BUTTONS = _menu_buttons()
GAME_OVER_BUTTONS = _game_over_buttons()


@dataclass(frozen=True)
class ObstacleView:
    kind: ObstacleKind
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a session for renderers and observers."""
    state: GameState
    mode: Optional[GameMode]
    score: float
    high_scores: Dict[str, int]
    character: Tuple[float, float, float, float]
    vy: float
    grounded: bool
    can_double_jump: bool
    obstacles: Tuple[ObstacleView, ...]
    difficulty: Optional[DifficultyLevel]
    clock_ms: float

    @property
    def display_score(self) -> int:
        return int(math.floor(self.score))

    @property
    def high_score(self) -> int:
        return self.high_scores.get(self.mode.value, 0) if self.mode else 0


class GameSession:
    """
    One independent game: MENU -> PLAYING -> GAME_OVER -> (MENU | PLAYING).

    All run state lives here and is mutated only by the input methods and tick().
    Inputs that do not apply to the current state are ignored.
    """
    def __init__(self, store=None, seed: int | None = None,
                 min_frame_ms: float = MIN_FRAME_MS):
        self.store = store if store is not None else MemoryHighScoreStore()
        self.seed = seed              # None -> new random layout every run
        self.min_frame_ms = float(min_frame_ms)

        self.state = GameState.MENU
        self.mode: Optional[GameMode] = None
        self.last_mode = GameMode(DEFAULT_MODE)
        self.high_scores: Dict[str, int] = {name: self.store.load(name) for name in MODES}

        self.character = Character()
        self.generator: Optional[ObstacleGenerator] = None
        self.difficulty: Optional[DifficultyLevel] = None
        self.score = 0.0
        self.clock_ms = 0.0
        self.runs = 0
        self.last_hit = None
        self._pending_ms = 0.0

    # -------------------- Inputs --------------------

    def select_mode(self, mode: Union[GameMode, str]) -> bool:
        """Start a run in `mode`. MENU only."""
        if self.state is not GameState.MENU:
            logger.debug("select_mode ignored in %s", self.state.value)
            return False
        self._start(GameMode(mode))
        return True

    def on_jump(self) -> bool:
        """Jump while playing; confirm in MENU, restart in GAME_OVER."""
        if self.state is GameState.PLAYING:
            return self.character.jump()
        if self.state is GameState.MENU:
            self._start(self.last_mode)
            return True
        self._start(self.mode or self.last_mode)
        return True

    def select(self, x: float, y: float) -> bool:
        """Pointer press in logical coordinates; hits the buttons of the current screen."""
        pos = (int(x), int(y))
        if self.state is GameState.MENU:
            for mode, rect in MENU_BUTTONS.items():
                if rect.collidepoint(pos):
                    return self.select_mode(mode)
        elif self.state is GameState.GAME_OVER:
            if GAME_OVER_BUTTONS["restart"].collidepoint(pos):
                self._start(self.mode or self.last_mode)
                return True
            if GAME_OVER_BUTTONS["menu"].collidepoint(pos):
                return self.return_to_menu()
        return False

    def return_to_menu(self) -> bool:
        """GAME_OVER only: clear the mode selection and show the menu."""
        if self.state is not GameState.GAME_OVER:
            logger.debug("return_to_menu ignored in %s", self.state.value)
            return False
        self.mode = None
        self.state = GameState.MENU
        logger.info("back to menu")
        return True

    # -------------------- Simulation --------------------

    def tick(self, elapsed_ms: float) -> bool:
        """Advance one frame. Returns True if the world moved."""
        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must be >= 0, got {elapsed_ms}")
        if self.state is not GameState.PLAYING:
            return False
        if elapsed_ms == 0:
            return False

        self._pending_ms += elapsed_ms
        if self._pending_ms < self.min_frame_ms:
            logger.debug("tick throttled (%.1fms pending)", self._pending_ms)
            return False
        elapsed_ms, self._pending_ms = self._pending_ms, 0.0

        self.clock_ms += elapsed_ms
        self.score += elapsed_ms / 1000.0
        self.difficulty = difficulty_for(self.score, self.mode)

        self.character.advance(elapsed_ms)
        self.generator.advance(elapsed_ms, self.clock_ms, self.difficulty.scroll_speed)
        self.generator.maybe_spawn(self.clock_ms, self.difficulty, self.score)

        hit = first_hit(self.character, self.generator.obstacles)
        if hit is not None:
            self._game_over(hit)
        return True

    def snapshot(self) -> Snapshot:
        ch = self.character
        obstacles = self.generator.obstacles if self.generator is not None else []
        return Snapshot(
            state=self.state,
            mode=self.mode,
            score=self.score,
            high_scores=dict(self.high_scores),
            character=ch.bounds,
            vy=ch.vy,
            grounded=ch.grounded,
            can_double_jump=ch.can_double_jump,
            obstacles=tuple(ObstacleView(ob.kind, ob.x, ob.y, ob.width, ob.height)
                            for ob in obstacles),
            difficulty=self.difficulty,
            clock_ms=self.clock_ms,
        )

    # -------------------- Transitions --------------------

    def _start(self, mode: GameMode):
        self.mode = mode
        self.last_mode = mode
        self.high_scores[mode.value] = max(self.high_scores.get(mode.value, 0),
                                           self.store.load(mode.value))

        self.score = 0.0
        self.clock_ms = 0.0
        self._pending_ms = 0.0
        self.last_hit = None
        self.character.reset()
        self.difficulty = difficulty_for(0.0, mode)
        self.generator = ObstacleGenerator(make_gate(mode_params(mode)["gate"]), seed=self.seed)
        self.runs += 1
        self.state = GameState.PLAYING
        logger.info("run %d started: mode=%s seed=%s", self.runs, mode.value, self.generator.seed)

    def _game_over(self, hit):
        if self.state is not GameState.PLAYING:
            return
        self.state = GameState.GAME_OVER
        self.last_hit = hit

        key = self.mode.value
        stored = self.high_scores.get(key, 0)
        best = int(math.floor(self.score))
        if best > stored:
            self.high_scores[key] = best
            self.store.save(key, best)
            logger.info("new %s high score: %d (was %d)", key, best, stored)
        logger.info("game over: mode=%s score=%.2f hit=%s", key, self.score, hit.kind.value)
