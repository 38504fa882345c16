# jumprunner/game/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_UP, K_ESCAPE, K_m
from .config import (
    WIDTH, HEIGHT, FPS, MAX_FRAME_MS, GROUND_Y, MIN_FRAME_MS, HIGHSCORE_FILE,
    COLOR_BG, COLOR_FG, COLOR_GROUND, COLOR_CHARACTER, COLOR_OBSTACLES,
    COLOR_BUTTON, COLOR_BUTTON_EDGE, COLOR_BUTTON_TXT
)
from .difficulty import GameMode
from .highscore import JsonHighScoreStore
from .session import GameSession, GameState, Snapshot, MENU_BUTTONS, GAME_OVER_BUTTONS

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Endless runner: jump and double jump over obstacles.")
    p.add_argument("--mode", choices=[m.value for m in GameMode], default=None,
                   help="Skip the menu and start this mode.")
    p.add_argument("--seed", type=int, default=None,
                   help="Obstacle seed for every run. Omit for a new random layout each run.")
    p.add_argument("--highscore-file", default=HIGHSCORE_FILE,
                   help="JSON file holding per-mode high scores.")
    p.add_argument("--min-frame-ms", type=float, default=MIN_FRAME_MS,
                   help="Skip ticks shorter than this (frame cap, 0 = off).")
    p.add_argument("--log-level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def _draw_button(screen, font, rect, label):
    pygame.draw.rect(screen, COLOR_BUTTON, rect, border_radius=10)
    pygame.draw.rect(screen, COLOR_BUTTON_EDGE, rect, width=2, border_radius=10)
    txt = font.render(label, True, COLOR_BUTTON_TXT)
    screen.blit(txt, (rect.centerx - txt.get_width() // 2, rect.centery - txt.get_height() // 2))


def _draw_centered(screen, font, text, y):
    txt = font.render(text, True, COLOR_FG)
    screen.blit(txt, (WIDTH // 2 - txt.get_width() // 2, y))


def draw_snapshot(screen: pygame.Surface, snap: Snapshot, font: pygame.font.Font):
    """Render one session snapshot. Draws only; never mutates the session."""
    screen.fill(COLOR_BG)
    pygame.draw.line(screen, COLOR_GROUND, (0, GROUND_Y - 1), (WIDTH, GROUND_Y - 1), 2)

    if snap.state is GameState.MENU:
        _draw_centered(screen, font, "Choose a mode (SPACE = last mode)", 60)
        for mode, rect in MENU_BUTTONS.items():
            best = snap.high_scores.get(mode.value, 0)
            _draw_button(screen, font, rect, f"{mode.value.title()}  ({best})")
        return

    for ob in snap.obstacles:
        color = COLOR_OBSTACLES[ob.kind.value]
        pygame.draw.rect(screen, color, pygame.Rect(int(ob.x), int(ob.y), int(ob.width), int(ob.height)))

    x, y, w, h = snap.character
    pygame.draw.rect(screen, COLOR_CHARACTER, pygame.Rect(int(x), int(y), int(w), int(h)))

    mode_txt = snap.mode.value if snap.mode else "-"
    level = snap.difficulty.level + 1 if snap.difficulty else 1
    hud = f"Score: {snap.display_score}   Best: {snap.high_score}   Mode: {mode_txt}   Level: {level}"
    screen.blit(font.render(hud, True, COLOR_FG), (12, 10))

    if snap.state is GameState.GAME_OVER:
        _draw_centered(screen, font, "Game Over", 60)
        _draw_centered(screen, font, f"Score: {snap.display_score}", 90)
        _draw_button(screen, font, GAME_OVER_BUTTONS["restart"], "Restart (SPACE)")
        _draw_button(screen, font, GAME_OVER_BUTTONS["menu"], "Menu (M)")


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    store = JsonHighScoreStore(args.highscore_file)
    logger.info("high scores: %s", args.highscore_file)
    session = GameSession(store=store, seed=args.seed, min_frame_ms=args.min_frame_ms)
    if args.mode:
        session.select_mode(args.mode)

    pygame.init()
    pygame.display.set_caption("Jump Runner")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 18)

    while True:
        elapsed_ms = min(clock.tick(FPS), MAX_FRAME_MS)  # clamp stalls

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key in (K_SPACE, K_UP):
                    session.on_jump()
                if event.key == K_m:
                    session.return_to_menu()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                # window is the logical field, no descaling needed
                session.select(*event.pos)

        session.tick(elapsed_ms)

        draw_snapshot(screen, session.snapshot(), font)
        pygame.display.flip()


if __name__ == "__main__":
    run()
