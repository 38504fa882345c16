# jumprunner/tests/test_observations.py
import numpy as np

from jumprunner.env.observations import build_observation, OBS_SIZE, OBS_LOW, OBS_HIGH
from jumprunner.game.config import WIDTH, HEIGHT
from jumprunner.game.obstacles import Obstacle, ObstacleKind
from jumprunner.game.session import GameSession


def _in_bounds(obs):
    return bool(np.all(obs >= OBS_LOW) and np.all(obs <= OBS_HIGH))


def test_shape_dtype_and_sentinels():
    s = GameSession(seed=1)
    s.select_mode("marathon")
    obs = build_observation(s.snapshot())
    assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (OBS_SIZE,)
    assert _in_bounds(obs)
    assert obs[2] == 1.0 and obs[3] == 0.0   # grounded, no double jump
    # no obstacles: both lookahead blocks are sentinels
    assert list(obs[5:]) == [1.0, 1.0, 1.0, 0.0] * 2


def test_nearest_obstacles_first():
    s = GameSession(seed=1)
    s.select_mode("marathon")
    x, y, w, h = s.character.bounds
    far = Obstacle(ObstacleKind.TALL, x=600.0, y=300.0, width=20.0, height=100.0, base_y=300.0)
    near = Obstacle(ObstacleKind.LOW, x=200.0, y=370.0, width=60.0, height=30.0, base_y=370.0)
    behind = Obstacle(ObstacleKind.STANDARD, x=x - 40, y=360.0, width=20.0, height=40.0, base_y=360.0)
    s.generator.obstacles.extend([far, behind, near])

    obs = build_observation(s.snapshot())
    assert np.isclose(obs[5], (200.0 - (x + w)) / WIDTH)
    assert np.isclose(obs[6], 370.0 / HEIGHT)
    assert np.isclose(obs[7], 400.0 / HEIGHT)
    assert np.isclose(obs[8], 60.0 / WIDTH)
    assert np.isclose(obs[9], (600.0 - (x + w)) / WIDTH)
    assert _in_bounds(obs)


def test_rising_character_has_negative_vy():
    s = GameSession(seed=1)
    s.select_mode("classic")
    s.on_jump()
    s.tick(16)
    obs = build_observation(s.snapshot())
    assert obs[1] < 0.0 and obs[2] == 0.0 and obs[3] == 1.0
    assert _in_bounds(obs)
