# jumprunner/tests/test_obstacles.py
import pytest

from jumprunner.game.config import (
    GROUND_Y, SPAWN_X, MAX_JUMP_HEIGHT, MIN_OBSTACLE_DISTANCE, MOVING_AMPLITUDE,
    ON_RAMP_SCORE, FRAME_MS
)
from jumprunner.game.difficulty import DifficultyLevel, difficulty_for
from jumprunner.game.obstacles import (
    ObstacleGenerator, ObstacleKind, Obstacle, KIND_GEOMETRY,
    TimeGate, DistanceGate, SpawnContext, make_gate
)

ALL_KINDS = tuple(ObstacleKind)


class AlwaysGate:
    name = "always"

    def should_spawn(self, ctx):
        return True


def _level(pool=ALL_KINDS, speed=4.0, freq=1.0):
    return DifficultyLevel(level=3, scroll_speed=speed, spawn_frequency=freq, pool=pool)


def _ctx(since_ms=0.0, since_px=0.0, live=1, interval=1000.0):
    return SpawnContext(since_spawn_ms=since_ms, since_spawn_px=since_px,
                        live_count=live, spawn_interval_ms=interval)


# --- gates ---

def test_time_gate_opens_after_interval():
    g = TimeGate()
    assert not g.should_spawn(_ctx(since_ms=999.0))
    assert not g.should_spawn(_ctx(since_ms=1000.0))
    assert g.should_spawn(_ctx(since_ms=1000.5))


def test_distance_gate_opens_on_empty_field_or_after_distance():
    g = DistanceGate()
    assert g.should_spawn(_ctx(live=0))
    assert not g.should_spawn(_ctx(since_px=MIN_OBSTACLE_DISTANCE))
    assert g.should_spawn(_ctx(since_px=MIN_OBSTACLE_DISTANCE + 1))


def test_make_gate():
    assert isinstance(make_gate("time"), TimeGate)
    assert isinstance(make_gate("distance"), DistanceGate)
    for name in ("time", "distance"):
        assert make_gate(name).name == name
    with pytest.raises(ValueError):
        make_gate("sometimes")


# --- geometry ---

def test_every_kind_has_geometry_and_is_clearable():
    assert set(KIND_GEOMETRY) == set(ObstacleKind)
    for kind, geo in KIND_GEOMETRY.items():
        assert 0 < geo.height(MAX_JUMP_HEIGHT) < MAX_JUMP_HEIGHT, kind
    std, tall, low = (KIND_GEOMETRY[k] for k in (ObstacleKind.STANDARD, ObstacleKind.TALL, ObstacleKind.LOW))
    assert tall.height_frac > std.height_frac
    assert low.width > std.width and low.height_frac < std.height_frac


def test_spawned_at_right_edge_resting_on_ground():
    gen = ObstacleGenerator(AlwaysGate(), seed=1)
    for _ in range(50):
        gen.maybe_spawn(0.0, _level(), score=100.0)
    for ob in gen.obstacles:
        assert ob.x == SPAWN_X
        bottom = ob.y + ob.height
        if ob.kind is ObstacleKind.MOVING:
            assert GROUND_Y - 2 * MOVING_AMPLITUDE - 1e-9 <= bottom <= GROUND_Y + 1e-9
        else:
            assert bottom == pytest.approx(GROUND_Y)


# --- kind selection ---

@pytest.mark.parametrize("pool", [ALL_KINDS, (ObstacleKind.STANDARD, ObstacleKind.TALL)])
def test_no_kind_four_times_in_a_row(pool):
    gen = ObstacleGenerator(AlwaysGate(), seed=7)
    kinds = [gen.maybe_spawn(float(i), _level(pool=pool), score=100.0).kind for i in range(3000)]
    for i in range(len(kinds) - 3):
        assert len(set(kinds[i:i + 4])) > 1, f"run of 4 at {i}"
    assert set(kinds) == set(pool)


def test_single_kind_pool_repeats_freely():
    gen = ObstacleGenerator(AlwaysGate(), seed=3)
    kinds = [gen.maybe_spawn(0.0, _level(pool=(ObstacleKind.TALL,)), score=100.0).kind for _ in range(10)]
    assert kinds == [ObstacleKind.TALL] * 10


def test_on_ramp_forces_standard():
    gen = ObstacleGenerator(AlwaysGate(), seed=5)
    for _ in range(20):
        ob = gen.maybe_spawn(0.0, _level(), score=ON_RAMP_SCORE - 0.01)
        assert ob.kind is ObstacleKind.STANDARD


def test_same_seed_same_sequence():
    a = ObstacleGenerator(AlwaysGate(), seed=42)
    b = ObstacleGenerator(AlwaysGate(), seed=42)
    ka = [a.maybe_spawn(0.0, _level(), 100.0).kind for _ in range(100)]
    kb = [b.maybe_spawn(0.0, _level(), 100.0).kind for _ in range(100)]
    assert ka == kb
    assert a.seed == 42


def test_random_seed_is_recorded():
    gen = ObstacleGenerator(AlwaysGate())
    assert isinstance(gen.seed, int)


# --- scrolling ---

def test_advance_scrolls_and_removes_exactly_when_off_screen():
    gen = ObstacleGenerator(AlwaysGate(), seed=1)
    ob = Obstacle(kind=ObstacleKind.STANDARD, x=-16.0, y=350.0, width=20.0, height=40.0, base_y=350.0)
    gen.obstacles.append(ob)

    gen.advance(FRAME_MS, 0.0, scroll_speed=4.0)
    assert ob.x == pytest.approx(-20.0)
    assert ob in gen.obstacles  # x + width == 0 is still on screen

    gen.advance(1.0, 0.0, scroll_speed=4.0)
    assert ob not in gen.obstacles


def test_moving_obstacle_oscillates_within_amplitude():
    gen = ObstacleGenerator(AlwaysGate(), seed=1)
    ob = gen._build(ObstacleKind.MOVING, 0.0)
    gen.obstacles.append(ob)
    ys = set()
    for t in range(1, 200):
        x_before = ob.x
        gen.advance(FRAME_MS, t * FRAME_MS, scroll_speed=1.0)
        assert ob.x < x_before
        assert abs(ob.y - ob.base_y) <= MOVING_AMPLITUDE + 1e-9
        ys.add(round(ob.y, 3))
    assert len(ys) > 10


def test_distance_gated_flow():
    gen = ObstacleGenerator(DistanceGate(), seed=1)
    lvl = difficulty_for(0.0, "classic")
    assert gen.maybe_spawn(0.0, lvl, 0.0) is not None  # empty field -> spawn at once
    assert gen.maybe_spawn(0.0, lvl, 0.0) is None

    spawned = 1
    for i in range(1, 400):
        gen.advance(FRAME_MS, i * FRAME_MS, lvl.scroll_speed)
        if gen.maybe_spawn(i * FRAME_MS, lvl, 0.0) is not None:
            spawned += 1
    # 399 frames * 4px = 1596px -> one spawn per ~300px
    assert spawned == 1 + int(399 * lvl.scroll_speed // (MIN_OBSTACLE_DISTANCE + lvl.scroll_speed))
    xs = [ob.x for ob in gen.obstacles]
    assert all(b - a > MIN_OBSTACLE_DISTANCE for a, b in zip(xs, xs[1:]))
