# jumprunner/tests/test_collision.py
from jumprunner.game.character import Character
from jumprunner.game.collision import overlaps, first_hit
from jumprunner.game.obstacles import Obstacle, ObstacleKind


def _ob(x, y, w=20, h=40):
    return Obstacle(kind=ObstacleKind.STANDARD, x=x, y=y, width=w, height=h, base_y=y)


def test_overlap_on_both_axes():
    assert overlaps((0, 0, 10, 10), (5, 5, 10, 10))
    assert overlaps((0, 0, 10, 10), (2, 2, 2, 2))  # contained


def test_touching_edges_do_not_overlap():
    assert not overlaps((0, 0, 10, 10), (10, 0, 10, 10))
    assert not overlaps((0, 0, 10, 10), (0, 10, 10, 10))
    assert not overlaps((10, 0, 10, 10), (0, 0, 10, 10))


def test_single_axis_overlap_is_not_a_hit():
    # x intervals overlap, y intervals apart
    assert not overlaps((0, 0, 10, 10), (5, 20, 10, 10))
    # y intervals overlap, x intervals apart
    assert not overlaps((0, 0, 10, 10), (20, 5, 10, 10))


def test_first_hit():
    c = Character()
    x, y, w, h = c.bounds
    far = _ob(x + 200, y)
    near = _ob(x + w - 1, y + h - 1)
    assert first_hit(c, [far]) is None
    assert first_hit(c, [far, near]) is near


def test_jumping_over_obstacle_clears_it():
    c = Character()
    x, y, w, h = c.bounds
    c.y = y - 50  # airborne, bottom 50px above the obstacle top
    ob = _ob(x, c.ground_y - 40, h=40)
    assert first_hit(c, [ob]) is None
