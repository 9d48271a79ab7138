import math

import pytest

from cubecast.raycast import RayHit, Side, WallFace, cast_ray, fish_eye_correction, wall_face
from cubecast.world import Point, World, make_test_world


def small_world():
    return World(map=["1111", "1001", "1111"], player=Point(1.5, 1.5))


def test_cast_ray_east_hits_right_wall():
    world = small_world()
    ray = cast_ray(world, 0.0)
    assert ray.side is Side.VERTICAL
    assert ray.hit.x == pytest.approx(3.0)
    assert ray.length == pytest.approx(ray.hit.x - world.player.x)
    assert ray.hit.y == pytest.approx(world.player.y)


def test_cast_ray_west_hits_left_wall():
    world = small_world()
    ray = cast_ray(world, math.pi)
    assert ray.side is Side.VERTICAL
    assert ray.hit.x == pytest.approx(1.0)
    assert ray.length == pytest.approx(world.player.x - ray.hit.x)


def test_cast_ray_up_is_horizontal_hit():
    world = small_world()
    ray = cast_ray(world, math.pi / 2)
    assert ray.side is Side.HORIZONTAL
    assert ray.hit.y == pytest.approx(1.0)
    assert ray.length == pytest.approx(world.player.y - ray.hit.y)


@pytest.mark.parametrize("angle", [0.3, 1.2, 2.5, 3.7, 5.0])
def test_cast_ray_invariants_on_test_map(angle):
    world = make_test_world()
    ray = cast_ray(world, angle)
    player = world.player
    assert ray.length > 0
    assert math.hypot(ray.hit.x - player.x, ray.hit.y - player.y) == pytest.approx(ray.length)
    if ray.side is Side.VERTICAL:
        boundary = round(ray.hit.x)
        assert ray.hit.x == pytest.approx(boundary)
        column = boundary if math.cos(angle) > 0 else boundary - 1
        assert world.is_wall(column, math.floor(ray.hit.y))
    else:
        boundary = round(ray.hit.y)
        assert ray.hit.y == pytest.approx(boundary)
        row = boundary if -math.sin(angle) > 0 else boundary - 1
        assert world.is_wall(math.floor(ray.hit.x), row)


def test_cast_ray_without_walls_raises():
    world = World(map=["000", "000", "000"], player=Point(1.5, 1.5))
    with pytest.raises(IndexError):
        cast_ray(world, 0.0)


@pytest.mark.parametrize(
    ("hit", "side", "face"),
    [
        (Point(12, 12), Side.VERTICAL, WallFace.EAST),
        (Point(12, 12), Side.HORIZONTAL, WallFace.NORTH),
        (Point(9, 12), Side.VERTICAL, WallFace.WEST),
        (Point(9, 12), Side.HORIZONTAL, WallFace.NORTH),
        (Point(12, 9), Side.VERTICAL, WallFace.EAST),
        (Point(12, 9), Side.HORIZONTAL, WallFace.SOUTH),
        (Point(9, 9), Side.VERTICAL, WallFace.WEST),
        (Point(9, 9), Side.HORIZONTAL, WallFace.SOUTH),
        (Point(12, 10.5), Side.VERTICAL, WallFace.SOUTH),
    ],
)
def test_wall_face(hit, side, face):
    world = make_test_world()
    assert wall_face(world, RayHit(side, hit, 1.0)) is face


def test_fish_eye_same_angle_keeps_length():
    ray = RayHit(Side.VERTICAL, Point(3, 1), 4.0)
    assert fish_eye_correction(ray, 0.7, 0.7).length == pytest.approx(4.0)


def test_fish_eye_shortens_and_is_symmetric():
    ray = RayHit(Side.HORIZONTAL, Point(3, 1), 4.0)
    left = fish_eye_correction(ray, 0.2 + math.pi / 3, 0.2)
    right = fish_eye_correction(ray, 0.2 - math.pi / 3, 0.2)
    assert left.length == pytest.approx(2.0)
    assert right.length == pytest.approx(left.length)
    assert left.hit == ray.hit and left.side is ray.side
    assert ray.length == 4.0