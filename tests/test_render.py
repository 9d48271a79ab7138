import math

import pytest

from cubecast.image import Image
from cubecast.raycast import WallFace
from cubecast.render import (
    KEY_A,
    KEY_D,
    KEY_DOWN,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_UP,
    CameraDirection,
    Scene,
    camera_direction,
    capture_scene,
    draw_column,
    draw_grid,
    draw_line,
    draw_map,
    handle_key,
    left_camera_limit,
    ray_angle,
    wall_color,
)
from cubecast.world import CEILING, FLOOR, Point, World, make_test_world, minimap_size

RES = 100


def _column(image, x, height):
    return [image.get_pixel(x, y) for y in range(height)]


@pytest.mark.parametrize(
    "orientation, expected",
    [
        (0, CameraDirection.UP),
        (999, CameraDirection.UP),
        (1000, CameraDirection.RIGHT),
        (1999, CameraDirection.RIGHT),
        (2000, CameraDirection.DOWN),
        (2999, CameraDirection.DOWN),
        (3000, CameraDirection.LEFT),
    ],
)
def test_camera_direction(orientation, expected):
    assert camera_direction(orientation, 1000) is expected


@pytest.mark.parametrize(
    "orientation, before, after",
    [
        (RES, CameraDirection.UP, CameraDirection.RIGHT),
        (RES * 2, CameraDirection.RIGHT, CameraDirection.DOWN),
        (RES * 3, CameraDirection.DOWN, CameraDirection.LEFT),
    ],
)
def test_camera_limit_is_continuous_across_edges(orientation, before, after):
    assert left_camera_limit(orientation, before, RES) == left_camera_limit(orientation, after, RES)


def test_camera_limit_closes_the_square():
    assert left_camera_limit(RES * 4, CameraDirection.LEFT, RES) == left_camera_limit(
        0, CameraDirection.UP, RES
    )


def test_ray_angle_directions():
    assert ray_angle(Point(RES, RES // 2), RES) == 0.0
    assert ray_angle(Point(0, RES // 2), RES) == pytest.approx(math.pi)
    assert ray_angle(Point(RES // 2, RES), RES) == pytest.approx(math.pi / 2)


def test_wall_colors():
    assert wall_color(WallFace.NORTH) == 0x3949AB
    assert wall_color(WallFace.SOUTH) == 0xFFCA28
    assert wall_color(WallFace.EAST) == 0x388E3C
    assert wall_color(WallFace.WEST) == 0xF44336


def test_draw_column_close_wall_fills_column():
    image = Image(4, RES)
    draw_column(image, WallFace.EAST, 1.0, 2, RES)
    assert set(_column(image, 2, RES)) == {wall_color(WallFace.EAST)}
    assert set(_column(image, 1, RES)) == {0}


def test_draw_column_zero_length_is_full_wall():
    image = Image(2, RES)
    draw_column(image, WallFace.WEST, 0.0, 0, RES)
    assert set(_column(image, 0, RES)) == {wall_color(WallFace.WEST)}


def test_draw_column_far_wall_has_only_ceiling_and_floor():
    image = Image(2, RES)
    draw_column(image, WallFace.NORTH, 1e9, 0, RES)
    column = _column(image, 0, RES)
    assert column[0] == CEILING
    assert column[-1] == FLOOR
    assert set(column) == {CEILING, FLOOR}


def test_draw_column_order_is_ceiling_wall_floor():
    image = Image(2, RES)
    color = wall_color(WallFace.SOUTH)
    draw_column(image, WallFace.SOUTH, 3.0, 1, RES)
    column = _column(image, 1, RES)
    rank = {CEILING: 0, color: 1, FLOOR: 2}
    ranks = [rank[value] for value in column]
    assert ranks == sorted(ranks)
    assert set(column) == {CEILING, color, FLOOR}


def test_draw_column_outside_image_raises():
    image = Image(2, RES)
    with pytest.raises(IndexError):
        draw_column(image, WallFace.NORTH, 1.0, 5, RES)


def test_capture_scene_paints_every_pixel_with_scene_colors():
    world = make_test_world()
    image = Image(RES, RES)
    capture_scene(world, image, RES, RES)
    allowed = {CEILING, FLOOR} | {wall_color(face) for face in WallFace}
    seen = {image.get_pixel(x, y) for y in range(RES) for x in range(RES)}
    assert seen <= allowed
    assert world.player_angle == pytest.approx(math.pi)


def test_capture_scene_keeps_orientation():
    world = make_test_world()
    world.orientation = RES * 4 - 1
    capture_scene(world, Image(RES, RES), RES, RES)
    assert world.orientation == RES * 4 - 1


def test_draw_grid_lines():
    image = Image(8, 8)
    draw_grid(image, 4)
    assert image.get_pixel(0, 3) == 0xFFFFFF
    assert image.get_pixel(4, 6) == 0xFFFFFF
    assert image.get_pixel(6, 4) == 0xFFFFFF
    assert image.get_pixel(1, 1) == 0
    assert image.get_pixel(6, 6) == 0


def test_draw_map_colors_walls():
    world = World(map=["11", "10"])
    image = Image(8, 8)
    draw_map(image, world, 4)
    assert image.get_pixel(1, 1) == 0x008000
    assert image.get_pixel(5, 1) == 0x008000
    assert image.get_pixel(1, 5) == 0x008000
    assert image.get_pixel(5, 5) == 0
    assert image.get_pixel(0, 0) == 0xFFFFFF


def test_draw_line_horizontal_excludes_end():
    image = Image(8, 8)
    draw_line(image, Point(0, 0), Point(1, 0), 4, Point(0, 0), 0xABCDEF)
    assert [image.get_pixel(x, 0) for x in range(4)] == [0xABCDEF] * 4
    assert image.get_pixel(4, 0) == 0


def test_draw_line_applies_offset():
    image = Image(8, 8)
    draw_line(image, Point(0, 0), Point(0, 1), 2, Point(3, 3), 0x123456)
    assert image.get_pixel(3, 3) == 0x123456
    assert image.get_pixel(3, 4) == 0x123456
    assert image.get_pixel(0, 0) == 0


def test_draw_line_clips_and_skips_empty():
    image = Image(4, 4)
    draw_line(image, Point(0, 0), Point(1, 1), 2, Point(100, 100), 0xFFFFFF)
    draw_line(image, Point(1, 1), Point(1, 1), 2, Point(0, 0), 0xFFFFFF)
    assert bytes(image.data) == bytes(len(image.data))


def test_handle_key_moves_and_returns():
    world = make_test_world()
    handle_key(world, KEY_RIGHT, RES)
    handle_key(world, KEY_LEFT, RES)
    assert world.player.x == pytest.approx(10.5)
    handle_key(world, KEY_UP, RES)
    assert world.player.y < 10.5
    handle_key(world, KEY_DOWN, RES)
    assert world.player.y == pytest.approx(10.5)


def test_handle_key_turning_wraps():
    world = make_test_world()
    handle_key(world, KEY_A, RES)
    assert world.orientation == RES * 4 - 1
    handle_key(world, KEY_D, RES)
    assert world.orientation == 0


def test_handle_key_turn_round_trip():
    world = make_test_world()
    world.orientation = RES
    handle_key(world, KEY_D, RES)
    assert world.orientation > RES
    handle_key(world, KEY_A, RES)
    assert world.orientation == RES


def test_scene_update_only_after_change():
    scene = Scene(make_test_world(), RES, RES)
    assert scene.update() is True
    assert scene.image.get_pixel(0, 0) == CEILING
    assert scene.update() is False
    scene.on_key(KEY_D)
    assert scene.refresh is True
    assert scene.update() is True


def test_scene_minimap_size():
    world = make_test_world()
    scene = Scene(world, RES, RES)
    assert (scene.minimap.width, scene.minimap.height) == minimap_size(world, scene.cell_size)


def test_scene_sets_map_offset_centering_player():
    world = make_test_world()
    scene = Scene(world, RES, RES)
    centre_x = int(world.player.x * scene.cell_size) + world.offset.x
    centre_y = int(world.player.y * scene.cell_size) + world.offset.y
    assert (centre_x, centre_y) == (RES // 2, RES // 2)