"""Drawing the first-person scene, the minimap and lines, and reacting to keys."""

from __future__ import annotations

import math
from enum import Enum
from functools import cached_property

from .image import Image
from .raycast import WallFace, cast_ray, fish_eye_correction, wall_face
from .world import CEILING, FLOOR, RES_X, RES_Y, Point, World, cell_size, minimap_size

KEY_LEFT = 0xFF51
KEY_UP = 0xFF52
KEY_RIGHT = 0xFF53
KEY_DOWN = 0xFF54
KEY_A = 0x61
KEY_D = 0x64

MOVE_STEP = 0.3

GRID_COLOR = 0xFFFFFF
WALL_CELL_COLOR = 0x008000
FLOOR_CELL_COLOR = 0x000000

_WALL_COLORS = {
    WallFace.NORTH: 0x3949AB,
    WallFace.SOUTH: 0xFFCA28,
    WallFace.EAST: 0x388E3C,
    WallFace.WEST: 0xF44336,
}


class CameraDirection(Enum):
    """Which edge of the view square the left camera limit lies on."""

    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"


def camera_direction(orientation: int, res_x: int = RES_X) -> CameraDirection:
    """Map an orientation counter to the edge of the view square it points at."""
    if orientation < res_x:
        return CameraDirection.UP
    if orientation < res_x * 2:
        return CameraDirection.RIGHT
    if orientation < res_x * 3:
        return CameraDirection.DOWN
    return CameraDirection.LEFT


def left_camera_limit(orientation: int, direction: CameraDirection, res_x: int = RES_X) -> Point:
    """Return the point on the view square's edge that the orientation aims at."""
    if direction is CameraDirection.UP:
        return Point(0, orientation)
    if direction is CameraDirection.RIGHT:
        return Point(orientation - res_x, res_x)
    if direction is CameraDirection.DOWN:
        return Point(res_x, res_x - (orientation - res_x * 2))
    return Point(res_x - (orientation - res_x * 3), 0)


def ray_angle(limit: Point, res_x: int = RES_X) -> float:
    """Return the angle from the view square's centre towards ``limit``."""
    half = res_x // 2
    return math.atan2(limit.y - half, limit.x - half)


def wall_color(face: WallFace) -> int:
    """Return the flat colour used for a wall face."""
    return _WALL_COLORS[face]


def _pixel_bytes(image: Image, color: int) -> bytes:
    opp = image.bytes_per_pixel
    order = "big" if image.big_endian else "little"
    return (color & ((1 << (8 * opp)) - 1)).to_bytes(opp, order)


def _fill_column(image: Image, x: int, top: int, bottom: int, color: int) -> None:
    if top >= bottom:
        return
    if not (0 <= x < image.width and 0 <= top and bottom <= image.height):
        raise IndexError(f"column {x} rows {top}..{bottom} outside {image.width}x{image.height} image")
    line = image.size_line
    count = bottom - top
    base = top * line + x * image.bytes_per_pixel
    for k, byte in enumerate(_pixel_bytes(image, color)):
        start = base + k
        image.data[start : start + count * line : line] = bytes((byte,)) * count


def _fill_row(image: Image, y: int, left: int, right: int, color: int) -> None:
    if left >= right:
        return
    if not (0 <= y < image.height and 0 <= left and right <= image.width):
        raise IndexError(f"row {y} columns {left}..{right} outside {image.width}x{image.height} image")
    opp = image.bytes_per_pixel
    start = y * image.size_line + left * opp
    image.data[start : start + (right - left) * opp] = _pixel_bytes(image, color) * (right - left)


def draw_column(image: Image, face: WallFace, ray_len: float, x: int, res_y: int = RES_Y) -> None:
    """Paint one screen column: ceiling, then the wall slice, then floor."""
    if ray_len <= 0:
        wall_len = res_y
    else:
        quotient = res_y / ray_len
        wall_len = res_y if quotient >= res_y else int(quotient)
    floor_ceiling_len = 0 if res_y - wall_len <= 0 else (res_y - wall_len) // 2
    ceiling_end = min(res_y, floor_ceiling_len // 2)
    wall_end = min(res_y, max(ceiling_end, wall_len + floor_ceiling_len // 2))
    _fill_column(image, x, 0, ceiling_end, CEILING)
    _fill_column(image, x, ceiling_end, wall_end, wall_color(face))
    _fill_column(image, x, wall_end, res_y, FLOOR)


def capture_scene(world: World, image: Image, res_x: int = RES_X, res_y: int = RES_Y) -> None:
    """Cast one ray per screen column and draw the resulting view into ``image``."""
    centre = world.orientation + res_x // 2
    world.player_angle = ray_angle(
        left_camera_limit(centre, camera_direction(centre, res_x), res_x), res_x
    )
    orientation = world.orientation
    column = 0
    while column <= res_x:
        if orientation == res_x * 4:
            orientation = 0
        direction = camera_direction(orientation, res_x)
        while column <= res_x:
            angle = ray_angle(left_camera_limit(orientation, direction, res_x), res_x)
            ray = fish_eye_correction(cast_ray(world, angle), angle, world.player_angle)
            if column < image.width:
                draw_column(image, wall_face(world, ray), ray.length, column, res_y)
            column += 1
            orientation += 1
            if orientation % res_x == 0:
                break


def draw_grid(minimap: Image, size: int) -> None:
    """Draw white lines along every cell border of the minimap."""
    for y in range(0, minimap.height, size):
        _fill_row(minimap, y, 0, minimap.width, GRID_COLOR)
    for x in range(0, minimap.width, size):
        _fill_column(minimap, x, 0, minimap.height, GRID_COLOR)


def _draw_square(minimap: Image, x: int, y: int, size: int, color: int) -> None:
    for row in range(y, y + size):
        _fill_row(minimap, row, x, x + size, color)


def draw_map(minimap: Image, world: World, size: int) -> None:
    """Draw the map's cells (walls green, floor black) and the grid on top."""
    for map_y, row in enumerate(world.map):
        for map_x, cell in enumerate(row):
            color = WALL_CELL_COLOR if cell == "1" else FLOOR_CELL_COLOR
            _draw_square(minimap, map_x * size, map_y * size, size, color)
    draw_grid(minimap, size)


def draw_line(
    image: Image,
    start: Point,
    end: Point,
    size: int,
    offset: Point,
    color: int = GRID_COLOR,
) -> None:
    """Draw a line between two world points, scaled by ``size`` and shifted by ``offset``.

    The end point itself is not drawn; pixels outside the image are skipped.
    """
    start_x, start_y = int(start.x * size), int(start.y * size)
    end_x, end_y = int(end.x * size), int(end.y * size)
    delta_x, delta_y = end_x - start_x, end_y - start_y
    steps = max(abs(delta_x), abs(delta_y))
    if steps == 0:
        return
    step_x, step_y = delta_x / steps, delta_y / steps
    shift_x, shift_y = int(offset.x), int(offset.y)
    x, y = float(start_x), float(start_y)
    for _ in range(steps):
        px, py = int(x) + shift_x, int(y) + shift_y
        if 0 <= px < image.width and 0 <= py < image.height:
            image.put_pixel(px, py, color)
        x += step_x
        y += step_y


def handle_key(world: World, key: int, res_x: int = RES_X) -> None:
    """Move the player with the arrow keys and turn the camera with A and D."""
    if key == KEY_RIGHT:
        world.player.x += MOVE_STEP
    if key == KEY_LEFT:
        world.player.x -= MOVE_STEP
    if key == KEY_UP:
        world.player.y -= MOVE_STEP
    if key == KEY_DOWN:
        world.player.y += MOVE_STEP
    last = res_x * 4 - 1
    if key == KEY_A:
        world.orientation = last if world.orientation == 0 else world.orientation - res_x // 10
    if key == KEY_D:
        world.orientation = 0 if world.orientation == last else world.orientation + res_x // 10


def _map_offset(world: World, size: int, res_x: int, res_y: int) -> Point:
    return Point(res_x // 2 - int(world.player.x * size), res_y // 2 - int(world.player.y * size))


class Scene:
    """The rendered view of a world, redrawn only after something changed."""

    def __init__(self, world: World, res_x: int = RES_X, res_y: int = RES_Y) -> None:
        self.world = world
        self.res_x = res_x
        self.res_y = res_y
        self.cell_size = cell_size(res_x, res_y)
        self.image = Image(res_x, res_y)
        self.refresh = True
        world.offset = _map_offset(world, self.cell_size, res_x, res_y)

    @cached_property
    def minimap(self) -> Image:
        """The top-down map image, created on first use."""
        width, height = minimap_size(self.world, self.cell_size)
        return Image(width, height)

    def on_key(self, key: int) -> None:
        """Apply a key press and mark the view for redrawing."""
        handle_key(self.world, key, self.res_x)
        self.refresh = True

    def update(self) -> bool:
        """Redraw the view if needed; return whether it was redrawn."""
        if not self.refresh:
            return False
        capture_scene(self.world, self.image, self.res_x, self.res_y)
        self.refresh = False
        return True