"""Grid ray casting (DDA) from the player to the nearest wall."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from enum import Enum

from .world import Point, World


class Side(Enum):
    """Which kind of grid line the ray crossed when it hit the wall."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class WallFace(Enum):
    """The wall face a ray hit, used to pick its colour."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall and how far it travelled."""

    side: Side
    hit: Point
    length: float


def _delta(direction: float) -> float:
    return math.inf if direction == 0 else abs(1 / direction)


def _first_side(position: float, cell: int, direction: float, delta: float) -> float:
    if direction < 0:
        return (position - cell) * delta
    return (cell + 1.0 - position) * delta


def cast_ray(world: World, angle: float) -> RayHit:
    """Cast a ray from the player at ``angle`` (radians, y pointing up).

    Raises IndexError when the ray leaves the map without meeting a wall.
    """
    player = world.player
    cell_x, cell_y = int(player.x), int(player.y)
    dir_x, dir_y = math.cos(angle), -math.sin(angle)
    delta_x, delta_y = _delta(dir_x), _delta(dir_y)
    step_x = -1 if dir_x < 0 else 1
    step_y = -1 if dir_y < 0 else 1
    side_x = _first_side(player.x, cell_x, dir_x, delta_x)
    side_y = _first_side(player.y, cell_y, dir_y, delta_y)
    while True:
        if side_x <= side_y:
            cell_x += step_x
            side = Side.VERTICAL
            side_x += delta_x
        else:
            cell_y += step_y
            side = Side.HORIZONTAL
            side_y += delta_y
        if world.is_wall(cell_x, cell_y):
            break
    length = side_x - delta_x if side is Side.VERTICAL else side_y - delta_y
    hit = Point(player.x + dir_x * length, player.y + dir_y * length)
    return RayHit(side, hit, length)


def wall_face(world: World, ray: RayHit) -> WallFace:
    """Choose the face of the wall a ray hit from where it came from."""
    player, hit = world.player, ray.hit
    right = player.x < hit.x
    left = player.x > hit.x
    below = player.y < hit.y
    above = player.y > hit.y
    vertical = ray.side is Side.VERTICAL
    if right and below:
        return WallFace.EAST if vertical else WallFace.NORTH
    if left and below:
        return WallFace.WEST if vertical else WallFace.NORTH
    if right and above:
        return WallFace.EAST if vertical else WallFace.SOUTH
    if left and above and vertical:
        return WallFace.WEST
    return WallFace.SOUTH


def fish_eye_correction(ray: RayHit, ray_angle: float, player_angle: float) -> RayHit:
    """Return the ray with its length projected onto the viewing direction."""
    return dataclasses.replace(ray, length=ray.length * math.cos(ray_angle - player_angle))