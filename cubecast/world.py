"""The game world: the grid map, the player and the minimap geometry."""

from __future__ import annotations

from dataclasses import dataclass, field

RES_X = 1000
RES_Y = 1000

CEILING = 0xC5E2FA
FLOOR = 0x795548

_TEST_MAP_SIDE = 50
_TEST_WALLS = ((3, 6), (3, 4), (1, 3), (2, 2), (2, 4), (5, 3), (5, 5))


@dataclass
class Point:
    """A position in world units (one unit per map cell)."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class World:
    """The map grid and the player's state in it."""

    map: list[str]
    orientation: int = 0
    player_angle: float = 0.0
    player: Point = field(default_factory=Point)
    offset: Point = field(default_factory=Point)
    ceiling_color: int = CEILING
    floor_color: int = FLOOR

    @property
    def map_x(self) -> int:
        return len(self.map[0]) if self.map else 0

    @property
    def map_y(self) -> int:
        return len(self.map)

    def is_wall(self, x: int, y: int) -> bool:
        """Tell whether the cell at column ``x``, row ``y`` is a wall.

        Raises IndexError for cells outside the map.
        """
        if not (0 <= y < self.map_y and 0 <= x < len(self.map[y])):
            raise IndexError(f"cell ({x}, {y}) is outside the map")
        return self.map[y][x] == "1"


def cell_size(res_x: int = RES_X, res_y: int = RES_Y) -> int:
    """Return the minimap cell size in pixels for a window of the given size."""
    if res_x > res_y:
        return ((res_x - res_y) // 2 + res_y) // 10
    if res_y > res_x:
        return ((res_y - res_x) // 2 + res_x) // 10
    return res_x // 10


def minimap_size(world: World, size: int) -> tuple[int, int]:
    """Return the minimap's (width, height) in pixels for cells of ``size``."""
    return world.map_x * size, world.map_y * size


def make_test_map() -> list[str]:
    """Build the fixed 50x50 walled test map with a few inner walls."""
    side = _TEST_MAP_SIDE
    rows = [["1"] * side if y in (0, side - 1) else ["1"] + ["0"] * (side - 2) + ["1"] for y in range(side)]
    for row, column in _TEST_WALLS:
        rows[row][column] = "1"
    return ["".join(row) for row in rows]


def make_test_world() -> World:
    """Return a world on the test map with the player at (10.5, 10.5)."""
    return World(map=make_test_map(), orientation=0, player=Point(10.5, 10.5))