"""
Maze Generation Algorithm
=========================

We carve the dungeon out of solid rock with a randomized Prim's algorithm
that moves in steps of two cells.

1. Start with every cell set to WALL
2. Open the cell at (1, 1)
3. Keep a "frontier" of wall cells two steps away from an open cell
4. While the frontier is not empty:
   a. Pull a random wall out of the frontier
   b. If it was already carved through another route, skip it
   c. Pick a random open cell two steps away and carve the wall plus the
      cell halfway between them
   d. Add the wall's own step-2 wall neighbours to the frontier
5. Each carve links one new room to exactly one existing room, so the
   result is connected and has no loops

Cells with odd coordinates end up as "rooms", the cells between them as
corridors. The outer border is never carved.
"""

import random
import numpy as np
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Tuple, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .settings import Difficulty


class CellCategory(IntEnum):
    """The role of a single grid position."""

    EMPTY = 0
    WALL = 1
    MONSTER = 2
    TREASURE = 3
    ENTRANCE = 4
    EXIT = 5


class TreasureKind(IntEnum):
    """Kinds of treasure. Only meaningful on TREASURE cells."""

    GOLD = 0
    GEMS = 1
    ARTIFACT = 2
    POTION = 3

    @property
    def label(self) -> str:
        return self.name.lower()


class MonsterTier(Enum):
    """Coarse monster classification derived from a monster's level."""

    EASY = auto()
    MEDIUM = auto()
    HARD = auto()
    BOSS = auto()

    @classmethod
    def for_level(cls, level: int) -> "MonsterTier":
        if level <= 2:
            return cls.EASY
        if level <= 4:
            return cls.MEDIUM
        if level <= 6:
            return cls.HARD
        return cls.BOSS


# Categories an actor can stand on or walk through
WALKABLE_CATEGORIES = frozenset(
    {
        CellCategory.EMPTY,
        CellCategory.MONSTER,
        CellCategory.TREASURE,
        CellCategory.ENTRANCE,
        CellCategory.EXIT,
    }
)


@dataclass(frozen=True)
class Point:
    """A position in the dungeon grid, measured in cells."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def distance_squared(self, other: "Point") -> int:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy


class Direction(Enum):
    """Cardinal directions, in the order the pathfinder explores them."""

    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


@dataclass(frozen=True)
class Cell:
    """Read-only snapshot of one grid position."""

    category: CellCategory
    interaction_level: int = 0
    treasure_kind: Optional[TreasureKind] = None

    @property
    def monster_tier(self) -> Optional[MonsterTier]:
        if self.category != CellCategory.MONSTER:
            return None
        return MonsterTier.for_level(self.interaction_level)


# Type Definition
DungeonMap = np.ndarray


class DungeonGrid:
    """
    A rectangular dungeon level.

    Cell data lives in three numpy arrays indexed [y, x] (row, column):
    categories, interaction levels and treasure kinds. The grid also records
    where the entrance and exit ended up and which dungeon level it is, since
    the level scales monster difficulty and treasure value.
    """

    def __init__(self, width: int, height: int, level: int = 1) -> None:
        self.width: int = width
        self.height: int = height
        self.level: int = level

        self.categories: DungeonMap = np.full(
            (height, width), int(CellCategory.WALL), dtype=np.int8
        )
        self.levels: DungeonMap = np.zeros((height, width), dtype=int)
        self.treasure_kinds: DungeonMap = np.zeros((height, width), dtype=np.int8)

        self.entrance: Optional[Point] = None
        self.exit: Optional[Point] = None

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def category_at(self, x: int, y: int) -> CellCategory:
        return CellCategory(int(self.categories[y, x]))

    def is_walkable(self, x: int, y: int) -> bool:
        """Out-of-bounds positions are never walkable."""
        if not self.in_bounds(x, y):
            return False
        return self.category_at(x, y) in WALKABLE_CATEGORIES

    def cell(self, x: int, y: int) -> Cell:
        category = self.category_at(x, y)
        kind = None
        if category == CellCategory.TREASURE:
            kind = TreasureKind(int(self.treasure_kinds[y, x]))
        return Cell(
            category=category,
            interaction_level=int(self.levels[y, x]),
            treasure_kind=kind,
        )

    def set_category(self, x: int, y: int, category: CellCategory) -> None:
        """Change a cell's category, resetting its per-category data."""
        self.categories[y, x] = int(category)
        self.levels[y, x] = 0
        self.treasure_kinds[y, x] = 0

    def set_cell(
        self,
        x: int,
        y: int,
        category: CellCategory,
        interaction_level: int = 0,
        treasure_kind: Optional[TreasureKind] = None,
    ) -> None:
        self.set_category(x, y, category)
        self.levels[y, x] = interaction_level
        if treasure_kind is not None:
            self.treasure_kinds[y, x] = int(treasure_kind)

    def clear_cell(self, x: int, y: int) -> None:
        """Turn a cell back into an empty floor."""
        self.set_category(x, y, CellCategory.EMPTY)

    def cells_of(self, category: CellCategory) -> List[Point]:
        """All positions of a category, in row-major order."""
        rows, cols = np.nonzero(self.categories == int(category))
        return [Point(int(col), int(row)) for row, col in zip(rows, cols)]

    def count(self, category: CellCategory) -> int:
        return int(np.count_nonzero(self.categories == int(category)))

    def describe(self, x: int, y: int) -> str:
        """Short human-readable description, used for hover info."""
        cell = self.cell(x, y)
        if cell.category == CellCategory.MONSTER:
            return f"Monster (Level {cell.interaction_level})"
        if cell.category == CellCategory.TREASURE:
            return f"{cell.treasure_kind.label} (Value {cell.interaction_level})"
        if cell.category == CellCategory.EXIT:
            return f"Exit to Level {cell.interaction_level}"
        return cell.category.name.capitalize()


def _in_interior(grid: DungeonGrid, x: int, y: int) -> bool:
    """True if (x, y) may be carved without touching the outer border."""
    return 1 <= x <= grid.width - 2 and 1 <= y <= grid.height - 2


def _step_two_neighbors(grid: DungeonGrid, x: int, y: int) -> List[Tuple[int, int]]:
    neighbors: List[Tuple[int, int]] = []
    for direction in (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT):
        nx = x + direction.dx * 2
        ny = y + direction.dy * 2
        if _in_interior(grid, nx, ny):
            neighbors.append((nx, ny))
    return neighbors


def carve_maze(grid: DungeonGrid, rng: Optional[random.Random] = None) -> int:
    """
    Carve a loop-free maze into an all-wall grid.

    Uses the algorithm documented at the top of this file.

    Returns the number of carve operations performed. Every carve opens two
    cells, so the grid ends up with 1 + 2 * carves EMPTY cells.
    """
    rng = rng or random.Random()

    start_x, start_y = 1, 1
    grid.categories[start_y, start_x] = CellCategory.EMPTY

    frontier: List[Tuple[int, int]] = list(_step_two_neighbors(grid, start_x, start_y))
    carves = 0

    while frontier:
        # Uniform random pick; swap-remove keeps the pop O(1)
        index = rng.randrange(len(frontier))
        frontier[index], frontier[-1] = frontier[-1], frontier[index]
        wall_x, wall_y = frontier.pop()

        # Queued more than once and already carved via another room
        if grid.categories[wall_y, wall_x] != CellCategory.WALL:
            continue

        open_rooms = [
            (nx, ny)
            for nx, ny in _step_two_neighbors(grid, wall_x, wall_y)
            if grid.categories[ny, nx] == CellCategory.EMPTY
        ]
        if not open_rooms:
            continue

        room_x, room_y = rng.choice(open_rooms)
        grid.categories[wall_y, wall_x] = CellCategory.EMPTY
        grid.categories[(wall_y + room_y) // 2, (wall_x + room_x) // 2] = CellCategory.EMPTY
        carves += 1

        for nx, ny in _step_two_neighbors(grid, wall_x, wall_y):
            if grid.categories[ny, nx] == CellCategory.WALL:
                frontier.append((nx, ny))

    return carves


def generate_maze(
    width: int,
    height: int,
    level: int = 1,
    rng: Optional[random.Random] = None,
) -> DungeonGrid:
    """
    Generate a bare maze: walls and EMPTY floor only, no features.

    Callers must supply width and height of at least 5; smaller grids have
    no room for a border and are not checked here.
    """
    grid = DungeonGrid(width, height, level)
    carve_maze(grid, rng)
    return grid


def generate_dungeon(
    width: int,
    height: int,
    level: int = 1,
    rng: Optional[random.Random] = None,
    monster_count: int = 10,
    treasure_count: int = 10,
    difficulty: Optional["Difficulty"] = None,
) -> DungeonGrid:
    """
    Generate a complete dungeon level: maze, entrance, exit, monsters and
    treasures, optionally scaled by a difficulty preset.

    Parameters:
        width, height: Grid size in cells (both at least 5)
        level: Dungeon level, scales monsters and treasures
        rng: Random source; pass a seeded random.Random for reproducible levels
        monster_count: Number of monsters to place
        treasure_count: Number of treasures to place
        difficulty: If given, monster levels and treasure values are scaled

    Returns:
        The populated DungeonGrid, with entrance and exit recorded
    """
    from .features import place_features, apply_difficulty

    rng = rng or random.Random()
    grid = generate_maze(width, height, level, rng)
    place_features(grid, rng, monster_count=monster_count, treasure_count=treasure_count)
    if difficulty is not None:
        apply_difficulty(grid, difficulty)
    return grid
