"""
Feature placement for generated mazes.

Once the maze is carved, we drop the special cells onto its EMPTY floor:

1. The entrance, on a random floor cell
2. The exit, on the dead end farthest from the entrance (so the player has to
   cross most of the maze), with a distance-threshold fallback for layouts
   that have no dead ends
3. Monsters, with a level close to the dungeon level
4. Treasures, worth roughly ten times the dungeon level

All placement mutates the grid in place.
"""

import random
import sys
import numpy as np
from typing import Dict, List, Optional, TYPE_CHECKING

from .dungeon_gen import (
    CellCategory,
    DungeonGrid,
    MonsterTier,
    Point,
    TreasureKind,
)

if TYPE_CHECKING:
    from .settings import Difficulty


DEFAULT_MONSTER_COUNT: int = 10
DEFAULT_TREASURE_COUNT: int = 10

# Treasure values never drop below this after difficulty scaling
MIN_SCALED_TREASURE_VALUE: int = 5


def _random_cell_of(
    grid: DungeonGrid, category: CellCategory, rng: random.Random
) -> Point:
    """
    Rejection-sample interior coordinates until one has the wanted category.

    Callers must make sure at least one such cell exists.
    """
    while True:
        x = rng.randint(1, grid.width - 2)
        y = rng.randint(1, grid.height - 2)
        if grid.categories[y, x] == category:
            return Point(x, y)


def place_entrance(grid: DungeonGrid, rng: Optional[random.Random] = None) -> Point:
    """Turn a random EMPTY cell into the entrance and record it on the grid."""
    rng = rng or random.Random()
    entrance = _random_cell_of(grid, CellCategory.EMPTY, rng)
    grid.set_category(entrance.x, entrance.y, CellCategory.ENTRANCE)
    grid.entrance = entrance
    return entrance


def _open_neighbor_counts(grid: DungeonGrid) -> np.ndarray:
    """For every cell, how many of its four neighbours are EMPTY."""
    empty = (grid.categories == CellCategory.EMPTY).astype(np.int8)
    padded = np.pad(empty, 1, constant_values=0)
    return (
        padded[:-2, 1:-1]  # up
        + padded[2:, 1:-1]  # down
        + padded[1:-1, :-2]  # left
        + padded[1:-1, 2:]  # right
    )


def find_dead_ends(grid: DungeonGrid) -> List[Point]:
    """
    Find EMPTY cells with exactly one EMPTY neighbour in the four cardinal
    directions. Returned in row-major order.
    """
    counts = _open_neighbor_counts(grid)
    mask = (grid.categories == CellCategory.EMPTY) & (counts == 1)
    rows, cols = np.nonzero(mask)
    return [Point(int(col), int(row)) for row, col in zip(rows, cols)]


def exit_distance_threshold(grid: DungeonGrid) -> int:
    """Minimum squared distance from the entrance for a fallback exit."""
    min_distance = (grid.width + grid.height) // 3
    return min_distance * min_distance


def place_exit(
    grid: DungeonGrid,
    rng: Optional[random.Random] = None,
    max_attempts: int = 1000,
) -> Point:
    """
    Place the exit as far from the entrance as the layout allows.

    The farthest dead end wins. Without dead ends, random EMPTY cells are
    tried until one lies at least exit_distance_threshold() away; rejected
    tries are reverted to EMPTY. If max_attempts tries all fail, the farthest
    EMPTY cell is used.

    The exit's interaction level is the level the player descends to.

    Raises:
        RuntimeError: If the entrance has not been placed yet.
    """
    rng = rng or random.Random()
    entrance = grid.entrance
    if entrance is None:
        raise RuntimeError("Cannot place exit before the entrance")

    dead_ends = find_dead_ends(grid)
    chosen: Optional[Point] = None

    if dead_ends:
        # Stable sort: ties keep row-major order
        dead_ends.sort(key=lambda p: p.distance_squared(entrance), reverse=True)
        chosen = dead_ends[0]
    else:
        threshold = exit_distance_threshold(grid)
        for _ in range(max_attempts):
            candidate = _random_cell_of(grid, CellCategory.EMPTY, rng)
            grid.set_category(candidate.x, candidate.y, CellCategory.EXIT)
            if candidate.distance_squared(entrance) >= threshold:
                chosen = candidate
                break
            grid.set_category(candidate.x, candidate.y, CellCategory.EMPTY)

        if chosen is None:
            print(
                f"No exit candidate {threshold} away after {max_attempts} tries, "
                "using the farthest floor cell.",
                file=sys.stderr,
            )
            floor = grid.cells_of(CellCategory.EMPTY)
            chosen = max(floor, key=lambda p: p.distance_squared(entrance))

    grid.set_cell(chosen.x, chosen.y, CellCategory.EXIT, interaction_level=grid.level + 1)
    grid.exit = chosen
    return chosen


def place_monsters(
    grid: DungeonGrid,
    count: int = DEFAULT_MONSTER_COUNT,
    rng: Optional[random.Random] = None,
) -> List[Point]:
    """
    Place monsters on random EMPTY cells.

    Each monster's level is the dungeon level give or take one, never below 1.
    If the maze has fewer EMPTY cells than requested, every one is filled.
    """
    rng = rng or random.Random()
    count = min(count, grid.count(CellCategory.EMPTY))

    placed: List[Point] = []
    for _ in range(count):
        position = _random_cell_of(grid, CellCategory.EMPTY, rng)
        monster_level = max(1, grid.level + rng.randint(-1, 1))
        grid.set_cell(position.x, position.y, CellCategory.MONSTER, interaction_level=monster_level)
        placed.append(position)
    return placed


def place_treasures(
    grid: DungeonGrid,
    count: int = DEFAULT_TREASURE_COUNT,
    rng: Optional[random.Random] = None,
) -> List[Point]:
    """
    Place treasures on random EMPTY cells.

    Value is level * 10 plus a random offset in [-10, 9], never below 10.
    The kind is drawn uniformly from TreasureKind.
    """
    rng = rng or random.Random()
    count = min(count, grid.count(CellCategory.EMPTY))
    kinds = list(TreasureKind)

    placed: List[Point] = []
    for _ in range(count):
        position = _random_cell_of(grid, CellCategory.EMPTY, rng)
        value = max(10, grid.level * 10 + rng.randint(-10, 9))
        grid.set_cell(
            position.x,
            position.y,
            CellCategory.TREASURE,
            interaction_level=value,
            treasure_kind=rng.choice(kinds),
        )
        placed.append(position)
    return placed


def place_features(
    grid: DungeonGrid,
    rng: Optional[random.Random] = None,
    monster_count: int = DEFAULT_MONSTER_COUNT,
    treasure_count: int = DEFAULT_TREASURE_COUNT,
) -> None:
    """Place entrance, exit, monsters and treasures, in that order."""
    rng = rng or random.Random()
    place_entrance(grid, rng)
    place_exit(grid, rng)
    place_monsters(grid, monster_count, rng)
    place_treasures(grid, treasure_count, rng)


def apply_difficulty(grid: DungeonGrid, difficulty: "Difficulty") -> None:
    """
    Scale monster levels and treasure values by a difficulty preset.

    Scaled values are truncated toward zero; monsters stay at level 1 or
    above and treasures at MIN_SCALED_TREASURE_VALUE or above.
    """
    monsters = grid.categories == CellCategory.MONSTER
    treasures = grid.categories == CellCategory.TREASURE

    scaled_monsters = (grid.levels * difficulty.monster_mod).astype(int)
    scaled_treasures = (grid.levels * difficulty.treasure_mod).astype(int)

    grid.levels[monsters] = np.maximum(scaled_monsters[monsters], 1)
    grid.levels[treasures] = np.maximum(scaled_treasures[treasures], MIN_SCALED_TREASURE_VALUE)


def monster_tiers(grid: DungeonGrid) -> Dict[MonsterTier, int]:
    """Count monsters per tier. Handy for balancing and tests."""
    tiers = {tier: 0 for tier in MonsterTier}
    for position in grid.cells_of(CellCategory.MONSTER):
        tiers[MonsterTier.for_level(int(grid.levels[position.y, position.x]))] += 1
    return tiers
