"""
Pathfinding algorithms for dungeon navigation.
"""

from collections import deque
import numpy as np
from typing import Deque, Dict, List, Optional, Tuple

from .dungeon_gen import CellCategory, Direction, DungeonGrid, Point

# A path is a list of cells, ordered from start to goal (both included)
Path = List[Point]

# Fixed exploration order, so equal-length routes always resolve the same way
SEARCH_ORDER = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)

# Cells the player walks up to but not through
BLOCKING_CATEGORIES = frozenset({CellCategory.MONSTER, CellCategory.TREASURE})


def _check_in_bounds(grid: DungeonGrid, point: Point, name: str) -> None:
    if not grid.in_bounds(point.x, point.y):
        raise ValueError(
            f"{name} ({point.x}, {point.y}) is outside the {grid.width}x{grid.height} grid"
        )


def find_path(start: Point, goal: Point, grid: DungeonGrid) -> Optional[Path]:
    """
    Find the shortest 4-connected path from start to goal over non-wall cells.

    Breadth-first search with a FIFO queue, exploring up, right, down, left.
    Each visited cell remembers its predecessor so the route can be rebuilt
    by walking back from the goal.

    Args:
        start: Cell to start from
        goal: Cell to reach
        grid: The dungeon; only read

    Returns:
        List of Points from start to goal, both included ([start] if they are
        the same cell), or None if goal cannot be reached or either end is a
        wall.

    Raises:
        ValueError: If start or goal is outside the grid.
    """
    _check_in_bounds(grid, start, "start")
    _check_in_bounds(grid, goal, "goal")

    if not grid.is_walkable(start.x, start.y) or not grid.is_walkable(goal.x, goal.y):
        return None

    if start == goal:
        return [start]

    visited = np.zeros((grid.height, grid.width), dtype=bool)
    visited[start.y, start.x] = True

    # parent[cell] = previous cell on the shortest route from start
    parent: Dict[Tuple[int, int], Tuple[int, int]] = {}
    queue: Deque[Tuple[int, int]] = deque([(start.x, start.y)])

    while queue:
        x, y = queue.popleft()

        if (x, y) == (goal.x, goal.y):
            path: Path = []
            node = (x, y)
            while node != (start.x, start.y):
                path.append(Point(*node))
                node = parent[node]
            path.append(start)
            path.reverse()
            return path

        for direction in SEARCH_ORDER:
            nx = x + direction.dx
            ny = y + direction.dy
            if not grid.in_bounds(nx, ny) or visited[ny, nx]:
                continue
            if grid.categories[ny, nx] == CellCategory.WALL:
                continue
            visited[ny, nx] = True
            parent[(nx, ny)] = (x, y)
            queue.append((nx, ny))

    return None  # Queue exhausted


def preview_path(start: Point, goal: Point, grid: DungeonGrid) -> Optional[Path]:
    """
    Route to show while the player hovers over a target cell.

    Leaves out the player's own cell and stops at the first monster or
    treasure on the way, including it, since that is as far as a move order
    would get.

    Returns None when the target is outside the grid or cannot be reached.
    """
    if not grid.in_bounds(goal.x, goal.y):
        return None

    path = find_path(start, goal, grid)
    if path is None:
        return None

    preview: Path = []
    for point in path[1:]:
        preview.append(point)
        if grid.category_at(point.x, point.y) in BLOCKING_CATEGORIES:
            break
    return preview
