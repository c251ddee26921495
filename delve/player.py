"""
The player character.

The player walks cell by cell along a pending path. Interactions change its
stats; the orchestrator repositions it when a new level starts.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .dungeon_gen import CellCategory, DungeonGrid, Point
from .pathfinding import BLOCKING_CATEGORIES

# Seconds between two steps along a path
DEFAULT_STEP_INTERVAL: float = 10 / 60

# Cooldown left over from summing frame times counts as run out
COOLDOWN_EPSILON: float = 1e-9


@dataclass
class Player:
    """
    Player position, stats and pending movement.

    defense is a percentage damage reduction, luck a percentage bonus on
    treasure value.
    """

    x: int
    y: int
    health: int = 100
    max_health: int = 100
    score: int = 0
    defense: int = 10
    luck: int = 5
    level: int = 1
    experience: int = 0

    # Cells still to walk, next one first. Excludes the current cell.
    path: List[Point] = field(default_factory=list)

    step_interval: float = DEFAULT_STEP_INTERVAL
    move_cooldown: float = 0.0

    @classmethod
    def at(cls, position: Point, **stats) -> "Player":
        return cls(x=position.x, y=position.y, **stats)

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def place(self, position: Point) -> None:
        """Teleport to a cell and forget any pending path."""
        self.x, self.y = position.x, position.y
        self.path = []
        self.move_cooldown = 0.0

    def update(self, dt: float, grid: DungeonGrid) -> Optional[Point]:
        """
        Advance along the pending path.

        Takes at most one step per call, and only once the movement cooldown
        has run out. Stops (dropping the rest of the path) in front of a
        monster or treasure, which must be approached with a move order.

        Returns:
            The cell stepped onto, or None if the player did not move.
        """
        if self.move_cooldown > COOLDOWN_EPSILON:
            self.move_cooldown = max(0.0, self.move_cooldown - dt)
            return None

        if not self.path:
            return None

        next_cell = self.path[0]
        category = grid.category_at(next_cell.x, next_cell.y)

        if category in BLOCKING_CATEGORIES or category == CellCategory.WALL:
            self.path = []
            return None

        self.x, self.y = next_cell.x, next_cell.y
        self.path = self.path[1:]
        self.move_cooldown = self.step_interval
        return next_cell
