import random
import sys
from typing import Any, List, Optional

from .dungeon_gen import CellCategory, DungeonGrid, Point, generate_dungeon
from .event_system import EventBus, Event
from .interactions import InteractionOutcome, InteractionRegistry
from .messages import Clock
from .pathfinding import Path, find_path, preview_path
from .player import Player
from .settings import Difficulty, GameSettings

# Cells that trigger an interaction when the player steps toward them
INTERACTIVE_CATEGORIES = frozenset(
    {CellCategory.MONSTER, CellCategory.TREASURE, CellCategory.EXIT}
)


class Game:
    """
    Runs one player through a sequence of dungeon levels.

    The game owns the current grid. Renderers and input handlers only read
    it (grid, player, messages, preview_path, describe) and send orders
    through move_to(); the process bootstrap calls tick() once per frame.

    Health at or below zero ends the run: is_game_over turns true and later
    orders and ticks are ignored, apart from message expiry.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.settings: GameSettings = settings if settings is not None else GameSettings()
        self.rng: random.Random = rng or random.Random()
        self.event_bus: Optional[EventBus] = event_bus
        self.registry: InteractionRegistry = InteractionRegistry(clock=clock)
        self.is_game_over: bool = False

        self.grid: DungeonGrid = self._generate(
            self.settings.dungeon_width,
            self.settings.dungeon_height,
            self.settings.difficulty.level,
            self.settings.difficulty,
        )
        self.player: Player = Player.at(
            self._entrance(), step_interval=self.settings.step_interval
        )
        self.registry.rebuild(self.grid)
        self._emit(
            Event.LEVEL_START,
            level=self.grid.level,
            width=self.grid.width,
            height=self.grid.height,
        )

    def set_event_bus(self, bus: EventBus) -> None:
        self.event_bus = bus

    def _emit(self, event: Event, **kwargs: Any) -> None:
        """Emit an event if an event bus is configured."""
        if self.event_bus:
            self.event_bus.emit(event, **kwargs)

    @property
    def level(self) -> int:
        """Current dungeon level."""
        return self.grid.level

    @property
    def messages(self) -> List[str]:
        return self.registry.get_messages()

    def _generate(
        self,
        width: int,
        height: int,
        level: int,
        difficulty: Optional[Difficulty] = None,
    ) -> DungeonGrid:
        """Build a level. Only the first level of a run is scaled by difficulty."""
        print(f"[Game] Generating dungeon level {level} ({width}x{height})", file=sys.stderr)
        return generate_dungeon(
            width,
            height,
            level,
            rng=self.rng,
            monster_count=self.settings.monster_count,
            treasure_count=self.settings.treasure_count,
            difficulty=difficulty,
        )

    def _entrance(self) -> Point:
        if self.grid.entrance is None:
            raise RuntimeError("Generated dungeon has no entrance")
        return self.grid.entrance

    def preview_path(self, x: int, y: int) -> Optional[Path]:
        """Route the player would take toward (x, y), for hover highlighting."""
        return preview_path(self.player.position, Point(x, y), self.grid)

    def describe(self, x: int, y: int) -> Optional[str]:
        """Hover text for a cell, or None outside the grid."""
        if not self.grid.in_bounds(x, y):
            return None
        return self.grid.describe(x, y)

    def move_to(self, x: int, y: int) -> Optional[InteractionOutcome]:
        """
        Order the player toward (x, y).

        If the first step lands on a monster, treasure or the exit, that
        interaction is resolved right away. A cleared cell becomes the
        player's only pending step; the exit starts the next level. Otherwise
        the whole route is queued and walked by tick().

        Returns:
            The interaction outcome, if the order triggered one.
        """
        if self.is_game_over or not self.grid.in_bounds(x, y):
            return None

        path = find_path(self.player.position, Point(x, y), self.grid)
        if path is None or len(path) < 2:
            return None

        next_cell = path[1]
        category = self.grid.category_at(next_cell.x, next_cell.y)

        if category not in INTERACTIVE_CATEGORIES:
            self.player.path = path[1:]
            return None

        outcome = self._interact(next_cell)
        if category == CellCategory.EXIT:
            self.advance_level()
        elif (
            not self.is_game_over
            and self.grid.category_at(next_cell.x, next_cell.y) == CellCategory.EMPTY
        ):
            self.player.path = [next_cell]
        return outcome

    def tick(self, dt: float) -> None:
        """
        Advance the game by dt seconds.

        Expires old messages, moves the player at most one step, and starts
        the next level when the player ends up on the exit.
        """
        self.registry.update_messages()
        if self.is_game_over:
            return

        stepped = self.player.update(dt, self.grid)
        if stepped is None:
            return

        self._emit(Event.PLAYER_MOVED, x=stepped.x, y=stepped.y)
        if self.grid.category_at(stepped.x, stepped.y) == CellCategory.EXIT:
            self._interact(stepped)
            self.advance_level()

    def advance_level(self) -> None:
        """
        Replace the grid with a freshly generated next level.

        The player keeps all stats and is moved to the new entrance.
        """
        finished = self.grid.level
        self._emit(Event.LEVEL_END, level=finished)

        width = self.rng.randint(*self.settings.next_width_range)
        height = self.rng.randint(*self.settings.next_height_range)
        self.grid = self._generate(width, height, finished + 1)

        self.player.place(self._entrance())
        self.registry.rebuild(self.grid)
        self._emit(Event.LEVEL_START, level=self.grid.level, width=width, height=height)

    def _interact(self, position: Point) -> InteractionOutcome:
        cell = self.grid.cell(position.x, position.y)
        self.registry.bind_cell(cell, self.grid.level)
        outcome = self.registry.handle(cell.category, self.player)
        self._emit(Event.INTERACTION, category=cell.category, outcome=outcome)

        if outcome.remove_entity:
            self.grid.clear_cell(position.x, position.y)
            self._emit(
                Event.CELL_CLEARED, x=position.x, y=position.y, category=outcome.entity_removed
            )

        if not self.player.is_alive and not self.is_game_over:
            self.is_game_over = True
            print(f"[Game] Player died on level {self.grid.level}", file=sys.stderr)
            self._emit(Event.PLAYER_DIED, health=self.player.health)

        return outcome
