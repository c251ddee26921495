"""
Interaction resolution for special cells.

When the player touches a monster, a treasure or the exit, the registry
looks up the interaction registered for that cell category, resolves it
against the player's stats, applies the health and score changes and logs
a message.

Interactions are a closed set of plain data records (MonsterInteraction,
TreasureInteraction, ExitInteraction). Each has a pure resolver function that
turns (record, player) into an InteractionOutcome; the resolver is picked by
record type.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union, TYPE_CHECKING

from .dungeon_gen import Cell, CellCategory, DungeonGrid, TreasureKind
from .messages import Clock, MessageLog

if TYPE_CHECKING:
    from .player import Player


NOTHING_HAPPENS: str = "Nothing happens."

EXIT_SCORE_BONUS: int = 20
POTION_HEALING: int = 10


@dataclass(frozen=True)
class InteractionOutcome:
    """What an interaction did. Created fresh for every interaction."""

    message: str
    health_change: int = 0
    score_change: int = 0
    remove_entity: bool = False
    entity_removed: CellCategory = CellCategory.EMPTY


@dataclass(frozen=True)
class MonsterInteraction:
    level: int = 1


@dataclass(frozen=True)
class TreasureInteraction:
    value: int = 10
    kind: TreasureKind = TreasureKind.GOLD


@dataclass(frozen=True)
class ExitInteraction:
    next_level: int = 2


# Union type for all interactions
Interaction = Union[MonsterInteraction, TreasureInteraction, ExitInteraction]


def resolve_monster(monster: MonsterInteraction, player: "Player") -> InteractionOutcome:
    """Fight a monster: damage reduced by defense percent, score by level."""
    damage = (5 + monster.level * 2) * (100 - player.defense) // 100
    score = 10 + monster.level * 5
    return InteractionOutcome(
        message=f"Defeated a level {monster.level} monster! Took {damage} damage.",
        health_change=-damage,
        score_change=score,
        remove_entity=True,
        entity_removed=CellCategory.MONSTER,
    )


def resolve_treasure(treasure: TreasureInteraction, player: "Player") -> InteractionOutcome:
    """Pick up treasure: value raised by luck percent, potions also heal."""
    score = treasure.value * (100 + player.luck) // 100
    health = POTION_HEALING if treasure.kind == TreasureKind.POTION else 0
    return InteractionOutcome(
        message=f"Found {treasure.kind.label} worth {score} points!",
        health_change=health,
        score_change=score,
        remove_entity=True,
        entity_removed=CellCategory.TREASURE,
    )


def resolve_exit(exit_: ExitInteraction, player: "Player") -> InteractionOutcome:
    # The exit stays put; the orchestrator handles the level change
    return InteractionOutcome(
        message=f"Descending to dungeon level {exit_.next_level}!",
        health_change=0,
        score_change=EXIT_SCORE_BONUS,
        remove_entity=False,
        entity_removed=CellCategory.EMPTY,
    )


_RESOLVERS: Dict[type, Callable[..., InteractionOutcome]] = {
    MonsterInteraction: resolve_monster,
    TreasureInteraction: resolve_treasure,
    ExitInteraction: resolve_exit,
}


def resolve(interaction: Interaction, player: "Player") -> InteractionOutcome:
    """Resolve any interaction against the player, without applying it."""
    resolver = _RESOLVERS.get(type(interaction))
    if resolver is None:
        raise TypeError(f"Unknown interaction type: {type(interaction).__name__}")
    return resolver(interaction, player)


def interaction_for_cell(cell: Cell, dungeon_level: int) -> Optional[Interaction]:
    """
    Build the interaction for a cell from its own parameters.

    Returns None for categories that have no interaction.
    """
    if cell.category == CellCategory.MONSTER:
        return MonsterInteraction(level=cell.interaction_level)
    if cell.category == CellCategory.TREASURE:
        return TreasureInteraction(
            value=cell.interaction_level,
            kind=cell.treasure_kind if cell.treasure_kind is not None else TreasureKind.GOLD,
        )
    if cell.category == CellCategory.EXIT:
        return ExitInteraction(next_level=dungeon_level + 1)
    return None


def default_interactions() -> Dict[CellCategory, Interaction]:
    """Stand-in interactions used before any level has been scanned."""
    return {
        CellCategory.MONSTER: MonsterInteraction(level=1),
        CellCategory.TREASURE: TreasureInteraction(value=10, kind=TreasureKind.GOLD),
        CellCategory.EXIT: ExitInteraction(next_level=2),
    }


class InteractionRegistry:
    """
    Maps cell categories to interactions and applies their outcomes.

    Interactions are registered per category, not per cell, so callers
    re-bind a category (bind_cell) with the parameters of the specific cell
    being entered, and rebuild() whenever a new level is generated.
    """

    def __init__(
        self,
        message_log: Optional[MessageLog] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._interactions: Dict[CellCategory, Interaction] = {}
        self.message_log: MessageLog = (
            message_log if message_log is not None else MessageLog(clock=clock)
        )

    def register(self, category: CellCategory, interaction: Interaction) -> None:
        """Install or replace the interaction for a category."""
        self._interactions[category] = interaction

    def unregister(self, category: CellCategory) -> None:
        self._interactions.pop(category, None)

    def get(self, category: CellCategory) -> Optional[Interaction]:
        return self._interactions.get(category)

    def __contains__(self, category: CellCategory) -> bool:
        return category in self._interactions

    def bind_cell(self, cell: Cell, dungeon_level: int) -> None:
        """Register the interaction for this cell's category from its parameters."""
        interaction = interaction_for_cell(cell, dungeon_level)
        if interaction is not None:
            self.register(cell.category, interaction)

    def rebuild(self, grid: DungeonGrid) -> None:
        """
        Reset to defaults, then bind every special category found on the grid.

        When a category occurs on several cells the last one in row-major
        order wins; bind_cell() before handle() gives exact per-cell values.
        """
        self._interactions = default_interactions()
        for category in (CellCategory.MONSTER, CellCategory.TREASURE, CellCategory.EXIT):
            positions = grid.cells_of(category)
            if positions:
                last = positions[-1]
                self.bind_cell(grid.cell(last.x, last.y), grid.level)

    def handle(self, category: CellCategory, player: "Player") -> InteractionOutcome:
        """
        Resolve the interaction for a category and apply it to the player.

        Health is capped at max_health but may go negative; the caller decides
        what zero or negative health means. Unregistered categories produce a
        harmless "Nothing happens." outcome, which is logged like any other.
        """
        interaction = self._interactions.get(category)
        if interaction is None:
            outcome = InteractionOutcome(message=NOTHING_HAPPENS)
        else:
            outcome = resolve(interaction, player)
            player.health += outcome.health_change
            player.score += outcome.score_change
            if player.health > player.max_health:
                player.health = player.max_health

        self.message_log.add(outcome.message)
        return outcome

    def update_messages(self) -> None:
        """Expire old messages. Call once per tick."""
        self.message_log.update()

    def get_messages(self) -> List[str]:
        return self.message_log.get_messages()
