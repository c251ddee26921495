"""Dungeon generation, pathfinding and interaction resolution."""

from delve.dungeon_gen import (
    Cell,
    CellCategory,
    Direction,
    DungeonGrid,
    MonsterTier,
    Point,
    TreasureKind,
    carve_maze,
    generate_dungeon,
    generate_maze,
)
from delve.features import (
    apply_difficulty,
    find_dead_ends,
    place_entrance,
    place_exit,
    place_features,
    place_monsters,
    place_treasures,
)
from delve.pathfinding import Path, find_path, preview_path
from delve.interactions import (
    ExitInteraction,
    InteractionOutcome,
    InteractionRegistry,
    MonsterInteraction,
    TreasureInteraction,
    resolve,
)
from delve.messages import MessageLog, TimedMessage
from delve.player import Player
from delve.event_system import Event, EventBus, EventData
from delve.settings import Difficulty, GameSettings, get_difficulty, list_difficulties
from delve.world import Game
