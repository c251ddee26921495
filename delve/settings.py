"""
Game settings and difficulty presets.

Difficulties live in a small registry keyed by name, so new presets can be
added without touching the orchestrator.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .player import DEFAULT_STEP_INTERVAL

MIN_DUNGEON_WIDTH: int = 20
MAX_DUNGEON_WIDTH: int = 80
MIN_DUNGEON_HEIGHT: int = 10
MAX_DUNGEON_HEIGHT: int = 40


@dataclass(frozen=True)
class Difficulty:
    """
    A difficulty preset.

    level is the dungeon level a new run starts on. monster_mod and
    treasure_mod scale monster levels and treasure values.
    """

    name: str
    level: int
    monster_mod: float
    treasure_mod: float


# Registry of available difficulties
_DIFFICULTIES: Dict[str, Difficulty] = {}


def register_difficulty(difficulty: Difficulty) -> None:
    """Register a difficulty preset under its (case-insensitive) name."""
    _DIFFICULTIES[difficulty.name.lower()] = difficulty


def get_difficulty(name: str) -> Difficulty:
    """Get a difficulty preset by name."""
    key = name.lower()
    if key not in _DIFFICULTIES:
        raise ValueError(f"Unknown difficulty: {name}")
    return _DIFFICULTIES[key]


def list_difficulties() -> List[str]:
    """Registered difficulty names, easiest first."""
    return [d.name for d in sorted(_DIFFICULTIES.values(), key=lambda d: d.level)]


EASY = Difficulty("Easy", level=1, monster_mod=0.8, treasure_mod=1.2)
NORMAL = Difficulty("Normal", level=2, monster_mod=1.0, treasure_mod=1.0)
HARD = Difficulty("Hard", level=3, monster_mod=1.2, treasure_mod=0.8)
NIGHTMARE = Difficulty("Nightmare", level=4, monster_mod=1.5, treasure_mod=0.7)

for _preset in (EASY, NORMAL, HARD, NIGHTMARE):
    register_difficulty(_preset)


@dataclass
class GameSettings:
    """
    Everything the orchestrator needs to know to build levels.

    Raises:
        ValueError: On dimensions outside the supported ranges, negative
            feature counts or a non-positive step interval.
    """

    dungeon_width: int = 40
    dungeon_height: int = 20
    difficulty: Difficulty = NORMAL
    monster_count: int = 10
    treasure_count: int = 10

    # Inclusive ranges for the size of every level after the first
    next_width_range: Tuple[int, int] = (40, 69)
    next_height_range: Tuple[int, int] = (12, 19)

    step_interval: float = DEFAULT_STEP_INTERVAL

    def __post_init__(self) -> None:
        if not MIN_DUNGEON_WIDTH <= self.dungeon_width <= MAX_DUNGEON_WIDTH:
            raise ValueError(
                f"dungeon_width must be between {MIN_DUNGEON_WIDTH} and "
                f"{MAX_DUNGEON_WIDTH}, got {self.dungeon_width}"
            )
        if not MIN_DUNGEON_HEIGHT <= self.dungeon_height <= MAX_DUNGEON_HEIGHT:
            raise ValueError(
                f"dungeon_height must be between {MIN_DUNGEON_HEIGHT} and "
                f"{MAX_DUNGEON_HEIGHT}, got {self.dungeon_height}"
            )
        if self.monster_count < 0 or self.treasure_count < 0:
            raise ValueError("monster_count and treasure_count must not be negative")
        for name, (low, high) in (
            ("next_width_range", self.next_width_range),
            ("next_height_range", self.next_height_range),
        ):
            if low < 5 or high < low:
                raise ValueError(f"{name} must be an increasing range starting at 5 or more")
        if self.step_interval <= 0:
            raise ValueError("step_interval must be positive")

    @classmethod
    def for_difficulty(cls, name: str, **overrides) -> "GameSettings":
        return cls(difficulty=get_difficulty(name), **overrides)
