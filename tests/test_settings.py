"""Tests for game settings and the difficulty registry."""

import pytest

from delve.player import DEFAULT_STEP_INTERVAL
from delve.settings import (
    EASY,
    HARD,
    NIGHTMARE,
    NORMAL,
    Difficulty,
    GameSettings,
    get_difficulty,
    list_difficulties,
    register_difficulty,
)


class TestDifficultyRegistry:
    """Tests for difficulty registration and lookup."""

    def test_builtin_presets_listed_easiest_first(self):
        names = list_difficulties()
        assert names[:4] == ["Easy", "Normal", "Hard", "Nightmare"]

    def test_lookup_is_case_insensitive(self):
        assert get_difficulty("hard") is HARD
        assert get_difficulty("NIGHTMARE") is NIGHTMARE

    def test_preset_values(self):
        assert (EASY.level, EASY.monster_mod, EASY.treasure_mod) == (1, 0.8, 1.2)
        assert (NORMAL.level, NORMAL.monster_mod, NORMAL.treasure_mod) == (2, 1.0, 1.0)
        assert (HARD.level, HARD.monster_mod, HARD.treasure_mod) == (3, 1.2, 0.8)
        assert (NIGHTMARE.level, NIGHTMARE.monster_mod, NIGHTMARE.treasure_mod) == (4, 1.5, 0.7)

    def test_unknown_difficulty(self):
        with pytest.raises(ValueError, match="Unknown difficulty"):
            get_difficulty("impossible")

    def test_register_custom(self):
        custom = Difficulty("Torment", level=9, monster_mod=2.0, treasure_mod=0.5)
        register_difficulty(custom)

        assert get_difficulty("torment") is custom
        assert list_difficulties()[-1] == "Torment"


class TestGameSettings:
    """Tests for GameSettings defaults and validation."""

    def test_defaults(self):
        settings = GameSettings()

        assert settings.dungeon_width == 40
        assert settings.dungeon_height == 20
        assert settings.difficulty is NORMAL
        assert settings.monster_count == 10
        assert settings.treasure_count == 10
        assert settings.next_width_range == (40, 69)
        assert settings.next_height_range == (12, 19)
        assert settings.step_interval == DEFAULT_STEP_INTERVAL

    @pytest.mark.parametrize("width,height", [(20, 10), (80, 40), (33, 17)])
    def test_accepts_sizes_in_range(self, width, height):
        settings = GameSettings(dungeon_width=width, dungeon_height=height)
        assert (settings.dungeon_width, settings.dungeon_height) == (width, height)

    @pytest.mark.parametrize("width,height", [(19, 20), (81, 20), (40, 9), (40, 41)])
    def test_rejects_sizes_out_of_range(self, width, height):
        with pytest.raises(ValueError):
            GameSettings(dungeon_width=width, dungeon_height=height)

    def test_rejects_negative_counts(self):
        with pytest.raises(ValueError):
            GameSettings(monster_count=-1)
        with pytest.raises(ValueError):
            GameSettings(treasure_count=-1)

    @pytest.mark.parametrize("bad_range", [(4, 10), (30, 20)])
    def test_rejects_bad_next_ranges(self, bad_range):
        with pytest.raises(ValueError):
            GameSettings(next_width_range=bad_range)
        with pytest.raises(ValueError):
            GameSettings(next_height_range=bad_range)

    def test_rejects_non_positive_step_interval(self):
        with pytest.raises(ValueError):
            GameSettings(step_interval=0)

    def test_for_difficulty(self):
        settings = GameSettings.for_difficulty("easy", dungeon_width=30)

        assert settings.difficulty is EASY
        assert settings.dungeon_width == 30
