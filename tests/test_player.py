"""Tests for player movement along a pending path."""

from delve.ascii_map import grid_from_ascii
from delve.dungeon_gen import Point
from delve.player import DEFAULT_STEP_INTERVAL, Player


CORRIDOR = grid_from_ascii([
    "#########",
    "#....M..#",
    "#########",
])


class TestPlayerMovement:
    """Test Player.update stepping and cooldown."""

    def test_no_path_no_move(self):
        player = Player(x=1, y=1)
        assert player.update(1.0, CORRIDOR) is None
        assert player.position == Point(1, 1)

    def test_steps_once_then_waits(self):
        player = Player(x=1, y=1, path=[Point(2, 1), Point(3, 1)])

        assert player.update(0.0, CORRIDOR) == Point(2, 1)
        assert player.move_cooldown == DEFAULT_STEP_INTERVAL
        assert player.update(0.05, CORRIDOR) is None
        assert player.position == Point(2, 1)
        assert player.path == [Point(3, 1)]

    def test_steps_again_after_cooldown(self):
        player = Player(x=1, y=1, path=[Point(2, 1), Point(3, 1)], step_interval=0.1)

        player.update(0.0, CORRIDOR)
        player.update(0.1, CORRIDOR)  # cooldown runs out
        stepped = player.update(0.0, CORRIDOR)

        assert stepped == Point(3, 1)
        assert player.path == []

    def test_steps_every_eleven_frames(self):
        """At 60 fps a 10-frame cooldown gives a step on every 11th frame."""
        grid = grid_from_ascii(["############", "#..........#", "############"])
        player = Player(x=1, y=1, path=[Point(x, 1) for x in range(2, 11)])

        step_frames = []
        for frame in range(1, 51):
            if player.update(1 / 60, grid) is not None:
                step_frames.append(frame)

        assert step_frames == [1, 12, 23, 34, 45]

    def test_stops_in_front_of_monster(self):
        player = Player(x=3, y=1, path=[Point(4, 1), Point(5, 1), Point(6, 1)])

        player.update(0.0, CORRIDOR)
        player.move_cooldown = 0.0

        assert player.update(0.0, CORRIDOR) is None
        assert player.position == Point(4, 1)
        assert player.path == []

    def test_place_resets_movement(self):
        player = Player(x=1, y=1, path=[Point(2, 1)], move_cooldown=0.3)

        player.place(Point(6, 1))

        assert player.position == Point(6, 1)
        assert player.path == []
        assert player.move_cooldown == 0.0

    def test_is_alive(self):
        assert Player(x=1, y=1).is_alive
        assert not Player(x=1, y=1, health=0).is_alive
        assert not Player(x=1, y=1, health=-3).is_alive

    def test_at(self):
        player = Player.at(Point(4, 2), luck=9)
        assert (player.x, player.y, player.luck) == (4, 2, 9)
