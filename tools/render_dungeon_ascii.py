#!/usr/bin/env python3
"""
Render a generated dungeon as ASCII art for debugging.

Usage:
    uv run tools/render_dungeon_ascii.py [--width N] [--height N] [--level L]
                                         [--difficulty NAME] [--seed S]
"""

import argparse
import random
import sys
from pathlib import Path

# Add parent directory to path so we can import delve
sys.path.insert(0, str(Path(__file__).parent.parent))

from delve.ascii_map import render_dungeon_ascii
from delve.dungeon_gen import CellCategory, generate_dungeon
from delve.features import find_dead_ends, monster_tiers
from delve.pathfinding import find_path
from delve.settings import get_difficulty, list_difficulties


def main():
    parser = argparse.ArgumentParser(description="Render dungeon as ASCII art")
    parser.add_argument("--width", type=int, default=40, help="Dungeon width in cells")
    parser.add_argument("--height", type=int, default=20, help="Dungeon height in cells")
    parser.add_argument("--level", type=int, default=1, help="Dungeon level")
    parser.add_argument("--monsters", type=int, default=10, help="Number of monsters")
    parser.add_argument("--treasures", type=int, default=10, help="Number of treasures")
    parser.add_argument(
        "--difficulty",
        choices=[name.lower() for name in list_difficulties()],
        help="Scale monsters and treasures by a difficulty preset",
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducible generation")
    args = parser.parse_args()

    rng = random.Random(args.seed)
    difficulty = get_difficulty(args.difficulty) if args.difficulty else None

    grid = generate_dungeon(
        args.width,
        args.height,
        args.level,
        rng=rng,
        monster_count=args.monsters,
        treasure_count=args.treasures,
        difficulty=difficulty,
    )

    print(render_dungeon_ascii(grid))

    # Print some debug info
    print(f"\n--- Debug Info ---")
    print(f"Map size: {grid.width}x{grid.height} cells, level {grid.level}")
    print(f"Entrance: {grid.entrance}  Exit: {grid.exit}")
    print(f"Dead ends: {len(find_dead_ends(grid))}")
    print(f"Monsters: {grid.count(CellCategory.MONSTER)}  Treasures: {grid.count(CellCategory.TREASURE)}")
    for tier, count in monster_tiers(grid).items():
        if count:
            print(f"  {tier.name.lower()}: {count}")

    if grid.entrance is not None and grid.exit is not None:
        route = find_path(grid.entrance, grid.exit, grid)
        length = len(route) - 1 if route else "unreachable"
        print(f"Entrance to exit: {length} steps")


if __name__ == "__main__":
    main()
