"""
ASCII conversion for dungeon grids.

Used by the debug tool to dump generated levels and by tests to describe
hand-made layouts:

    #######
    #S..M.#
    #.###.#
    #..T.E#
    #######
"""

from typing import Dict, List

from .dungeon_gen import CellCategory, DungeonGrid, Point, TreasureKind

TILE_TO_ASCII: Dict[CellCategory, str] = {
    CellCategory.WALL: "#",
    CellCategory.EMPTY: ".",
    CellCategory.MONSTER: "M",
    CellCategory.TREASURE: "T",
    CellCategory.ENTRANCE: "S",
    CellCategory.EXIT: "E",
}

ASCII_TO_TILE: Dict[str, CellCategory] = {char: tile for tile, char in TILE_TO_ASCII.items()}


def render_dungeon_ascii(grid: DungeonGrid) -> str:
    """Convert a grid to one line of characters per row."""
    lines = []
    for row in range(grid.height):
        lines.append(
            "".join(TILE_TO_ASCII[CellCategory(int(tile))] for tile in grid.categories[row])
        )
    return "\n".join(lines)


def grid_from_ascii(
    rows: List[str],
    level: int = 1,
    treasure_kind: TreasureKind = TreasureKind.GOLD,
) -> DungeonGrid:
    """
    Parse an ASCII layout into a grid.

    Monsters get the dungeon level, treasures ten times the level, the exit
    the next level, matching the centre of the ranges the generator uses.

    Raises:
        ValueError: On unknown characters, rows of different lengths, or more
            than one entrance or exit.
    """
    if not rows:
        raise ValueError("Layout must have at least one row")
    width = len(rows[0])
    if any(len(line) != width for line in rows):
        raise ValueError("All layout rows must have the same length")

    grid = DungeonGrid(width, len(rows), level)
    for y, line in enumerate(rows):
        for x, char in enumerate(line):
            if char not in ASCII_TO_TILE:
                raise ValueError(f"Unknown layout character {char!r} at ({x}, {y})")
            category = ASCII_TO_TILE[char]

            if category == CellCategory.MONSTER:
                grid.set_cell(x, y, category, interaction_level=level)
            elif category == CellCategory.TREASURE:
                grid.set_cell(x, y, category, interaction_level=level * 10, treasure_kind=treasure_kind)
            elif category == CellCategory.EXIT:
                if grid.exit is not None:
                    raise ValueError("Layout has more than one exit")
                grid.set_cell(x, y, category, interaction_level=level + 1)
                grid.exit = Point(x, y)
            elif category == CellCategory.ENTRANCE:
                if grid.entrance is not None:
                    raise ValueError("Layout has more than one entrance")
                grid.set_category(x, y, category)
                grid.entrance = Point(x, y)
            else:
                grid.set_category(x, y, category)
    return grid
