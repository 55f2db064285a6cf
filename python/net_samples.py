"""
Sample nets for demos and tests.
"""

from __future__ import annotations

SAMPLE_NET = "\n".join([
    "        ...#",
    "        .#..",
    "        #...",
    "        ....",
    "...#.......#",
    "........#...",
    "..#....#....",
    "..........#.",
    "        ...#....",
    "        .....#..",
    "        .#......",
    "        ......#.",
])

SAMPLE_PATH = "10R5L5R10L4R5L5"

SAMPLE_PUZZLE = f"{SAMPLE_NET}\n\n{SAMPLE_PATH}\n"

SAMPLE_FACE_SIZE = 4

# The 11 cube nets, one face per 'X', holes as '_', rows separated by '|'
CUBE_NETS: dict[str, str] = {
    "cross_0_0": "X___|XXXX|X___",
    "cross_0_1": "X___|XXXX|_X__",
    "cross_0_2": "X___|XXXX|__X_",
    "cross_0_3": "X___|XXXX|___X",
    "cross_1_1": "_X__|XXXX|_X__",
    "cross_1_2": "_X__|XXXX|__X_",
    "step_2_3_1_a": "XX__|_XXX|_X__",
    "step_2_3_1_b": "XX__|_XXX|__X_",
    "step_2_3_1_c": "XX__|_XXX|___X",
    "stairs_2_2_2": "XX__|_XX_|__XX",
    "stairs_3_3": "XXX__|__XXX",
}


def net_from_layout(layout: str, face_size: int, walls: set[tuple[int, int]] | None = None) -> str:
    """
    Expand a face layout into net text.

    Args:
        layout: Rows of 'X' (face) and '_' (hole) separated by '|'
        face_size: Tiles per face side
        walls: Absolute (row, column) tiles to draw as '#'

    Returns:
        Net text with every face tile open unless listed in `walls`
    """
    walls = walls or set()
    lines: list[str] = []
    for fy, layout_row in enumerate(layout.split("|")):
        for dy in range(face_size):
            row = fy * face_size + dy
            chars: list[str] = []
            for fx, marker in enumerate(layout_row):
                for dx in range(face_size):
                    col = fx * face_size + dx
                    if marker == "_":
                        chars.append(" ")
                    else:
                        chars.append("#" if (row, col) in walls else ".")
            lines.append("".join(chars))
    return "\n".join(lines)
