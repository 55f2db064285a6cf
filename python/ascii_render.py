"""
ASCII rendering for cubenet boards.

Provides two views:
1. The net itself, one colour per face, with the agent's trail drawn as arrows
2. A seam table listing which face side is glued to which
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from simple_chalk import chalk  # type: ignore[import-untyped]

from cubenet import Board, absolute_tile, describe_edge
from net_types import Direction, FaceGrid, Pose, Position

logger = logging.getLogger(__name__)

FACING_ARROWS: dict[Direction, str] = {
    Direction.RIGHT: ">",
    Direction.DOWN: "v",
    Direction.LEFT: "<",
    Direction.UP: "^",
}

PALETTE: list[Callable[[str], str]] = [
    chalk.red,
    chalk.green,
    chalk.yellow,
    chalk.blue,
    chalk.magenta,
    chalk.cyan,
    chalk.redBright,
    chalk.greenBright,
    chalk.yellowBright,
    chalk.blueBright,
]


def face_colors(grid: FaceGrid) -> dict[Position, Callable[[str], str]]:
    """Assign palette colours to faces in row-major order."""
    return {position: PALETTE[i % len(PALETTE)] for i, position in enumerate(grid.positions)}


def render_board(
    board: Board,
    trail: Iterable[Pose] = (),
    pose: Pose | None = None,
) -> str:
    """
    Render the net to an ASCII string with colours.

    Args:
        board: The board to render
        trail: Poses to overlay as facing arrows, later poses drawn on top
        pose: Optional current pose, drawn in white

    Returns:
        Rendered ASCII string with ANSI colour codes
    """
    grid = board.grid
    size = grid.face_size
    colors = face_colors(grid)

    buffer: list[list[str]] = [[" " for _ in range(grid.width * size)] for _ in range(grid.height * size)]

    for position in grid.positions:
        colorize = colors[position]
        face = grid.face_at(position)
        for y, row in enumerate(face.tiles):
            for x, tile in enumerate(row):
                buffer[position.y * size + y][position.x * size + x] = colorize(tile.value)

    drawn = 0
    for step in trail:
        row, col = absolute_tile(step, size)
        buffer[row][col] = colors[step.face](FACING_ARROWS[step.facing])
        drawn += 1

    if pose is not None:
        row, col = absolute_tile(pose, size)
        buffer[row][col] = chalk.white(FACING_ARROWS[pose.facing])

    logger.debug("render_board: %dx%d tiles, %d trail poses", grid.width * size, grid.height * size, drawn)
    return "\n".join("".join(row) for row in buffer)


def render_seams(board: Board) -> str:
    """One line per glued pair of sides, coloured by face."""
    colors = face_colors(board.grid)
    lines = [f"Seams ({board.rules.wrap_mode.value}):"]
    for edge, partner in board.edges.seams():
        left = colors[edge[0]](describe_edge(edge))
        right = colors[partner[0]](describe_edge(partner))
        lines.append(f"  {left} <-> {right}")
    return "\n".join(lines)
