"""
Puzzle parsing utilities for cubenet.

Provides:
1. Net parsing: a block of ' ', '.', '#' characters cut into square faces
2. Path parsing: a string such as "10R5L5R10L4R5L5" split into instructions
"""

from __future__ import annotations

import re
from math import isqrt

from net_types import (
    Face,
    FaceGrid,
    Instruction,
    InstructionFormatError,
    NetFormatError,
    Tile,
    Turn,
)

__all__ = ["infer_face_size", "parse_instructions", "parse_net", "parse_puzzle"]

_TOKEN = re.compile(r"(\d+)([LR]?)")


def _net_lines(text: str) -> list[str]:
    """Lines of the net block: skip leading blank lines, stop at the next one."""
    lines: list[str] = []
    for line in text.splitlines():
        if not line.strip():
            if lines:
                break
            continue
        lines.append(line)
    return lines


def infer_face_size(lines: list[str]) -> int:
    """
    Infer the face size of a cube net from its tile count.

    A cube net has exactly 6 * S * S tiles.

    Raises:
        NetFormatError: If the tile count is not of that form
    """
    tiles = sum(1 for line in lines for char in line if char != " ")
    side = isqrt(tiles // 6)
    if tiles == 0 or tiles % 6 != 0 or side * side * 6 != tiles:
        raise NetFormatError(
            f"Cannot infer face size from {tiles} tiles\n"
            f"  A cube net has 6 * S * S tiles for some face size S\n"
            f"  Pass face_size explicitly for other nets"
        )
    return side


def parse_net(text: str, face_size: int | None = None) -> FaceGrid:
    """
    Parse a net drawn with ' ' (hole), '.' (open) and '#' (wall).

    Lines are read up to the first blank line and right-padded with spaces to
    the widest line. A face is present at (fx, fy) when the character at row
    fy * S, column fx * S is not a space; every tile of a present face must
    then be '.' or '#', and no tile may appear outside a present face.

    Example (S = 1):
        " .\\n..\\n ."
        Creates a 2x3 FaceGrid with faces at (1, 0), (0, 1), (1, 1), (1, 2)

    Args:
        text: Puzzle text; anything after the first blank line is ignored
        face_size: Side length of each face, inferred when omitted

    Returns:
        FaceGrid of the parsed faces

    Raises:
        NetFormatError: If the block cannot be cut into faces
    """
    lines = _net_lines(text)
    if not lines:
        raise NetFormatError("Net is empty")

    if face_size is None:
        face_size = infer_face_size(lines)
    if face_size <= 0:
        raise NetFormatError(f"Face size must be positive, got {face_size}")

    width = max(len(line) for line in lines)
    lines = [line.ljust(width) for line in lines]
    height = len(lines)

    if height % face_size or width % face_size:
        raise NetFormatError(
            f"Net dimensions do not divide into faces\n"
            f"  Net: {width} columns x {height} rows\n"
            f"  Face size: {face_size}\n"
            f"  Both dimensions must be multiples of the face size"
        )

    faces: list[tuple[Face | None, ...]] = []
    for fy in range(height // face_size):
        row: list[Face | None] = []
        for fx in range(width // face_size):
            row.append(_parse_face(lines, fx, fy, face_size))
        faces.append(tuple(row))

    grid = FaceGrid(face_size, tuple(faces))
    if not grid.positions:
        raise NetFormatError("Net contains no faces")
    return grid


def _parse_face(lines: list[str], fx: int, fy: int, size: int) -> Face | None:
    top, left = fy * size, fx * size
    block = [line[left:left + size] for line in lines[top:top + size]]
    present = block[0][0] != " "

    tiles: list[tuple[Tile, ...]] = []
    for dy, chars in enumerate(block):
        row: list[Tile] = []
        for dx, char in enumerate(chars):
            if not present:
                if char != " ":
                    raise NetFormatError(
                        f"Tile outside any face\n"
                        f"  Row {top + dy}, column {left + dx}: '{char}'\n"
                        f"  Block ({fx}, {fy}) starts with a space, so it is a hole"
                    )
                continue
            if char == " ":
                raise NetFormatError(
                    f"Face ({fx}, {fy}) is not fully populated\n"
                    f"  Missing tile at row {top + dy}, column {left + dx}"
                )
            try:
                row.append(Tile(char))
            except ValueError:
                raise NetFormatError(
                    f"Invalid tile character '{char}'\n"
                    f"  Row {top + dy}, column {left + dx}\n"
                    f"  Valid characters: '.' (open), '#' (wall), ' ' (hole)"
                ) from None
        if present:
            tiles.append(tuple(row))

    return Face(tuple(tiles)) if present else None


def parse_instructions(path: str) -> list[Instruction]:
    """
    Parse a path description into instructions.

    Format: (<uint>[LR]?)* read left to right. Each number is a distance;
    the letter following it, if any, is the turn made after walking.

    Example:
        "10R5L5" -> [Instruction(10, Turn.RIGHT), Instruction(5, Turn.LEFT), Instruction(5)]

    Raises:
        InstructionFormatError: On any character that does not fit the grammar
    """
    path = path.strip()
    instructions: list[Instruction] = []
    pos = 0
    while pos < len(path):
        match = _TOKEN.match(path, pos)
        if match is None:
            raise InstructionFormatError(
                f"Invalid path character '{path[pos]}' at column {pos}\n"
                f"  Path: \"{path}\"\n"
                f"  Expected a distance (digits) optionally followed by L or R",
                pos,
            )
        distance, turn = match.groups()
        instructions.append(Instruction(int(distance), Turn(turn) if turn else None))
        pos = match.end()
    return instructions


def parse_puzzle(text: str, face_size: int | None = None) -> tuple[FaceGrid, list[Instruction]]:
    """
    Parse a full puzzle: the net, a blank line, then the path line.

    Returns:
        (FaceGrid, instructions)
    """
    grid = parse_net(text, face_size)
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) <= len(_net_lines(text)):
        raise InstructionFormatError("Puzzle has no path line after the net", 0)
    return grid, parse_instructions(lines[-1])
