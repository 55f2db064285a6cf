"""
Shared type definitions for the cubenet system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# =============================================================================
# Errors
# =============================================================================


class NetFormatError(ValueError):
    """The character block cannot be read as a net of square faces."""


class InstructionFormatError(ValueError):
    """The path string does not match (<uint>[LR]?)*."""

    def __init__(self, message: str, column: int) -> None:
        super().__init__(message)
        self.column = column


class TopologyError(ValueError):
    """The net does not fold into a cube."""


# =============================================================================
# Directions
# =============================================================================


class Turn(Enum):
    """A quarter turn applied after a straight run."""

    LEFT = "L"
    RIGHT = "R"


class Direction(Enum):
    """Cardinal direction within the net (y grows downward)."""

    UP = "U"
    DOWN = "D"
    LEFT = "L"
    RIGHT = "R"

    @property
    def quarter_turns(self) -> int:
        """Clockwise quarter turns from UP."""
        return CLOCKWISE.index(self)

    def rotate_clockwise(self, count: int = 1) -> Direction:
        return CLOCKWISE[(self.quarter_turns + count) % 4]

    def rotate(self, turn: Turn) -> Direction:
        return self.rotate_clockwise(1 if turn is Turn.RIGHT else 3)

    def opposite(self) -> Direction:
        return self.rotate_clockwise(2)

    def alignment(self, other: Direction) -> int:
        """Clockwise quarter turns taking this direction onto `other`."""
        return (other.quarter_turns - self.quarter_turns) % 4

    def diagonals(self) -> tuple[DiagonalCorner, DiagonalCorner]:
        """
        The two corners bounding this side of a face, in clockwise order.

        Walking the boundary of a face clockwise visits the first corner
        before the second, so gluing two sides pairs first with second.
        """
        return _SIDE_CORNERS[self]


CLOCKWISE: tuple[Direction, ...] = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)

# (dx, dy)
DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

FACING_CODES: dict[Direction, int] = {
    Direction.RIGHT: 0,
    Direction.DOWN: 1,
    Direction.LEFT: 2,
    Direction.UP: 3,
}


class DiagonalCorner(Enum):
    """One of the four corners of a face."""

    UP_LEFT = "UL"
    UP_RIGHT = "UR"
    DOWN_LEFT = "DL"
    DOWN_RIGHT = "DR"

    def sides(self) -> tuple[Direction, Direction]:
        """The two sides meeting at this corner, in clockwise order."""
        return _CORNER_SIDES[self]


_SIDE_CORNERS: dict[Direction, tuple[DiagonalCorner, DiagonalCorner]] = {
    Direction.UP: (DiagonalCorner.UP_LEFT, DiagonalCorner.UP_RIGHT),
    Direction.RIGHT: (DiagonalCorner.UP_RIGHT, DiagonalCorner.DOWN_RIGHT),
    Direction.DOWN: (DiagonalCorner.DOWN_RIGHT, DiagonalCorner.DOWN_LEFT),
    Direction.LEFT: (DiagonalCorner.DOWN_LEFT, DiagonalCorner.UP_LEFT),
}

_CORNER_SIDES: dict[DiagonalCorner, tuple[Direction, Direction]] = {
    DiagonalCorner.UP_LEFT: (Direction.LEFT, Direction.UP),
    DiagonalCorner.UP_RIGHT: (Direction.UP, Direction.RIGHT),
    DiagonalCorner.DOWN_RIGHT: (Direction.RIGHT, Direction.DOWN),
    DiagonalCorner.DOWN_LEFT: (Direction.DOWN, Direction.LEFT),
}


# =============================================================================
# Positions and Faces
# =============================================================================


@dataclass(frozen=True)
class Position:
    """
    An (x, y) pair, y growing downward. Used both for a face's place in
    the net and for an offset inside a face.
    """

    x: int
    y: int

    def step(self, direction: Direction) -> Position:
        dx, dy = DELTAS[direction]
        return Position(self.x + dx, self.y + dy)

    def wrap_around(self, width: int, height: int) -> Position:
        return Position(self.x % width, self.y % height)

    def in_bounds(self, size: int) -> bool:
        return 0 <= self.x < size and 0 <= self.y < size

    def move_to_edge(self, direction: Direction, size: int) -> Position:
        """Project onto the side of a `size` square facing `direction`."""
        match direction:
            case Direction.UP:
                return Position(self.x, 0)
            case Direction.DOWN:
                return Position(self.x, size - 1)
            case Direction.LEFT:
                return Position(0, self.y)
            case Direction.RIGHT:
                return Position(size - 1, self.y)

    def rotate_clockwise(self, size: int, count: int = 1) -> Position:
        """Rotate inside a `size` square: (x, y) -> (size - 1 - y, x) per quarter turn."""
        current = self
        for _ in range(count % 4):
            current = Position(size - 1 - current.y, current.x)
        return current

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


def row_major(position: Position) -> tuple[int, int]:
    """Sort key walking the net top to bottom, left to right."""
    return (position.y, position.x)


class Tile(Enum):
    """Content of a single tile on a face."""

    OPEN = "."
    WALL = "#"


@dataclass(frozen=True)
class Face:
    """A square block of tiles, indexed tiles[y][x]."""

    tiles: tuple[tuple[Tile, ...], ...]

    @property
    def size(self) -> int:
        return len(self.tiles)

    def tile(self, offset: Position) -> Tile:
        return self.tiles[offset.y][offset.x]


@dataclass(frozen=True)
class FaceGrid:
    """
    The net cut into a matrix of faces, indexed faces[fy][fx].
    Holes in the net are None.
    """

    face_size: int
    faces: tuple[tuple[Face | None, ...], ...]

    @property
    def width(self) -> int:
        return len(self.faces[0]) if self.faces else 0

    @property
    def height(self) -> int:
        return len(self.faces)

    @property
    def positions(self) -> list[Position]:
        """Present face positions in row-major order."""
        return [
            Position(fx, fy)
            for fy, row in enumerate(self.faces)
            for fx, face in enumerate(row)
            if face is not None
        ]

    def occupancy(self) -> tuple[tuple[bool, ...], ...]:
        return tuple(tuple(face is not None for face in row) for row in self.faces)

    def is_present(self, position: Position) -> bool:
        return (
            0 <= position.y < self.height
            and 0 <= position.x < self.width
            and self.faces[position.y][position.x] is not None
        )

    def face_at(self, position: Position) -> Face:
        face = self.faces[position.y][position.x] if self.is_present(position) else None
        if face is None:
            raise KeyError(f"No face at net position {position}")
        return face

    def tile_at(self, face: Position, offset: Position) -> Tile:
        return self.face_at(face).tile(offset)

    def start_face(self) -> Position:
        """The leftmost face of the top row of the net."""
        for fx, face in enumerate(self.faces[0] if self.faces else ()):
            if face is not None:
                return Position(fx, 0)
        raise KeyError("Top row of the net has no face")


RawEdge = tuple[Position, Direction]
RawCorner = tuple[Position, DiagonalCorner]


# =============================================================================
# Traversal Types
# =============================================================================


@dataclass(frozen=True)
class Instruction:
    """Walk up to `distance` tiles, then optionally turn."""

    distance: int
    turn: Turn | None = None


@dataclass(frozen=True)
class Pose:
    """Where the agent stands and which way it faces."""

    face: Position
    offset: Position
    facing: Direction


class WrapMode(Enum):
    """How leaving a face across an unglued side is resolved."""

    FLAT = "flat"  # Torus over the occupied footprint
    CUBE = "cube"  # Fold the net into a cube


@dataclass(frozen=True)
class RuleSet:
    """Rules governing edge resolution."""

    wrap_mode: WrapMode = WrapMode.FLAT
