"""
Edge resolution and surface traversal over a net of square faces.
Two-phase algorithm: resolve (glue face sides into an EdgeMap) -> walk
(an Agent replays instructions over the resolved Board).
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Iterator

from net_parser import parse_puzzle
from net_types import (
    CLOCKWISE,
    FACING_CODES,
    DiagonalCorner,
    Direction,
    FaceGrid,
    Instruction,
    Pose,
    Position,
    RawCorner,
    RawEdge,
    RuleSet,
    Tile,
    TopologyError,
    Turn,
    WrapMode,
    row_major,
)
from partition import Partition

logger = logging.getLogger(__name__)


class StepResult(Enum):
    """Outcome of a single agent step."""

    MOVED = "moved"
    BLOCKED = "blocked"  # Next tile is a wall; pose unchanged


def describe_edge(edge: RawEdge) -> str:
    face, side = edge
    return f"face {face} {side.name}"


def describe_corner(corner: RawCorner) -> str:
    face, corner_name = corner
    return f"face {face} {corner_name.name}"


def _edge_key(edge: RawEdge) -> tuple[int, int, int]:
    face, side = edge
    return (*row_major(face), side.quarter_turns)


def _corner_key(corner: RawCorner) -> tuple[int, int, str]:
    face, corner_name = corner
    return (*row_major(face), corner_name.value)


# =============================================================================
# Edge Map
# =============================================================================


class EdgeMap:
    """
    Resolved gluing of face sides.

    resolve(face, side) gives the face and side on the far side of the seam.
    Resolving from the returned pair leads back to the original one.
    """

    def __init__(self, links: dict[RawEdge, RawEdge]) -> None:
        self._links = dict(links)

    def resolve(self, face: Position, direction: Direction) -> RawEdge:
        try:
            return self._links[(face, direction)]
        except KeyError:
            raise KeyError(f"No seam resolved for {describe_edge((face, direction))}") from None

    def seams(self) -> list[tuple[RawEdge, RawEdge]]:
        """Each glued pair once, ordered by its first side."""
        seen: set[frozenset[RawEdge]] = set()
        result: list[tuple[RawEdge, RawEdge]] = []
        for edge in sorted(self._links, key=_edge_key):
            partner = self._links[edge]
            key = frozenset((edge, partner))
            if key not in seen:
                seen.add(key)
                result.append((edge, partner))
        return result

    def __iter__(self) -> Iterator[RawEdge]:
        return iter(self._links)

    def __len__(self) -> int:
        return len(self._links)


# Type alias for an edge resolution strategy
EdgeResolver = Callable[[FaceGrid], EdgeMap]


# =============================================================================
# Flat Strategy
# =============================================================================


def step_wrap_around(
    position: Position,
    direction: Direction,
    occupancy: tuple[tuple[bool, ...], ...],
) -> Position:
    """
    Step one face in `direction`, skipping holes and wrapping at the
    bounds of the face matrix, until a present face is reached.
    """
    height = len(occupancy)
    width = len(occupancy[0])
    current = position
    while True:
        current = current.step(direction).wrap_around(width, height)
        if occupancy[current.y][current.x]:
            return current


def build_flat_edge_map(grid: FaceGrid) -> EdgeMap:
    """Glue every side to the next present face along its row or column."""
    occupancy = grid.occupancy()
    links: dict[RawEdge, RawEdge] = {}
    for position in grid.positions:
        for direction in CLOCKWISE:
            target = step_wrap_around(position, direction, occupancy)
            links[(position, direction)] = (target, direction.opposite())

    logger.info("build_flat_edge_map: %d faces, %d sides", len(grid.positions), len(links))
    return EdgeMap(links)


# =============================================================================
# Cube Strategy
# =============================================================================


class CubeStitcher:
    """
    Folds a cube net by saturating its corners.

    Every raw edge (face, side) and raw corner (face, corner) starts in its
    own class. Sides that touch in the flat net are glued first. Then any
    corner class that has gathered three faces is a finished cube vertex:
    if two of its sides are still free, they must be glued to each other.
    Each glue joins two edge classes, so the loop stops after at most
    2 * faces glues.

    Usage:
        stitcher = CubeStitcher(grid.positions)
        stitcher.stitch()
        edges = stitcher.edge_map()
    """

    def __init__(self, positions: Iterable[Position]) -> None:
        self.positions = sorted(positions, key=row_major)
        self.edges: Partition[RawEdge] = Partition(
            (p, d) for p in self.positions for d in CLOCKWISE
        )
        self.corners: Partition[RawCorner] = Partition(
            (p, c) for p in self.positions for c in DiagonalCorner
        )
        self._pending: deque[RawCorner] = deque()

    def merge_edges(self, edge_a: RawEdge, edge_b: RawEdge) -> None:
        """
        Glue two sides and the corners at their ends.

        Folding keeps every face the same way out, so the first corner of
        one side (clockwise order) meets the second corner of the other.
        """
        face_a, side_a = edge_a
        face_b, side_b = edge_b
        first_a, second_a = side_a.diagonals()
        first_b, second_b = side_b.diagonals()

        self.edges.merge(edge_a, edge_b)
        logger.debug("glue %s <-> %s", describe_edge(edge_a), describe_edge(edge_b))

        for corner_a, corner_b in (
            ((face_a, first_a), (face_b, second_b)),
            ((face_a, second_a), (face_b, first_b)),
        ):
            if self.corners.merge(corner_a, corner_b):
                self._pending.append(corner_a)

    def glue_adjacent_faces(self) -> None:
        """Glue the sides of faces that already touch in the flat net."""
        present = set(self.positions)
        for position in self.positions:
            for direction in (Direction.RIGHT, Direction.DOWN):
                neighbour = position.step(direction)
                if neighbour in present:
                    self.merge_edges((position, direction), (neighbour, direction.opposite()))

    def touching_edge_classes(self, vertex: frozenset[RawCorner]) -> list[frozenset[RawEdge]]:
        """Distinct edge classes of the sides meeting at the corners in `vertex`."""
        classes: dict[RawEdge, frozenset[RawEdge]] = {}
        for face, corner in sorted(vertex, key=_corner_key):
            for side in corner.sides():
                root = self.edges.find((face, side))
                if root not in classes:
                    classes[root] = self.edges.class_of(root)
        return list(classes.values())

    def close_vertex(self, corner: RawCorner) -> bool:
        """
        Glue the two free sides at `corner` if its vertex has three faces.

        Returns:
            True if a glue was made
        """
        vertex = self.corners.class_of(corner)
        if len(vertex) != 3:
            return False

        touching = self.touching_edge_classes(vertex)
        if len(touching) != 4:
            return False

        free = sorted((next(iter(c)) for c in touching if len(c) == 1), key=_edge_key)
        if len(free) != 2:
            raise TopologyError(
                f"Vertex at {describe_corner(corner)} cannot be closed\n"
                f"  Expected 2 free sides, found {len(free)}\n"
                f"  Sides: {', '.join(describe_edge(e) for c in touching for e in sorted(c, key=_edge_key))}"
            )

        self.merge_edges(free[0], free[1])
        return True

    def stitch(self) -> None:
        """Glue adjacent faces, then close vertices until nothing changes."""
        self.glue_adjacent_faces()
        self._pending.extend((p, c) for p in self.positions for c in DiagonalCorner)

        closed = 0
        while self._pending:
            if self.close_vertex(self._pending.popleft()):
                closed += 1

        logger.debug("stitch: closed %d vertices, %d edge classes left", closed, len(self.edges))

    def validate(self) -> None:
        """
        Check the folded classes describe a cube.

        Raises:
            TopologyError: If any edge class is not a pair or any corner
                class does not join three faces
        """
        for edge_class in self.edges.classes():
            if len(edge_class) != 2:
                edges = sorted(edge_class, key=_edge_key)
                raise TopologyError(
                    f"Net does not fold into a cube\n"
                    f"  Edge class of size {len(edge_class)} (expected 2)\n"
                    f"  Sides: {', '.join(describe_edge(e) for e in edges)}"
                )

        for corner_class in self.corners.classes():
            if len(corner_class) != 3:
                corners = sorted(corner_class, key=_corner_key)
                raise TopologyError(
                    f"Net does not fold into a cube\n"
                    f"  Corner class of size {len(corner_class)} (expected 3)\n"
                    f"  Corners: {', '.join(describe_corner(c) for c in corners)}"
                )

    def edge_map(self) -> EdgeMap:
        links: dict[RawEdge, RawEdge] = {}
        for edge_class in self.edges.classes():
            if len(edge_class) == 2:
                a, b = edge_class
                links[a] = b
                links[b] = a
        return EdgeMap(links)


def build_cube_edge_map(grid: FaceGrid) -> EdgeMap:
    """
    Fold the net into a cube and glue every side to its partner.

    Raises:
        TopologyError: If the net does not have exactly six faces or does not
            fold into a cube
    """
    positions = grid.positions
    if len(positions) != 6:
        raise TopologyError(
            f"A cube net needs exactly 6 faces, found {len(positions)}\n"
            f"  Faces: {', '.join(str(p) for p in positions)}"
        )

    stitcher = CubeStitcher(positions)
    stitcher.stitch()
    stitcher.validate()
    edges = stitcher.edge_map()

    logger.info("build_cube_edge_map: %d faces, %d seams", len(positions), len(edges.seams()))
    return edges


RESOLVERS: dict[WrapMode, EdgeResolver] = {
    WrapMode.FLAT: build_flat_edge_map,
    WrapMode.CUBE: build_cube_edge_map,
}


# =============================================================================
# Board
# =============================================================================


@dataclass(frozen=True)
class Board:
    """A parsed net together with its resolved seams."""

    grid: FaceGrid
    edges: EdgeMap
    rules: RuleSet

    @property
    def face_size(self) -> int:
        return self.grid.face_size

    def tile_at(self, pose: Pose) -> Tile:
        return self.grid.tile_at(pose.face, pose.offset)


def build_board(grid: FaceGrid, rules: RuleSet | None = None) -> Board:
    if rules is None:
        rules = RuleSet()
    return Board(grid, RESOLVERS[rules.wrap_mode](grid), rules)


# =============================================================================
# Traversal
# =============================================================================


def initial_pose(grid: FaceGrid) -> Pose:
    """Top-left tile of the leftmost face in the top row, facing right."""
    return Pose(grid.start_face(), Position(0, 0), Direction.RIGHT)


def next_pose(board: Board, pose: Pose) -> Pose:
    """
    The pose one tile ahead, ignoring walls.

    Inside a face this is a plain step. Across a seam the agent enters the
    resolved face through the resolved side, facing away from it, and its
    offset is carried over by rotating the face frame by the same number of
    quarter turns as the facing changed.
    """
    size = board.face_size
    offset = pose.offset.step(pose.facing)
    if offset.in_bounds(size):
        return Pose(pose.face, offset, pose.facing)

    face, side = board.edges.resolve(pose.face, pose.facing)
    facing = side.opposite()
    turns = pose.facing.alignment(facing)
    offset = pose.offset.move_to_edge(pose.facing.opposite(), size).rotate_clockwise(size, turns)

    logger.debug(
        "cross seam: %s -> %s, facing %s -> %s",
        describe_edge((pose.face, pose.facing)),
        describe_edge((face, side)),
        pose.facing.name,
        facing.name,
    )
    return Pose(face, offset, facing)


def absolute_tile(pose: Pose, face_size: int) -> tuple[int, int]:
    """0-based (row, column) of the pose in the character block."""
    return (
        pose.face.y * face_size + pose.offset.y,
        pose.face.x * face_size + pose.offset.x,
    )


def password(pose: Pose, face_size: int) -> int:
    """1000 * row + 4 * column + facing code, with 1-based absolute row and column."""
    row, column = absolute_tile(pose, face_size)
    return 1000 * (row + 1) + 4 * (column + 1) + FACING_CODES[pose.facing]


class Agent:
    """
    Walks a Board one tile at a time.

    Usage:
        agent = Agent(build_board(grid, RuleSet(WrapMode.CUBE)))
        agent.run(instructions)
        print(agent.password())
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self.pose = initial_pose(board.grid)
        self.history: list[Pose] = [self.pose]

    def step(self) -> StepResult:
        candidate = next_pose(self.board, self.pose)
        if self.board.tile_at(candidate) is Tile.WALL:
            return StepResult.BLOCKED

        self.pose = candidate
        self.history.append(candidate)
        return StepResult.MOVED

    def turn(self, turn: Turn) -> None:
        self.pose = Pose(self.pose.face, self.pose.offset, self.pose.facing.rotate(turn))
        self.history.append(self.pose)

    def apply_instruction(self, instruction: Instruction) -> int:
        """
        Walk up to `instruction.distance` tiles, stopping at the first wall,
        then turn.

        Returns:
            Number of tiles actually walked
        """
        walked = 0
        while walked < instruction.distance and self.step() is StepResult.MOVED:
            walked += 1

        if instruction.turn is not None:
            self.turn(instruction.turn)
        return walked

    def run(self, instructions: Iterable[Instruction]) -> Pose:
        for instruction in instructions:
            self.apply_instruction(instruction)
        return self.pose

    def reset(self) -> None:
        self.pose = initial_pose(self.board.grid)
        self.history = [self.pose]

    def password(self) -> int:
        return password(self.pose, self.board.face_size)


def solve(text: str, rules: RuleSet | None = None, face_size: int | None = None) -> int:
    """Parse a puzzle, walk its path and return the final password."""
    grid, instructions = parse_puzzle(text, face_size)
    agent = Agent(build_board(grid, rules))
    agent.run(instructions)
    result = agent.password()

    logger.info(
        "solve: mode=%s, %d instructions, final pose %s %s facing %s, password=%d",
        agent.board.rules.wrap_mode.value,
        len(instructions),
        agent.pose.face,
        agent.pose.offset,
        agent.pose.facing.name,
        result,
    )
    return result
