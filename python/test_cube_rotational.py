"""
Rotational tests for cube folding and walking.

Each property is checked on all 11 cube nets, each drawn in all 4 rotations.
Faces are 3x3 and fully open, so walks are never blocked.
"""

import pytest

from cubenet import (
    Board,
    CubeStitcher,
    build_board,
    build_cube_edge_map,
    build_flat_edge_map,
    next_pose,
)
from net_samples import CUBE_NETS
from net_types import Direction, FaceGrid, Pose, Position, RuleSet, WrapMode
from test_rotations import RotationalNetCase, all_rotated_cube_nets, rotate_layout_90

ROTATED_NETS = all_rotated_cube_nets()
NET_IDS = [name for name, _ in ROTATED_NETS]
NET_GRIDS = [grid for _, grid in ROTATED_NETS]


def walk(board: Board, pose: Pose, steps: int) -> Pose:
    for _ in range(steps):
        pose = next_pose(board, pose)
    return pose


def turned_around(pose: Pose) -> Pose:
    return Pose(pose.face, pose.offset, pose.facing.opposite())


class TestRotationFramework:
    """Sanity checks for the rotation utilities themselves."""

    def test_rotate_layout_90(self) -> None:
        assert rotate_layout_90("XX|X_") == "XX|_X"
        assert rotate_layout_90("XXX") == "X|X|X"

    def test_four_rotations_return_to_start(self) -> None:
        layout = CUBE_NETS["step_2_3_1_b"]
        rotated = layout
        for _ in range(4):
            rotated = rotate_layout_90(rotated)
        assert rotated == layout

    def test_every_rotation_has_six_faces(self) -> None:
        case = RotationalNetCase("cross", CUBE_NETS["cross_1_1"])
        rotations = case.get_all_rotations()

        assert [rotation for rotation, _ in rotations] == [0, 90, 180, 270]
        assert all(len(grid.positions) == 6 for _, grid in rotations)

    def test_eleven_nets(self) -> None:
        assert len(CUBE_NETS) == 11
        assert len(ROTATED_NETS) == 44


@pytest.mark.parametrize("grid", NET_GRIDS, ids=NET_IDS)
class TestCubeNetsRotational:
    """Folding and walking properties for every cube net in every rotation."""

    def test_class_invariants(self, grid: FaceGrid) -> None:
        """12 glued edge pairs and 8 three-face vertices."""
        stitcher = CubeStitcher(grid.positions)
        stitcher.stitch()
        stitcher.validate()

        assert len(stitcher.edges) == 12
        assert len(stitcher.corners) == 8
        assert sorted(len(c) for c in stitcher.edges.classes()) == [2] * 12
        assert sorted(len(c) for c in stitcher.corners.classes()) == [3] * 8

    def test_round_trip(self, grid: FaceGrid) -> None:
        edges = build_cube_edge_map(grid)
        for face in grid.positions:
            for direction in Direction:
                other, side = edges.resolve(face, direction)
                assert edges.resolve(other, side) == (face, direction)

    def test_neighbours(self, grid: FaceGrid) -> None:
        """Each face borders four different faces, never itself or its opposite."""
        edges = build_cube_edge_map(grid)
        neighbours = {
            face: {edges.resolve(face, d)[0] for d in Direction}
            for face in grid.positions
        }

        for face, around in neighbours.items():
            assert face not in around
            assert len(around) == 4
            (opposite,) = set(grid.positions) - around - {face}
            # Opposite faces share no side
            assert neighbours[opposite] == around

    def test_great_circle(self, grid: FaceGrid) -> None:
        """Walking 4 faces straight on from any tile comes back to it."""
        board = build_board(grid, RuleSet(wrap_mode=WrapMode.CUBE))
        size = board.face_size
        for face in grid.positions:
            for facing in Direction:
                for offset in (Position(0, 0), Position(1, 1), Position(2, 0)):
                    start = Pose(face, offset, facing)
                    assert walk(board, start, 4 * size) == start

    def test_walk_is_reversible(self, grid: FaceGrid) -> None:
        """Walk, turn around, walk the same distance: back where we started."""
        board = build_board(grid, RuleSet(wrap_mode=WrapMode.CUBE))
        for face in grid.positions:
            for facing in Direction:
                start = Pose(face, Position(2, 1), facing)
                there = walk(board, start, 7)
                back = walk(board, turned_around(there), 7)
                assert turned_around(back) == start

    def test_flat_round_trip(self, grid: FaceGrid) -> None:
        """The flat strategy honours the same round-trip contract on every net."""
        edges = build_flat_edge_map(grid)
        for face in grid.positions:
            for direction in Direction:
                other, side = edges.resolve(face, direction)
                assert side == direction.opposite()
                assert edges.resolve(other, side) == (face, direction)
