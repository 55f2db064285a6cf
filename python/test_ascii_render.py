"""Tests for ascii_render module."""

import re

from ascii_render import FACING_ARROWS, face_colors, render_board, render_seams
from cubenet import Agent, build_board
from net_parser import parse_instructions, parse_net
from net_samples import SAMPLE_NET, SAMPLE_PATH
from net_types import Direction, Pose, Position, RuleSet, WrapMode

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def plain(text: str) -> str:
    return ANSI.sub("", text)


class TestRenderBoard:
    """Tests for drawing the net."""

    def test_render_matches_input(self) -> None:
        """Without a trail the net is drawn as it was read, padded to full width."""
        board = build_board(parse_net(SAMPLE_NET, 4))
        result = plain(render_board(board))

        assert result.split("\n") == [line.ljust(16) for line in SAMPLE_NET.split("\n")]

    def test_render_pose(self) -> None:
        board = build_board(parse_net(SAMPLE_NET, 4))
        pose = Pose(Position(2, 0), Position(1, 0), Direction.DOWN)

        lines = plain(render_board(board, pose=pose)).split("\n")
        assert lines[0][9] == "v"

    def test_render_trail(self) -> None:
        """Every pose of the walk is drawn as an arrow."""
        board = build_board(parse_net(SAMPLE_NET, 4), RuleSet(wrap_mode=WrapMode.CUBE))
        agent = Agent(board)
        agent.run(parse_instructions(SAMPLE_PATH))

        lines = plain(render_board(board, agent.history, agent.pose)).split("\n")

        # Final pose: row 5, column 7 (1-based), facing up
        assert lines[4][6] == "^"
        assert lines[0][8] == ">"
        assert sum(line.count(arrow) for line in lines for arrow in FACING_ARROWS.values()) > 10

    def test_face_colors_are_distinct(self) -> None:
        grid = parse_net(SAMPLE_NET, 4)
        colors = face_colors(grid)

        assert set(colors) == set(grid.positions)
        assert len(set(colors.values())) == 6


class TestRenderSeams:
    """Tests for the seam table."""

    def test_cube_seams(self) -> None:
        board = build_board(parse_net(SAMPLE_NET, 4), RuleSet(wrap_mode=WrapMode.CUBE))
        lines = plain(render_seams(board)).split("\n")

        assert lines[0] == "Seams (cube):"
        assert len(lines) == 13
        assert "  face (2, 0) UP <-> face (0, 1) UP" in lines

    def test_flat_seams(self) -> None:
        board = build_board(parse_net(SAMPLE_NET, 4))
        lines = plain(render_seams(board)).split("\n")

        assert lines[0] == "Seams (flat):"
        assert "  face (2, 0) RIGHT <-> face (2, 0) LEFT" in lines
