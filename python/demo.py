"""
Demonstration script for cubenet.

Usage:
    python demo.py                     # reference puzzle, both modes
    python demo.py INPUT [FACE_SIZE]   # puzzle file, both modes
"""

import logging
import sys

from ascii_render import render_board, render_seams
from cubenet import Agent, build_board
from net_parser import parse_puzzle
from net_samples import SAMPLE_FACE_SIZE, SAMPLE_PUZZLE
from net_types import RuleSet, TopologyError, WrapMode


def walk_demo(text: str, face_size: int | None, mode: WrapMode) -> None:
    """Walk the puzzle's path in one mode and show where the agent went."""
    print(f"Mode: {mode.value}")
    print("-" * 40)

    grid, instructions = parse_puzzle(text, face_size)
    try:
        board = build_board(grid, RuleSet(wrap_mode=mode))
    except TopologyError as e:
        print(f"Cannot walk in {mode.value} mode:\n{e}")
        return

    agent = Agent(board)
    agent.run(instructions)

    # Large nets are summarised by their seams only
    if grid.width * grid.face_size <= 60:
        print(render_board(board, agent.history, agent.pose))
        print()
    print(render_seams(board))
    print()
    print(f"Final pose: face {agent.pose.face} offset {agent.pose.offset} facing {agent.pose.facing.name}")
    print(f"Password: {agent.password()}")


def main(argv: list[str]) -> None:
    if argv:
        with open(argv[0]) as f:
            text = f.read()
        face_size = int(argv[1]) if len(argv) > 1 else None
    else:
        text = SAMPLE_PUZZLE
        face_size = SAMPLE_FACE_SIZE

    walk_demo(text, face_size, WrapMode.FLAT)
    print()
    walk_demo(text, face_size, WrapMode.CUBE)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    main(sys.argv[1:])
