"""
Interactive demo for cubenet.
Display a net and walk an agent across it with keyboard commands.
"""

import logging
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_board
from cubenet import Agent, StepResult, build_board, describe_edge
from net_parser import parse_net
from net_samples import CUBE_NETS, SAMPLE_FACE_SIZE, SAMPLE_NET, net_from_layout
from net_types import FaceGrid, RuleSet, TopologyError, Turn, WrapMode


class InteractiveDemo:
    """Interactive demo for walking a net."""

    def __init__(self, grid: FaceGrid, mode: WrapMode = WrapMode.CUBE) -> None:
        self.grid = grid
        self.mode = mode
        self.console = Console()
        self.status_message = "Ready"
        self.agent = Agent(build_board(grid, RuleSet(wrap_mode=mode)))

    def generate_display(self) -> Panel:
        """Generate the current display with net and status."""
        pose = self.agent.pose
        board = self.agent.board

        status = Text()
        status.append("Mode: ", style="bold")
        status.append(f"{self.mode.value}\n")
        status.append("Pose: ", style="bold")
        status.append(f"face {pose.face} offset {pose.offset} facing {pose.facing.name}\n")
        status.append("Ahead: ", style="bold")
        status.append(f"{describe_edge(board.edges.resolve(pose.face, pose.facing))}\n")
        status.append("Password: ", style="bold")
        status.append(f"{self.agent.password()}\n\n")

        status.append(Text.from_ansi(render_board(board, self.agent.history[-40:], pose)))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  W - Step forward\n")
        status.append("  A - Turn left\n")
        status.append("  D - Turn right\n")
        status.append("  M - Toggle flat/cube mode\n")
        status.append("  R - Reset to start\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Cubenet Interactive Walk", border_style="green", width=80)

    def attempt_step(self) -> None:
        before = self.agent.pose
        if self.agent.step() is StepResult.BLOCKED:
            self.status_message = "✗ Blocked by a wall"
        elif self.agent.pose.face != before.face:
            self.status_message = f"✓ Crossed onto face {self.agent.pose.face}"
        else:
            self.status_message = "✓ Stepped"

    def toggle_mode(self) -> None:
        mode = WrapMode.FLAT if self.mode is WrapMode.CUBE else WrapMode.CUBE
        try:
            board = build_board(self.grid, RuleSet(wrap_mode=mode))
        except TopologyError as e:
            self.status_message = f"✗ Cannot switch to {mode.value}: {str(e).splitlines()[0]}"
            return
        self.mode = mode
        self.agent = Agent(board)
        self.status_message = f"Switched to {mode.value} mode"

    def run(self) -> None:
        """Run the interactive demo."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()

                    if key.lower() == 'q':
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key.lower() == 'r':
                        self.agent.reset()
                        self.status_message = "Agent reset to start"
                    elif key.lower() == 'w':
                        self.attempt_step()
                    elif key.lower() == 'a':
                        self.agent.turn(Turn.LEFT)
                        self.status_message = "Turned left"
                    elif key.lower() == 'd':
                        self.agent.turn(Turn.RIGHT)
                        self.status_message = "Turned right"
                    elif key.lower() == 'm':
                        self.toggle_mode()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


LAYOUTS = dict(
    sample=SAMPLE_NET,
    **{name: net_from_layout(layout, 3) for name, layout in CUBE_NETS.items()},
)


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format='%(levelname)s: %(message)s')

    name = sys.argv[1] if len(sys.argv) > 1 else 'sample'
    face_size = SAMPLE_FACE_SIZE if name == 'sample' else 3
    InteractiveDemo(parse_net(LAYOUTS[name], face_size)).run()
