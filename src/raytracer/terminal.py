"""ANSI truecolor output and keyboard/mouse polling for the terminal."""

from __future__ import annotations

import logging
import os
import re
import select
import shutil
import sys
import termios
import tty
from dataclasses import dataclass, field
from typing import IO, List, Optional, Tuple

from .engine import FrameBuffer

logger = logging.getLogger(__name__)

TermiosAttr = List[int | List[bytes | int]]

CURSOR_HOME = "\033[H"
RESET = "\033[0m"

# Report every mouse motion using SGR-encoded coordinates.
_MOUSE_ON = "\033[?1003h\033[?1006h"
_MOUSE_OFF = "\033[?1003l\033[?1006l"
_SGR_MOUSE = re.compile(r"^\x1b\[<(\d+);(\d+);(\d+)[Mm]$")

_ARROWS = {
    "\x1b[A": "UP",
    "\x1b[B": "DOWN",
    "\x1b[C": "RIGHT",
    "\x1b[D": "LEFT",
}


def compose_frame(buffer: FrameBuffer) -> str:
    """Render ``buffer`` as one background-coloured space per pixel."""

    lines: List[str] = []
    for row in buffer.rows():
        current: Optional[Tuple[int, int, int]] = None
        parts: List[str] = []
        for color in row:
            if color != current:
                parts.append(f"\033[48;2;{color[0]};{color[1]};{color[2]}m")
                current = color
            parts.append(" ")
        parts.append(RESET)
        lines.append("".join(parts))
    return "\n".join(lines)


@dataclass
class InputState:
    """Everything read from the terminal since the previous poll."""

    keys: List[str] = field(default_factory=list)
    mouse_delta: Tuple[int, int] = (0, 0)


class TerminalController:
    """Context manager that prepares the terminal for smooth animations.

    When ``record`` is given, every drawn frame is also appended to it so the
    session can be replayed later.
    """

    def __init__(self, *, clear: bool = True, mouse: bool = True, record: Optional[IO[str]] = None) -> None:
        self._clear = clear
        self._mouse = mouse
        self._record = record
        self._cursor_hidden = False
        self._stdin_fd: Optional[int] = None
        self._termios_before: Optional[TermiosAttr] = None
        self._input_enabled = False
        self._mouse_enabled = False
        self._last_mouse: Optional[Tuple[int, int]] = None

    def __enter__(self) -> "TerminalController":
        if self._clear:
            sys.stdout.write("\033[2J")
        sys.stdout.write(CURSOR_HOME)
        sys.stdout.write("\033[?25l")
        self._cursor_hidden = True

        if sys.stdin.isatty():
            fd = sys.stdin.fileno()
            try:
                self._termios_before = termios.tcgetattr(fd)
                tty.setcbreak(fd)
                self._stdin_fd = fd
                self._input_enabled = True
            except termios.error as exc:
                logger.warning("Keyboard input disabled: %s", exc)
                self._termios_before = None
        else:
            logger.info("stdin is not a terminal; keyboard and mouse input disabled")

        if self._input_enabled and self._mouse:
            sys.stdout.write(_MOUSE_ON)
            self._mouse_enabled = True
        sys.stdout.flush()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def restore(self) -> None:
        if self._mouse_enabled:
            sys.stdout.write(_MOUSE_OFF)
            self._mouse_enabled = False
        if self._cursor_hidden:
            sys.stdout.write(RESET)
            sys.stdout.write("\033[?25h")
            self._cursor_hidden = False
        sys.stdout.flush()

        if self._input_enabled and self._stdin_fd is not None and self._termios_before is not None:
            try:
                termios.tcsetattr(self._stdin_fd, termios.TCSADRAIN, self._termios_before)
            except termios.error as exc:
                logger.warning("Could not restore terminal attributes: %s", exc)
        self._input_enabled = False
        self._stdin_fd = None
        self._termios_before = None

    def draw(self, frame: str) -> None:
        output = CURSOR_HOME + frame + RESET
        sys.stdout.write(output)
        sys.stdout.flush()
        if self._record is not None:
            self._record.write(output)

    def get_size(self) -> os.terminal_size:
        return shutil.get_terminal_size(fallback=(100, 40))

    def size_tuple(self) -> Tuple[int, int]:
        size = self.get_size()
        return size.columns, size.lines

    def poll_input(self) -> InputState:
        state = InputState()
        if not self._input_enabled or self._stdin_fd is None:
            return state

        dx = dy = 0
        try:
            while True:
                char = self._read_char()
                if char is None:
                    break
                if not char:
                    continue

                if char == "\x03":
                    raise KeyboardInterrupt

                if char != "\x1b":
                    state.keys.append(char)
                    continue

                sequence = self._read_escape_sequence()
                position = self._parse_mouse(sequence)
                if position is not None:
                    if self._last_mouse is not None:
                        dx += position[0] - self._last_mouse[0]
                        dy += position[1] - self._last_mouse[1]
                    self._last_mouse = position
                    continue

                key = self._map_escape_sequence(sequence)
                if key is not None:
                    state.keys.append(key)
        except OSError as exc:
            logger.debug("Input polling interrupted: %s", exc)

        state.mouse_delta = (dx, dy)
        return state

    def _read_char(self) -> Optional[str]:
        """Return the next pending character, or ``None`` if nothing is waiting."""
        if self._stdin_fd is None:
            return None
        readable, _, _ = select.select([sys.stdin], [], [], 0)
        if not readable:
            return None
        data = os.read(self._stdin_fd, 1)
        if not data:
            return None
        return data.decode("utf-8", errors="ignore")

    def _read_escape_sequence(self) -> str:
        sequence = "\x1b"
        while True:
            char = self._read_char()
            if char is None:
                break
            if not char:
                continue
            sequence += char
            if char.isalpha() or char == "~":
                break
        return sequence

    @staticmethod
    def _parse_mouse(sequence: str) -> Optional[Tuple[int, int]]:
        match = _SGR_MOUSE.match(sequence)
        if match is None:
            return None
        return int(match.group(2)), int(match.group(3))

    @staticmethod
    def _map_escape_sequence(sequence: str) -> Optional[str]:
        if not sequence:
            return None
        if sequence in _ARROWS:
            return _ARROWS[sequence]
        # Modified arrows such as "\x1b[1;2A".
        if sequence.startswith("\x1b[") and sequence[-1] in "ABCD":
            return _ARROWS.get("\x1b[" + sequence[-1])
        return None
