from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from flip.core.board import Position, SIZE

# "4 3": column then row, both 1-based
_XY_RE = re.compile(r"^(\d+)\s+(\d+)$")
# "D3" or "d 3": column letter then 1-based row
_CELL_RE = re.compile(r"^([A-Za-z])\s*(\d+)$")


class CommandType(Enum):
    QUIT = "quit"
    RESTART = "restart"
    HELP = "help"


@dataclass(frozen=True)
class Command:
    type: CommandType
    raw: str


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of parsing one input line: a command, a 0-based position or an
    error message. A blank line gives none of them and an empty error.
    """
    command: Optional[Command] = None
    position: Optional[Position] = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error and (self.command is not None or self.position is not None)


class CommandProcessor:
    """Turns input lines into commands or board positions. Executes nothing."""

    def __init__(self, board_size: int = SIZE) -> None:
        if board_size <= 0:
            raise ValueError("board_size must be positive")
        self.board_size = board_size

    @property
    def help_cmds(self) -> str:
        return ", ".join("/" + c.value for c in CommandType)

    def help_text(self) -> str:
        last_col = chr(ord("A") + self.board_size - 1)
        return (
            f"Input: 'x y' (e.g. 4 3) or 'D3' (A-{last_col} + 1-{self.board_size}).\n"
            f"Commands: {self.help_cmds}"
        )

    def parse(self, text: str) -> ParseResult:
        raw = (text or "").strip()
        if not raw:
            return ParseResult()

        if raw.startswith("/"):
            name = raw[1:].strip().lower()
            try:
                return ParseResult(command=Command(CommandType(name), raw))
            except ValueError:
                return ParseResult(error=f"Unknown command: {raw}")

        m = _XY_RE.match(raw)
        if m:
            return self._position(int(m.group(1)), int(m.group(2)))

        m = _CELL_RE.match(raw)
        if m:
            col = ord(m.group(1).upper()) - ord("A") + 1
            return self._position(col, int(m.group(2)))

        return ParseResult(error="Invalid input. Use 'x y' or 'D3' or /help")

    def _position(self, col: int, row: int) -> ParseResult:
        if not (1 <= col <= self.board_size and 1 <= row <= self.board_size):
            return ParseResult(
                error=f"Out of bounds: {col}, {row} (must be 1..{self.board_size})"
            )
        return ParseResult(position=Position(col - 1, row - 1))
