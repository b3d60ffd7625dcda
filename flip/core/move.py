from __future__ import annotations

from dataclasses import dataclass

from flip.core.board import Player, Position


@dataclass(frozen=True)
class Move:
    """A disc placed by player at position."""
    position: Position
    player: Player

    def __str__(self) -> str:
        return f"{self.player} at {self.position}"


@dataclass(frozen=True)
class MoveResult:
    """Whether a move attempt was accepted, with the reason if it was not."""
    success: bool
    error_message: str = ""

    @classmethod
    def ok(cls) -> MoveResult:
        return cls(True)

    @classmethod
    def fail(cls, message: str) -> MoveResult:
        return cls(False, message)
