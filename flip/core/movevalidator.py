from __future__ import annotations

from dataclasses import dataclass

from flip.core.board import Player
from flip.core.move import Move, MoveResult
from flip.core.gamestate import GameState


@dataclass
class MoveValidator:
    """
    Explains whether a move attempt would be accepted by
    GameState.update_for_move, with a reason when it would not.
    Positions are range-checked on construction, so only rule checks live here.
    """

    def validate(self, state: GameState, move: Move) -> MoveResult:
        if state.is_terminal:
            return MoveResult.fail("Game is over.")

        if move.player != state.current_player:
            return MoveResult.fail("Not your turn.")

        pos = move.position
        if state.board.piece_at(pos.x, pos.y) != Player.EMPTY:
            return MoveResult.fail("Cell is already occupied.")

        if not state.board.is_legal_move(pos.x, pos.y, move.player):
            return MoveResult.fail("Move captures no discs.")

        return MoveResult.ok()
