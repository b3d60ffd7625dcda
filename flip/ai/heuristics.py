"""Static evaluation of Reversi positions."""

from flip.core.board import Board, Player
from flip.ai.config import (
    POSITION_WEIGHTS,
    SearchConfig,
    WEIGHT_MOBILITY,
    WEIGHT_PIECE,
    WEIGHT_WIN,
)


class Heuristic:
    """Evaluates a board from the maximizing player's perspective."""

    def __init__(self, config: SearchConfig = SearchConfig()) -> None:
        self.config = config

    def evaluate(self, board: Board, maximizing_player: Player) -> int:
        """
        Evaluate board. Positive = good for maximizing_player.

        Finished games score WEIGHT_WIN plus the disc margin, so any win
        outranks any unfinished position and bigger wins rank higher.
        """
        minimizing_player = maximizing_player.opponent()
        own_moves = sum(1 for _ in board.legal_moves(maximizing_player))
        opp_moves = sum(1 for _ in board.legal_moves(minimizing_player))
        diff = board.piece_count(maximizing_player) - board.piece_count(minimizing_player)

        if own_moves == 0 and opp_moves == 0:
            if diff > 0:
                return WEIGHT_WIN + diff
            if diff < 0:
                return -WEIGHT_WIN + diff
            return 0

        score = WEIGHT_PIECE * diff
        if self.config.use_positional:
            score += self._positional_score(board, maximizing_player)
        if self.config.use_mobility:
            score += WEIGHT_MOBILITY * (own_moves - opp_moves)
        return score

    @staticmethod
    def _positional_score(board: Board, player: Player) -> int:
        """Sum of square weights for player's discs minus the opponent's."""
        grid = board.grid
        own = POSITION_WEIGHTS[grid == player.value].sum()
        opp = POSITION_WEIGHTS[grid == player.opponent().value].sum()
        return int(own - opp)
