"""Minimax with Alpha-Beta pruning."""

import logging
import time
from typing import List, Optional, Tuple

from flip.core.board import Board, Player, Position
from flip.ai.config import SearchConfig
from flip.ai.heuristics import Heuristic

logger = logging.getLogger(__name__)


class MoveFinder:
    """
    Minimax AI with Alpha-Beta pruning over immutable boards.

    Moves are generated in Board.legal_moves() order (row-major) and the
    first move reaching the best score is kept, so a search is a pure
    function of (board, player, depth). nodes_explored belongs to the last
    search; use one instance per thread.
    """

    def __init__(self, config: SearchConfig = SearchConfig()) -> None:
        self.config = config
        self.heuristic = Heuristic(config)
        self.nodes_explored = 0

    def find_next_move(
        self,
        board: Board,
        player: Player,
        depth: Optional[int] = None,
    ) -> Optional[Position]:
        """
        Best move for player searching depth plies, or None if player has no
        legal move. With depth <= 0 nothing is expanded and the first legal
        move is returned.
        """
        if depth is None:
            depth = self.config.depth

        possible_moves = list(board.legal_moves(player))
        if not possible_moves:
            return None
        if depth <= 0:
            return possible_moves[0]

        start = time.time()
        self.nodes_explored = 0
        move, score = self._search_root(board, possible_moves, player, depth)
        logger.debug(
            "search %s depth=%d move=%s score=%s nodes=%d elapsed=%.3fs",
            player, depth, move, score, self.nodes_explored, time.time() - start,
        )
        return move

    def _search_root(
        self,
        board: Board,
        moves: List[Position],
        player: Player,
        depth: int,
    ) -> Tuple[Optional[Position], float]:
        """Alpha-beta at root. Returns (best_move, best_score)."""
        best_move = None
        best_score = float("-inf")
        alpha = float("-inf")
        beta = float("inf")
        for move in moves:
            child = board.apply_move(move.x, move.y, player)
            score = self._alpha_beta(
                child, player.opponent(), depth - 1, alpha, beta, player
            )
            # strict comparison keeps the earliest of equally scored moves
            if best_move is None or score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, score)
        return best_move, best_score

    def _alpha_beta(
        self,
        board: Board,
        to_move: Player,
        depth: int,
        alpha: float,
        beta: float,
        maximizing_player: Player,
    ) -> float:
        """Alpha-beta recursion. Returns the score of board with to_move to play."""
        self.nodes_explored += 1

        if depth <= 0:
            return self.heuristic.evaluate(board, maximizing_player)

        possible_moves = list(board.legal_moves(to_move))
        if not possible_moves:
            other = to_move.opponent()
            if not board.has_legal_move(other):
                return self.heuristic.evaluate(board, maximizing_player)
            # to_move passes; same skip rule as GameState.update_for_move
            return self._alpha_beta(
                board, other, depth - 1, alpha, beta, maximizing_player
            )

        if to_move == maximizing_player:
            max_eval = float("-inf")
            for move in possible_moves:
                child = board.apply_move(move.x, move.y, to_move)
                eval_score = self._alpha_beta(
                    child, to_move.opponent(), depth - 1, alpha, beta, maximizing_player
                )
                max_eval = max(max_eval, eval_score)
                alpha = max(alpha, eval_score)
                if beta <= alpha:
                    break
            return max_eval

        min_eval = float("inf")
        for move in possible_moves:
            child = board.apply_move(move.x, move.y, to_move)
            eval_score = self._alpha_beta(
                child, to_move.opponent(), depth - 1, alpha, beta, maximizing_player
            )
            min_eval = min(min_eval, eval_score)
            beta = min(beta, eval_score)
            if beta <= alpha:
                break
        return min_eval
