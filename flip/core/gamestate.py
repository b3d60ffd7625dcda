from dataclasses import dataclass, field
from typing import Optional
from flip.core.board import Board, Player, Position
from flip.core.move import Move


@dataclass(frozen=True)
class GameResult:
    """Outcome of a finished game. winner is None for a tie."""
    winner: Optional[Player]
    black_score: int
    white_score: int

    @property
    def margin(self) -> int:
        return abs(self.black_score - self.white_score)

    @property
    def is_tie(self) -> bool:
        return self.winner is None

    def __str__(self) -> str:
        if self.winner is None:
            return "it's a tie"
        return f"{self.winner} wins by {self.margin}"


@dataclass(frozen=True)
class GameState:
    """
    Immutable snapshot of a game: the board and whose turn it is.

    Scores, terminal status and the result are derived from the board on
    every access. A state in which neither side can move is terminal; its
    current_player is whoever made the last move.
    """
    board: Board = field(default_factory=Board.initial)
    current_player: Player = Player.BLACK
    last_move: Optional[Move] = None

    @classmethod
    def new_game(cls) -> "GameState":
        return cls(board=Board.initial(), current_player=Player.BLACK)

    # ---------- Derived info ----------

    def piece_at(self, x: int, y: int) -> Player:
        return self.board.piece_at(x, y)

    def score(self, player: Player) -> int:
        return self.board.piece_count(player)

    @property
    def black_score(self) -> int:
        return self.score(Player.BLACK)

    @property
    def white_score(self) -> int:
        return self.score(Player.WHITE)

    @property
    def is_terminal(self) -> bool:
        return not (
            self.board.has_legal_move(Player.BLACK)
            or self.board.has_legal_move(Player.WHITE)
        )

    @property
    def result(self) -> Optional[GameResult]:
        """None while the game is in progress."""
        if not self.is_terminal:
            return None
        black, white = self.black_score, self.white_score
        if black > white:
            winner: Optional[Player] = Player.BLACK
        elif white > black:
            winner = Player.WHITE
        else:
            winner = None
        return GameResult(winner=winner, black_score=black, white_score=white)

    @property
    def result_string(self) -> str:
        result = self.result
        return str(result) if result is not None else ""

    # ---------- Transition ----------

    def update_for_move(self, x: int, y: int) -> "GameState":
        """
        Play (x, y) for the current player.

        An illegal move returns this same state. Otherwise the opponent moves
        next; if the opponent cannot move the current player goes again, and
        if neither can the returned state is terminal.
        """
        player = self.current_player
        if not self.board.is_legal_move(x, y, player):
            return self

        new_board = self.board.apply_move(x, y, player)
        move = Move(Position(x, y), player)

        opponent = player.opponent()
        if new_board.has_legal_move(opponent):
            return GameState(new_board, opponent, move)
        # opponent is skipped if it has no reply; terminal if nobody can move
        return GameState(new_board, player, move)
