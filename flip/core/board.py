from typing import List, Tuple, Iterator, Optional, Iterable
import numpy as np
from dataclasses import dataclass
from enum import Enum

SIZE = 8


class OutOfRangeError(ValueError):
    """Raised for coordinates outside the 8x8 board."""


class Player(Enum):
    """Cell / player constants."""
    EMPTY = 0
    BLACK = 1
    WHITE = 2

    def symbol(self) -> str:
        return {0: "·", 1: "●", 2: "○"}[self.value]

    def opponent(self) -> "Player":
        if self == Player.BLACK:
            return Player.WHITE
        if self == Player.WHITE:
            return Player.BLACK
        return Player.EMPTY

    def __str__(self) -> str:
        return self.name.lower()


def check_range(x: int, y: int) -> None:
    if not (0 <= x < SIZE and 0 <= y < SIZE):
        raise OutOfRangeError(f"Out of range: ({x}, {y}) must be within 0..{SIZE - 1}")


@dataclass(frozen=True)
class Position:
    """
    Immutable position on the board.
    Coordinates are 0-based: (0..7, 0..7), x is the column, y the row.
    """
    x: int
    y: int

    def __post_init__(self):
        if not isinstance(self.x, int) or not isinstance(self.y, int):
            raise TypeError("Position coordinates must be integers")
        check_range(self.x, self.y)

    def __str__(self) -> str:
        """Return human-readable form like D3."""
        col = chr(ord("A") + self.x)
        return f"{col}{self.y + 1}"


# 8 directions as (dx, dy)
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)

_ROW_CHARS = {".": Player.EMPTY, "B": Player.BLACK, "W": Player.WHITE}


class Board:
    """
    Immutable Reversi board.

    - Cells are addressed by 0-based (x, y).
    - Internally stores an 8x8 read-only numpy grid of Player values indexed [y, x].
    - apply_move() returns a new Board; no method mutates an existing one.
    """

    __slots__ = ("_grid",)

    def __init__(self, grid: Optional[np.ndarray] = None) -> None:
        if grid is None:
            grid = np.zeros((SIZE, SIZE), dtype=np.int8)
        else:
            grid = np.array(grid, dtype=np.int8)
            if grid.shape != (SIZE, SIZE):
                raise ValueError(f"grid must be {SIZE}x{SIZE}, got {grid.shape}")
        grid.setflags(write=False)
        self._grid = grid

    # ---------- Constructors ----------

    @classmethod
    def initial(cls) -> "Board":
        """Standard start: white on (3,3) and (4,4), black on (4,3) and (3,4)."""
        grid = np.zeros((SIZE, SIZE), dtype=np.int8)
        grid[3, 3] = Player.WHITE.value
        grid[4, 4] = Player.WHITE.value
        grid[3, 4] = Player.BLACK.value
        grid[4, 3] = Player.BLACK.value
        return cls(grid)

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "Board":
        """
        Build a board from 8 strings of 8 chars each, top row first:
          '.' empty, 'B' black, 'W' white. Whitespace is ignored.
        """
        lines = ["".join(r.split()) for r in rows]
        if len(lines) != SIZE or any(len(line) != SIZE for line in lines):
            raise ValueError(f"expected {SIZE} rows of {SIZE} cells")
        grid = np.zeros((SIZE, SIZE), dtype=np.int8)
        for y, line in enumerate(lines):
            for x, ch in enumerate(line):
                try:
                    grid[y, x] = _ROW_CHARS[ch.upper()].value
                except KeyError:
                    raise ValueError(f"invalid cell {ch!r} at ({x}, {y})") from None
        return cls(grid)

    # ---------- Cell access ----------

    @property
    def grid(self) -> np.ndarray:
        """Read-only view of the cells ([y, x] -> Player value)."""
        return self._grid

    def piece_at(self, x: int, y: int) -> Player:
        check_range(x, y)
        return Player(int(self._grid[y, x]))

    def piece_count(self, player: Player) -> int:
        return int(np.count_nonzero(self._grid == player.value))

    # ---------- Rules ----------

    def _run_length(self, x: int, y: int, dx: int, dy: int, player: int, opponent: int) -> int:
        """
        Length of the opponent run starting next to (x, y) in direction (dx, dy)
        that is closed by one of player's discs. 0 if there is no sandwich.
        """
        grid = self._grid
        n = 0
        cx, cy = x + dx, y + dy
        while 0 <= cx < SIZE and 0 <= cy < SIZE:
            v = grid[cy, cx]
            if v == opponent:
                n += 1
            elif v == player:
                return n
            else:
                return 0
            cx += dx
            cy += dy
        return 0

    def is_legal_move(self, x: int, y: int, player: Player) -> bool:
        check_range(x, y)
        if player == Player.EMPTY or self._grid[y, x] != Player.EMPTY.value:
            return False
        p, o = player.value, player.opponent().value
        for dx, dy in DIRECTIONS:
            if self._run_length(x, y, dx, dy, p, o) > 0:
                return True
        return False

    def legal_moves(self, player: Player) -> Iterator[Position]:
        """Yield legal positions for player, row-major (y, then x)."""
        for y in range(SIZE):
            for x in range(SIZE):
                if self.is_legal_move(x, y, player):
                    yield Position(x, y)

    def has_legal_move(self, player: Player) -> bool:
        return next(self.legal_moves(player), None) is not None

    def flips_for(self, x: int, y: int, player: Player) -> List[Position]:
        """Positions that would flip if player played (x, y). Empty if illegal."""
        check_range(x, y)
        if player == Player.EMPTY or self._grid[y, x] != Player.EMPTY.value:
            return []
        p, o = player.value, player.opponent().value
        flips: List[Position] = []
        for dx, dy in DIRECTIONS:
            n = self._run_length(x, y, dx, dy, p, o)
            for k in range(1, n + 1):
                flips.append(Position(x + k * dx, y + k * dy))
        return flips

    def apply_move(self, x: int, y: int, player: Player) -> "Board":
        """
        Return a new board with player's disc at (x, y) and every sandwiched
        run flipped.

        Raises:
            OutOfRangeError if (x, y) is off the board.
            ValueError if the move is not legal for player.
        """
        flips = self.flips_for(x, y, player)
        if not flips:
            raise ValueError(f"Illegal move for {player} at {Position(x, y)}")
        grid = self._grid.copy()
        grid[y, x] = player.value
        for pos in flips:
            grid[pos.y, pos.x] = player.value
        return Board(grid)

    # ---------- Value semantics ----------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._grid, other._grid))

    def __hash__(self) -> int:
        return hash(self._grid.tobytes())

    def __repr__(self) -> str:
        return f"Board(black={self.piece_count(Player.BLACK)}, white={self.piece_count(Player.WHITE)})"

    # ---------- Rendering ----------

    def to_rows(self) -> List[str]:
        """Inverse of from_rows()."""
        chars = {v.value: k for k, v in _ROW_CHARS.items()}
        return ["".join(chars[int(v)] for v in row) for row in self._grid]

    def to_cli(self, marks: Iterable[Position] = ()) -> str:
        """Render with column letters and 1-based row numbers; marks are shown as '*'."""
        marked = {(p.x, p.y) for p in marks}
        letters = [chr(ord("A") + i) for i in range(SIZE)]
        lines = []
        lines.append("    " + " ".join(letters))
        for y in range(SIZE):
            row = []
            for x in range(SIZE):
                if (x, y) in marked:
                    row.append("*")
                else:
                    row.append(Player(int(self._grid[y, x])).symbol())
            lines.append(f"{str(y + 1).rjust(2)}  " + " ".join(row))
        return "\n".join(lines)
