import random

import numpy as np
import pytest

from flip.core.board import Board, OutOfRangeError, Player, Position, SIZE


def _total(board: Board) -> int:
    return sum(board.piece_count(p) for p in Player)


class TestPosition:
    def test_str_uses_letter_and_one_based_row(self):
        assert str(Position(3, 2)) == "D3"
        assert str(Position(0, 0)) == "A1"
        assert str(Position(7, 7)) == "H8"

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (8, 0), (0, 8)])
    def test_out_of_range_rejected(self, x, y):
        with pytest.raises(OutOfRangeError):
            Position(x, y)

    def test_out_of_range_is_value_error(self):
        with pytest.raises(ValueError):
            Position(9, 9)

    def test_non_int_rejected(self):
        with pytest.raises(TypeError):
            Position(1.0, 2)  # type: ignore[arg-type]


class TestInitialBoard:
    def test_center_discs(self):
        b = Board.initial()
        assert b.piece_at(3, 3) == Player.WHITE
        assert b.piece_at(4, 4) == Player.WHITE
        assert b.piece_at(4, 3) == Player.BLACK
        assert b.piece_at(3, 4) == Player.BLACK

    def test_counts(self):
        b = Board.initial()
        assert b.piece_count(Player.BLACK) == 2
        assert b.piece_count(Player.WHITE) == 2
        assert b.piece_count(Player.EMPTY) == 60

    def test_black_opening_moves_row_major(self):
        moves = list(Board.initial().legal_moves(Player.BLACK))
        assert moves == [Position(3, 2), Position(2, 3), Position(5, 4), Position(4, 5)]

    def test_white_opening_moves(self):
        moves = list(Board.initial().legal_moves(Player.WHITE))
        assert moves == [Position(4, 2), Position(5, 3), Position(2, 4), Position(3, 5)]

    def test_legal_moves_is_single_pass(self):
        it = Board.initial().legal_moves(Player.BLACK)
        assert len(list(it)) == 4
        assert list(it) == []


class TestCellAccess:
    @pytest.mark.parametrize("x, y", [(-1, 0), (8, 3), (3, 8), (0, -5)])
    def test_piece_at_out_of_range(self, x, y):
        with pytest.raises(OutOfRangeError):
            Board.initial().piece_at(x, y)

    def test_is_legal_move_out_of_range(self):
        with pytest.raises(OutOfRangeError):
            Board.initial().is_legal_move(8, 0, Player.BLACK)

    def test_grid_is_read_only(self):
        b = Board.initial()
        with pytest.raises(ValueError):
            b.grid[0, 0] = Player.BLACK.value

    def test_constructor_copies_input(self):
        grid = np.zeros((SIZE, SIZE), dtype=np.int8)
        b = Board(grid)
        grid[0, 0] = Player.BLACK.value
        assert b.piece_at(0, 0) == Player.EMPTY

    def test_wrong_shape_rejected(self):
        with pytest.raises(ValueError):
            Board(np.zeros((4, 4), dtype=np.int8))


class TestFromRows:
    def test_to_rows_inverse(self):
        rows = [
            "B......W",
            "........",
            "...WB...",
            "........",
            "........",
            "........",
            "........",
            "W......B",
        ]
        assert Board.from_rows(rows).to_rows() == rows

    def test_initial_matches_rows(self):
        rows = ["........"] * 3 + ["...WB...", "...BW..."] + ["........"] * 3
        assert Board.from_rows(rows) == Board.initial()

    def test_whitespace_and_lowercase_accepted(self):
        rows = ["b . . . . . . w"] + ["........"] * 7
        b = Board.from_rows(rows)
        assert b.piece_at(0, 0) == Player.BLACK
        assert b.piece_at(7, 0) == Player.WHITE

    def test_bad_char(self):
        with pytest.raises(ValueError):
            Board.from_rows(["X......."] + ["........"] * 7)

    def test_wrong_row_count(self):
        with pytest.raises(ValueError):
            Board.from_rows(["........"] * 7)


class TestLegality:
    def test_occupied_cell_is_illegal(self):
        assert not Board.initial().is_legal_move(3, 3, Player.BLACK)

    def test_no_sandwich_is_illegal(self):
        assert not Board.initial().is_legal_move(0, 0, Player.BLACK)

    def test_adjacent_without_closing_disc_is_illegal(self):
        # white run reaches the edge with no black behind it
        b = Board.from_rows(["WW......", "B......."] + ["........"] * 6)
        assert not b.is_legal_move(2, 0, Player.BLACK)

    def test_run_broken_by_gap_is_illegal(self):
        b = Board.from_rows(["..W.B..."] + ["........"] * 7)
        assert not b.is_legal_move(1, 0, Player.BLACK)

    def test_empty_player_never_moves(self):
        assert not Board.initial().is_legal_move(3, 2, Player.EMPTY)

    def test_has_legal_move(self, tied_board):
        assert Board.initial().has_legal_move(Player.BLACK)
        assert not tied_board.has_legal_move(Player.BLACK)
        assert not tied_board.has_legal_move(Player.WHITE)


class TestApplyMove:
    def test_first_flip(self):
        b = Board.initial().apply_move(2, 3, Player.BLACK)
        assert b.piece_at(2, 3) == Player.BLACK
        assert b.piece_at(3, 3) == Player.BLACK
        assert b.piece_count(Player.BLACK) == 4
        assert b.piece_count(Player.WHITE) == 1

    def test_does_not_mutate_original(self):
        original = Board.initial()
        original.apply_move(2, 3, Player.BLACK)
        assert original == Board.initial()

    def test_flips_in_several_directions(self):
        b = Board.from_rows([
            "........",
            "...B....",
            "...W....",
            ".BW.WB..",
            "........",
            "........",
            "........",
            "........",
        ])
        assert set(b.flips_for(3, 3, Player.BLACK)) == {
            Position(2, 3), Position(4, 3), Position(3, 2)
        }
        after = b.apply_move(3, 3, Player.BLACK)
        assert after.piece_count(Player.BLACK) == 7
        assert after.piece_count(Player.WHITE) == 0

    def test_flips_whole_run(self):
        b = Board.from_rows(["BWWWW..."] + ["........"] * 7)
        after = b.apply_move(5, 0, Player.BLACK)
        assert after.to_rows()[0] == "BBBBBB.."

    def test_only_sandwiched_runs_flip(self):
        b = Board.from_rows([
            "B.......",
            ".W......",
            "..W.....",
            "........",
            "..W.....",
            ".W......",
            "........",
            "........",
        ])
        # the diagonal towards A1 is closed by black; the one towards A7 is not
        after = b.apply_move(3, 3, Player.BLACK)
        assert after.piece_at(2, 2) == Player.BLACK
        assert after.piece_at(1, 1) == Player.BLACK
        assert after.piece_at(2, 4) == Player.WHITE
        assert after.piece_at(1, 5) == Player.WHITE

    def test_illegal_move_raises(self):
        with pytest.raises(ValueError):
            Board.initial().apply_move(0, 0, Player.BLACK)

    def test_out_of_range_raises(self):
        with pytest.raises(OutOfRangeError):
            Board.initial().apply_move(8, 8, Player.BLACK)

    def test_flips_for_illegal_is_empty(self):
        assert Board.initial().flips_for(3, 3, Player.BLACK) == []
        assert Board.initial().flips_for(0, 0, Player.BLACK) == []


class TestInvariants:
    def test_random_games_keep_64_cells_and_grow_by_one(self):
        rng = random.Random(1234)
        for _ in range(20):
            board = Board.initial()
            player = Player.BLACK
            while True:
                moves = list(board.legal_moves(player))
                if not moves:
                    player = player.opponent()
                    moves = list(board.legal_moves(player))
                    if not moves:
                        break
                move = rng.choice(moves)
                before = SIZE * SIZE - board.piece_count(Player.EMPTY)
                board = board.apply_move(move.x, move.y, player)
                after = SIZE * SIZE - board.piece_count(Player.EMPTY)
                assert after == before + 1
                assert _total(board) == 64
                player = player.opponent()


class TestValueSemantics:
    def test_equal_boards_hash_equal(self):
        a = Board.initial().apply_move(2, 3, Player.BLACK)
        b = Board.initial().apply_move(2, 3, Player.BLACK)
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_boards_not_equal(self):
        assert Board.initial() != Board.initial().apply_move(2, 3, Player.BLACK)

    def test_to_cli_marks(self):
        text = Board.initial().to_cli([Position(3, 2)])
        lines = text.splitlines()
        assert lines[0].split() == list("ABCDEFGH")
        assert "*" in lines[3]
        assert text.count("*") == 1
