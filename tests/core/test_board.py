"""Tests for Board."""

from tablut.core.board import INITIAL_ATTACKERS, INITIAL_DEFENDERS, Board
from tablut.core.enums import Side
from tablut.core.piece import Piece
from tablut.core.types import THRONE, parse_square


class TestBoardInitial:
    def test_royal_on_throne(self) -> None:
        board = Board.initial()
        assert board[THRONE] == Piece.ROYAL
        assert board.royal_square == THRONE

    def test_piece_counts(self) -> None:
        board = Board.initial()
        assert board.count(Side.ATTACKER) == 16
        assert board.count(Side.DEFENDER) == 9  # eight defenders plus the royal piece
        assert len(INITIAL_ATTACKERS) == 16
        assert len(INITIAL_DEFENDERS) == 8

    def test_initial_squares(self) -> None:
        board = Board.initial()
        for name in ("a4", "a5", "a6", "b5", "d1", "e2", "e8", "i6"):
            assert board[parse_square(name)] == Piece.ATTACKER, name
        for name in ("e6", "f5", "e4", "d5", "e7", "e3", "c5", "g5"):
            assert board[parse_square(name)] == Piece.DEFENDER, name
        assert board.is_empty(parse_square("a1"))

    def test_side_squares_ascending(self) -> None:
        squares = Board.initial().side_squares(Side.ATTACKER)
        assert squares == sorted(squares)
        assert squares[0] == parse_square("d1")


class TestBoardMutation:
    def test_set_and_clear_updates_counts(self) -> None:
        board = Board()
        sq = parse_square("c3")
        board[sq] = Piece.ATTACKER
        assert board.count(Side.ATTACKER) == 1
        board[sq] = Piece.EMPTY
        assert board.count(Side.ATTACKER) == 0

    def test_royal_cache_follows_piece(self) -> None:
        board = Board()
        board[parse_square("b2")] = Piece.ROYAL
        assert board.royal_square == parse_square("b2")
        board[parse_square("b2")] = Piece.EMPTY
        assert board.royal_square is None

    def test_layout_key_is_placement_only(self) -> None:
        a = Board()
        b = Board()
        a[parse_square("a1")] = Piece.ATTACKER
        a[parse_square("b1")] = Piece.DEFENDER
        b[parse_square("b1")] = Piece.DEFENDER
        b[parse_square("a1")] = Piece.ATTACKER
        assert a.layout_key == b.layout_key
        assert a == b
        b[parse_square("a1")] = Piece.EMPTY
        assert a.layout_key != b.layout_key

    def test_key_returns_after_piece_moves_back(self) -> None:
        board = Board.initial()
        key = board.layout_key
        d1, d3 = parse_square("d1"), parse_square("d3")
        board[d3] = board[d1]
        board[d1] = Piece.EMPTY
        assert board.layout_key != key
        board[d1] = board[d3]
        board[d3] = Piece.EMPTY
        assert board.layout_key == key

    def test_copy_is_independent(self) -> None:
        board = Board.initial()
        clone = board.copy()
        clone[parse_square("a5")] = Piece.EMPTY
        assert board[parse_square("a5")] == Piece.ATTACKER
        assert board != clone

    def test_copy_from(self) -> None:
        board = Board()
        board.copy_from(Board.initial())
        assert board == Board.initial()
        assert board.layout_key == Board.initial().layout_key


class TestBoardRender:
    def test_render_without_coordinates(self) -> None:
        text = Board.initial().render(coordinates=False)
        assert text.splitlines() == [
            "- - - B B B - - -",
            "- - - - B - - - -",
            "- - - - W - - - -",
            "B - - - W - - - B",
            "B B W W K W W B B",
            "B - - - W - - - B",
            "- - - - W - - - -",
            "- - - - B - - - -",
            "- - - B B B - - -",
        ]

    def test_render_with_coordinates(self) -> None:
        lines = Board.initial().render().splitlines()
        assert lines[0] == " 9 - - - B B B - - -"
        assert lines[-1] == "   a b c d e f g h i"
