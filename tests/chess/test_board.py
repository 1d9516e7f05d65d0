"""Unit tests for jokerchess/chess/board.py"""

from jokerchess.chess.board import Board
from jokerchess.chess.pieces import Piece
from jokerchess.chess.square import Square
from jokerchess.core.shared_types import Color, PieceType


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


def test_empty_board() -> None:
    board = Board()
    assert board.position == {}
    assert board.piece(sq("e4")) is None
    assert board.locate_king(Color.WHITE) is None


def test_from_symbols() -> None:
    board = Board.from_symbols({"e1": "K", "e8": "k", "e7": "q"})
    assert board.piece(sq("e1")) == Piece(PieceType.KING, Color.WHITE)
    assert board.piece(sq("e8")) == Piece(PieceType.KING, Color.BLACK)
    assert board.piece(sq("e7")) == Piece(PieceType.QUEEN, Color.BLACK)
    # only occupied squares are stored
    assert len(board.position) == 3


def test_place_and_remove_piece() -> None:
    board = Board()
    rook = Piece(PieceType.ROOK, Color.WHITE)
    board.place_piece(rook, sq("a1"))
    assert board.is_occupied(sq("a1"))
    assert board.remove_piece(sq("a1")) == rook
    assert not board.is_occupied(sq("a1"))
    assert board.remove_piece(sq("a1")) is None


def test_move_piece_returns_capture() -> None:
    board = Board.from_symbols({"d1": "Q", "d8": "q"})
    captured = board.move_piece(sq("d1"), sq("d8"))
    assert captured == Piece(PieceType.QUEEN, Color.BLACK)
    assert board.piece(sq("d1")) is None
    assert board.piece(sq("d8")) == Piece(PieceType.QUEEN, Color.WHITE, has_moved=True)


def test_moved_piece_is_a_copy() -> None:
    """The piece on the new square must not be the same object as the one that left the old square"""
    board = Board.from_symbols({"e2": "P"})
    original = board.piece(sq("e2"))
    board.move_piece(sq("e2"), sq("e3"))
    moved = board.piece(sq("e3"))
    assert moved is not original
    assert original is not None and not original.has_moved


def test_clone_is_independent() -> None:
    board = Board.from_symbols({"e1": "K", "e2": "P"})
    clone = board.clone()
    assert clone == board

    clone.move_piece(sq("e2"), sq("e4"))
    piece = clone.piece(sq("e1"))
    assert piece is not None
    piece.has_moved = True

    assert board.piece(sq("e2")) == Piece(PieceType.PAWN, Color.WHITE)
    assert board.piece(sq("e4")) is None
    assert board.piece(sq("e1")) == Piece(PieceType.KING, Color.WHITE)


def test_locate_pieces() -> None:
    board = Board.from_symbols({"e1": "K", "a2": "P", "b2": "P", "e8": "k", "a7": "p"})
    assert set(board.locate_color(Color.WHITE)) == {sq("e1"), sq("a2"), sq("b2")}
    assert set(board.locate_pieces(PieceType.PAWN, Color.WHITE)) == {sq("a2"), sq("b2")}
    assert board.locate_king(Color.BLACK) == sq("e8")


def test_board_diagram() -> None:
    board = Board.from_symbols({"a1": "R", "h8": "k"})
    lines = str(board).splitlines()
    assert lines[0] == ".......k"
    assert lines[-1] == "R......."
