"""Checks for ending the game: check, checkmate and stalemate"""

from jokerchess.chess.board import Board
from jokerchess.chess.moves import in_check
from jokerchess.chess.validator import legal_destinations
from jokerchess.core.shared_types import Color

__all__ = ["in_check", "has_any_legal_move", "is_checkmate", "is_stalemate"]


def has_any_legal_move(color: Color, board: Board) -> bool:
    return any(legal_destinations(square, board) for square in board.locate_color(color))


def is_checkmate(color: Color, board: Board) -> bool:
    return in_check(color, board) and not has_any_legal_move(color, board)


def is_stalemate(color: Color, board: Board) -> bool:
    return not in_check(color, board) and not has_any_legal_move(color, board)
