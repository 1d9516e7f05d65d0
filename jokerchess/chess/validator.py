"""
Move legality
-----

A move is legal when:
1. there is a piece to move, it does not stay on its square and it does not take one of its own pieces
2. it follows the movement rule of that piece (see moves.py)
3. it does not put (or leave) your own king in check
"""

from jokerchess.chess.board import Board
from jokerchess.chess.moves import in_check, movement_rule
from jokerchess.chess.square import Square, all_squares


def is_legal(from_square: Square, to_square: Square, board: Board) -> bool:
    piece = board.piece(from_square)
    if piece is None or from_square == to_square:
        return False

    target = board.piece(to_square)
    if target is not None and target.color == piece.color:
        return False

    if not movement_rule(piece.type)(from_square, to_square, board):
        return False

    return not leaves_king_in_check(from_square, to_square, board)


def leaves_king_in_check(from_square: Square, to_square: Square, board: Board) -> bool:
    """Return True if the move puts you in check

    plan:
    1. Copy the board
    2. make the candidate move
    3. determine if king is in check on the new board
    """
    piece = board.piece(from_square)
    assert piece is not None
    speculative_board = board.clone()
    speculative_board.move_piece(from_square, to_square)
    return in_check(piece.color, speculative_board)


def legal_destinations(square: Square, board: Board) -> list[Square]:
    """
    Brute force: try all 64 squares. Used for move hints and to find out if a player can still move at all.
    At this board size there is no need for anything smarter.
    """
    if board.piece(square) is None:
        return []
    return [target for target in all_squares() if is_legal(square, target, board)]
