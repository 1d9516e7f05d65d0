"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the movement pattern for each piece type.
A movement rule answers "does the piece on `from_square` move like this to reach `to_square`?"
(incl. blocked paths and the pawn's special cases).

Whether the move leaves your own king in check is decided later by the validator.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from jokerchess.chess.board import Board
from jokerchess.chess.pieces import Piece
from jokerchess.chess.square import BOARD_DIMENSIONS, Square
from jokerchess.core.shared_types import Color, PieceType

Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """A move as recorded in the move log. `piece` is the piece as it stands after the move."""

    from_square: Square
    to_square: Square
    piece: Piece
    captured_piece: Optional[Piece]
    timestamp: datetime
    promotion_piece: Optional[PieceType] = None

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None


def _delta(from_square: Square, to_square: Square) -> Vector:
    return to_square.file - from_square.file, to_square.rank - from_square.rank


def _pawn_direction(color: Color) -> int:
    """White moves UP the board, black moves DOWN"""
    return 1 if color == Color.WHITE else -1


def _pawn_starting_rank(color: Color) -> int:
    return 1 if color == Color.WHITE else BOARD_DIMENSIONS[1] - 2


def is_path_clear(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    Walk from one square to the other along a straight line or diagonal.
    Every square in between (exclusive of both endpoints) must be empty.
    """
    df, dr = _delta(from_square, to_square)
    step_file = (df > 0) - (df < 0)
    step_rank = (dr > 0) - (dr < 0)
    file = from_square.file + step_file
    rank = from_square.rank + step_rank
    while (file, rank) != (to_square.file, to_square.rank):
        if board.is_occupied(Square(file, rank)):
            return False
        file += step_file
        rank += step_rank
    return True


# --- MOVEMENT RULES ---
def pawn_rule(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in their first move (so when on their starting rank), if both squares are empty
    - takes diagonally (one square forward), only if there is an opponent's piece to take

    NOTE: No en passant.
    """
    pawn = board.piece(from_square)
    assert pawn is not None
    direction = _pawn_direction(pawn.color)
    df, dr = _delta(from_square, to_square)
    target = board.piece(to_square)

    if df == 0 and target is None:
        if dr == direction:
            return True
        if dr == 2 * direction and from_square.rank == _pawn_starting_rank(pawn.color):
            return is_path_clear(from_square, to_square, board)
        return False

    return abs(df) == 1 and dr == direction and target is not None


def knight_rule(from_square: Square, to_square: Square, board: Board) -> bool:
    """Knights jump: |delta_file|, |delta_rank| is (1, 2) or (2, 1). Nothing can block them."""
    df, dr = _delta(from_square, to_square)
    return {abs(df), abs(dr)} == {1, 2}


def bishop_rule(from_square: Square, to_square: Square, board: Board) -> bool:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    df, dr = _delta(from_square, to_square)
    return abs(df) == abs(dr) and is_path_clear(from_square, to_square, board)


def rook_rule(from_square: Square, to_square: Square, board: Board) -> bool:
    """Rooks move either horizontally or vertically"""
    df, dr = _delta(from_square, to_square)
    return (df == 0 or dr == 0) and is_path_clear(from_square, to_square, board)


def queen_rule(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return rook_rule(from_square, to_square, board) or bishop_rule(
        from_square, to_square, board
    )


def king_rule(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    The king can move by a single square at the time. No castling.
    """
    df, dr = _delta(from_square, to_square)
    return abs(df) <= 1 and abs(dr) <= 1


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MovementRuleFn = Callable[[Square, Square, Board], bool]
MOVEMENT_RULES: dict[PieceType, MovementRuleFn] = {
    PieceType.PAWN: pawn_rule,
    PieceType.KNIGHT: knight_rule,
    PieceType.BISHOP: bishop_rule,
    PieceType.ROOK: rook_rule,
    PieceType.QUEEN: queen_rule,
    PieceType.KING: king_rule,
}


def movement_rule(piece_type: PieceType) -> MovementRuleFn:
    """Every PieceType has a rule. Anything else is a programming error, not an illegal move."""
    try:
        return MOVEMENT_RULES[piece_type]
    except KeyError:
        raise ValueError(f"No movement rule for piece type {piece_type!r}") from None


# --- CAPTURING RULES / ATTACKING RULES ---
def pawn_attack_rule(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    Pawn moves are not symmetric: a pawn only ever attacks the two squares diagonally in front of it,
    whether or not there is something standing there.
    """
    pawn = board.piece(from_square)
    assert pawn is not None
    df, dr = _delta(from_square, to_square)
    return abs(df) == 1 and dr == _pawn_direction(pawn.color)


# --- STRATEGY PATTERN: ATTACKING RULES ---
ATTACK_RULES: dict[PieceType, MovementRuleFn] = {
    **MOVEMENT_RULES,
    PieceType.PAWN: pawn_attack_rule,
}


def is_attacked(square: Square, by_color: Color, board: Board) -> bool:
    """
    Is the square in the line-of-sight of any piece of the specified color?
    ---

    Uses the bare movement patterns: it does NOT matter whether the attacker would leave its own king in check.
    (That is what keeps check detection from recursing into legality checks.)
    """
    for attacker_square in board.locate_color(by_color):
        if attacker_square == square:
            continue
        attacker = board.piece(attacker_square)
        assert attacker is not None
        if ATTACK_RULES[attacker.type](attacker_square, square, board):
            return True
    return False


def in_check(color: Color, board: Board) -> bool:
    """Your king is attacked by the opponent. A board without your king cannot put you in check."""
    king_square = board.locate_king(color)
    if king_square is None:
        return False
    return is_attacked(king_square, color.opponent, board)


# -- PAWN PROMOTION --
def is_promotion(from_square: Square, to_square: Square, board: Board) -> bool:
    """check if the move is a pawn move that reaches the far rank (8th for white, 1st for black)"""
    piece = board.piece(from_square)
    if piece is None or piece.type != PieceType.PAWN:
        return False
    final_rank = BOARD_DIMENSIONS[1] - 1 if piece.color == Color.WHITE else 0
    return to_square.rank == final_rank
