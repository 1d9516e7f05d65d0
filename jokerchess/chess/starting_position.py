"""
Starting positions
----

* standard: the classical back rank.
* shuffled: the 7 non-king pieces are shuffled, then the king is dropped into one of the 8 slots.
  Both players get the same arrangement. NOTE: this is a "random back rank", not Chess960
  (bishops may share a square color, the king does not need to stand between the rooks).
* jokers: one pawn per color is secretly marked. The two jokers never share a file.

Randomness is always passed in, so tests can fix the outcome with a seeded random.Random
"""

import random

from jokerchess.chess.board import Board
from jokerchess.chess.pieces import Piece
from jokerchess.chess.square import BOARD_DIMENSIONS, Square
from jokerchess.core.shared_types import Color, PieceType

STANDARD_BACK_RANK: list[PieceType] = [
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
]

HOME_RANKS: dict[Color, tuple[int, int]] = {
    # (back rank, pawn rank)
    Color.WHITE: (0, 1),
    Color.BLACK: (BOARD_DIMENSIONS[1] - 1, BOARD_DIMENSIONS[1] - 2),
}


def shuffled_back_rank(rng: random.Random) -> list[PieceType]:
    back_rank = [piece for piece in STANDARD_BACK_RANK if piece != PieceType.KING]
    rng.shuffle(back_rank)
    back_rank.insert(rng.randrange(len(back_rank) + 1), PieceType.KING)
    return back_rank


def initial_board(back_rank: list[PieceType]) -> Board:
    """Same back rank for both colors, full rows of pawns in front of them"""
    board = Board()
    for color, (back_rank_idx, pawn_rank_idx) in HOME_RANKS.items():
        for file, piece_type in enumerate(back_rank):
            board.place_piece(Piece(piece_type, color), Square(file, back_rank_idx))
            board.place_piece(Piece(PieceType.PAWN, color), Square(file, pawn_rank_idx))
    return board


def select_joker_squares(board: Board, rng: random.Random) -> dict[Color, Square]:
    """Draw one pawn of each color, and draw again while they stand on the same file."""
    white_pawns = board.locate_pieces(PieceType.PAWN, Color.WHITE)
    black_pawns = board.locate_pieces(PieceType.PAWN, Color.BLACK)
    if not white_pawns or not black_pawns:
        raise ValueError("Both players need at least one pawn to pick a joker.")
    if {sq.file for sq in white_pawns} | {sq.file for sq in black_pawns} == {
        white_pawns[0].file
    }:
        raise ValueError("Jokers cannot be placed: all pawns stand on a single file.")

    while True:
        white_joker = rng.choice(white_pawns)
        black_joker = rng.choice(black_pawns)
        if white_joker.file != black_joker.file:
            return {Color.WHITE: white_joker, Color.BLACK: black_joker}


def mark_jokers(board: Board, joker_squares: dict[Color, Square]) -> None:
    for square in joker_squares.values():
        piece = board.piece(square)
        assert piece is not None and piece.type == PieceType.PAWN
        piece.is_joker = True
