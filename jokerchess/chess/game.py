"""
The GameSession is the entrypoint into the domain layer.
It owns everything that changes during a game (board, turn, clocks, move log, result) and
is the only place where any of it gets mutated. Each public method is one indivisible state transition,
so a clock tick can never land halfway through a move.
"""

import logging
import random
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Self

from pydantic import ValidationError

from jokerchess.chess.analyzer import in_check, is_checkmate, is_stalemate
from jokerchess.chess.board import Board
from jokerchess.chess.clock import ClockTask
from jokerchess.chess.moves import Move, is_promotion
from jokerchess.chess.pieces import PROMOTION_OPTIONS, Piece
from jokerchess.chess.square import Square
from jokerchess.chess.starting_position import (
    STANDARD_BACK_RANK,
    initial_board,
    mark_jokers,
    select_joker_squares,
    shuffled_back_rank,
)
from jokerchess.chess.validator import is_legal, legal_destinations
from jokerchess.core.exceptions import (
    CorruptSnapshotError,
    IllegalMoveError,
    InvalidRequestError,
    InvalidStateError,
    NotYourTurnError,
)
from jokerchess.core.models import (
    GameSnapshot,
    MoveModel,
    PieceModel,
    PlacedPieceModel,
    PlayerInfo,
)
from jokerchess.core.shared_types import (
    Color,
    EndReason,
    GameMode,
    MoveOutcome,
    PieceType,
    Status,
)

logger = logging.getLogger(__name__)

SquareLike = Square | str


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MoveResult:
    """What happened to a submitted move. Illegal moves never get here: they raise IllegalMoveError."""

    outcome: MoveOutcome
    move: Optional[Move] = None
    winner: Optional[Color] = None
    end_reason: Optional[EndReason] = None


@dataclass
class _Snapshot:
    """Everything undo/redo has to put back. Always holds its own deep copies."""

    board: Board
    current_player: Color
    moves: list[Move]
    status: Status
    white_clock: int
    black_clock: int
    winner: Optional[Color]
    end_reason: Optional[EndReason]
    pending_draw_offer: Optional[Color]


@dataclass
class GameSession:
    # --- DOMAIN LAYER API CALLED BY SERVICE / UI ---

    mode: GameMode
    board: Board
    current_player: Color
    moves: list[Move]
    status: Status
    white_clock: int = 0
    black_clock: int = 0
    players: dict[Color, PlayerInfo] = field(default_factory=dict)
    joker_squares: Optional[dict[Color, Square]] = None
    winner: Optional[Color] = None
    end_reason: Optional[EndReason] = None
    pending_promotion: Optional[tuple[Square, Square]] = None
    pending_draw_offer: Optional[Color] = None
    paused: bool = False
    selected_square: Optional[Square] = None

    # collaborators: injected so tests can fix shuffles / timestamps
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)
    now: Callable[[], datetime] = field(default=utc_now, repr=False, compare=False)
    clock_period_seconds: float = field(default=1.0, repr=False, compare=False)

    _history: list[_Snapshot] = field(default_factory=list, init=False, repr=False, compare=False)
    _future: list[_Snapshot] = field(default_factory=list, init=False, repr=False, compare=False)
    _clock: Optional[ClockTask] = field(default=None, init=False, repr=False, compare=False)

    @classmethod
    def create(
        cls,
        mode: GameMode = GameMode.STANDARD,
        rng: Optional[random.Random] = None,
        now: Optional[Callable[[], datetime]] = None,
        clock_period_seconds: float = 1.0,
    ) -> Self:
        """A new session waits in `setup` on an empty board until start_game is called."""
        return cls(
            mode=GameMode(mode),
            board=Board(),
            current_player=Color.WHITE,
            moves=[],
            status=Status.SETUP,
            rng=rng or random.Random(),
            now=now or utc_now,
            clock_period_seconds=clock_period_seconds,
        )

    def start_game(
        self,
        white: PlayerInfo,
        black: PlayerInfo,
        time_control_seconds: int,
    ) -> None:
        """Set up the pieces according to the mode, hide the jokers, and start playing (white to move)."""
        if self.status != Status.SETUP:
            raise InvalidStateError(f"Game was already started. status: {self.status}")
        if time_control_seconds <= 0:
            raise InvalidRequestError(
                f"Time control must be a positive number of seconds, got {time_control_seconds}."
            )

        back_rank = (
            list(STANDARD_BACK_RANK)
            if self.mode == GameMode.STANDARD
            else shuffled_back_rank(self.rng)
        )
        board = initial_board(back_rank)
        if self.mode == GameMode.JOKER:
            self.joker_squares = select_joker_squares(board, self.rng)
            mark_jokers(board, self.joker_squares)

        self.board = board
        self.players = {Color.WHITE: white, Color.BLACK: black}
        self.current_player = Color.WHITE
        self.white_clock = time_control_seconds
        self.black_clock = time_control_seconds
        self._change_status(Status.PLAYING)
        logger.info(
            "Game started: mode=%s white=%r black=%r time=%ss",
            self.mode,
            white.name,
            black.name,
            time_control_seconds,
        )

    def legal_destinations(self, square: SquareLike) -> list[Square]:
        """Move hints for the piece standing on `square` (empty if there is none)."""
        return legal_destinations(Square.parse(square), self.board)

    def in_check(self, color: Optional[Color] = None) -> bool:
        return in_check(color or self.current_player, self.board)

    def submit_move(
        self,
        from_square: SquareLike,
        to_square: SquareLike,
        promotion_choice: Optional[PieceType | str] = None,
    ) -> MoveResult:
        """
        Attempt to make a move
        -----

        1. make sure the game is in progress, it is your piece and the move is legal (raise otherwise, nothing changes)
        2. pawn reaching the last rank without a choice of piece? --> park it as pending promotion, board untouched
        3. taking the opponent's joker pawn? --> you lose on the spot
        4. update the board, the move log and your clock (time bonus for captures)
        5. hand the turn over, and see if the opponent got mated / stalemated
        """
        self._assert_playing()
        from_sq = Square.parse(from_square)
        to_sq = Square.parse(to_square)
        choice = self._parse_promotion_choice(promotion_choice)

        piece = self.board.piece(from_sq)
        if piece is None:
            raise IllegalMoveError(f"There is no piece on {from_sq}.")
        if piece.color != self.current_player:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.current_player} to make a move first."
            )
        if not is_legal(from_sq, to_sq, self.board):
            raise IllegalMoveError(f"Move not allowed: {from_sq}{to_sq}")

        promoting = is_promotion(from_sq, to_sq, self.board)
        if choice is not None and not promoting:
            raise IllegalMoveError(
                f"Move {from_sq}{to_sq} is not a promotion, cannot promote to {choice}."
            )
        if promoting and choice is None:
            self.pending_promotion = (from_sq, to_sq)
            self.selected_square = None
            return MoveResult(MoveOutcome.AWAITING_PROMOTION)

        return self._play(from_sq, to_sq, choice)

    def promote(self, choice: PieceType | str) -> MoveResult:
        """Complete the pending promotion with the chosen piece type."""
        if self.pending_promotion is None:
            raise InvalidStateError("There is no pawn waiting to be promoted.")
        from_sq, to_sq = self.pending_promotion
        return self.submit_move(from_sq, to_sq, choice)

    def cancel_promotion(self) -> None:
        self.pending_promotion = None

    def select_square(self, square: SquareLike) -> Optional[MoveResult]:
        """
        Click-to-move
        ---
        * nothing selected yet: select one of your own pieces
        * same square again: deselect
        * another one of your pieces: select that one instead
        * anything else: try to move the selected piece there (selection is cleared, even if the move is illegal)
        """
        self._assert_playing()
        sq = Square.parse(square)
        piece = self.board.piece(sq)
        is_own_piece = piece is not None and piece.color == self.current_player

        if self.selected_square is None:
            if is_own_piece:
                self.selected_square = sq
            return None

        if sq == self.selected_square:
            self.selected_square = None
            return None

        if is_own_piece:
            self.selected_square = sq
            return None

        from_sq = self.selected_square
        self.selected_square = None
        return self.submit_move(from_sq, sq)

    # --- CLOCK ---
    def clock(self, color: Color) -> int:
        return self.white_clock if color == Color.WHITE else self.black_clock

    def tick(self) -> bool:
        """
        One (simulated) second passes for the player on turn.
        Returns False once the clock should stop for good.
        """
        if self.status != Status.PLAYING:
            return False
        if self.paused:
            return True

        remaining = max(0, self.clock(self.current_player) - 1)
        self._set_clock(self.current_player, remaining)
        if remaining == 0:
            logger.info("%s ran out of time", self.current_player)
            self._end_game(EndReason.TIMEOUT, winner=self.current_player.opponent)
            return False
        return True

    def start_clock(self) -> ClockTask:
        """Start ticking in the background. Must be called from within a running event loop."""
        self._assert_playing()
        if self._clock is None:
            self._clock = ClockTask(self.tick, self.clock_period_seconds)
        self._clock.start()
        return self._clock

    def stop_clock(self) -> None:
        if self._clock is not None:
            self._clock.cancel()

    def pause(self) -> None:
        self._assert_playing()
        self.paused = True

    def resume(self) -> None:
        self._assert_playing()
        self.paused = False

    # --- ENDING THE GAME BY AGREEMENT ---
    def offer_draw(self, color: Color) -> None:
        self._assert_playing()
        if self.pending_draw_offer is not None:
            raise InvalidStateError(
                f"{self.pending_draw_offer} already offered a draw. Waiting for a response."
            )
        self.pending_draw_offer = Color(color)
        logger.info("%s offers a draw", color)

    def respond_to_draw(self, accept: bool) -> None:
        """Accepting ends the game without a winner. Declining just withdraws the offer."""
        self._assert_playing()
        if self.pending_draw_offer is None:
            raise InvalidStateError("There is no draw offer to respond to.")
        if accept:
            self._end_game(EndReason.DRAW, winner=None)
            return
        logger.info("Draw offer by %s declined", self.pending_draw_offer)
        self.pending_draw_offer = None

    def resign(self, color: Color) -> None:
        """Resigning an ended game does nothing."""
        if self.status == Status.ENDED:
            return
        self._assert_playing()
        self._end_game(EndReason.RESIGNATION, winner=Color(color).opponent)

    # --- UNDO / REDO ---
    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    def undo(self) -> None:
        """Go back to the state right before the last move."""
        if not self._history:
            raise InvalidStateError("Nothing to undo.")
        self._future.append(self._capture())
        self._restore(self._history.pop())

    def redo(self) -> None:
        if not self._future:
            raise InvalidStateError("Nothing to redo.")
        self._history.append(self._capture())
        self._restore(self._future.pop())

    @property
    def captured_pieces(self) -> list[Piece]:
        return [move.captured_piece for move in self.moves if move.captured_piece]

    # --- SERIALIZATION ---
    def serialize(self) -> GameSnapshot:
        return GameSnapshot(
            mode=self.mode,
            status=self.status,
            current_player=self.current_player,
            board=[
                PlacedPieceModel(square=square.to_algebraic(), **_piece_fields(piece))
                for square, piece in sorted(
                    self.board.position.items(), key=lambda item: (item[0].rank, item[0].file)
                )
            ],
            moves=[move_to_model(move) for move in self.moves],
            white_clock=self.white_clock,
            black_clock=self.black_clock,
            joker_squares=(
                {color: sq.to_algebraic() for color, sq in self.joker_squares.items()}
                if self.joker_squares is not None
                else None
            ),
            winner=self.winner,
            end_reason=self.end_reason,
            players=dict(self.players),
            paused=self.paused,
            pending_draw_offer=self.pending_draw_offer,
        )

    @classmethod
    def deserialize(
        cls,
        snapshot: GameSnapshot | dict[str, Any] | str | bytes,
        rng: Optional[random.Random] = None,
        now: Optional[Callable[[], datetime]] = None,
        clock_period_seconds: float = 1.0,
    ) -> Self:
        """Rebuild a session from a snapshot. Raises CorruptSnapshotError if the data does not make sense."""
        try:
            if isinstance(snapshot, GameSnapshot):
                data = GameSnapshot.model_validate(snapshot.model_dump())
            elif isinstance(snapshot, (str, bytes)):
                data = GameSnapshot.model_validate_json(snapshot)
            else:
                data = GameSnapshot.model_validate(snapshot)
        except ValidationError as exc:
            raise CorruptSnapshotError(f"Snapshot does not describe a game: {exc}") from exc

        board = Board(
            {
                Square.from_algebraic(placed.square): _piece_from_model(placed)
                for placed in data.board
            }
        )
        session = cls(
            mode=data.mode,
            board=board,
            current_player=data.current_player,
            moves=[_move_from_model(move) for move in data.moves],
            status=data.status,
            white_clock=data.white_clock,
            black_clock=data.black_clock,
            players=dict(data.players),
            joker_squares=(
                {color: Square.from_algebraic(sq) for color, sq in data.joker_squares.items()}
                if data.joker_squares is not None
                else None
            ),
            winner=data.winner,
            end_reason=data.end_reason,
            pending_draw_offer=data.pending_draw_offer,
            paused=data.paused,
            rng=rng or random.Random(),
            now=now or utc_now,
            clock_period_seconds=clock_period_seconds,
        )
        return session

    # -- PRIVATE HELPERS ---
    def _assert_playing(self) -> None:
        if self.status != Status.PLAYING:
            raise InvalidStateError(f"Game is not in progress. status: {self.status}")

    def _parse_promotion_choice(
        self, choice: Optional[PieceType | str]
    ) -> Optional[PieceType]:
        if choice is None:
            return None
        try:
            piece_type = PieceType(choice)
        except ValueError:
            raise IllegalMoveError(f"Unknown piece type {choice!r}.") from None
        if piece_type not in PROMOTION_OPTIONS:
            raise IllegalMoveError(
                f"Cannot promote to {piece_type}. Pick one of {', '.join(PROMOTION_OPTIONS)}."
            )
        return piece_type

    def _play(
        self, from_sq: Square, to_sq: Square, choice: Optional[PieceType]
    ) -> MoveResult:
        """Move has been validated. From here on it is one uninterrupted update of the session."""
        self._push_history()
        self.pending_promotion = None
        self.selected_square = None
        mover = self.current_player

        # the joker rule is checked BEFORE the piece is moved: the board stays as it was
        target = self.board.piece(to_sq)
        if target is not None and target.is_live_joker:
            logger.info("%s captured the joker pawn on %s and loses", mover, to_sq)
            self._end_game(EndReason.JOKER, winner=target.color)
            return MoveResult(
                MoveOutcome.GAME_ENDED, winner=self.winner, end_reason=self.end_reason
            )

        captured = self.board.move_piece(from_sq, to_sq)
        moved_piece = self.board.piece(to_sq)
        assert moved_piece is not None
        if choice is not None:
            moved_piece.promote_to(choice)

        move = Move(
            from_square=from_sq,
            to_square=to_sq,
            piece=replace(moved_piece),
            captured_piece=captured,
            timestamp=self.now(),
            promotion_piece=choice,
        )
        self.moves.append(move)
        if captured is not None:
            self._set_clock(mover, self.clock(mover) + captured.time_bonus)
        logger.debug("%s played %s%s", mover, from_sq, to_sq)

        self.current_player = mover.opponent
        self._update_game_status(mover)
        if self.status == Status.ENDED:
            return MoveResult(
                MoveOutcome.GAME_ENDED,
                move=move,
                winner=self.winner,
                end_reason=self.end_reason,
            )
        return MoveResult(MoveOutcome.ACCEPTED, move=move)

    def _update_game_status(self, mover: Color) -> None:
        """NOTE the turn has already been handed over. The player on turn is the one that might be mated."""
        if is_checkmate(self.current_player, self.board):
            self._end_game(EndReason.CHECKMATE, winner=mover)
        elif is_stalemate(self.current_player, self.board):
            self._end_game(EndReason.STALEMATE, winner=None)

    def _set_clock(self, color: Color, seconds: int) -> None:
        if color == Color.WHITE:
            self.white_clock = seconds
        else:
            self.black_clock = seconds

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status

    def _end_game(self, reason: EndReason, winner: Optional[Color]) -> None:
        if self.status == Status.ENDED:
            return
        self._change_status(Status.ENDED)
        self.winner = winner
        self.end_reason = reason
        self.pending_promotion = None
        self.pending_draw_offer = None
        self.selected_square = None
        self.stop_clock()
        logger.info("Game ended: reason=%s winner=%s", reason, winner or "none (draw)")

    def _capture(self) -> _Snapshot:
        return _Snapshot(
            board=self.board.clone(),
            current_player=self.current_player,
            moves=list(self.moves),
            status=self.status,
            white_clock=self.white_clock,
            black_clock=self.black_clock,
            winner=self.winner,
            end_reason=self.end_reason,
            pending_draw_offer=self.pending_draw_offer,
        )

    def _push_history(self) -> None:
        """A new move makes the redo tail meaningless."""
        self._history.append(self._capture())
        self._future.clear()

    def _restore(self, snapshot: _Snapshot) -> None:
        self.board = snapshot.board.clone()
        self.current_player = snapshot.current_player
        self.moves = list(snapshot.moves)
        self.status = snapshot.status
        self.white_clock = snapshot.white_clock
        self.black_clock = snapshot.black_clock
        self.winner = snapshot.winner
        self.end_reason = snapshot.end_reason
        self.pending_draw_offer = snapshot.pending_draw_offer
        self.pending_promotion = None
        self.selected_square = None
        if self.status != Status.PLAYING:
            self.stop_clock()


# --- SNAPSHOT CONVERSION HELPERS ---
def _piece_fields(piece: Piece) -> dict[str, Any]:
    return {
        "type": piece.type,
        "color": piece.color,
        "has_moved": piece.has_moved,
        "is_joker": piece.is_joker,
    }


def _piece_from_model(model: PieceModel) -> Piece:
    return Piece(model.type, model.color, model.has_moved, model.is_joker)


def move_to_model(move: Move) -> MoveModel:
    return MoveModel(
        from_square=move.from_square.to_algebraic(),
        to_square=move.to_square.to_algebraic(),
        piece=PieceModel(**_piece_fields(move.piece)),
        captured_piece=(
            PieceModel(**_piece_fields(move.captured_piece))
            if move.captured_piece is not None
            else None
        ),
        is_capture=move.is_capture,
        promotion_piece=move.promotion_piece,
        timestamp=move.timestamp,
    )


def _move_from_model(model: MoveModel) -> Move:
    return Move(
        from_square=Square.from_algebraic(model.from_square),
        to_square=Square.from_algebraic(model.to_square),
        piece=_piece_from_model(model.piece),
        captured_piece=(
            _piece_from_model(model.captured_piece)
            if model.captured_piece is not None
            else None
        ),
        timestamp=model.timestamp,
        promotion_piece=model.promotion_piece,
    )
