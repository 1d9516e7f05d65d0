"""
Custom exceptions raised by the domain, service and persistence layers.

None of these are fatal: the caller can always recover (re-prompt, reload, ...).
A game ending (checkmate, joker capture, timeout) is NOT an error.
"""


class ChessError(Exception):
    """Top-level exception for anything raised on purpose by this package."""


class IllegalMoveError(ChessError):
    """The requested move breaks the rules. Nothing changed, the player may try again."""


class NotYourTurnError(IllegalMoveError):
    """Tried to move a piece of the player that is not on turn."""


class InvalidStateError(ChessError):
    """Request does not fit the current state of the game (e.g. moving after the game ended)."""


class CorruptSnapshotError(ChessError):
    """A stored snapshot could not be turned back into a game."""


class RepositoryError(ChessError):
    """Persistence layer could not find / store the requested record."""


class InvalidRequestError(ChessError):
    """Input at the boundary could not be interpreted (bad square name, bad time control, ...)."""
