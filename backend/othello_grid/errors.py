class OthelloError(Exception):
    """Base exception for the engine and its service."""


class InvalidPositionError(OthelloError):
    """Position lies outside the grid."""


class IllegalMoveError(OthelloError):
    """Move is not in the current legal-move set."""


class NoLegalMovesError(OthelloError, ValueError):
    """A move was requested from an empty legal-move set."""


class SessionNotFoundError(OthelloError, KeyError):
    """No game session with the given id."""
