from __future__ import annotations


class OthelloError(Exception):
    """Base for every rejected operation; the session is left exactly as it was."""


class IllegalMoveError(OthelloError):
    """Out of turn, wrong phase, or a placement that flips nothing."""


class InvalidTransitionError(OthelloError):
    """Operation not allowed in the current phase (e.g. acknowledging a pass that is not pending)."""


class InvalidProviderMoveError(OthelloError):
    """The external move provider answered with a cell or pass that current legality contradicts."""


class TransportFailure(OthelloError):
    """Invoking the move provider failed; `message` carries the underlying diagnostic."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
