from __future__ import annotations

from fastapi import HTTPException

from othello.engine.driver import SessionNotFound
from othello.engine.errors import (
    IllegalMoveError,
    InvalidProviderMoveError,
    InvalidTransitionError,
    OthelloError,
    TransportFailure,
)

_STATUS: dict[type[OthelloError], int] = {
    IllegalMoveError: 400,
    InvalidTransitionError: 409,
    InvalidProviderMoveError: 502,
    TransportFailure: 502,
}


def to_http(e: Exception) -> HTTPException:
    if isinstance(e, SessionNotFound):
        return HTTPException(404, "session not found")
    for cls, code in _STATUS.items():
        if isinstance(e, cls):
            return HTTPException(code, f"{cls.__name__}: {e}")
    raise e
