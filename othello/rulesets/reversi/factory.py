from __future__ import annotations

from typing import Optional

from othello.models.board import CELLS, Board
from othello.models.enums import Cell, Player
from othello.models.phase import Finished, PassPending, Playing
from othello.models.session import GameSession, SessionConfig, SessionRecord

from .rules import has_any_legal_move, outcome_of


def initial_board() -> Board:
    cells = [Cell.EMPTY] * CELLS
    cells[27] = Cell.WHITE
    cells[36] = Cell.WHITE
    cells[28] = Cell.BLACK
    cells[35] = Cell.BLACK
    return Board(cells=tuple(cells))


def quickstart(config: Optional[SessionConfig] = None) -> GameSession:
    """Create a session at the opening position; Black to move."""
    return GameSession(config=config or SessionConfig(), board=initial_board())


def from_record(record: SessionRecord, config: Optional[SessionConfig] = None, session_id: Optional[str] = None) -> GameSession:
    """Rebuild a session from its persistence record, deriving the phase from the board."""
    board = Board(cells=record.board)
    extra = {"id": session_id} if session_id else {}
    if record.winner is not None:
        phase = Finished(outcome=record.winner)
    elif not has_any_legal_move(board, Player.BLACK) and not has_any_legal_move(board, Player.WHITE):
        phase = Finished(outcome=outcome_of(board))
    elif not has_any_legal_move(board, record.turn):
        phase = PassPending(player=record.turn)
    else:
        phase = Playing()
    return GameSession(config=config or SessionConfig(), board=board, turn=record.turn, phase=phase, **extra)

