from __future__ import annotations

from othello.engine.driver import GameDriver
from othello.engine.store import make_store
from othello.models.api import SessionView
from othello.models.session import GameSession
from othello.rulesets.reversi.rules import legal_moves

store = make_store()
driver = GameDriver(store)


def get_driver() -> GameDriver:
    return driver


def view(sess: GameSession) -> SessionView:
    moves = [] if sess.is_finished else sorted(legal_moves(sess.board, sess.turn))
    return SessionView.of(sess, legal_moves=moves)
