from __future__ import annotations

from othello.rulesets.reversi import factory
from othello.rulesets.reversi.rules import compute_flips, has_any_legal_move, outcome_of

from ..models.board import CELLS, Board
from ..models.enums import MoveKind, MoveLogResult, Player, TurnPolicy, opponent
from ..models.phase import Finished, PassPending, Playing
from ..models.session import GameSession, SessionConfig
from .errors import IllegalMoveError, InvalidProviderMoveError, InvalidTransitionError
from .logging.logger import log_event, log_illegal

PASS = -1


def next_actor(config: SessionConfig, mover: Player) -> Player:
    """Nominal next player after `mover` places a disc.

    With two players both policies hand the turn to the opponent; what
    FIXED_ROLES adds is that only the provider may act for
    `config.provider_player`, which GameDriver.play and
    GameDriver.provider_turn enforce.
    """
    if config.policy is TurnPolicy.FIXED_ROLES:
        human = opponent(config.provider_player)
        return human if mover == config.provider_player else config.provider_player
    return opponent(mover)


def waiting_on(sess: GameSession) -> Player | None:
    """Player whose input the session needs next; None once finished."""
    if isinstance(sess.phase, Finished):
        return None
    return sess.turn


class OthelloEngine:
    """Turn-state machine. Transitions return a new session and never touch the one passed in."""

    def new_session(self, config: SessionConfig | None = None) -> GameSession:
        return factory.quickstart(config)

    def apply_move(self, sess: GameSession, index: int, mover: Player) -> GameSession:
        try:
            flips = self._validate_move(sess, index, mover)
        except IllegalMoveError as e:
            log_illegal(sess, MoveKind.MOVE, e, player=mover, index=index)
            raise
        return self._place(sess, index, mover, flips)

    def acknowledge_pass(self, sess: GameSession) -> GameSession:
        if not isinstance(sess.phase, PassPending):
            e = InvalidTransitionError(f"no pass pending (phase is {sess.phase.kind})")
            log_illegal(sess, MoveKind.PASS, e)
            raise e
        passer = sess.phase.player
        new = sess.model_copy(update={"turn": opponent(passer), "phase": Playing()})
        log_event(new, MoveKind.PASS, MoveLogResult.APPLIED, player=passer)
        return new

    def reset(self, sess: GameSession) -> GameSession:
        fresh = factory.quickstart(sess.config)
        new = fresh.model_copy(update={"id": sess.id, "generation": sess.generation + 1, "created_at": sess.created_at})
        log_event(new, MoveKind.RESET, MoveLogResult.APPLIED)
        return new

    def apply_provider_move(self, sess: GameSession, player: Player, response: int) -> GameSession:
        """Re-validate an untrusted provider answer before applying it."""
        if waiting_on(sess) != player:
            e = IllegalMoveError(f"session is not waiting on {player.value}")
            log_illegal(sess, MoveKind.PROVIDER, e, player=player, index=response)
            raise e
        try:
            if response == PASS:
                if has_any_legal_move(sess.board, player):
                    raise InvalidProviderMoveError(f"provider passed for {player.value} while a legal move exists")
            elif not 0 <= response < CELLS:
                raise InvalidProviderMoveError(f"provider returned out-of-range cell {response}")
            elif not compute_flips(sess.board, response, player):
                raise InvalidProviderMoveError(f"provider returned illegal cell {response} for {player.value}")
        except InvalidProviderMoveError as e:
            log_illegal(sess, MoveKind.PROVIDER, e, player=player, index=response)
            raise

        if response == PASS:
            if isinstance(sess.phase, PassPending):
                return self.acknowledge_pass(sess)
            # only reachable for sessions built directly rather than through from_record
            new = sess.model_copy(update={"turn": opponent(player), "phase": Playing()})
            log_event(new, MoveKind.PASS, MoveLogResult.APPLIED, player=player)
            return new
        return self.apply_move(sess, response, player)

    def _validate_move(self, sess: GameSession, index: int, mover: Player) -> frozenset[int]:
        if not isinstance(sess.phase, Playing):
            raise IllegalMoveError(f"cannot move while phase is {sess.phase.kind}")
        if mover != sess.turn:
            raise IllegalMoveError(f"not {mover.value}'s turn")
        if not 0 <= index < CELLS:
            raise IllegalMoveError(f"cell index out of range: {index}")
        flips = compute_flips(sess.board, index, mover)
        if not flips:
            raise IllegalMoveError(f"cell {index} flips no discs for {mover.value}")
        return flips

    def _place(self, sess: GameSession, index: int, mover: Player, flips: frozenset[int]) -> GameSession:
        cells = list(sess.board.cells)
        cells[index] = mover.cell
        for i in flips:
            cells[i] = mover.cell
        board = Board(cells=tuple(cells))

        nxt = next_actor(sess.config, mover)
        black_can = has_any_legal_move(board, Player.BLACK)
        white_can = has_any_legal_move(board, Player.WHITE)
        if not black_can and not white_can:
            phase = Finished(outcome=outcome_of(board))
        elif not (black_can if nxt is Player.BLACK else white_can):
            phase = PassPending(player=nxt)
        else:
            phase = Playing()

        new = sess.model_copy(update={"board": board, "turn": nxt, "phase": phase})
        log_event(new, MoveKind.MOVE, MoveLogResult.APPLIED, player=mover, index=index, flips=flips)
        return new
