from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional

from ..models.enums import MoveKind, MoveLogResult, Player, TurnPolicy
from ..models.session import GameSession
from .core import OthelloEngine, waiting_on
from .errors import IllegalMoveError, InvalidTransitionError, TransportFailure
from .logging.logger import log_error, log_event

if TYPE_CHECKING:
    from othello.ai.providers import MoveProvider

    from .store import SessionStore

logger = logging.getLogger(__name__)


class SessionNotFound(KeyError):
    pass


@dataclass(frozen=True)
class ProviderTurn:
    session: GameSession
    response: int
    applied: bool
    stale: bool = False


class GameDriver:
    """Single-writer orchestrator around the engine and a session store.

    Contract:
    - play / acknowledge_pass / reset run one at a time per session (asyncio.Lock per id).
    - provider_turn awaits the provider outside the lock, then drops the answer if the
      session was reset meanwhile (generation changed) instead of applying it.
    - Provider transport failures propagate with the stored session untouched.
    """

    def __init__(self, store: SessionStore, engine: OthelloEngine | None = None) -> None:
        self.store = store
        self.engine = engine or OthelloEngine()
        self._locks: Dict[str, asyncio.Lock] = {}
        # sid -> generation the outstanding provider request was issued against
        self._inflight: Dict[str, int] = {}

    def _lock(self, sid: str) -> asyncio.Lock:
        return self._locks.setdefault(sid, asyncio.Lock())

    def _check_idle(self, sess: GameSession) -> None:
        # input stays disabled while the provider is thinking about this generation
        if self._inflight.get(sess.id) == sess.generation:
            raise InvalidTransitionError("waiting on the move provider")

    async def _load(self, sid: str) -> GameSession:
        sess = await self.store.get(sid)
        if sess is None:
            self._locks.pop(sid, None)
            raise SessionNotFound(sid)
        return sess

    async def create(self, sess: GameSession) -> GameSession:
        await self.store.set(sess)
        return sess

    async def forget(self, sid: str) -> None:
        async with self._lock(sid):
            await self._load(sid)
            await self.store.delete(sid)
        self._locks.pop(sid, None)
        self._inflight.pop(sid, None)

    async def play(self, sid: str, index: int, player: Optional[Player] = None) -> GameSession:
        async with self._lock(sid):
            sess = await self._load(sid)
            self._check_idle(sess)
            mover = player or sess.turn
            cfg = sess.config
            if cfg.policy is TurnPolicy.FIXED_ROLES and mover == cfg.provider_player:
                raise IllegalMoveError(f"{mover.value} is played by the move provider")
            new = self.engine.apply_move(sess, index, mover)
            await self.store.set(new)
            return new

    async def acknowledge_pass(self, sid: str) -> GameSession:
        async with self._lock(sid):
            sess = await self._load(sid)
            self._check_idle(sess)
            new = self.engine.acknowledge_pass(sess)
            await self.store.set(new)
            return new

    async def reset(self, sid: str) -> GameSession:
        async with self._lock(sid):
            sess = await self._load(sid)
            new = self.engine.reset(sess)
            await self.store.set(new)
            return new

    async def provider_turn(self, sid: str, provider: MoveProvider) -> ProviderTurn:
        async with self._lock(sid):
            sess = await self._load(sid)
            if self._inflight.get(sid) == sess.generation:
                raise InvalidTransitionError("a provider request is already outstanding")
            player = waiting_on(sess)
            if player is None:
                raise InvalidTransitionError("game is finished")
            if sess.config.policy is TurnPolicy.FIXED_ROLES and player != sess.config.provider_player:
                raise InvalidTransitionError(f"it is the human's turn ({player.value})")
            board, generation = sess.board, sess.generation
            self._inflight[sid] = generation

        try:
            response = await provider.next_move(board, player)
        except TransportFailure as e:
            log_error(sess, MoveKind.PROVIDER, e, player=player)
            raise
        finally:
            # a request issued after a reset may own the slot by now
            if self._inflight.get(sid) == generation:
                del self._inflight[sid]

        async with self._lock(sid):
            current = await self._load(sid)
            if current.generation != generation:
                logger.info(
                    "discarding provider answer %s for session %s: generation %s is now %s",
                    response, sid, generation, current.generation,
                )
                log_event(
                    current, MoveKind.PROVIDER, MoveLogResult.STALE, player=player, index=response,
                    message=f"issued against generation {generation}",
                )
                return ProviderTurn(session=current, response=response, applied=False, stale=True)
            new = self.engine.apply_provider_move(current, player, response)
            await self.store.set(new)
            return ProviderTurn(session=new, response=response, applied=True)
