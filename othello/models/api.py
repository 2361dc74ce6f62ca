from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel, Field

from .board import CELLS
from .enums import MoveKind, MoveLogResult, Outcome, Player, TurnPolicy
from .phase import Phase
from .session import GameSession, SessionConfig, SessionRecord

# ----- API IO -----


class CreateSessionRequest(BaseModel):
    config: SessionConfig | None = None
    # resume from a stored record instead of the opening position
    record: SessionRecord | None = None


class SessionView(BaseModel):
    id: str
    config: SessionConfig
    board: list[str]
    turn: Player
    phase: Phase
    winner: Outcome | None = None
    score: dict[str, int]
    generation: int
    legal_moves: list[int] = Field(default_factory=list)

    @classmethod
    def of(cls, sess: GameSession, legal_moves: list[int] | None = None) -> SessionView:
        black, white = sess.board.score()
        return cls(
            id=sess.id,
            config=sess.config,
            board=[c.value for c in sess.board.cells],
            turn=sess.turn,
            phase=sess.phase,
            winner=sess.winner,
            score={"black": black, "white": white},
            generation=sess.generation,
            legal_moves=legal_moves or [],
        )


class MoveRequest(BaseModel):
    index: int = Field(ge=0, lt=CELLS)
    # defaults to the player whose turn it is
    player: Player | None = None


class EvaluateRequest(BaseModel):
    index: int = Field(ge=0, lt=CELLS)
    player: Player | None = None


class LegalMove(BaseModel):
    index: int
    row: int
    col: int
    flips: list[int]


class LegalMovesResponse(BaseModel):
    player: Player
    moves: list[LegalMove]


class ProviderTurnResponse(BaseModel):
    applied: bool
    stale: bool = False
    response: int | None = None
    session: SessionView


# ----- Move Log -----


class MoveLogEntry(BaseModel):
    ts: datetime = Field(default_factory=datetime.now)
    session_id: str
    generation: int
    kind: MoveKind
    result: MoveLogResult = MoveLogResult.APPLIED
    player: Player | None = None
    index: int | None = None
    flips: list[int] = Field(default_factory=list)
    message: str | None = None


class MoveLogResponse(BaseModel):
    entries: list[MoveLogEntry]


class HealthResponse(BaseModel):
    ok: bool
    storage: str
    provider: str | None = None
