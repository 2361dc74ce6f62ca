from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .board import CELLS, Board
from .enums import Cell, Outcome, Player, TurnPolicy
from .phase import Finished, Phase, Playing


class SessionConfig(BaseModel):
    """Chosen at session creation and never changed afterwards."""

    model_config = ConfigDict(frozen=True)

    policy: TurnPolicy = TurnPolicy.FIXED_ROLES
    # side answered by the external move provider (only meaningful for FIXED_ROLES)
    provider_player: Player = Player.WHITE


class SessionRecord(BaseModel):
    """Persistence shape: enough to rebuild a session without replaying history."""

    board: tuple[Cell, ...] = Field(min_length=CELLS, max_length=CELLS)
    turn: Player = Player.BLACK
    winner: Outcome | None = None


class GameSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    config: SessionConfig = Field(default_factory=SessionConfig)
    board: Board
    turn: Player = Player.BLACK
    phase: Phase = Field(default_factory=Playing)
    # bumped on every reset; provider responses issued against an older generation are stale
    generation: int = 0
    created_at: str = Field(default_factory=lambda: datetime.now().isoformat())

    @model_validator(mode="after")
    def _pass_pending_owns_turn(self) -> GameSession:
        player = getattr(self.phase, "player", None)
        if player is not None and player != self.turn:
            raise ValueError("pass_pending player must be the player to move")
        return self

    @property
    def winner(self) -> Outcome | None:
        return self.phase.outcome if isinstance(self.phase, Finished) else None

    @property
    def is_finished(self) -> bool:
        return isinstance(self.phase, Finished)

    def to_record(self) -> SessionRecord:
        return SessionRecord(board=self.board.cells, turn=self.turn, winner=self.winner)
