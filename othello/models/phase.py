from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import Outcome, Player

# ----- Game phase (discriminated union) -----


class Playing(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["playing"] = "playing"


class PassPending(BaseModel):
    """`player` has no legal move; waiting for the pass to be acknowledged."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["pass_pending"] = "pass_pending"
    player: Player


class Finished(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["finished"] = "finished"
    outcome: Outcome


Phase = Annotated[Union[Playing, PassPending, Finished], Field(discriminator="kind")]
