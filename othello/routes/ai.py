from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from othello.ai.providers import MoveProvider, provider_from_settings
from othello.engine.driver import GameDriver, SessionNotFound
from othello.engine.errors import OthelloError
from othello.models.api import ProviderTurnResponse
from othello.routes.deps import get_driver, view
from othello.routes.errors import to_http

router = APIRouter(prefix="/sessions", tags=["othello-ai"])

_provider: MoveProvider | None = provider_from_settings()


def get_provider() -> MoveProvider | None:
    return _provider


@router.post("/{sid}/ai/turn", response_model=ProviderTurnResponse)
async def provider_turn(
    sid: str,
    driver: GameDriver = Depends(get_driver),
    provider: MoveProvider | None = Depends(get_provider),
) -> ProviderTurnResponse:
    if provider is None:
        raise HTTPException(503, "no move provider configured")
    try:
        turn = await driver.provider_turn(sid, provider)
    except (OthelloError, SessionNotFound) as e:
        raise to_http(e) from e
    return ProviderTurnResponse(
        applied=turn.applied, stale=turn.stale, response=turn.response, session=view(turn.session)
    )
