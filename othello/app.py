from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import TypeAdapter, ValidationError
from redis.exceptions import RedisError

from . import settings, storage
from .core.primitives import Explanation
from .engine.driver import GameDriver, SessionNotFound
from .engine.errors import OthelloError
from .engine.store import RedisSessionStore
from .logging_listeners import register_listeners
from .models.api import (
    CreateSessionRequest,
    EvaluateRequest,
    HealthResponse,
    LegalMove,
    LegalMovesResponse,
    MoveLogEntry,
    MoveLogResponse,
    MoveRequest,
    SessionView,
)
from .models.board import coords_of
from .models.enums import Player, TurnPolicy
from .models.session import SessionConfig, SessionRecord
from .routes import ai as ai_routes
from .routes.deps import get_driver, view
from .routes.errors import to_http
from .rulesets.reversi import factory
from .rulesets.reversi.rules import explain_move, legal_moves

app = FastAPI(title="Othello Sessions")
register_listeners()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(ai_routes.router)


def _default_config() -> SessionConfig:
    return SessionConfig(policy=TurnPolicy(settings.DEFAULT_POLICY), provider_player=Player(settings.PROVIDER_PLAYER))


@app.get("/health", response_model=HealthResponse)
async def health(driver: GameDriver = Depends(get_driver)):
    store = driver.store
    provider = ai_routes.get_provider()
    if isinstance(store, RedisSessionStore):
        try:
            ok = await store.ping()
        except (RedisError, OSError):
            ok = False
        return HealthResponse(ok=ok, storage="redis", provider=provider.name if provider else None)
    return HealthResponse(ok=True, storage="memory", provider=provider.name if provider else None)


@app.get("/sessions", response_model=list[SessionView])
async def list_sessions(driver: GameDriver = Depends(get_driver)):
    return [view(s) for s in (await driver.store.all()).values()]


@app.post("/sessions", response_model=SessionView)
async def create_session(req: CreateSessionRequest, driver: GameDriver = Depends(get_driver)):
    config = req.config or _default_config()
    if req.record:
        sess = factory.from_record(req.record, config)
    else:
        sess = driver.engine.new_session(config)
    await driver.create(sess)
    return view(sess)


async def _load(driver: GameDriver, sid: str):
    sess = await driver.store.get(sid)
    if not sess:
        raise HTTPException(404, "session not found")
    return sess


@app.get("/sessions/{sid}", response_model=SessionView)
async def get_session(sid: str, driver: GameDriver = Depends(get_driver)):
    return view(await _load(driver, sid))


@app.delete("/sessions/{sid}", status_code=204)
async def delete_session(sid: str, driver: GameDriver = Depends(get_driver)):
    try:
        await driver.forget(sid)
    except SessionNotFound as e:
        raise to_http(e) from e
    storage.logs.drop(sid)
    return None


@app.get("/sessions/{sid}/record", response_model=SessionRecord)
async def get_record(sid: str, driver: GameDriver = Depends(get_driver)):
    return (await _load(driver, sid)).to_record()


@app.get("/sessions/{sid}/legal_moves", response_model=LegalMovesResponse)
async def list_legal_moves(sid: str, player: Player | None = None, driver: GameDriver = Depends(get_driver)):
    sess = await _load(driver, sid)
    who = player or sess.turn
    moves = []
    for idx, flips in sorted(legal_moves(sess.board, who).items()):
        row, col = coords_of(idx)
        moves.append(LegalMove(index=idx, row=row, col=col, flips=sorted(flips)))
    return LegalMovesResponse(player=who, moves=moves)


@app.post("/sessions/{sid}/evaluate", response_model=Explanation)
async def evaluate(sid: str, req: EvaluateRequest, driver: GameDriver = Depends(get_driver)):
    sess = await _load(driver, sid)
    return explain_move(sess.board, req.index, req.player or sess.turn)


@app.post("/sessions/{sid}/move", response_model=SessionView)
async def play_move(sid: str, req: MoveRequest, driver: GameDriver = Depends(get_driver)):
    try:
        sess = await driver.play(sid, req.index, req.player)
    except (OthelloError, SessionNotFound) as e:
        raise to_http(e) from e
    return view(sess)


@app.post("/sessions/{sid}/pass", response_model=SessionView)
async def acknowledge_pass(sid: str, driver: GameDriver = Depends(get_driver)):
    try:
        sess = await driver.acknowledge_pass(sid)
    except (OthelloError, SessionNotFound) as e:
        raise to_http(e) from e
    return view(sess)


@app.post("/sessions/{sid}/reset", response_model=SessionView)
async def reset_session(sid: str, driver: GameDriver = Depends(get_driver)):
    try:
        sess = await driver.reset(sid)
    except SessionNotFound as e:
        raise to_http(e) from e
    return view(sess)


@app.get("/sessions/{sid}/log", response_model=MoveLogResponse)
async def get_move_log(sid: str, limit: int = Query(50, ge=1, le=1000), driver: GameDriver = Depends(get_driver)):
    await _load(driver, sid)
    ta = TypeAdapter(MoveLogEntry)
    entries: list[MoveLogEntry] = []
    for raw in storage.logs.list(sid, limit):
        try:
            entries.append(ta.validate_json(raw))
        except ValidationError:
            # skip malformed entries
            continue
    return MoveLogResponse(entries=entries)
