"""Adapters that ask an external move-selection service for the next move.

Every adapter speaks the same wire contract: a 64-char board ('0' empty,
'1' black, '2' white) plus the acting player's id (0 black, 1 white); the
answer is a cell index or -1 for pass. Adapters only transport; the engine
re-validates whatever comes back.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol, Sequence

import httpx

from othello import settings
from othello.engine.core import PASS
from othello.engine.errors import InvalidProviderMoveError, TransportFailure
from othello.models.board import Board
from othello.models.enums import Player

logger = logging.getLogger(__name__)

__all__ = [
    "PASS",
    "MoveProvider",
    "SubprocessMoveProvider",
    "HttpMoveProvider",
    "parse_move",
    "provider_from_settings",
]


class MoveProvider(Protocol):
    name: str

    async def next_move(self, board: Board, player: Player) -> int: ...


def parse_move(raw: object) -> int:
    """Coerce a provider answer into an int; anything else is a protocol violation."""
    if isinstance(raw, bool):
        raise InvalidProviderMoveError(f"provider returned non-integer move: {raw!r}")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise InvalidProviderMoveError(f"provider returned non-integer move: {raw!r}") from None


class SubprocessMoveProvider:
    """Runs `<command> <board> <turn>` and reads the chosen index from stdout."""

    name = "subprocess"

    def __init__(self, command: Sequence[str], timeout: Optional[float] = None) -> None:
        if not command:
            raise ValueError("command must not be empty")
        self.command = list(command)
        self.timeout = timeout

    async def next_move(self, board: Board, player: Player) -> int:
        argv = self.command + [board.to_wire(), str(player.wire_id)]
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv, stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            raise TransportFailure(f"AI executable could not be started: {e}") from e
        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            raise TransportFailure(f"AI execution timed out after {self.timeout}s") from None
        if proc.returncode != 0:
            err = stderr.decode(errors="replace").strip()
            raise TransportFailure(f"AI execution failed: {err}")
        move = parse_move(stdout.decode(errors="replace"))
        logger.debug("subprocess provider answered %s for %s", move, player.value)
        return move


class HttpMoveProvider:
    """POSTs {"board", "turn"} to a next-move endpoint and reads {"next_move": int}."""

    name = "http"

    def __init__(
        self,
        url: str,
        timeout: Optional[float] = 6,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def next_move(self, board: Board, player: Player) -> int:
        payload = {"board": board.to_wire(), "turn": player.wire_id}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Accept": "application/json", "User-Agent": settings.AI_USER_AGENT},
                transport=self._transport,
            ) as client:
                r = await client.post(self.url, json=payload)
        except httpx.HTTPError as e:
            raise TransportFailure(f"AI request failed: {e!r}") from e
        if r.is_error:
            raise TransportFailure(f"AI request failed ({r.status_code}): {_error_text(r)}")
        try:
            body = r.json()
        except ValueError:
            raise InvalidProviderMoveError(f"provider returned non-JSON body: {r.text[:200]!r}") from None
        if not isinstance(body, dict) or "next_move" not in body:
            raise InvalidProviderMoveError(f"provider response lacks next_move: {body!r}")
        move = parse_move(body["next_move"])
        logger.debug("http provider answered %s for %s", move, player.value)
        return move


def _error_text(r: httpx.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return r.text


def provider_from_settings() -> Optional[MoveProvider]:
    if settings.AI_URL:
        return HttpMoveProvider(settings.AI_URL, timeout=settings.AI_TIMEOUT or 6)
    if settings.AI_COMMAND:
        return SubprocessMoveProvider(settings.AI_COMMAND, timeout=settings.AI_TIMEOUT)
    return None
