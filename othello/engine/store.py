from __future__ import annotations
import asyncio
from typing import Dict, Optional, Protocol

import redis.asyncio as redis

from othello.models.session import GameSession
from othello.settings import REDIS_URL


class SessionStore(Protocol):
    async def get(self, sid: str) -> Optional[GameSession]: ...
    async def set(self, s: GameSession) -> None: ...
    async def delete(self, sid: str) -> None: ...
    async def all(self) -> Dict[str, GameSession]: ...


class MemorySessionStore:
    """In-process store with an asyncio.Lock for safety within a single worker."""
    def __init__(self) -> None:
        self._data: Dict[str, GameSession] = {}
        self._lock = asyncio.Lock()

    async def get(self, sid: str) -> Optional[GameSession]:
        async with self._lock:
            return self._data.get(sid)

    async def set(self, s: GameSession) -> None:
        async with self._lock:
            self._data[s.id] = s

    async def delete(self, sid: str) -> None:
        async with self._lock:
            self._data.pop(sid, None)

    async def all(self) -> Dict[str, GameSession]:
        async with self._lock:
            return dict(self._data)


class RedisSessionStore:
    """Cross-worker store using Redis. Set REDIS_URL to enable."""
    def __init__(self, url: str | None = None, client: "redis.Redis | None" = None, prefix: str = "othello:sessions:") -> None:
        if client is None:
            if not url:
                raise ValueError("RedisSessionStore needs a url or a client")
            client = redis.from_url(url, encoding="utf-8", decode_responses=True)
        self._r = client
        self._prefix = prefix

    def _key(self, sid: str) -> str:
        return f"{self._prefix}{sid}"

    async def get(self, sid: str) -> Optional[GameSession]:
        data = await self._r.get(self._key(sid))
        return GameSession.model_validate_json(data) if data else None

    async def set(self, s: GameSession) -> None:
        await self._r.set(self._key(s.id), s.model_dump_json())

    async def delete(self, sid: str) -> None:
        await self._r.delete(self._key(sid))

    async def all(self) -> Dict[str, GameSession]:
        keys = await self._r.keys(f"{self._prefix}*")
        out: Dict[str, GameSession] = {}
        for k in keys:
            data = await self._r.get(k)
            if data:
                s = GameSession.model_validate_json(data)
                out[s.id] = s
        return out

    async def ping(self) -> bool:
        return bool(await self._r.ping())


def make_store() -> SessionStore:
    return RedisSessionStore(REDIS_URL) if REDIS_URL else MemorySessionStore()
