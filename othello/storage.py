from __future__ import annotations
from collections import deque
from typing import Deque, Dict, List, Optional

from redis import Redis

from .settings import MAX_LOG_ENTRIES, REDIS_URL


class MoveLog:
    """Bounded per-session log of move events, newest last."""

    def __init__(self, max_entries: int = MAX_LOG_ENTRIES) -> None:
        self.max_entries = max_entries
        self._data: Dict[str, Deque[str]] = {}

    def append(self, sid: str, raw: str) -> None:
        self._data.setdefault(sid, deque(maxlen=self.max_entries)).append(raw)

    def list(self, sid: str, limit: int = 50) -> List[str]:
        entries = list(self._data.get(sid, ()))
        return entries[-limit:]

    def drop(self, sid: str) -> None:
        self._data.pop(sid, None)


class RedisMoveLog:
    """Same log kept in one Redis list per session so every worker sees it."""

    def __init__(
        self,
        url: Optional[str] = None,
        client: Optional[Redis] = None,
        max_entries: int = MAX_LOG_ENTRIES,
        prefix: str = "othello:log:",
    ) -> None:
        if client is None:
            if not url:
                raise ValueError("RedisMoveLog needs a url or a client")
            client = Redis.from_url(url, decode_responses=True)
        self.r = client
        self.max_entries = max_entries
        self.prefix = prefix

    def _k(self, sid: str) -> str:
        return f"{self.prefix}{sid}"

    def append(self, sid: str, raw: str) -> None:
        pipe = self.r.pipeline()
        pipe.rpush(self._k(sid), raw)
        # keep only the newest max_entries
        pipe.ltrim(self._k(sid), -self.max_entries, -1)
        pipe.execute()

    def list(self, sid: str, limit: int = 50) -> List[str]:
        return list(self.r.lrange(self._k(sid), -limit, -1))

    def drop(self, sid: str) -> None:
        self.r.delete(self._k(sid))


logs = RedisMoveLog(REDIS_URL) if REDIS_URL else MoveLog()
