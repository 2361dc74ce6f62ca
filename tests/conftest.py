# Shared fixtures: a fresh engine, the opening session and an event recorder.

from typing import Iterator, List

import pytest

from othello.engine.core import OthelloEngine
from othello.events import MoveEvent, event_bus
from othello.models.enums import TurnPolicy
from othello.models.session import GameSession, SessionConfig


@pytest.fixture()
def engine() -> OthelloEngine:
    return OthelloEngine()


@pytest.fixture()
def opening(engine: OthelloEngine) -> GameSession:
    return engine.new_session(SessionConfig(policy=TurnPolicy.STRICT_ALTERNATION))


@pytest.fixture()
def events() -> Iterator[List[MoveEvent]]:
    seen: List[MoveEvent] = []
    handler = seen.append
    event_bus.subscribe(MoveEvent, handler)
    try:
        yield seen
    finally:
        event_bus.unsubscribe(MoveEvent, handler)
