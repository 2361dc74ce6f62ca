from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from othello.app import app
from othello.engine.driver import GameDriver
from othello.engine.store import MemorySessionStore
from othello.routes.ai import get_provider
from othello.routes.deps import get_driver
from tests.utils.providers import ScriptedProvider


@pytest.fixture()
def provider() -> ScriptedProvider:
    return ScriptedProvider([])


@pytest.fixture()
def client(provider: ScriptedProvider) -> Iterator[TestClient]:
    driver = GameDriver(MemorySessionStore())
    app.dependency_overrides[get_driver] = lambda: driver
    app.dependency_overrides[get_provider] = lambda: provider
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
