from fastapi.testclient import TestClient

from othello.engine.core import PASS
from othello.models.enums import Player
from othello.rulesets.reversi.factory import initial_board
from othello.routes.ai import get_provider
from othello.app import app
from tests.utils.data import black_gets_stuck_board


def _create(client: TestClient, **body) -> dict:
    r = client.post("/sessions", json=body)
    assert r.status_code == 200, r.text
    return r.json()


def _strict(client: TestClient) -> dict:
    return _create(client, config={"policy": "strict_alternation"})


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True
    assert r.json()["storage"] == "memory"


def test_create_and_open(client):
    sess = _strict(client)
    assert sess["turn"] == "black"
    assert sess["phase"] == {"kind": "playing"}
    assert sess["score"] == {"black": 2, "white": 2}
    assert sess["legal_moves"] == [19, 26, 37, 44]
    assert sess["board"][27] == "white" and sess["board"][28] == "black"
    assert client.get(f"/sessions/{sess['id']}").json() == sess
    assert [s["id"] for s in client.get("/sessions").json()] == [sess["id"]]


def test_move_and_illegal_move(client):
    sid = _strict(client)["id"]
    r = client.post(f"/sessions/{sid}/move", json={"index": 19})
    assert r.status_code == 200
    body = r.json()
    assert body["score"] == {"black": 4, "white": 1}
    assert body["turn"] == "white"

    r = client.post(f"/sessions/{sid}/move", json={"index": 27})
    assert r.status_code == 400
    assert "IllegalMoveError" in r.json()["detail"]
    r = client.post(f"/sessions/{sid}/move", json={"index": 64})
    assert r.status_code == 422
    assert client.get(f"/sessions/{sid}").json()["score"] == {"black": 4, "white": 1}


def test_pass_outside_pass_pending_is_conflict(client):
    sid = _strict(client)["id"]
    r = client.post(f"/sessions/{sid}/pass")
    assert r.status_code == 409


def test_resume_from_record_and_pass(client):
    record = {"board": [c.value for c in black_gets_stuck_board().cells], "turn": "white"}
    sid = _create(client, config={"policy": "strict_alternation"}, record=record)["id"]
    r = client.post(f"/sessions/{sid}/move", json={"index": 0})
    assert r.json()["phase"] == {"kind": "pass_pending", "player": "black"}
    r = client.post(f"/sessions/{sid}/pass")
    assert r.status_code == 200
    assert r.json()["turn"] == "white"
    r = client.post(f"/sessions/{sid}/move", json={"index": 5})
    body = r.json()
    assert body["phase"] == {"kind": "finished", "outcome": "white"}
    assert body["winner"] == "white"
    assert body["legal_moves"] == []
    rec = client.get(f"/sessions/{sid}/record").json()
    assert rec["winner"] == "white" and rec["turn"] == "black" and len(rec["board"]) == 64


def test_record_with_wrong_length_rejected(client):
    r = client.post("/sessions", json={"record": {"board": ["empty"] * 63, "turn": "black"}})
    assert r.status_code == 422


def test_legal_moves_and_evaluate(client):
    sid = _strict(client)["id"]
    moves = client.get(f"/sessions/{sid}/legal_moves").json()
    assert moves["player"] == "black"
    assert moves["moves"][0] == {"index": 19, "row": 2, "col": 3, "flips": [27]}
    white = client.get(f"/sessions/{sid}/legal_moves", params={"player": "white"}).json()
    assert [m["index"] for m in white["moves"]] == [20, 29, 34, 43]
    ex = client.post(f"/sessions/{sid}/evaluate", json={"index": 0}).json()
    assert ex["ok"] is False


def test_reset(client):
    sid = _strict(client)["id"]
    client.post(f"/sessions/{sid}/move", json={"index": 19})
    r = client.post(f"/sessions/{sid}/reset")
    body = r.json()
    assert body["generation"] == 1
    assert body["board"] == [c.value for c in initial_board().cells]
    assert body["turn"] == "black"


def test_provider_turn(client, provider):
    sid = _create(client, config={"policy": "fixed_roles", "provider_player": "white"})["id"]
    r = client.post(f"/sessions/{sid}/ai/turn")
    assert r.status_code == 409

    client.post(f"/sessions/{sid}/move", json={"index": 19})
    r = client.post(f"/sessions/{sid}/move", json={"index": 18, "player": "white"})
    assert r.status_code == 400

    provider.answers = [18]
    r = client.post(f"/sessions/{sid}/ai/turn")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["applied"] is True and body["response"] == 18
    assert body["session"]["turn"] == "black"
    assert provider.calls[-1][1] == Player.WHITE


def test_provider_violation_is_bad_gateway(client, provider):
    sid = _create(client, config={"policy": "fixed_roles", "provider_player": "white"})["id"]
    client.post(f"/sessions/{sid}/move", json={"index": 19})
    provider.answers = [PASS]
    r = client.post(f"/sessions/{sid}/ai/turn")
    assert r.status_code == 502
    assert "InvalidProviderMoveError" in r.json()["detail"]
    assert client.get(f"/sessions/{sid}").json()["turn"] == "white"


def test_no_provider_configured(client):
    app.dependency_overrides[get_provider] = lambda: None
    sid = _create(client)["id"]
    r = client.post(f"/sessions/{sid}/ai/turn")
    assert r.status_code == 503


def test_move_log(client):
    sid = _strict(client)["id"]
    client.post(f"/sessions/{sid}/move", json={"index": 19})
    client.post(f"/sessions/{sid}/move", json={"index": 0})
    entries = client.get(f"/sessions/{sid}/log").json()["entries"]
    assert [(e["kind"], e["result"]) for e in entries] == [("move", "applied"), ("move", "illegal")]
    assert entries[0]["flips"] == [27]


def test_delete(client):
    sid = _strict(client)["id"]
    assert client.delete(f"/sessions/{sid}").status_code == 204
    assert client.get(f"/sessions/{sid}").status_code == 404
    assert client.delete(f"/sessions/{sid}").status_code == 404
    assert client.post(f"/sessions/{sid}/move", json={"index": 19}).status_code == 404
