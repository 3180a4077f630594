import random

import pytest

pytest.importorskip("httpx", reason="httpx is required for the FastAPI test client")

from fastapi.testclient import TestClient

from tracker.settings import Settings
from web.server import create_app


@pytest.fixture
def client():
    settings = Settings(HISTORY_CAPACITY=4, DEFAULT_PLAYERS=2, COMMANDER=True)
    # Context manager keeps requests and WebSockets on one event loop
    with TestClient(create_app(settings, rng=random.Random(5))) as test_client:
        yield test_client


def test_initial_state(client):
    response = client.get("/api/state")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["state"]["life"] == [40, 40]
    assert data["capacity"] == 4
    assert (data["cursor"], data["top"]) == (0, 0)
    assert data["can_undo"] is False


def test_life_then_undo_redo(client):
    data = client.post("/api/life", json={"player": 1, "amount": -7}).json()
    assert data["status"] == "ok"
    assert data["state"]["life"] == [33, 40]
    assert data["can_undo"] is True

    data = client.post("/api/undo").json()
    assert data["state"]["life"] == [40, 40]
    assert data["can_redo"] is True

    data = client.post("/api/redo").json()
    assert data["state"]["life"] == [33, 40]

    data = client.post("/api/redo").json()
    assert data == {"status": "nothing_to_redo", "message": "Nothing to redo."}


def test_undo_at_start_is_reported(client):
    data = client.post("/api/undo").json()
    assert data["status"] == "nothing_to_undo"


def test_invalid_player_is_an_error_status(client):
    data = client.post("/api/poison", json={"player": 3, "amount": 1}).json()
    assert data["status"] == "error"
    assert client.get("/api/state").json()["top"] == 0


def test_commander_damage_and_set_life(client):
    client.post("/api/commander-damage", json={"target": 2, "source": 1, "amount": 9})
    data = client.post("/api/set-life", json={"player": 2, "amount": 31}).json()
    assert data["state"]["commander_damage"] == [[0, 0], [9, 0]]
    assert data["state"]["life"] == [40, 31]


def test_history_is_bounded(client):
    for _ in range(6):
        client.post("/api/next-turn")
    data = client.get("/api/history").json()
    assert len(data["history"]) == 4
    assert data["cursor"] == data["top"] == 3
    assert data["history"][-1]["current"] is True


def test_new_game_versus_reset(client):
    client.post("/api/life", json={"player": 1, "amount": -1})

    data = client.post("/api/new-game", json={"players": 3, "commander": False}).json()
    assert data["state"]["life"] == [20, 20, 20]
    assert client.get("/api/state").json()["top"] == 2

    data = client.post("/api/reset", json={"players": 4, "commander": True}).json()
    assert data["state"]["life"] == [40, 40, 40, 40]
    assert client.get("/api/state").json()["top"] == 0


def test_new_game_validates_player_count(client):
    response = client.post("/api/new-game", json={"players": 7})
    assert response.status_code == 422


def test_text_command(client):
    data = client.post("/api/command", json={"line": "-2 4"}).json()
    assert data["status"] == "ok"
    assert data["state"]["life"] == [40, 36]

    data = client.post("/api/command", json={"line": "history"}).json()
    assert data["status"] == "history"
    assert len(data["history"]) == 2

    data = client.post("/api/command", json={"line": "help"}).json()
    assert "Commander dmg" in data["help"]

    assert client.post("/api/command", json={"line": "jump"}).json()["status"] == "error"
    assert client.post("/api/command", json={"line": "quit"}).json()["status"] == "error"
    assert client.post("/api/command", json={"line": "  "}).json()["status"] == "error"


def test_dice(client):
    data = client.post("/api/roll", json={"sides": 6}).json()
    assert data["status"] == "ok"
    assert 1 <= data["value"] <= 6
    assert client.post("/api/roll", json={"sides": 0}).json()["status"] == "error"
    assert client.post("/api/coin").json()["result"] in ("Heads", "Tails")


def test_websocket_receives_state_and_updates(client):
    with client.websocket_connect("/ws") as ws:
        first = ws.receive_json()
        assert first["type"] == "state"
        assert first["state"]["life"] == [40, 40]

        ws.send_text('{"type": "ping"}')
        assert ws.receive_json() == {"type": "pong"}

        client.post("/api/life", json={"player": 1, "amount": 2})
        update = ws.receive_json()
        assert update["state"]["life"] == [42, 40]


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
