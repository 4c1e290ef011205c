"""Tests for the FastAPI tic-tac-toe interface."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tictactoe import ui
from tictactoe.ui import app
from tictactoe.view import PresentationAdapter


client = TestClient(app)


@pytest.fixture(autouse=True)
def fresh_adapter(monkeypatch):
    monkeypatch.setattr(ui, "ADAPTER", PresentationAdapter())


def test_initial_state():
    response = client.get("/api/state")
    assert response.status_code == 200
    payload = response.json()
    assert payload["board"] == [""] * 9
    assert payload["turn"] == "X"
    assert payload["outcome"] == {"status": "in_progress", "winner": None, "line": []}
    assert payload["scores"] == {"X": 0, "O": 0, "draws": 0}
    assert payload["canUndo"] is False
    assert payload["statusText"] == "Next: X"
    assert len(payload["cells"]) == 9


def test_select_cell_and_undo():
    state = client.post("/api/cell", json={"index": 4}).json()
    assert state["board"][4] == "X"
    assert state["turn"] == "O"
    assert state["canUndo"] is True
    assert state["cells"][4] == {
        "index": 4,
        "value": "X",
        "disabled": True,
        "winning": False,
        "label": "Cell 5, X",
    }

    state = client.post("/api/undo").json()
    assert state["board"] == [""] * 9
    assert state["turn"] == "X"
    assert state["canUndo"] is False


def test_occupied_cell_is_ignored():
    client.post("/api/cell", json={"index": 0})
    response = client.post("/api/cell", json={"index": 0})
    assert response.status_code == 200
    state = response.json()
    assert state["board"][0] == "X"
    assert state["turn"] == "O"
    assert state["movesPlayed"] == 1


def test_out_of_range_index_rejected():
    response = client.post("/api/cell", json={"index": 9})
    assert response.status_code == 422
    assert client.get("/api/state").json()["movesPlayed"] == 0


def test_win_scores_once_and_new_game_keeps_scores():
    for index in (0, 1, 4, 2, 8):
        state = client.post("/api/cell", json={"index": index}).json()
    assert state["outcome"] == {"status": "win", "winner": "X", "line": [0, 4, 8]}
    assert state["statusText"] == "Winner: X"
    assert state["scores"]["X"] == 1

    for _ in range(3):
        assert client.get("/api/state").json()["scores"]["X"] == 1

    state = client.post("/api/new-game").json()
    assert state["board"] == [""] * 9
    assert state["scores"] == {"X": 1, "O": 0, "draws": 0}


def test_reset_scores():
    for index in (0, 4, 8, 1, 7, 6, 2, 5, 3):
        state = client.post("/api/cell", json={"index": index}).json()
    assert state["statusText"] == "Draw"
    assert state["scores"]["draws"] == 1

    state = client.post("/api/reset-scores").json()
    assert state["scores"] == {"X": 0, "O": 0, "draws": 0}
    assert state["board"] == [""] * 9
    assert state["turn"] == "X"


def test_index_page_served():
    response = client.get("/")
    assert response.status_code == 200
    assert "Tic-Tac-Toe" in response.text
    assert "/api/cell" in response.text
