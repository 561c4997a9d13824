"""Tests for the Flask JSON API."""

import pytest

from sideline_rotation.ui import WebAppState, create_app

START_PAYLOAD = {
    "team_config": {"format": "5v5", "squad_size": 6, "formation_id": "2-2"},
    "players": [{"id": pid, "name": f"Player {pid}"} for pid in "ABCDEF"],
    "goalie_id": "F",
    "now": 1000,
}


@pytest.fixture
def client():
    app = create_app(WebAppState())
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def started(client):
    response = client.post("/api/match/start", json=START_PAYLOAD)
    assert response.status_code == 200
    return client


def test_state_before_start(client):
    data = client.get("/api/state").get_json()
    assert data["success"] is True
    assert data["state"] is None


def test_start_match(client):
    data = client.post("/api/match/start", json=START_PAYLOAD).get_json()

    assert data["success"] is True
    assert data["state"]["rotation_queue"] == ["A", "B", "C", "D", "E"]
    assert data["state"]["next_player_id_to_sub_out"] == "A"
    assert data["can_undo"] is False


def test_start_match_validation(client):
    response = client.post("/api/match/start", json={"players": ["A"]})
    assert response.status_code == 400
    assert "team_config" in response.get_json()["error"]

    bad = dict(START_PAYLOAD, team_config={"format": "5v5", "squad_size": 20, "formation_id": "2-2"})
    response = client.post("/api/match/start", json=bad)
    assert response.status_code == 400
    assert response.get_json()["error_type"] == "InvalidConfiguration"


def test_action_before_start(client):
    response = client.post("/api/substitution", json={"now": 1060})
    assert response.status_code == 400
    assert response.get_json()["error_type"] == "MatchNotStarted"


def test_substitution_and_undo_redo(started):
    data = started.post("/api/substitution", json={"now": 1060}).get_json()
    assert data["state"]["formation"]["positions"]["leftDefender"] == "E"
    assert data["state"]["players_to_highlight"] == ["A", "E"]
    assert data["can_undo"] is True

    data = started.post("/api/undo").get_json()
    assert data["state"]["formation"]["positions"]["leftDefender"] == "A"
    assert data["can_redo"] is True

    data = started.post("/api/redo").get_json()
    assert data["state"]["formation"]["positions"]["leftDefender"] == "E"

    history = started.get("/api/history").get_json()
    assert history["history"] == ["substitution"]


def test_undo_without_history(started):
    response = started.post("/api/undo")
    assert response.status_code == 400
    assert response.get_json()["error_type"] == "NothingToUndo"


def test_position_and_goalie_switch(started):
    data = started.post(
        "/api/position-switch",
        json={"position_a": "leftDefender", "position_b": "rightAttacker", "now": 1030},
    ).get_json()
    assert data["state"]["formation"]["positions"]["rightAttacker"] == "A"

    data = started.post("/api/goalie-switch", json={"goalie_id": "E", "now": 1040}).get_json()
    assert data["state"]["formation"]["goalie"] == "E"
    assert data["state"]["formation"]["positions"]["substitute_1"] == "F"


def test_rejected_action_reports_error(started):
    response = started.post("/api/toggle-inactive", json={"player_id": "A", "now": 1010})
    assert response.status_code == 400
    body = response.get_json()
    assert body["success"] is False
    assert body["error_type"] == "CannotDeactivateFieldPlayer"

    response = started.post("/api/position-switch", json={"position_a": "leftDefender"})
    assert response.status_code == 400


def test_toggle_inactive(started):
    data = started.post("/api/toggle-inactive", json={"player_id": "E", "now": 1010}).get_json()
    assert data["state"]["players"]["E"]["is_inactive"] is True


def test_pause_and_resume(started):
    data = started.post("/api/pause", json={"now": 1030}).get_json()
    assert data["state"]["is_clock_paused"] is True
    assert data["state"]["players"]["A"]["stats"]["time_as_defender_seconds"] == 30

    data = started.post("/api/resume", json={"now": 1100}).get_json()
    assert data["state"]["is_clock_paused"] is False


def test_report_endpoints(started):
    started.post("/api/substitution", json={"now": 1060})

    data = started.get("/api/report").get_json()
    assert data["success"] is True
    assert data["report"]["squad_size"] == 6

    response = started.get("/api/report/csv")
    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert "Player Id" in response.get_data(as_text=True)


def test_report_before_start(client):
    response = client.get("/api/report")
    assert response.status_code == 400


def test_save_and_load(started, tmp_path):
    path = str(tmp_path / "match.json")
    started.post("/api/substitution", json={"now": 1060})

    response = started.post("/api/save", json={"file_path": path})
    assert response.get_json()["success"] is True

    started.post("/api/substitution", json={"now": 1120})
    data = started.post("/api/load", json={"file_path": path}).get_json()
    assert data["state"]["formation"]["positions"]["leftDefender"] == "E"
    assert data["can_undo"] is False


def test_load_inline_state(started):
    state = started.get("/api/state").get_json()["state"]
    data = started.post("/api/load", json={"state": state}).get_json()
    assert data["success"] is True
    assert data["state"] == state


def test_load_errors(client, tmp_path):
    response = client.post("/api/load", json={"file_path": str(tmp_path / "missing.json")})
    assert response.status_code == 404

    response = client.post("/api/load", json={})
    assert response.status_code == 400


def test_malformed_now_is_rejected(started):
    response = started.post("/api/substitution", json={"now": "abc"})
    assert response.status_code == 400
    assert response.get_json()["error_type"] == "ValueError"

    response = started.post("/api/pause", json={"now": True})
    assert response.status_code == 400

    data = started.get("/api/state").get_json()
    assert data["state"]["formation"]["positions"]["leftDefender"] == "A"
    assert data["state"]["is_clock_paused"] is False


def test_start_match_rejects_malformed_fields(client):
    response = client.post("/api/match/start", json=dict(START_PAYLOAD, now="abc"))
    assert response.status_code == 400
    assert response.get_json()["success"] is False

    response = client.post("/api/match/start", json=dict(START_PAYLOAD, paused="false"))
    assert response.status_code == 400
    assert "paused" in response.get_json()["error"]

    assert client.get("/api/state").get_json()["state"] is None


def test_start_match_paused(client):
    data = client.post("/api/match/start", json=dict(START_PAYLOAD, paused=True)).get_json()
    assert data["state"]["is_clock_paused"] is True


def test_load_rejects_inconsistent_state(started):
    state = started.get("/api/state").get_json()["state"]
    state["rotation_queue"] = ["A", "B", "C", "D", "Z"]

    response = started.post("/api/load", json={"state": state})
    assert response.status_code == 400
    assert response.get_json()["error_type"] == "InvalidQueueComposition"

    response = started.post("/api/substitution", json={"now": 1060})
    assert response.status_code == 200
    assert response.get_json()["state"]["formation"]["positions"]["leftDefender"] == "E"


def test_load_rejects_non_object_state(started):
    response = started.post("/api/load", json={"state": ["A", "B"]})
    assert response.status_code == 400


def test_reset_clears_match(started):
    started.post("/api/substitution", json={"now": 1060})

    data = started.post("/api/reset").get_json()
    assert data["success"] is True
    assert data["state"] is None
    assert data["can_undo"] is False

    response = started.post("/api/substitution", json={"now": 1120})
    assert response.get_json()["error_type"] == "MatchNotStarted"
