"""
Tests for API layer.

Tests:
- API service methods
- Session lifecycle
- HTTP endpoints via the FastAPI test client
- Error handling
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from ..api.app import create_app
from ..api.schemas import (
    ActionResponse,
    CreateSessionRequest,
    ErrorResponse,
    SessionStatus,
    TeamSlot,
)
from ..api.service import APIService
from ..errors import ErrorCode
from ..session.manager import SessionManager, SessionState


@pytest.fixture
def service(dataset):
    """API service with the small test dataset as the server default."""
    return APIService(dataset=dataset)


@pytest.fixture
def session_id(service):
    response = service.create_session(CreateSessionRequest(seed=5))
    service.select_team(response.session_id, TeamSlot.BLUE)
    return response.session_id


class TestAPIService:
    def test_create_session(self, service):
        response = service.create_session(CreateSessionRequest(seed=1, red_name="Kowalscy"))

        assert response.status == SessionStatus.ACTIVE
        state = response.game_state
        assert state.round.round_count == 1
        assert state.round.question == "Ulubione zwierzę domowe"
        assert state.current_team in (TeamSlot.BLUE, TeamSlot.RED)
        assert [t.name for t in state.teams] == ["Niebiescy", "Kowalscy"]

    def test_unrevealed_answers_hidden(self, service, session_id):
        state = service.get_game_state(session_id)

        assert [a.rank for a in state.answers] == [1, 2]
        assert all(a.text is None and a.points is None for a in state.answers)

    def test_reveal_and_score(self, service, session_id):
        service.reveal(session_id, 1)
        response = service.answer(session_id, "pies")

        assert isinstance(response, ActionResponse)
        assert response.success
        state = response.game_state
        assert state.teams[0].points == 70
        assert state.round.pending_next_round
        assert state.answers[0].text == "kot"
        assert state.current_team == TeamSlot.RED

    def test_engine_errors_pass_through(self, service, session_id):
        response = service.next_round(session_id)

        assert not response.success
        assert response.error_code == ErrorCode.NO_PENDING_ROUND

    def test_undo(self, service, session_id):
        service.add_error(session_id)

        response = service.undo(session_id)

        assert response.success
        assert response.game_state.teams[0].errors == 0

    def test_key_press(self, service, session_id):
        response = asyncio.run(service.press_key(session_id, "x"))

        assert response.success
        assert response.game_state.teams[0].errors == 1

    def test_unknown_session(self, service):
        response = service.reveal("missing", 1)

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.SESSION_NOT_FOUND

    def test_invalid_inline_dataset(self, service):
        # Passes schema validation but holds no questions
        request = CreateSessionRequest.model_validate({"dataset": {"questions": {}}})

        response = service.create_session(request)

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.INVALID_DATASET

    def test_end_session(self, service, session_id):
        assert service.end_session(session_id)
        assert not service.end_session(session_id)
        assert session_id not in service.list_sessions()

    def test_health(self, service, session_id):
        health = service.health()

        assert health.active_sessions == 1


class TestSessionManager:
    def test_game_over_sessions_are_not_listed(self, dataset):
        manager = SessionManager()
        session = manager.create_session(dataset, seed=3)
        session.game.get_team(session.game.current_team_id).points = 399

        session.controller.reveal(1)
        session.controller.reveal(2)

        assert session.state == SessionState.GAME_OVER
        assert manager.list_active_sessions() == []

    def test_cleanup_stale_sessions(self, dataset):
        manager = SessionManager()
        old = manager.create_session(dataset)
        fresh = manager.create_session(dataset)
        old.created_at -= 7200
        old.game.winner = old.game.current_team_id

        removed = manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == 1
        assert manager.get_session(old.session_id) is None
        assert manager.get_session(fresh.session_id) is fresh
        assert old.state == SessionState.ENDED


class TestHTTP:
    @pytest.fixture
    def client(self, service):
        return TestClient(create_app(service))

    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["active_sessions"] == 0

    def test_game_flow(self, client):
        created = client.post("/api/v1/sessions", json={"seed": 2})
        assert created.status_code == 200
        sid = created.json()["session_id"]

        client.post(f"/api/v1/sessions/{sid}/team", json={"team_id": "red"})
        client.post(f"/api/v1/sessions/{sid}/answer", json={"text": "KOT"})
        response = client.post(f"/api/v1/sessions/{sid}/reveal", json={"rank": 2})

        body = response.json()
        assert body["success"] is True
        assert body["game_state"]["teams"][1]["points"] == 70
        assert body["game_state"]["round"]["pending_next_round"] is True

        advanced = client.post(f"/api/v1/sessions/{sid}/next-round").json()
        assert advanced["game_state"]["round"]["round_count"] == 2

        state = client.get(f"/api/v1/sessions/{sid}/state").json()
        assert state["round"]["question"] == "Co pływa w stawie?"

    def test_rejected_action_is_not_an_http_error(self, client):
        sid = client.post("/api/v1/sessions", json={}).json()["session_id"]

        response = client.post(f"/api/v1/sessions/{sid}/undo")

        assert response.status_code == 200
        assert response.json()["error_code"] == "EMPTY_UNDO"

    def test_unknown_session_is_404(self, client):
        response = client.post("/api/v1/sessions/nope/error")

        assert response.status_code == 404
        assert response.json()["error_code"] == "SESSION_NOT_FOUND"

    def test_invalid_dataset_is_400(self, client):
        response = client.post("/api/v1/sessions", json={"dataset": {"questions": {}}})

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_DATASET"

    def test_schema_violation_is_422(self, client):
        sid = client.post("/api/v1/sessions", json={}).json()["session_id"]

        response = client.post(f"/api/v1/sessions/{sid}/reveal", json={"rank": 0})

        assert response.status_code == 422

    def test_key_without_state(self, client):
        sid = client.post("/api/v1/sessions", json={}).json()["session_id"]

        response = client.post(
            f"/api/v1/sessions/{sid}/key", params={"verbose": False}, json={"key": "s"}
        )

        body = response.json()
        assert body["success"] is True
        assert body["game_state"] is None

    def test_end_session(self, client):
        sid = client.post("/api/v1/sessions", json={}).json()["session_id"]

        assert client.delete(f"/api/v1/sessions/{sid}").json()["success"] is True
        assert client.get(f"/api/v1/sessions/{sid}").status_code == 404
        assert client.get("/api/v1/sessions").json()["count"] == 0

    def test_openapi_lists_game_endpoints(self, client):
        paths = client.get("/openapi.json").json()["paths"]

        assert "/api/v1/sessions/{session_id}/reveal" in paths
        assert "/api/v1/sessions/{session_id}/next-round" in paths
        assert "delete" in paths["/api/v1/sessions/{session_id}"]

    def test_dataset_larger_than_board_is_refused(self, client):
        answers = [{"lp": n, "ans": f"odp {n}", "points": 10} for n in range(1, 8)]

        response = client.post("/api/v1/sessions", json={"dataset": {"questions": {"Q": answers}}})

        assert response.status_code == 422
        assert client.get("/api/v1/sessions").json()["count"] == 0

    def test_reveal_past_last_answer_keeps_game_and_board_in_step(self, client):
        sid = client.post("/api/v1/sessions", json={}).json()["session_id"]

        response = client.post(f"/api/v1/sessions/{sid}/reveal", json={"rank": 7})

        body = response.json()
        assert response.status_code == 200
        assert body["error_code"] == "NOT_FOUND"
        assert body["game_state"]["can_undo"] is False
        assert all(not a["revealed"] for a in body["game_state"]["answers"])
