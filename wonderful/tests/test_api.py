"""
Tests for the API service and the FastAPI app.
"""

import pytest
from fastapi.testclient import TestClient

from ..api.app import create_app
from ..api.schemas import (
    CardActionRequest,
    CreateGameRequest,
    ErrorCode,
    ErrorResponse,
    GameStatusResponse,
    InvestRequest,
    Phase,
    ReadyRequest,
    Resource,
)
from ..api.service import APIService
from ..engine_core.action import ActionType
from ..engine_core.action_generator import legal_actions
from ..session import GameManager
from .conftest import DictStore

ACTION_PATHS = {
    ActionType.DRAFT: "draft",
    ActionType.MOVE_TO_CONSTRUCTION: "construct",
    ActionType.DISCARD: "discard",
    ActionType.ADD_RESOURCE: "invest",
    ActionType.SET_READY: "ready",
}


@pytest.fixture
def service(small_rules):
    return APIService(manager=GameManager(rules=small_rules))


@pytest.fixture
def client(service):
    return TestClient(create_app(service))


@pytest.fixture
def created(client):
    response = client.post(
        "/api/v1/games", json={"player_names": ["Ada", "Bo"], "seed": 3}
    )
    assert response.status_code == 200
    return response.json()


def status_of(client, game_id, player_id):
    response = client.get(f"/api/v1/games/{game_id}/status", params={"player_id": player_id})
    assert response.status_code == 200
    return response.json()


class TestAPIService:
    """Tests for the framework-agnostic service."""

    def test_create_game(self, service):
        response = service.create_game(CreateGameRequest(player_names=["Ada", "Bo", "Cy"]))

        assert response.phase is Phase.DRAFT
        assert response.current_round == 1
        assert [p.name for p in response.players] == ["Ada", "Bo", "Cy"]
        assert response.host_id == response.players[0].player_id

    def test_invalid_host(self, service):
        response = service.create_game(CreateGameRequest(player_names=["Ada", "Bo"], host_index=4))

        assert isinstance(response, ErrorResponse)
        assert response.error_code is ErrorCode.INVALID_HOST

    def test_status_hides_other_hands(self, service):
        created = service.create_game(CreateGameRequest(player_names=["Ada", "Bo"]))
        viewer = created.players[0].player_id

        status = service.get_status(created.game_id, viewer)

        assert isinstance(status, GameStatusResponse)
        assert status.you.player_id == viewer
        assert len(status.you.hand) == 3
        assert [p.hand for p in status.other_players] == [None]
        assert [p.hand_count for p in status.other_players] == [3]
        assert set(status.you.resources) == set(Resource)

    def test_status_unknown_player(self, service):
        created = service.create_game(CreateGameRequest(player_names=["Ada", "Bo"]))
        status = service.get_status(created.game_id, "nobody")

        assert isinstance(status, ErrorResponse)
        assert status.error_code is ErrorCode.PLAYER_NOT_FOUND
        assert status.details == {"kind": "not_found"}

    def test_draft_and_reject(self, service):
        created = service.create_game(CreateGameRequest(player_names=["Ada", "Bo"]))
        player_id = created.players[0].player_id
        hand = service.get_status(created.game_id, player_id).you.hand

        ok = service.draft_card(
            created.game_id, CardActionRequest(player_id=player_id, card_id=hand[0].card_id)
        )
        again = service.draft_card(
            created.game_id, CardActionRequest(player_id=player_id, card_id=hand[1].card_id)
        )

        assert ok.success
        assert ok.phase is Phase.DRAFT
        assert isinstance(again, ErrorResponse)
        assert again.error_code is ErrorCode.ALREADY_DRAFTED
        assert again.details == {"kind": "invalid_state"}

    def test_invest_in_missing_card(self, service):
        created = service.create_game(CreateGameRequest(player_names=["Ada", "Bo"]))
        response = service.add_resource_to_card(
            created.game_id,
            InvestRequest(
                player_id=created.players[0].player_id,
                card_id="missing",
                resource=Resource.GOLD,
            ),
        )

        assert isinstance(response, ErrorResponse)
        assert response.error_code is ErrorCode.WRONG_PHASE

    def test_ready_in_unknown_game(self, service):
        response = service.set_player_ready("missing", ReadyRequest(player_id="p1"))
        assert response.error_code is ErrorCode.GAME_NOT_FOUND


class TestEndpoints:
    """Tests for the HTTP surface."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        assert client.get("/").json()["health"] == "/health"

    def test_openapi_lists_game_routes(self, client):
        paths = client.get("/openapi.json").json()["paths"]
        assert "/api/v1/games" in paths
        assert "/api/v1/games/{game_id}/ready" in paths

    def test_create_validates_player_count(self, client):
        response = client.post("/api/v1/games", json={"player_names": ["Solo"]})
        assert response.status_code == 422

    def test_create_game(self, created):
        assert created["phase"] == "draft"
        assert len(created["players"]) == 2

    def test_status(self, client, created):
        player_id = created["players"][1]["player_id"]
        status = status_of(client, created["game_id"], player_id)

        assert status["you"]["name"] == "Bo"
        assert len(status["you"]["hand"]) == 3
        assert status["other_players"][0]["hand"] is None
        assert status["draft_direction"] == "clockwise"

    def test_unknown_game_is_404(self, client):
        response = client.get("/api/v1/games/missing/status", params={"player_id": "x"})
        assert response.status_code == 404
        assert response.json()["error_code"] == "GAME_NOT_FOUND"

    def test_unknown_player_is_404(self, client, created):
        response = client.get(
            f"/api/v1/games/{created['game_id']}/status", params={"player_id": "nobody"}
        )
        assert response.status_code == 404
        assert response.json()["error_code"] == "PLAYER_NOT_FOUND"

    def test_draft_then_conflict(self, client, created):
        game_id = created["game_id"]
        player_id = created["players"][0]["player_id"]
        hand = status_of(client, game_id, player_id)["you"]["hand"]

        first = client.post(
            f"/api/v1/games/{game_id}/draft",
            json={"player_id": player_id, "card_id": hand[0]["card_id"]},
        )
        second = client.post(
            f"/api/v1/games/{game_id}/draft",
            json={"player_id": player_id, "card_id": hand[1]["card_id"]},
        )

        assert first.status_code == 200
        assert first.json()["changes"] == [f"Ada drafted {hand[0]['name']}"]
        assert second.status_code == 409
        assert second.json()["error_code"] == "ALREADY_DRAFTED"

    def test_ready_during_draft_is_409(self, client, created):
        response = client.post(
            f"/api/v1/games/{created['game_id']}/ready",
            json={"player_id": created["players"][0]["player_id"]},
        )
        assert response.status_code == 409
        assert response.json()["error_code"] == "WRONG_PHASE"

    def test_invest_rejects_unknown_resource(self, client, created):
        response = client.post(
            f"/api/v1/games/{created['game_id']}/invest",
            json={
                "player_id": created["players"][0]["player_id"],
                "card_id": "x",
                "resource": "unobtanium",
            },
        )
        assert response.status_code == 422

    def test_scores_before_end_is_409(self, client, created):
        response = client.get(f"/api/v1/games/{created['game_id']}/scores")
        assert response.status_code == 409
        assert response.json()["error_code"] == "GAME_NOT_FINISHED"

    def test_list_and_delete(self, client, created):
        listing = client.get("/api/v1/games").json()
        assert listing["count"] == 1
        assert listing["games"][0]["lifecycle"] == "in_progress"

        deleted = client.delete(f"/api/v1/games/{created['game_id']}")
        assert deleted.json()["success"]
        assert client.get("/api/v1/games").json()["count"] == 0

    def test_store_without_listing_is_501(self, small_rules):
        manager = GameManager(store=DictStore(), rules=small_rules)
        client = TestClient(create_app(APIService(manager=manager)))
        created = client.post("/api/v1/games", json={"player_names": ["Ada", "Bo"]}).json()
        game_id = created["game_id"]

        listing = client.get("/api/v1/games")
        assert listing.status_code == 501
        assert listing.json()["error_code"] == "STORE_UNSUPPORTED"

        deleted = client.delete(f"/api/v1/games/{game_id}")
        assert deleted.status_code == 501
        status_of(client, game_id, created["players"][0]["player_id"])

    def test_full_game_over_http(self, client, service, created):
        """Play every legal action through the endpoints until the game ends."""
        game_id = created["game_id"]
        outcomes = []

        while True:
            game = service.manager.require_game(game_id)
            pending = [legal_actions(game, pid) for pid in game.player_ids]
            pending = [actions for actions in pending if actions]
            if not pending:
                break

            action = pending[0][0]
            body = {"player_id": action.payload.player_id}
            if action.payload.card_id is not None:
                body["card_id"] = action.payload.card_id
            if action.payload.resource is not None:
                body["resource"] = action.payload.resource.value

            response = client.post(
                f"/api/v1/games/{game_id}/{ACTION_PATHS[action.action_type]}", json=body
            )
            assert response.status_code == 200, response.json()
            if response.json()["outcome"] not in (None, "continuing"):
                outcomes.append(response.json()["outcome"])

        assert outcomes == ["round_started"] * 3 + ["game_over"]

        scores = client.get(f"/api/v1/games/{game_id}/scores")
        assert scores.status_code == 200
        body = scores.json()
        assert set(body["scores"]) == {p["player_id"] for p in created["players"]}

        status = status_of(client, game_id, created["players"][0]["player_id"])
        assert status["lifecycle"] == "finished"
        assert status["phase"] == "game_over"
        assert status["final_scores"] == body["scores"]
        assert status["winner_id"] == body["winner_id"]
