"""HTTP surface tests using FastAPI's test client."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, Iterator

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from closet_app.app import ClosetApp
from closet_app.config import AppConfig
from server.api import app, get_closet_app

USER = "user-123"


@pytest.fixture()
def client(tmp_path: Path) -> Iterator[TestClient]:
    closet = ClosetApp(config=AppConfig(wardrobe_db_path=str(tmp_path / "api.db")))
    app.dependency_overrides[get_closet_app] = lambda: closet
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _add(client: TestClient, item_id: str, item_type: str, color: str, seasons=("summer",)) -> Dict[str, object]:
    response = client.post(
        f"/users/{USER}/items",
        json={"item_id": item_id, "type": item_type, "color": color, "seasons": list(seasons)},
    )
    assert response.status_code == 201, response.text
    return response.json()


def _seed_summer(client: TestClient) -> None:
    _add(client, "top1", "top", "blue")
    _add(client, "bottom1", "bottom", "white")
    _add(client, "shoes1", "shoes", "gray")
    _add(client, "acc1", "accessory", "black", seasons=("all",))


def test_healthcheck(client: TestClient) -> None:
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_add_and_list_items(client: TestClient) -> None:
    created = _add(client, "top1", "top", "Grey", seasons=("Autumn",))
    assert created["color"] == "gray"
    assert created["seasons"] == ["fall"]

    listed = client.get(f"/users/{USER}/items").json()
    assert [item["item_id"] for item in listed] == ["top1"]
    assert client.get(f"/users/{USER}/items", params={"type": "shoes"}).json() == []


def test_add_item_generates_an_id(client: TestClient) -> None:
    response = client.post(f"/users/{USER}/items", json={"type": "shoes", "color": "black", "seasons": ["all"]})
    assert response.status_code == 201
    assert response.json()["item_id"]


def test_add_item_rejects_unknown_type(client: TestClient) -> None:
    response = client.post(f"/users/{USER}/items", json={"type": "hat", "color": "black", "seasons": ["all"]})
    assert response.status_code == 422


def test_list_items_rejects_unknown_filter(client: TestClient) -> None:
    assert client.get(f"/users/{USER}/items", params={"type": "hat"}).status_code == 422


def test_stats(client: TestClient) -> None:
    _seed_summer(client)
    stats = client.get(f"/users/{USER}/stats").json()
    assert stats["total"] == 4
    assert stats["by_type"]["shoes"] == 1


def test_suggestions_for_summer(client: TestClient) -> None:
    _seed_summer(client)
    response = client.post("/suggestions", json={"user_id": USER, "season_preference": "Summer"})
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == len(body["suggestions"]) >= 1

    best = body["suggestions"][0]
    assert best["score"] == 100
    assert best["items"]["top"]["item_id"] == "top1"
    assert "Perfect for summer weather" in best["reasoning"]
    assert best["breakdown"]["total"] == 100


def test_suggestions_with_insufficient_items(client: TestClient) -> None:
    _add(client, "top1", "top", "blue")
    response = client.post("/suggestions", json={"user_id": USER})
    assert response.status_code == 422
    assert response.json()["detail"] == {"code": "INSUFFICIENT_ITEMS", "missing": ["bottom", "shoes"]}


def test_save_outfit_and_log_wear(client: TestClient) -> None:
    _seed_summer(client)
    response = client.post(
        "/outfits",
        json={"user_id": USER, "top_id": "top1", "bottom_id": "bottom1", "shoes_id": "shoes1", "accessory_id": "acc1"},
    )
    assert response.status_code == 201, response.text
    saved = response.json()
    assert saved["items"] == {"top": "top1", "bottom": "bottom1", "shoes": "shoes1", "accessory": "acc1"}
    assert saved["name"]

    outfits = client.get(f"/users/{USER}/outfits").json()
    assert [outfit["outfit_id"] for outfit in outfits] == [saved["outfit_id"]]

    logged = client.post(
        "/wear-logs", json={"user_id": USER, "outfit_id": saved["outfit_id"], "worn_date": "2024-07-04"}
    )
    assert logged.status_code == 201
    assert logged.json()["worn_date"] == "2024-07-04"
    assert sorted(logged.json()["item_ids"]) == ["acc1", "bottom1", "shoes1", "top1"]


def test_save_outfit_with_custom_name(client: TestClient) -> None:
    _seed_summer(client)
    response = client.post(
        "/outfits",
        json={"user_id": USER, "top_id": "top1", "bottom_id": "bottom1", "shoes_id": "shoes1", "name": "Beach day"},
    )
    assert response.json()["name"] == "Beach day"


def test_save_outfit_unknown_item(client: TestClient) -> None:
    _seed_summer(client)
    response = client.post(
        "/outfits", json={"user_id": USER, "top_id": "nope", "bottom_id": "bottom1", "shoes_id": "shoes1"}
    )
    assert response.status_code == 404


def test_save_outfit_role_mismatch(client: TestClient) -> None:
    _seed_summer(client)
    response = client.post(
        "/outfits", json={"user_id": USER, "top_id": "bottom1", "bottom_id": "bottom1", "shoes_id": "shoes1"}
    )
    assert response.status_code == 422


def test_wear_log_for_unknown_outfit(client: TestClient) -> None:
    response = client.post("/wear-logs", json={"user_id": USER, "outfit_id": "missing"})
    assert response.status_code == 404


def test_wear_log_with_loose_items(client: TestClient) -> None:
    response = client.post("/wear-logs", json={"user_id": USER, "item_ids": ["top1"], "worn_date": "2024-01-01"})
    assert response.status_code == 201
    assert response.json()["item_ids"] == ["top1"]


def test_wear_log_needs_a_reference(client: TestClient) -> None:
    assert client.post("/wear-logs", json={"user_id": USER}).status_code == 422


def test_get_item(client: TestClient) -> None:
    _add(client, "top1", "top", "blue")

    response = client.get(f"/users/{USER}/items/top1")
    assert response.status_code == 200
    assert response.json()["color"] == "blue"
    assert client.get(f"/users/{USER}/items/missing").status_code == 404
    assert client.get("/users/someone-else/items/top1").status_code == 404


def test_patch_item_changes_only_given_fields(client: TestClient) -> None:
    _add(client, "top1", "top", "blue", seasons=("summer",))

    response = client.patch(f"/users/{USER}/items/top1", json={"color": "Grey"})
    assert response.status_code == 200, response.text
    assert response.json()["color"] == "gray"
    assert response.json()["seasons"] == ["summer"]
    assert client.get(f"/users/{USER}/items/top1").json()["color"] == "gray"

    assert client.patch(f"/users/{USER}/items/top1", json={"type": "hat"}).status_code == 422
    assert client.patch(f"/users/{USER}/items/missing", json={"color": "red"}).status_code == 404


def test_delete_item(client: TestClient) -> None:
    _add(client, "top1", "top", "blue")

    response = client.delete(f"/users/{USER}/items/top1")
    assert response.status_code == 204
    assert client.get(f"/users/{USER}/items").json() == []
    assert client.delete(f"/users/{USER}/items/top1").status_code == 404


def test_wear_history_lists_most_recent_first(client: TestClient) -> None:
    for worn_date, item_id in [("2024-01-01", "top1"), ("2024-03-01", "shoes1"), ("2024-02-01", "bottom1")]:
        client.post("/wear-logs", json={"user_id": USER, "item_ids": [item_id], "worn_date": worn_date})

    history = client.get(f"/users/{USER}/wear-logs").json()
    assert [entry["worn_date"] for entry in history] == ["2024-03-01", "2024-02-01", "2024-01-01"]
    assert history[0]["item_ids"] == ["shoes1"]
    assert history[0]["outfit_id"] is None

    limited = client.get(f"/users/{USER}/wear-logs", params={"limit": 1}).json()
    assert [entry["item_ids"] for entry in limited] == [["shoes1"]]
    assert client.get(f"/users/{USER}/wear-logs", params={"limit": 0}).status_code == 422


def test_suggestions_default_to_configured_limit(tmp_path: Path) -> None:
    closet = ClosetApp(config=AppConfig(wardrobe_db_path=str(tmp_path / "limit.db"), max_suggestions=1))
    app.dependency_overrides[get_closet_app] = lambda: closet
    try:
        client = TestClient(app)
        _seed_summer(client)
        _add(client, "top2", "top", "white")

        body = client.post("/suggestions", json={"user_id": USER, "season_preference": "summer"}).json()
        assert body["count"] == 1
        assert client.post(
            "/suggestions", json={"user_id": USER, "season_preference": "summer", "max_suggestions": 3}
        ).json()["count"] > 1
    finally:
        app.dependency_overrides.clear()
