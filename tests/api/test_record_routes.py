"""Unit tests for user, app and policy API routes."""

from __future__ import annotations

from unittest.mock import patch

from privacy_guard.exceptions import CacheUnavailable

PREFERENCE = {
    "allowed_attributes": ["location", "contact"],
    "denied_purposes": ["marketing"],
    "allowed_purposes": ["analytics"],
    "retention_seconds": 600,
}


# =============================================================================
# Tests: /api/users
# =============================================================================


class TestUsers:
    def test_create_and_get(self, client):
        created = client.post("/api/users", json={"full_name": "Ada", "privacy_preference": PREFERENCE})

        assert created.status_code == 201
        user = created.json()
        assert user["privacy_preference"]["allowed_attributes"] == ["contact", "location"]

        fetched = client.get(f"/api/users/{user['id']}")
        assert fetched.json() == user

    def test_create_rejects_negative_retention(self, client):
        response = client.post(
            "/api/users",
            json={"privacy_preference": {"retention_seconds": -1}},
        )

        assert response.status_code == 422

    def test_get_missing_404(self, client):
        assert client.get("/api/users/ghost").status_code == 404

    def test_list_paginates(self, client):
        for name in ("A", "B", "C"):
            client.post("/api/users", json={"full_name": name, "privacy_preference": PREFERENCE})

        body = client.get("/api/users", params={"limit": 2, "skip": 1}).json()

        assert [u["full_name"] for u in body["users"]] == ["B", "C"]
        assert (body["total"], body["limit"], body["skip"]) == (3, 2, 1)

    def test_list_limit_bounds(self, client):
        assert client.get("/api/users", params={"limit": 0}).status_code == 422
        assert client.get("/api/users", params={"limit": 501}).status_code == 422

    def test_update_preferences(self, client, service, user_id):
        response = client.put(f"/api/users/{user_id}/preferences", json=PREFERENCE)

        assert response.status_code == 200
        assert response.json()["privacy_preference"]["retention_seconds"] == 600
        assert service.store.get_user(user_id).preference.retention_seconds == 600

    def test_update_preferences_missing_user_404(self, client):
        response = client.put("/api/users/ghost/preferences", json=PREFERENCE)

        assert response.status_code == 404

    def test_update_preferences_cache_down_503(self, client, service, user_id):
        with patch.object(service.coordinator, "on_preference_changed", side_effect=CacheUnavailable("down")):
            response = client.put(f"/api/users/{user_id}/preferences", json=PREFERENCE)

        assert response.status_code == 503


# =============================================================================
# Tests: /api/apps
# =============================================================================


class TestApps:
    def test_create_and_get(self, client):
        created = client.post(
            "/api/apps",
            json={"name": "Maps", "attributes": ["gps"], "purposes": ["analytics"], "retention_seconds": 60},
        )

        assert created.status_code == 201
        app = created.json()
        assert client.get(f"/api/apps/{app['id']}").json() == app

    def test_get_missing_404(self, client):
        assert client.get("/api/apps/missing").status_code == 404

    def test_list(self, client, app_id):
        body = client.get("/api/apps").json()

        assert [a["id"] for a in body["apps"]] == [app_id]
        assert body["limit"] == 50


# =============================================================================
# Tests: /api/policy and /api/cache
# =============================================================================


class TestPolicy:
    def test_returns_trees_with_intervals(self, client, service):
        body = client.get("/api/policy").json()

        assert body["policy_version"] == "v1"
        assert body["attributes_count"] == len(service.attributes)
        first = body["attributes"][0]
        assert first["left"] == 1
        assert all(node["left"] < node["right"] for node in body["purposes"])


class TestCache:
    def test_stats_and_clear(self, client, app_id, user_id):
        client.post("/api/evaluate", json={"app_id": app_id, "user_id": user_id})

        stats = client.get("/api/cache/stats").json()
        cleared = client.delete("/api/cache").json()

        assert stats["total_entries"] == 1
        assert stats["grant_count"] == 1
        assert stats["service"] == "test-service"
        assert cleared == {"message": "Cache cleared", "deleted_count": 1, "service": "test-service"}

    def test_stats_cache_down_503(self, client, service):
        with patch.object(service, "cache_stats", side_effect=CacheUnavailable("down")):
            assert client.get("/api/cache/stats").status_code == 503
