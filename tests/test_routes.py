"""Integration tests for the HTTP routes."""

from unittest.mock import patch

import psycopg2
from fastapi.testclient import TestClient

IDEA = {
    "userId": "u1",
    "title": "T",
    "description": "D",
    "category": "SaaS",
    "estimatedRevenue": "$1k/mo",
    "difficulty": "Easy",
    "timeToLaunch": "2 weeks",
}


class TestIdeaRoutes:
    def test_create_then_list_returns_new_idea_first(self, client: TestClient) -> None:
        client.post("/createIdea", json={**IDEA, "title": "older"})

        created = client.post("/createIdea", json=IDEA)
        listed = client.get("/getIdeas", params={"userId": "u1"})

        assert created.status_code == 201
        row = created.json()
        assert row["id"]
        assert {row[k] for k in ("title", "description", "category")} == {"T", "D", "SaaS"}
        assert listed.status_code == 200
        assert listed.json()[0]["id"] == row["id"]

    def test_update_title_only(self, client: TestClient) -> None:
        row = client.post("/createIdea", json=IDEA).json()

        response = client.put(f"/updateIdea?id={row['id']}", json={"userId": "u1", "title": "New Title"})

        assert response.status_code == 200
        updated = response.json()
        assert updated["title"] == "New Title"
        assert {k: v for k, v in updated.items() if k != "title"} == {
            k: v for k, v in row.items() if k != "title"
        }

    def test_update_by_other_user_is_404(self, client: TestClient) -> None:
        row = client.post("/createIdea", json=IDEA).json()

        response = client.put(f"/updateIdea?id={row['id']}", json={"userId": "u2"})

        assert response.status_code == 404

    def test_delete_then_list(self, client: TestClient) -> None:
        row = client.post("/createIdea", json=IDEA).json()

        deleted = client.delete("/deleteIdea", params={"id": row["id"], "userId": "u1"})
        listed = client.get("/getIdeas", params={"userId": "u1"}).json()

        assert deleted.json() == {"success": True, "message": "Idea deleted successfully"}
        assert row["id"] not in [r["id"] for r in listed]

    def test_wrong_verb_gets_json_405(self, client: TestClient) -> None:
        response = client.get("/createIdea")

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}
        assert response.headers["access-control-allow-origin"] == "*"

    def test_legacy_netlify_path(self, client: TestClient) -> None:
        response = client.get("/.netlify/functions/getIdeas", params={"userId": "u1"})

        assert response.status_code == 200
        assert response.json() == []


class TestProfileRoutes:
    def test_unknown_profile_is_404(self, client: TestClient) -> None:
        response = client.get("/getProfile", params={"userId": "nonexistent"})

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/json"

    def test_create_update_get(self, client: TestClient) -> None:
        client.post("/createProfile", json={"userId": "u1", "email": "u1@example.com"})

        updated = client.put("/updateProfile?userId=u1", json={"displayName": "Ada"})
        fetched = client.get("/getProfile", params={"userId": "u1"})

        assert updated.status_code == 200
        assert fetched.json()["display_name"] == "Ada"


class TestInitDbRoute:
    def test_init_twice_succeeds(self, client: TestClient, fake_db) -> None:
        first = client.post("/initDb")
        second = client.get("/initDb")

        assert first.status_code == 200
        assert second.json() == {"message": "Database initialized successfully"}
        assert fake_db.conn.commits == 2

    def test_failure_is_500(self, client: TestClient, fake_db) -> None:
        fake_db.cursor.error = psycopg2.OperationalError("no route to host")

        response = client.post("/initDb")

        assert response.status_code == 500
        assert response.json() == {"error": "Database initialization failed"}


class TestGenerateIdeaRoute:
    def test_returns_ideas(self, client: TestClient, mock_generator) -> None:
        response = client.post("/generateIdea", json={"userId": "u1", "interests": ["pets"]})

        assert response.status_code == 200
        assert response.json()["ideas"][0]["title"] == "Pet Sitter Match"
        params = mock_generator.generate.call_args.args[0]
        assert params["interests"] == ["pets"]

    def test_requires_interests(self, client: TestClient) -> None:
        response = client.post("/generateIdea", json={"interests": []})

        assert response.status_code == 400

    def test_rate_limited_after_budget(self, client: TestClient) -> None:
        for _ in range(2):
            client.post("/generateIdea", json={"userId": "u1", "interests": ["ai"]})

        response = client.post("/generateIdea", json={"userId": "u1", "interests": ["ai"]})

        assert response.status_code == 429
        assert "retry-after" in response.headers

    def test_changing_user_id_does_not_reset_budget(self, client: TestClient) -> None:
        for n in range(2):
            client.post("/generateIdea", json={"userId": f"spoof-{n}", "interests": ["ai"]})

        response = client.post("/generateIdea", json={"userId": "spoof-fresh", "interests": ["ai"]})

        assert response.status_code == 429

    def test_non_string_interest_is_400(self, client: TestClient, mock_generator) -> None:
        response = client.post("/generateIdea", json={"interests": ["ai", 7]})

        assert response.status_code == 400
        mock_generator.generate.assert_not_called()

    def test_model_failure_is_500(self, client: TestClient, mock_generator) -> None:
        mock_generator.generate.side_effect = RuntimeError("quota exceeded")

        response = client.post("/generateIdea", json={"userId": "u1", "interests": ["ai"]})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate ideas"}


class TestLifespan:
    def test_opens_and_closes_database(self, fake_db, mock_generator) -> None:
        import main

        app = main.create_app(db=fake_db, generator=mock_generator, init_schema=True)
        with patch.object(main, "create_tables") as create_tables:
            with TestClient(app):
                assert fake_db.opened is True
                create_tables.assert_called_once_with(fake_db)

        assert fake_db.opened is False

    def test_health(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"status": "ok"}
