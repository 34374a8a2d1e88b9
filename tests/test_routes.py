"""Tests for the HTTP surface (HTML page + JSON API)."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from directory_app.main import create_app
from directory_app.store_client import StoreClient

from conftest import SAMPLE_ROWS

ADA_FORM = {
    "name": "Ada",
    "university": "X",
    "email": "a@x.com",
    "graduation_year": "2025",
    "skills": "Rust, Systems",
    "project_idea": "",
    "ai_interests": "",
}


@pytest.fixture
def store() -> StoreClient:
    return StoreClient(provider="mock", seed=[dict(r) for r in SAMPLE_ROWS])


@pytest.fixture
def client(store) -> TestClient:
    return TestClient(create_app(store=store))


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class TestDiag:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "store_provider": "mock"}

    def test_config_has_no_secrets(self, client):
        data = client.get("/api/diag/config").json()
        assert "store_anon_key" not in data
        assert "has_store_key" in data

    def test_metrics_mounted(self, client):
        client.get("/api/participants")
        resp = client.get("/metrics/")
        assert resp.status_code == 200
        assert "store_requests_total" in resp.text


class TestPage:
    def test_anonymous_page(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        html = resp.text
        assert "Create Your Profile" in html
        assert html.count('class="panel card"') == 3
        assert "mailto:alice@example.ac.uk" in html
        assert "<form" not in html

    def test_signed_in_page_offers_edit(self, client):
        resp = client.get("/", headers=_auth("alice"))
        assert "Edit Your Profile" in resp.text

    def test_cookie_token(self, client):
        client.cookies.set("access_token", "alice")
        resp = client.get("/")
        assert "Edit Your Profile" in resp.text

    def test_editor_prefilled(self, client):
        resp = client.get("/?edit=1", headers=_auth("alice"))
        html = resp.text
        assert "Edit Profile" in html
        assert 'value="Study buddy bot"' in html

    def test_markup_is_escaped(self, store):
        client = TestClient(create_app(store=store))
        client.post(
            "/profile",
            data={**ADA_FORM, "name": "<script>x</script>"},
            headers=_auth("mallory"),
            follow_redirects=False,
        )
        html = client.get("/").text
        assert "<script>x</script>" not in html
        assert "&lt;script&gt;x&lt;/script&gt;" in html

    def test_form_submit_creates_and_redirects(self, client):
        resp = client.post("/profile", data=ADA_FORM, headers=_auth("ada"), follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"] == "/?saved=1"

        page = client.get("/?saved=1", headers=_auth("ada")).text
        assert "Profile saved successfully!" in page
        assert "Edit Your Profile" in page
        assert page.count('class="panel card"') == 4

    def test_form_submit_anonymous(self, client):
        resp = client.post("/profile", data=ADA_FORM)
        assert resp.status_code == 401
        assert "Please sign in first" in resp.text
        # editor stays open with the input
        assert 'value="Ada"' in resp.text
        assert 'value="Rust, Systems"' in resp.text

    def test_form_submit_bad_year(self, client):
        resp = client.post("/profile", data={**ADA_FORM, "graduation_year": "soon"}, headers=_auth("ada"))
        assert resp.status_code == 422
        assert "Graduation year must be a whole number" in resp.text
        assert 'value="Ada"' in resp.text


class TestApi:
    def test_participants_and_stats(self, client):
        body = client.get("/api/participants").json()
        assert body["meta"]["count"] == 3
        assert body["meta"]["stats"] == {
            "participants": 3,
            "universities": 2,
            "skills": 4,
            "project_ideas": 1,
        }
        assert body["errors"] == []

        stats = client.get("/api/stats").json()["data"]
        assert stats["participants"] == 3

    def test_me(self, client):
        anon = client.get("/api/me").json()
        assert anon["data"] is None
        assert anon["meta"]["authenticated"] is False
        assert anon["meta"]["button_label"] == "Create Your Profile"

        me = client.get("/api/me", headers=_auth("alice")).json()
        assert me["data"]["user_id"] == "alice"
        assert me["meta"]["mode"] == "edit"

    def test_contact(self, client):
        cards = client.get("/api/participants").json()["data"]
        alice = next(c for c in cards if c["name"] == "User alice")

        resp = client.get(f"/api/participants/{alice['id']}/contact")
        assert resp.json()["data"]["href"] == "mailto:alice@example.ac.uk"

        assert client.get("/api/participants/missing/contact").status_code == 404

    def test_create_then_update(self, client):
        payload = {
            "name": "Ada",
            "university": "X",
            "email": "a@x.com",
            "graduation_year": 2025,
            "skills": "Rust, Systems",
        }
        created = client.post("/api/profile", json=payload, headers=_auth("ada"))
        assert created.status_code == 200
        body = created.json()
        assert body["meta"]["mode"] == "create"
        assert body["data"]["skills"] == ["Rust", "Systems"]
        profile_id = body["data"]["id"]

        updated = client.post("/api/profile", json={"skills": ["Rust", "Go"]}, headers=_auth("ada"))
        assert updated.status_code == 200
        body = updated.json()
        assert body["meta"]["mode"] == "edit"
        assert body["data"]["id"] == profile_id
        assert body["data"]["name"] == "Ada"
        assert body["data"]["skills"] == ["Rust", "Go"]

        assert client.get("/api/stats").json()["data"]["participants"] == 4

    def test_anonymous_submit(self, client):
        resp = client.post("/api/profile", json={"name": "Ada"})
        assert resp.status_code in (401, 422)

        full = client.post(
            "/api/profile",
            json={"name": "Ada", "university": "X", "email": "a@x.com", "skills": "Go"},
        )
        assert full.status_code == 401
        assert full.json()["meta"]["notice"]["message"] == "Please sign in first"
        assert client.get("/api/stats").json()["data"]["participants"] == 3

    def test_missing_fields(self, client):
        resp = client.post("/api/profile", json={"name": "Ada"}, headers=_auth("ada"))
        assert resp.status_code == 422
        assert resp.json()["meta"]["notice"]["code"] == "invalid"
