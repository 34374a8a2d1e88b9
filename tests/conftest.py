"""
Shared test fixtures.

Provides participant row factories, an in-process (mock provider) store and
a fake hosted store served through httpx.MockTransport.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
import pytest

from directory_app.store_client import StoreClient


# ============ Sample Data ============

def make_row(user_id: str, **overrides: Any) -> Dict[str, Any]:
    row = {
        "user_id": user_id,
        "name": f"User {user_id}",
        "university": "Imperial College London",
        "email": f"{user_id}@example.ac.uk",
        "graduation_year": 2026,
        "skills": ["Python"],
        "project_idea": None,
        "ai_interests": None,
    }
    row.update(overrides)
    return row


SAMPLE_ROWS = [
    make_row("alice", university="UCL", skills=["Python", "React"], project_idea="Study buddy bot"),
    make_row("bob", university="UCL", skills=["React", "Go"], project_idea=""),
    make_row("carol", university="Oxford", skills=["Rust"], ai_interests=["LLMs"]),
]


@pytest.fixture
def sample_rows() -> List[Dict[str, Any]]:
    return [dict(r) for r in SAMPLE_ROWS]


@pytest.fixture
def mock_store() -> StoreClient:
    """Empty in-process store."""
    return StoreClient(provider="mock")


@pytest.fixture
def seeded_store(sample_rows) -> StoreClient:
    return StoreClient(provider="mock", seed=sample_rows)


# ============ Fake hosted store ============

class FakeHostedStore:
    """
    Minimal stand-in for the hosted REST + auth endpoints.

    `tokens` maps bearer tokens to identity ids; `fail_writes` / `fail_reads`
    turn the matching calls into 500s.
    """

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None, tokens: Optional[Dict[str, str]] = None) -> None:
        self.rows: List[Dict[str, Any]] = []
        self.tokens = dict(tokens or {})
        self.requests: List[httpx.Request] = []
        self.fail_reads = False
        self.fail_writes = False
        for r in rows or []:
            self._insert(dict(r))

    def _insert(self, row: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.now(timezone.utc).isoformat()
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", now)
        row.setdefault("updated_at", now)
        self.rows.append(row)
        return row

    def calls(self, method: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path.startswith("/rest/")]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/auth/v1/user":
            token = request.headers.get("authorization", "").removeprefix("Bearer ").strip()
            user_id = self.tokens.get(token)
            if user_id is None:
                return httpx.Response(401, json={"msg": "invalid JWT"})
            return httpx.Response(200, json={"id": user_id, "email": f"{user_id}@example.ac.uk"})

        if not path.startswith("/rest/v1/participants"):
            return httpx.Response(404, json={"message": "not found"})

        user_filter = request.url.params.get("user_id")
        wanted = user_filter.removeprefix("eq.") if user_filter else None

        if request.method == "GET":
            if self.fail_reads:
                return httpx.Response(500, json={"message": "boom"})
            rows = [r for r in self.rows if wanted is None or r["user_id"] == wanted]
            return httpx.Response(200, json=rows)

        if self.fail_writes:
            return httpx.Response(500, json={"message": "boom"})

        payload = json.loads(request.content)
        if request.method == "POST":
            created = []
            for row in payload:
                if any(r["user_id"] == row["user_id"] for r in self.rows):
                    return httpx.Response(409, json={"message": "duplicate key value"})
                created.append(self._insert(dict(row)))
            return httpx.Response(201, json=created)

        if request.method == "PATCH":
            updated = []
            for r in self.rows:
                if r["user_id"] == wanted:
                    r.update(payload)
                    updated.append(r)
            return httpx.Response(200, json=updated)

        return httpx.Response(405)


@pytest.fixture
def hosted():
    return FakeHostedStore(rows=[dict(r) for r in SAMPLE_ROWS], tokens={"tok-alice": "alice", "tok-dave": "dave"})


@pytest.fixture
def hosted_store(hosted) -> StoreClient:
    return StoreClient(
        provider="supabase",
        base_url="https://project.example.co",
        api_key="anon-key",
        transport=httpx.MockTransport(hosted),
    )
