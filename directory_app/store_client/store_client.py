# directory_app/store_client/store_client.py
"""
Store client wrapper (identity provider + participants table)

Supports:
- STORE_PROVIDER=mock     -> no network, in-process table (MemoryTable)
- STORE_PROVIDER=supabase -> hosted REST interface (base_url + /rest/v1, /auth/v1)

Includes:
- httpx async
- aiobreaker circuit breaker (one per client)
- Prometheus metrics (requests + latency, per operation)

No retries: a failed call surfaces as StoreError and callers decide whether
to log and swallow it or report it.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

import httpx
from aiobreaker import CircuitBreaker, CircuitBreakerError
from pydantic import ValidationError

from directory_app.config import (
    PARTICIPANTS_TABLE,
    STORE_ANON_KEY,
    STORE_PROVIDER,
    STORE_TIMEOUT_SECONDS,
    STORE_URL,
    validate_store_config,
)
from directory_app.errors import StoreError
from directory_app.metrics import STORE_LATENCY, STORE_REQUESTS
from directory_app.store_client.memory_table import MemoryTable
from directory_app.store_client.models import Identity, Participant, ProfileFields

logger = logging.getLogger("participant-directory.store_client")
logger.setLevel(logging.INFO)

REST_PATH = "/rest/v1"
AUTH_USER_PATH = "/auth/v1/user"


async def _send(
    client: httpx.AsyncClient,
    operation: str,
    method: str,
    url: str,
    **kwargs: Any,
) -> httpx.Response:
    """
    Single request + Prometheus metrics.
    """
    with STORE_LATENCY.labels(operation=operation).time():
        try:
            resp = await client.request(method, url, **kwargs)
            resp.raise_for_status()
            STORE_REQUESTS.labels(operation=operation, outcome="success").inc()
            return resp
        except Exception:
            STORE_REQUESTS.labels(operation=operation, outcome="failure").inc()
            raise


def _parse_participants(rows: Any, operation: str) -> List[Participant]:
    if not isinstance(rows, list):
        raise StoreError(f"Store returned malformed payload for {operation} (expected a list).")

    out: List[Participant] = []
    for idx, row in enumerate(rows):
        if not isinstance(row, dict):
            continue
        try:
            out.append(Participant(**row))
        except ValidationError as exc:
            # One bad row must not hide the rest of the directory
            logger.warning(f"Skipping malformed participant row #{idx} ({operation}): {exc.error_count()} error(s)")
    return out


class StoreClient:
    """
    Unified store client for the hosted backend / in-process mock.

    IMPORTANT:
    - base_url is always the project BASE (e.g. https://abc.supabase.co)
    - requests carry `apikey` plus a bearer token: the visitor's access token
      when one is known, otherwise the anon key
    """

    def __init__(
        self,
        provider: Optional[str] = None,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        table: Optional[str] = None,
        seed: Optional[Iterable[Dict[str, Any]]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.provider = (provider or STORE_PROVIDER).strip().lower()
        self.base_url = (base_url if base_url is not None else STORE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else STORE_ANON_KEY
        validate_store_config(self.provider, self.base_url, self.api_key)

        self.table = table or PARTICIPANTS_TABLE
        self.timeout = httpx.Timeout(float(timeout_seconds or STORE_TIMEOUT_SECONDS))
        self._transport = transport

        # 5 failures -> open for 30s; HTTP status errors mean the store answered
        self._breaker = CircuitBreaker(
            fail_max=5,
            timeout_duration=timedelta(seconds=30),
            exclude=(httpx.HTTPStatusError,),
        )

        self._memory: Optional[MemoryTable] = None
        if self.provider == "mock":
            self._memory = MemoryTable(seed)

    # ------------------------------------------------------------------
    # HTTP plumbing
    # ------------------------------------------------------------------
    def _headers(self, access_token: Optional[str]) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {access_token or self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        access_token: Optional[str] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers(access_token),
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            logger.debug(f"STORE[{self.provider}] → {method} {self.base_url}{path} ({operation})")

            try:
                resp = await self._breaker.call_async(_send, client, operation, method, path, **kwargs)
            except CircuitBreakerError:
                logger.warning("Store circuit breaker OPEN – request blocked")
                STORE_REQUESTS.labels(operation=operation, outcome="circuit_breaker").inc()
                raise StoreError("Store temporarily unavailable (circuit breaker open).")
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                logger.error(f"Store HTTP error {status} on {operation}: {exc.response.text[:500]}")
                raise StoreError(f"Store HTTP error {status}: {exc.response.text[:500]}", status_code=status)
            except httpx.HTTPError as exc:
                logger.error(f"Store request failed on {operation}: {exc!r}")
                raise StoreError(f"Store request failed: {exc!r}")

            logger.debug(f"STORE[{self.provider}] ← {resp.status_code} ({operation})")
            return resp

    @staticmethod
    def _json(resp: httpx.Response, operation: str) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            logger.error(f"Malformed store response on {operation}: {exc} – raw={resp.text[:500]}")
            raise StoreError(f"Store returned malformed response for {operation}.")

    def _mock_hit(self, operation: str) -> MemoryTable:
        # Prometheus: still track that the feature was used
        STORE_REQUESTS.labels(operation=operation, outcome="mock").inc()
        assert self._memory is not None
        return self._memory

    # ------------------------------------------------------------------
    # Identity provider
    # ------------------------------------------------------------------
    async def get_current_identity(self, access_token: Optional[str]) -> Optional[Identity]:
        """
        Return the identity behind `access_token`, or None for anonymous visitors.

        Rejected tokens (401/403) are anonymous; other failures raise StoreError.
        """
        token = (access_token or "").strip()
        if not token:
            return None

        if self.provider == "mock":
            # Mock tokens are the identity's id
            self._mock_hit("get_identity")
            return Identity(id=token)

        try:
            resp = await self._request("get_identity", "GET", AUTH_USER_PATH, access_token=token)
        except StoreError as exc:
            if exc.status_code in (401, 403):
                return None
            raise

        data = self._json(resp, "get_identity")
        if not isinstance(data, dict) or not data.get("id"):
            return None
        return Identity(id=data["id"], email=data.get("email"))

    # ------------------------------------------------------------------
    # Participants table
    # ------------------------------------------------------------------
    async def list_participants(self, access_token: Optional[str] = None) -> List[Participant]:
        """
        select * from participants (no filter, no pagination).
        """
        if self.provider == "mock":
            rows: Any = self._mock_hit("list_participants").select()
        else:
            resp = await self._request(
                "list_participants",
                "GET",
                f"{REST_PATH}/{self.table}",
                access_token=access_token,
                params={"select": "*"},
            )
            rows = self._json(resp, "list_participants")
        return _parse_participants(rows, "list_participants")

    async def get_participant_by_user_id(
        self,
        user_id: str,
        access_token: Optional[str] = None,
    ) -> Optional[Participant]:
        """
        select * from participants where user_id = X  ->  zero-or-one row.
        """
        if self.provider == "mock":
            rows: Any = self._mock_hit("get_participant").select(user_id=user_id)
        else:
            resp = await self._request(
                "get_participant",
                "GET",
                f"{REST_PATH}/{self.table}",
                access_token=access_token,
                params={"select": "*", "user_id": f"eq.{user_id}"},
            )
            rows = self._json(resp, "get_participant")

        found = _parse_participants(rows, "get_participant")
        if len(found) > 1:
            logger.warning(f"{len(found)} participants share user_id={user_id}; using the first")
        return found[0] if found else None

    async def insert_participant(
        self,
        fields: ProfileFields,
        user_id: str,
        access_token: Optional[str] = None,
    ) -> Optional[Participant]:
        """
        insert into participants(fields..., user_id); the store assigns id + created_at.
        """
        row = {**fields.to_row(), "user_id": user_id}

        if self.provider == "mock":
            created: Any = [self._mock_hit("insert_participant").insert(row)]
        else:
            resp = await self._request(
                "insert_participant",
                "POST",
                f"{REST_PATH}/{self.table}",
                access_token=access_token,
                json=[row],
                headers={"Prefer": "return=representation"},
            )
            created = self._json(resp, "insert_participant") if resp.content else []

        found = _parse_participants(created, "insert_participant")
        return found[0] if found else None

    async def update_participant(
        self,
        user_id: str,
        fields: ProfileFields,
        updated_at: Optional[datetime] = None,
        access_token: Optional[str] = None,
    ) -> Optional[Participant]:
        """
        update participants set fields..., updated_at = <submission time> where user_id = X.
        """
        stamp = (updated_at or datetime.now(timezone.utc)).isoformat()
        values = {**fields.to_row(), "updated_at": stamp}

        if self.provider == "mock":
            updated: Any = self._mock_hit("update_participant").update(values, user_id=user_id)
        else:
            resp = await self._request(
                "update_participant",
                "PATCH",
                f"{REST_PATH}/{self.table}",
                access_token=access_token,
                params={"user_id": f"eq.{user_id}"},
                json=values,
                headers={"Prefer": "return=representation"},
            )
            updated = self._json(resp, "update_participant") if resp.content else []

        found = _parse_participants(updated, "update_participant")
        return found[0] if found else None
