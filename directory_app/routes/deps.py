# directory_app/routes/deps.py
"""Request-scoped helpers shared by the routers."""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from directory_app.config import ACCESS_TOKEN_COOKIE
from directory_app.store_client import StoreClient
from directory_app.store_client.models import Notice

_NOTICE_STATUS = {
    "saved": 200,
    "sign_in_required": 401,
    "invalid": 422,
    "store_failure": 502,
}


def get_store(request: Request) -> StoreClient:
    return request.app.state.store


def get_access_token(request: Request) -> Optional[str]:
    """
    Visitor's access token: `Authorization: Bearer ...` first, then the cookie.
    Sign-in itself happens against the identity provider, not here.
    """
    auth = request.headers.get("authorization") or ""
    scheme, _, value = auth.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    cookie = (request.cookies.get(ACCESS_TOKEN_COOKIE) or "").strip()
    return cookie or None


def status_for_notice(notice: Notice) -> int:
    return _NOTICE_STATUS.get(notice.code, 502)
