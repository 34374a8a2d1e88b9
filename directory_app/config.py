# directory_app/config.py
"""
Central configuration for the participant directory.

Design goals:
- Always load .env from the repository root in a deterministic way
- Support switching store providers (mock / supabase) via STORE_PROVIDER
- Keep secrets out of logs (provide "safe" diagnostics)
- Keep the store base URL and the REST/auth paths separate
"""

from __future__ import annotations

import os
from pathlib import Path
from dotenv import load_dotenv


# ---------------------------------------------------------------------
# 1) Repo root discovery + .env loading
# ---------------------------------------------------------------------
def _find_repo_root(start: Path) -> Path:
    """
    Walk upwards until we find a folder that looks like the repository root.
    Markers: .env, pyproject.toml, README.md
    """
    markers = (".env", "pyproject.toml", "README.md")
    for p in [start, *start.parents]:
        if any((p / m).exists() for m in markers):
            return p
    # Fallback: assume directory_app/ is directly under repo root
    return start.parents[1]


REPO_ROOT = _find_repo_root(Path(__file__).resolve())
load_dotenv(dotenv_path=REPO_ROOT / ".env", override=False)


# ---------------------------------------------------------------------
# 2) Store provider switch
# ---------------------------------------------------------------------
STORE_PROVIDER = os.getenv("STORE_PROVIDER", "mock").strip().lower()
# Allowed: mock | supabase
if STORE_PROVIDER not in {"mock", "supabase"}:
    raise RuntimeError(
        f"Invalid STORE_PROVIDER='{STORE_PROVIDER}'. Expected mock|supabase."
    )


# ---------------------------------------------------------------------
# 3) Hosted store settings (STORE_PROVIDER=supabase)
#
# STORE_URL is the project BASE (e.g. https://abc.supabase.co);
# REST and auth paths are appended by the client.
# ---------------------------------------------------------------------
STORE_URL = os.getenv("STORE_URL", "").strip().rstrip("/")
STORE_ANON_KEY = os.getenv("STORE_ANON_KEY", "").strip()
STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", "10"))
PARTICIPANTS_TABLE = os.getenv("PARTICIPANTS_TABLE", "participants").strip() or "participants"


# ---------------------------------------------------------------------
# 4) Mock store + browser session
# ---------------------------------------------------------------------
STORE_SEED_FILE = os.getenv("STORE_SEED_FILE", "mocks/participants.json").strip()
ACCESS_TOKEN_COOKIE = os.getenv("ACCESS_TOKEN_COOKIE", "access_token").strip() or "access_token"


# ---------------------------------------------------------------------
# 5) Provider validation helpers (used by StoreClient)
# ---------------------------------------------------------------------
def validate_store_config(provider: str = STORE_PROVIDER, url: str = STORE_URL, key: str = STORE_ANON_KEY) -> None:
    """
    Validate required settings for the selected provider.
    - mock: no requirements
    - supabase: requires STORE_URL and STORE_ANON_KEY
    """
    if provider == "supabase":
        if not url:
            raise RuntimeError("STORE_URL is empty (STORE_PROVIDER=supabase).")
        if not key:
            raise RuntimeError("STORE_ANON_KEY is empty (STORE_PROVIDER=supabase).")


def config_diag_safe() -> dict:
    """
    Safe diagnostics (no secrets).
    Served by /api/diag/config.
    """
    return {
        "repo_root": str(REPO_ROOT),
        "store_provider": STORE_PROVIDER,
        "store_url": STORE_URL if STORE_PROVIDER == "supabase" else None,
        "store_timeout_seconds": STORE_TIMEOUT_SECONDS,
        "participants_table": PARTICIPANTS_TABLE,
        "has_store_key": bool(STORE_ANON_KEY),
        "store_seed_file": STORE_SEED_FILE if STORE_PROVIDER == "mock" else None,
        "access_token_cookie": ACCESS_TOKEN_COOKIE,
    }
