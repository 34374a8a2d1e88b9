# directory_app/utils.py
"""
Utility helpers used across the service.

Goals:
- Resolve absolute paths reliably on all OS (always relative to repo root)
- Provide JSON-file helpers with clear errors
- Build the contact (mailto:) target shown on participant cards
"""

from __future__ import annotations

import json
import pathlib
from typing import Any, Union
from urllib.parse import quote

from directory_app.config import REPO_ROOT, STORE_SEED_FILE


# ----------------------------------------------------------------------
# 1) Helper: configured path -> absolute Path
# ----------------------------------------------------------------------
def resolve_repo_path(raw: Union[str, pathlib.Path]) -> pathlib.Path:
    """
    Return a pathlib.Path guaranteed to be absolute.

    Relative values are interpreted as relative to REPO_ROOT.
    """
    p = pathlib.Path(str(raw).strip())
    if not p.is_absolute():
        p = REPO_ROOT / p
    return p.resolve()


# Seed rows for the mock store – defaults to <repo>/mocks/participants.json
STORE_SEED_PATH: pathlib.Path = resolve_repo_path(STORE_SEED_FILE)


# ----------------------------------------------------------------------
# 2) JSON helpers
# ----------------------------------------------------------------------
def load_json_file(path: pathlib.Path) -> Any:
    """
    Read a JSON file and return its content.

    Returns Any and lets callers validate the type (the seed file is a list).
    """
    if not path.is_file():
        raise FileNotFoundError(f"Mock file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


# ----------------------------------------------------------------------
# 3) Contact affordance
# ----------------------------------------------------------------------
def mailto_href(email: str) -> str:
    """
    Build the mail composer target for a participant card.

    Only the address is encoded; nothing is ever sent by the service.
    """
    return f"mailto:{quote((email or '').strip(), safe='@.+-_')}"


__all__ = [
    "STORE_SEED_PATH",
    "resolve_repo_path",
    "load_json_file",
    "mailto_href",
]
