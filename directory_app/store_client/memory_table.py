# directory_app/store_client/memory_table.py
"""
In-process participants table used by STORE_PROVIDER=mock.

Mirrors the hosted store's contract for the calls the directory makes:
- `id`, `created_at` and `updated_at` are assigned on insert
- `user_id` is unique (a second insert for the same identity is rejected)
- selects filter on column equality only

Rows are copied on the way in and out so callers never share state with
the table.
"""

from __future__ import annotations

import copy
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from directory_app.errors import StoreError


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class MemoryTable:
    def __init__(self, rows: Optional[Iterable[Dict[str, Any]]] = None) -> None:
        self._rows: List[Dict[str, Any]] = []
        for row in rows or []:
            if isinstance(row, dict):
                self.insert(row)

    def __len__(self) -> int:
        return len(self._rows)

    def _matches(self, row: Dict[str, Any], eq: Dict[str, Any]) -> bool:
        return all(str(row.get(col)) == str(val) for col, val in eq.items())

    def select(self, **eq: Any) -> List[Dict[str, Any]]:
        return [copy.deepcopy(r) for r in self._rows if self._matches(r, eq)]

    def insert(self, row: Dict[str, Any]) -> Dict[str, Any]:
        user_id = row.get("user_id")
        if user_id is not None and self.select(user_id=user_id):
            raise StoreError(
                f"duplicate key value violates unique constraint (user_id={user_id})",
                status_code=409,
            )

        now = _now_iso()
        stored = copy.deepcopy(row)
        stored.setdefault("id", str(uuid.uuid4()))
        stored.setdefault("created_at", now)
        stored.setdefault("updated_at", stored["created_at"])
        self._rows.append(stored)
        return copy.deepcopy(stored)

    def update(self, values: Dict[str, Any], **eq: Any) -> List[Dict[str, Any]]:
        # id, user_id and created_at are immutable once stored
        changes = {k: v for k, v in values.items() if k not in ("id", "user_id", "created_at")}
        changes.setdefault("updated_at", _now_iso())

        out: List[Dict[str, Any]] = []
        for r in self._rows:
            if self._matches(r, eq):
                r.update(copy.deepcopy(changes))
                out.append(copy.deepcopy(r))
        return out
