# directory_app/routes/__init__.py
"""Router registry.

Single source of truth for FastAPI route inclusion.

Guidelines:
- Keep this list deterministic and explicit.
- Each router must be mounted exactly once (no duplicates).
"""

from __future__ import annotations

from directory_app.routes.diag_routes import router as diag_router
from directory_app.routes.directory_routes import router as directory_router
from directory_app.routes.profile_routes import router as profile_router

# Deterministic inclusion order:
# 1) Diagnostics
# 2) Page (HTML)
# 3) JSON API
routers = [
    diag_router,
    directory_router,
    profile_router,
]

__all__ = ["routers"]
