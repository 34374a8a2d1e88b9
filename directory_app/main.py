# directory_app/main.py
import logging
import traceback
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from directory_app.config import STORE_PROVIDER
from directory_app.errors import StoreError
from directory_app.metrics import REGISTRY
from directory_app.routes import routers
from directory_app.store_client import StoreClient
from directory_app.utils import STORE_SEED_PATH, load_json_file

# ----------------------------------------------------------------------
# Logger configuration
# ----------------------------------------------------------------------
logger = logging.getLogger("participant-directory")
logger.setLevel(logging.INFO)
handler = logging.StreamHandler()
formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
handler.setFormatter(formatter)

if not logger.handlers:
    logger.addHandler(handler)
else:
    for h in logger.handlers:
        h.setFormatter(formatter)


# ----------------------------------------------------------------------
# Store
# ----------------------------------------------------------------------
def build_default_store() -> StoreClient:
    """
    Store client from configuration. The mock provider is seeded from
    STORE_SEED_FILE when that file exists.
    """
    seed = None
    if STORE_PROVIDER == "mock" and STORE_SEED_PATH.is_file():
        raw = load_json_file(STORE_SEED_PATH)
        seed = [r for r in raw if isinstance(r, dict)] if isinstance(raw, list) else []
        logger.info(f"Mock store seeded with {len(seed)} participant(s) from {STORE_SEED_PATH}")
    return StoreClient(seed=seed)


def create_app(store: Optional[StoreClient] = None) -> FastAPI:
    app = FastAPI(title="Hackathon participant directory")
    app.state.store = store if store is not None else build_default_store()

    # ------------------------------------------------------------------
    # CORS
    # ------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # restrict in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ------------------------------------------------------------------
    # Routers (single source of truth: directory_app/routes/__init__.py)
    # ------------------------------------------------------------------
    for r in routers:
        app.include_router(r)

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------
    app.mount("/metrics", make_asgi_app(registry=REGISTRY))

    # ------------------------------------------------------------------
    # Exception handlers
    # ------------------------------------------------------------------
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}\n{traceback.format_exc()}"
        )
        detail = str(exc) if app.debug else "Internal server error"
        return JSONResponse(
            status_code=500,
            content={"error": "internal_server_error", "detail": detail},
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error(f"Store error on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=502,
            content={"error": "store_unavailable", "detail": str(exc)},
        )

    return app


app = create_app()
