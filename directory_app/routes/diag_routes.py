# directory_app/routes/diag_routes.py
from fastapi import APIRouter, Depends

from directory_app.config import config_diag_safe
from directory_app.routes.deps import get_store
from directory_app.store_client import StoreClient

router = APIRouter(tags=["diag"])


@router.get("/health")
def health(store: StoreClient = Depends(get_store)):
    return {"status": "ok", "store_provider": store.provider}


@router.get("/api/diag/config")
def diag_config():
    return config_diag_safe()
