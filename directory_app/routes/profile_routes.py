# directory_app/routes/profile_routes.py
from __future__ import annotations

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from directory_app.components import DirectoryPage
from directory_app.errors import DraftValidationError
from directory_app.routes.deps import get_access_token, get_store, status_for_notice
from directory_app.store_client import StoreClient
from directory_app.store_client.models import Notice

logger = logging.getLogger("participant-directory")

router = APIRouter(prefix="/api", tags=["profile"])


class ProfileSubmission(BaseModel):
    """
    Editor fields as sent by a client. Omitted fields keep the draft's value
    (the current profile, or create-mode defaults).
    """
    name: Optional[str] = None
    university: Optional[str] = None
    email: Optional[str] = None
    graduation_year: Optional[Union[int, str]] = None
    skills: Optional[Union[List[str], str]] = Field(None, description="List or comma-separated text")
    project_idea: Optional[str] = None
    ai_interests: Optional[Union[List[str], str]] = Field(None, description="List or comma-separated text")


# ─────────────────────────────────────────────────────────────
# Directory
# ─────────────────────────────────────────────────────────────
@router.get("/participants")
async def list_participants(
    store: StoreClient = Depends(get_store),
    access_token: Optional[str] = Depends(get_access_token),
):
    page = DirectoryPage(store, access_token)
    await page.directory.refresh()
    cards = [c.model_dump() for c in page.directory.cards()]
    return {
        "data": cards,
        "meta": {"count": len(cards), "stats": page.directory.stats().model_dump()},
        "errors": [],
    }


@router.get("/stats")
async def directory_stats(
    store: StoreClient = Depends(get_store),
    access_token: Optional[str] = Depends(get_access_token),
):
    page = DirectoryPage(store, access_token)
    await page.directory.refresh()
    return {"data": page.directory.stats().model_dump(), "meta": {}, "errors": []}


@router.get("/participants/{participant_id}/contact")
async def participant_contact(
    participant_id: str,
    store: StoreClient = Depends(get_store),
    access_token: Optional[str] = Depends(get_access_token),
):
    page = DirectoryPage(store, access_token)
    await page.directory.refresh()
    card = next((c for c in page.directory.cards() if c.id == participant_id), None)
    if card is None:
        return JSONResponse(
            status_code=404,
            content={
                "data": None,
                "meta": {"participant_id": participant_id},
                "errors": [{"message": "Participant not found"}],
            },
        )
    return {"data": {"href": card.contact_href}, "meta": {"participant_id": participant_id}, "errors": []}


# ─────────────────────────────────────────────────────────────
# Session + editor
# ─────────────────────────────────────────────────────────────
@router.get("/me")
async def current_user(
    store: StoreClient = Depends(get_store),
    access_token: Optional[str] = Depends(get_access_token),
):
    page = DirectoryPage(store, access_token)
    await page.session.refresh()
    me = page.session.current_user
    return {
        "data": me.model_dump(mode="json") if me else None,
        "meta": {
            "authenticated": page.session.is_authenticated,
            "mode": "edit" if me else "create",
            "button_label": page.profile_button_label,
        },
        "errors": [],
    }


@router.post("/profile")
async def submit_profile(
    req: ProfileSubmission,
    store: StoreClient = Depends(get_store),
    access_token: Optional[str] = Depends(get_access_token),
):
    page = DirectoryPage(store, access_token)
    await page.session.refresh()
    editor = page.open_editor()
    mode = editor.mode

    try:
        editor.apply_form(req.model_dump(exclude_none=True))
    except DraftValidationError as exc:
        editor.notice = Notice(kind="error", message=str(exc), code="invalid")

    notice = editor.notice if editor.notice is not None else await editor.submit()
    status = status_for_notice(notice)
    if status != 200:
        logger.info(f"Profile submission refused ({notice.code})")

    saved = editor.current_user if notice.kind == "success" else None
    return JSONResponse(
        status_code=status,
        content={
            "data": saved.model_dump(mode="json") if saved else None,
            "meta": {"mode": mode, "notice": notice.model_dump(), "draft": editor.draft.model_dump()},
            "errors": [] if notice.kind == "success" else [{"source": "profile_editor", "message": notice.message}],
        },
    )
