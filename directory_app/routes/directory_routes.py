# directory_app/routes/directory_routes.py
"""HTML routes: the single page and the editor's form submission.

GET /            -> stats, profile button, cards (editor open with ?edit=1)
POST /profile    -> editor submit; success redirects back to the page,
                    anything else re-renders with the editor open and the
                    visitor's input intact
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from directory_app.components import DirectoryPage
from directory_app.components.profile_editor import SAVED_NOTICE
from directory_app.errors import DraftValidationError
from directory_app.rendering import render_page
from directory_app.routes.deps import get_access_token, get_store, status_for_notice
from directory_app.store_client import StoreClient
from directory_app.store_client.models import Notice

logger = logging.getLogger("participant-directory")

router = APIRouter(tags=["directory"])


@router.get("/", response_class=HTMLResponse)
async def directory_page(
    edit: bool = False,
    saved: bool = False,
    store: StoreClient = Depends(get_store),
    access_token: Optional[str] = Depends(get_access_token),
):
    page = DirectoryPage(store, access_token)
    await page.load()
    if edit:
        page.open_editor()
    if saved:
        page.flash = Notice(kind="success", message=SAVED_NOTICE, code="saved")
    return HTMLResponse(render_page(page))


@router.post("/profile", response_class=HTMLResponse)
async def submit_profile_form(
    request: Request,
    store: StoreClient = Depends(get_store),
    access_token: Optional[str] = Depends(get_access_token),
):
    form = await request.form()

    page = DirectoryPage(store, access_token)
    await page.load()
    editor = page.open_editor()

    try:
        editor.apply_form({k: v for k, v in form.items() if isinstance(v, str)})
    except DraftValidationError as exc:
        editor.notice = Notice(kind="error", message=str(exc), code="invalid")
        return HTMLResponse(render_page(page), status_code=status_for_notice(editor.notice))

    notice = await editor.submit()
    if notice.kind == "success":
        return RedirectResponse("/?saved=1", status_code=303)

    logger.info(f"Profile form not saved ({notice.code})")
    return HTMLResponse(render_page(page), status_code=status_for_notice(notice))
