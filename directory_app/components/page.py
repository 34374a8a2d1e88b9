# directory_app/components/page.py
import asyncio
import logging
from typing import Optional

from directory_app.components.directory_view import DirectoryView
from directory_app.components.profile_editor import ProfileEditor
from directory_app.components.session_resolver import SessionResolver
from directory_app.store_client import StoreClient
from directory_app.store_client.models import Notice

logger = logging.getLogger("participant-directory.page")


class DirectoryPage:
    """
    The single page: directory + session + (optionally) the open editor.

    The directory and the session resolver own their own state; the only
    coupling is the editor's completion callback, which closes the editor
    and reloads both.
    """

    def __init__(self, store: StoreClient, access_token: Optional[str] = None) -> None:
        self.store = store
        self.access_token = access_token
        self.directory = DirectoryView(store, access_token)
        self.session = SessionResolver(store, access_token)
        self.editor: Optional[ProfileEditor] = None
        self.flash: Optional[Notice] = None

    async def load(self) -> None:
        # Independent fetches; completion order does not matter
        await asyncio.gather(self.directory.refresh(), self.session.refresh())

    @property
    def is_editing(self) -> bool:
        return self.editor is not None and self.editor.is_open

    @property
    def profile_button_label(self) -> str:
        return "Edit Your Profile" if self.session.current_user else "Create Your Profile"

    def open_editor(self) -> ProfileEditor:
        self.editor = ProfileEditor(
            self.store,
            access_token=self.access_token,
            current_user=self.session.current_user,
            on_save=self._on_saved,
        )
        return self.editor

    def close_editor(self) -> None:
        if self.editor is not None:
            self.editor.close()
        self.editor = None

    async def _on_saved(self) -> None:
        if self.editor is not None:
            self.flash = self.editor.notice
        self.close_editor()
        logger.info("Profile saved; refreshing directory and session")
        await self.load()
