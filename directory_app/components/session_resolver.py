# directory_app/components/session_resolver.py
import logging
from typing import Optional

from directory_app.errors import StoreError
from directory_app.store_client import StoreClient
from directory_app.store_client.models import Identity, Participant

logger = logging.getLogger("participant-directory.session_resolver")


class SessionResolver:
    """
    Resolves the visitor's identity and, when signed in, their own profile row.

    `current_user` stays None for anonymous visitors and for identities that
    have not created a profile yet; neither case is an error.
    """

    def __init__(self, store: StoreClient, access_token: Optional[str] = None) -> None:
        self._store = store
        self.access_token = access_token
        self.identity: Optional[Identity] = None
        self.current_user: Optional[Participant] = None

    async def refresh(self) -> None:
        try:
            identity = await self._store.get_current_identity(self.access_token)
        except StoreError as exc:
            logger.warning(f"Identity lookup failed, treating visitor as anonymous: {exc}")
            identity = None

        self.identity = identity
        if identity is None:
            self.current_user = None
            return

        try:
            self.current_user = await self._store.get_participant_by_user_id(
                identity.id, access_token=self.access_token
            )
        except StoreError as exc:
            logger.error(f"Error fetching profile for user {identity.id}: {exc}")
            self.current_user = None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None
