# directory_app/components/directory_view.py
"""Directory view: the participant list, its statistics and the cards.

Read failures are logged and swallowed; the view keeps whatever it held
before (empty on first load).
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from directory_app.errors import StoreError
from directory_app.store_client import StoreClient
from directory_app.store_client.models import DirectoryStats, Participant, ParticipantCard
from directory_app.utils import mailto_href

logger = logging.getLogger("participant-directory.directory_view")


def compute_stats(participants: Sequence[Participant]) -> DirectoryStats:
    universities = {p.university for p in participants}
    skills = {s for p in participants for s in p.skills}
    return DirectoryStats(
        participants=len(participants),
        universities=len(universities),
        skills=len(skills),
        project_ideas=sum(1 for p in participants if p.has_project_idea),
    )


def build_card(participant: Participant) -> ParticipantCard:
    return ParticipantCard(
        id=participant.id,
        name=participant.name,
        university=participant.university,
        skills=list(participant.skills),
        project_idea=participant.project_idea or None,
        ai_interests=list(participant.ai_interests or []),
        contact_href=mailto_href(participant.email),
    )


class DirectoryView:
    def __init__(self, store: StoreClient, access_token: Optional[str] = None) -> None:
        self._store = store
        self._access_token = access_token
        self._participants: List[Participant] = []

    @property
    def participants(self) -> List[Participant]:
        return list(self._participants)

    async def refresh(self) -> None:
        try:
            participants = await self._store.list_participants(access_token=self._access_token)
        except StoreError as exc:
            logger.error(f"Error fetching participants: {exc}")
            return
        self._participants = participants

    def stats(self) -> DirectoryStats:
        return compute_stats(self._participants)

    def cards(self) -> List[ParticipantCard]:
        return [build_card(p) for p in self._participants]
