"""Tests for the directory view: statistics, cards and read-failure handling."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from directory_app.components import DirectoryView, build_card, compute_stats
from directory_app.errors import StoreError
from directory_app.store_client.models import Participant

from conftest import SAMPLE_ROWS, make_row

NOW = datetime(2025, 3, 1, tzinfo=timezone.utc)


def _participant(idx: int, row: dict) -> Participant:
    return Participant(id=f"p{idx}", created_at=NOW, updated_at=NOW, **row)


def _participants(rows):
    return [_participant(i, r) for i, r in enumerate(rows)]


class TestComputeStats:
    def test_empty(self):
        stats = compute_stats([])
        assert stats.participants == 0
        assert stats.universities == 0
        assert stats.skills == 0
        assert stats.project_ideas == 0

    def test_distinct_counts(self):
        participants = _participants(SAMPLE_ROWS)
        stats = compute_stats(participants)

        assert stats.participants == 3
        assert stats.universities == len({p.university for p in participants}) == 2
        assert stats.skills == len({s for p in participants for s in p.skills}) == 4
        # "" and None are both "not provided"
        assert stats.project_ideas == 1

    def test_empty_skill_string_counts_as_a_value(self):
        participants = _participants([make_row("a", skills=[""]), make_row("b", skills=["Go"])])
        assert compute_stats(participants).skills == 2


class TestBuildCard:
    def test_optional_sections(self):
        card = build_card(_participant(0, make_row("a", project_idea="", ai_interests=None)))
        assert card.project_idea is None
        assert card.ai_interests == []

        card = build_card(_participant(1, make_row("b", project_idea="Bot", ai_interests=["NLP"])))
        assert card.project_idea == "Bot"
        assert card.ai_interests == ["NLP"]

    def test_contact_is_mailto(self):
        card = build_card(_participant(0, make_row("ada", email="ada@example.ac.uk")))
        assert card.contact_href == "mailto:ada@example.ac.uk"


class TestDirectoryView:
    @pytest.mark.asyncio
    async def test_refresh_loads_everything(self, seeded_store):
        view = DirectoryView(seeded_store)
        await view.refresh()
        assert len(view.participants) == 3
        assert len(view.cards()) == 3
        assert view.stats().participants == 3

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_state(self):
        store = AsyncMock()
        store.list_participants = AsyncMock(return_value=_participants(SAMPLE_ROWS))

        view = DirectoryView(store)
        await view.refresh()
        assert len(view.participants) == 3

        store.list_participants.side_effect = StoreError("network down")
        await view.refresh()
        assert len(view.participants) == 3
        assert store.list_participants.await_count == 2

    @pytest.mark.asyncio
    async def test_failure_on_first_load_is_empty(self):
        store = AsyncMock()
        store.list_participants = AsyncMock(side_effect=StoreError("network down"))

        view = DirectoryView(store)
        await view.refresh()
        assert view.participants == []
        assert view.stats().participants == 0
