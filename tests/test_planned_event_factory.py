"""Tests for PlannedEventFactory — record building and atomic commit."""
from datetime import date
import random

import pytest
from unittest.mock import AsyncMock

from groupmatch.core.errors import ConflictError, StoreUnavailableError
from groupmatch.core.planned_event_factory import (
    LOCATION_TBD,
    PlannedEventFactory,
    select_random_suggested_location,
)
from groupmatch.database.repositories.event_repo import PendingEventRepository
from groupmatch.models.event import Location, PendingEvent, TimeSlot


def _make_event(user, *, topic="Coffee", suggested=None, start="14:00", end="16:00", **overrides):
    data = dict(
        topic=topic,
        group_size=2,
        scheduled_times=[TimeSlot(date="2024-06-01", start_time=start, end_time=end)],
        location=Location(latitude=40.7128, longitude=-74.0060, address="Manhattan"),
        suggested_location=suggested,
        created_by=user,
    )
    data.update(overrides)
    return PendingEvent(**data)


@pytest.fixture
def repo(store):
    return PendingEventRepository(store)


@pytest.fixture
def factory(store):
    return PlannedEventFactory(store, rng=random.Random(1), today=lambda: date(2024, 5, 30))


# ---------------------------------------------------------------------------
# Venue selection
# ---------------------------------------------------------------------------

class TestSuggestedLocation:
    def test_placeholder_when_none_suggested(self):
        events = [_make_event("alice"), _make_event("bob", suggested="   ")]
        assert select_random_suggested_location(events) == LOCATION_TBD

    def test_picks_one_of_the_suggestions(self):
        events = [
            _make_event("alice", suggested="Blue Bottle"),
            _make_event("bob"),
            _make_event("carol", suggested="Stumptown"),
        ]
        for seed in range(10):
            choice = select_random_suggested_location(events, random.Random(seed))
            assert choice in {"Blue Bottle", "Stumptown"}

    def test_seeded_source_is_reproducible(self):
        events = [_make_event(u, suggested=f"Cafe {u}") for u in ("a", "b", "c", "d")]
        first = select_random_suggested_location(events, random.Random(42))
        second = select_random_suggested_location(events, random.Random(42))
        assert first == second


# ---------------------------------------------------------------------------
# build
# ---------------------------------------------------------------------------

class TestBuild:
    def test_fields_derived_from_seed_and_group(self, factory):
        a = _make_event("alice", id="e1")
        b = _make_event("bob", topic="coffee chat", id="e2", start="15:00", end="17:00")
        planned = factory.build([a, b])

        assert planned.name == "Coffee Group"
        assert planned.topic == "Coffee"
        assert planned.city == "Area 40.7, -74.0"
        assert planned.event_location == LOCATION_TBD
        assert planned.participants == ["alice", "bob"]
        assert planned.participant_count == 2
        assert planned.original_events == ["e1", "e2"]
        assert planned.status == "planned"
        assert planned.meeting_time.start_time == "15:00"
        assert planned.meeting_time.duration == 60

    def test_meeting_time_none_without_shared_hour(self, factory):
        a = _make_event("alice", id="e1", start="09:00", end="09:30")
        b = _make_event("bob", id="e2", start="09:00", end="09:30")
        assert factory.build([a, b]).meeting_time is None

    def test_empty_group_rejected(self, factory):
        with pytest.raises(ValueError):
            factory.build([])


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------

class TestCreate:
    @pytest.mark.asyncio
    async def test_commits_planned_event_and_consumes_pending(self, store, repo, factory):
        a = await repo.create(_make_event("alice", suggested="Blue Bottle"))
        b = await repo.create(_make_event("bob"))

        planned = await factory.create([a, b])

        assert await repo.list_all() == []
        stored = await store.get_by_id("planned_events", planned.id)
        assert stored["participants"] == ["alice", "bob"]
        assert stored["original_events"] == [a.id, b.id]
        assert stored["event_location"] == "Blue Bottle"

    @pytest.mark.asyncio
    async def test_already_consumed_event_aborts_commit(self, store, repo, factory):
        a = await repo.create(_make_event("alice"))
        ghost = _make_event("bob", id="consumed-elsewhere")

        with pytest.raises(ConflictError):
            await factory.create([a, ghost])

        assert [e.id for e in await repo.list_all()] == [a.id]
        assert await store.list_all("planned_events") == []

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, store, repo, factory):
        a = await repo.create(_make_event("alice"))
        b = await repo.create(_make_event("bob"))
        store.fail_writes = True

        with pytest.raises(StoreUnavailableError):
            await factory.create([a, b])

        store.fail_writes = False
        assert len(await repo.list_all()) == 2

    @pytest.mark.asyncio
    async def test_created_hook_receives_planned_event(self, store, repo):
        hook = AsyncMock()
        factory = PlannedEventFactory(store, on_planned_event_created=hook)
        a = await repo.create(_make_event("alice"))
        b = await repo.create(_make_event("bob"))

        planned = await factory.create([a, b])

        hook.assert_awaited_once_with(planned)

    @pytest.mark.asyncio
    async def test_hook_failure_does_not_undo_commit(self, store, repo):
        hook = AsyncMock(side_effect=RuntimeError("chat service down"))
        factory = PlannedEventFactory(store, on_planned_event_created=hook)
        a = await repo.create(_make_event("alice"))
        b = await repo.create(_make_event("bob"))

        planned = await factory.create([a, b])

        assert await store.get_by_id("planned_events", planned.id) is not None
