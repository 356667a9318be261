"""Turns a matched group of pending events into a committed planned event."""
from datetime import date
import random
from typing import Awaitable, Callable, List, Optional, Sequence
from uuid import uuid4
import logging

from groupmatch.config.settings import settings
from groupmatch.core.geo import city_from_coordinates
from groupmatch.core.time_overlap import common_available_times, select_optimal_meeting_time
from groupmatch.database.store import DeleteOp, DocumentStore, InsertOp
from groupmatch.models.event import PendingEvent, PlannedEvent

logger = logging.getLogger(__name__)

LOCATION_TBD = "Location to be determined"

PlannedEventHook = Callable[[PlannedEvent], Awaitable[None]]


def select_random_suggested_location(
    events: Sequence[PendingEvent],
    rng: Optional[random.Random] = None,
) -> str:
    """Pick one non-blank suggested venue uniformly at random."""
    suggested = [
        e.suggested_location for e in events
        if e.suggested_location and e.suggested_location.strip()
    ]
    if not suggested:
        return LOCATION_TBD
    return (rng or random).choice(suggested)


class PlannedEventFactory:
    """
    Builds planned events and commits them together with the deletion of
    every consumed pending event, as one atomic batch.
    """

    def __init__(
        self,
        store: DocumentStore,
        rng: Optional[random.Random] = None,
        today: Optional[Callable[[], date]] = None,
        on_planned_event_created: Optional[PlannedEventHook] = None,
        pending_collection: Optional[str] = None,
        planned_collection: Optional[str] = None,
    ):
        self.store = store
        self.rng = rng or random.Random()
        self.today = today or date.today
        self.on_planned_event_created = on_planned_event_created
        self.pending_collection = pending_collection or settings.PENDING_EVENTS_COLLECTION
        self.planned_collection = planned_collection or settings.PLANNED_EVENTS_COLLECTION

    def build(self, matched_events: Sequence[PendingEvent]) -> PlannedEvent:
        """Assemble the planned event record without persisting it."""
        if not matched_events:
            raise ValueError("Cannot plan an event without matched events")

        seed = matched_events[0]
        if seed.location.has_coordinates:
            city = city_from_coordinates(seed.location.latitude, seed.location.longitude)
        else:
            city = seed.location.address or LOCATION_TBD

        meeting_time = select_optimal_meeting_time(
            common_available_times(matched_events),
            today=self.today(),
        )

        return PlannedEvent(
            id=str(uuid4()),
            name=f"{seed.topic} Group",
            topic=seed.topic,
            city=city,
            event_location=select_random_suggested_location(matched_events, self.rng),
            participants=[e.created_by for e in matched_events],
            participant_count=len(matched_events),
            original_events=[e.id for e in matched_events if e.id],
            meeting_time=meeting_time,
        )

    async def create(self, matched_events: List[PendingEvent]) -> PlannedEvent:
        """
        Persist a planned event and retire its pending events atomically.

        Each delete is guarded by the pending event's version, so an event
        already consumed by a concurrent match makes the whole batch fail
        with ConflictError. Store errors propagate to the caller.
        """
        planned = self.build(matched_events)

        operations = [InsertOp(self.planned_collection, planned.id, planned.to_document())]
        operations.extend(
            DeleteOp(self.pending_collection, e.id, expected_version=e.version)
            for e in matched_events
            if e.id
        )

        await self.store.atomic_batch(operations)
        logger.info(
            f"Planned event created: '{planned.name}' with {planned.participant_count} "
            f"participants (consumed {len(planned.original_events)} pending events)"
        )

        if self.on_planned_event_created:
            try:
                await self.on_planned_event_created(planned)
            except Exception as e:
                logger.error(f"planned-event hook failed for {planned.id}: {e}", exc_info=True)

        return planned
