"""Pending event lifecycle: submit, delete, list, and batch re-matching."""
from collections import defaultdict
from typing import Dict, List, Tuple
import logging

from groupmatch.core.errors import (
    ConflictError,
    EventNotFoundError,
    NotEventOwnerError,
    StoreError,
)
from groupmatch.core.match_engine import MatchEngine
from groupmatch.core.topics import normalize_topic
from groupmatch.database.repositories.event_repo import (
    PendingEventRepository,
    PlannedEventRepository,
)
from groupmatch.models.event import PendingEvent, PlannedEvent

logger = logging.getLogger(__name__)


class EventService:
    """Entry points used by the request handlers."""

    def __init__(
        self,
        pending_repo: PendingEventRepository,
        planned_repo: PlannedEventRepository,
        match_engine: MatchEngine,
    ):
        self.pending_repo = pending_repo
        self.planned_repo = planned_repo
        self.match_engine = match_engine

    async def submit_event(self, event: PendingEvent) -> Tuple[PendingEvent, bool]:
        """
        Store a new pending event, then try to match it.

        The event is persisted first; a failed match attempt leaves it
        pending. Store errors while creating the event propagate.

        Returns:
            (stored event with id, whether a planned event was created)
        """
        created = await self.pending_repo.create(event)
        logger.info(f"Pending event {created.id} submitted by {created.created_by}")

        matched = await self.match_engine.check_for_matches(created)
        return created, matched

    async def delete_pending_event(self, event_id: str, user: str) -> None:
        """Owner-only removal of a pending event that has not been matched yet."""
        event = await self.pending_repo.get(event_id)
        if event is None:
            raise EventNotFoundError(f"Pending event {event_id} not found")
        if event.created_by != user:
            raise NotEventOwnerError(f"Pending event {event_id} belongs to another user")

        await self.pending_repo.delete(event_id)
        logger.info(f"Pending event {event_id} deleted by owner")

    async def get_user_pending_events(self, user: str) -> List[PendingEvent]:
        return await self.pending_repo.list_for_user(user)

    async def get_user_planned_events(self, user: str) -> List[PlannedEvent]:
        """Planned events the user participates in; empty on store errors."""
        try:
            return await self.planned_repo.list_for_participant(user)
        except StoreError as e:
            logger.error(f"Error fetching planned events for {user}: {e}")
            return []

    async def sweep_pending_events(self) -> int:
        """
        Re-run matching over every pending event, bucketed by topic.

        Used by a periodic job so events that missed each other at submission
        time still get grouped.

        Returns:
            number of planned events created
        """
        try:
            all_events = await self.pending_repo.list_all()
        except StoreError as e:
            logger.error(f"Error loading pending events for sweep: {e}")
            return 0

        buckets: Dict[str, List[PendingEvent]] = defaultdict(list)
        for event in all_events:
            buckets[normalize_topic(event.topic)].append(event)

        created = 0
        for topic, events in buckets.items():
            if len(events) < 2:
                continue

            consumed = set()
            for event in events:
                if event.id in consumed:
                    continue

                others = [e for e in events if e.id not in consumed and e.id != event.id]
                group = self.match_engine.find_group(event, others)
                if group is None:
                    continue

                try:
                    await self.match_engine.factory.create(group)
                except ConflictError as e:
                    logger.warning(f"Sweep conflict on topic '{topic}': {e}")
                    continue
                except StoreError as e:
                    logger.error(f"Sweep aborted by store error: {e}")
                    return created

                consumed.update(e.id for e in group)
                created += 1

        logger.info(f"Sweep created {created} planned events from {len(all_events)} pending")
        return created
