"""Match engine: decides whether a new pending event completes a group."""
from typing import List, Optional, Sequence
import logging

from groupmatch.config.settings import settings
from groupmatch.core.errors import ConflictError, StoreError
from groupmatch.core.geo import calculate_distance
from groupmatch.core.group_size import MIN_GROUP_SIZE, find_compatible_group
from groupmatch.core.planned_event_factory import PlannedEventFactory
from groupmatch.core.topics import topics_match
from groupmatch.database.repositories.event_repo import PendingEventRepository
from groupmatch.models.event import PendingEvent

logger = logging.getLogger(__name__)


def find_candidates(
    new_event: PendingEvent,
    existing_events: Sequence[PendingEvent],
    max_distance: float = 25.0,
) -> List[PendingEvent]:
    """Events with a matching topic within ``max_distance`` miles of ``new_event``."""
    if not new_event.location.has_coordinates:
        return []

    matches = []
    for event in existing_events:
        if new_event.id and event.id == new_event.id:
            continue
        if not event.location.has_coordinates:
            continue
        if not topics_match(new_event.topic, event.topic):
            continue

        distance = calculate_distance(
            new_event.location.latitude,
            new_event.location.longitude,
            event.location.latitude,
            event.location.longitude,
        )
        if distance <= max_distance:
            matches.append(event)

    return matches


class MatchEngine:
    """
    Forms planned events out of compatible pending events.

    Matching never blocks a user's own submission: store failures are logged
    and reported as "no match", leaving the new event pending.
    """

    def __init__(
        self,
        pending_repo: PendingEventRepository,
        factory: PlannedEventFactory,
        max_distance_miles: Optional[float] = None,
        max_conflict_retries: Optional[int] = None,
    ):
        self.pending_repo = pending_repo
        self.factory = factory
        self.max_distance_miles = (
            settings.MATCH_MAX_DISTANCE_MILES if max_distance_miles is None else max_distance_miles
        )
        self.max_conflict_retries = (
            settings.MATCH_CONFLICT_RETRIES if max_conflict_retries is None else max_conflict_retries
        )

    def find_group(
        self,
        new_event: PendingEvent,
        existing_events: Sequence[PendingEvent],
    ) -> Optional[List[PendingEvent]]:
        """Pure part of matching: candidate filtering plus group search."""
        others = [e for e in existing_events if e.created_by != new_event.created_by]
        candidates = find_candidates(new_event, others, self.max_distance_miles)
        if not candidates:
            return None

        group = find_compatible_group([new_event, *candidates])
        if group is None or len(group) < MIN_GROUP_SIZE:
            return None
        return group

    async def check_for_matches(
        self,
        new_event: PendingEvent,
        existing_pending_events: Optional[Sequence[PendingEvent]] = None,
    ) -> bool:
        """
        Try to fold ``new_event`` into a planned event.

        Args:
            new_event: the just-submitted pending event
            existing_pending_events: candidates to consider; fetched from the
                store (everyone else's pending events) when omitted

        Returns:
            True if a planned event was created.
        """
        existing = existing_pending_events

        for attempt in range(self.max_conflict_retries + 1):
            try:
                if existing is None:
                    if attempt > 0 and new_event.id:
                        current = await self.pending_repo.get(new_event.id)
                        if current is None:
                            logger.info(f"Event {new_event.id} was consumed by another match")
                            return False
                        new_event = current
                    existing = await self.pending_repo.list_excluding_user(new_event.created_by)

                group = self.find_group(new_event, existing)
                if group is None:
                    logger.info(f"No match found for '{new_event.topic}' ({new_event.id})")
                    return False

                await self.factory.create(group)
                return True

            except ConflictError as e:
                logger.warning(
                    f"Match conflict on attempt {attempt + 1} for {new_event.id}: {e}; "
                    "refreshing candidates"
                )
                existing = None
            except StoreError as e:
                logger.error(f"Store error while matching {new_event.id}: {e}")
                return False
            except Exception as e:
                logger.error(f"Error checking for matches: {e}", exc_info=True)
                return False

        logger.warning(f"Giving up matching {new_event.id} after repeated conflicts")
        return False
