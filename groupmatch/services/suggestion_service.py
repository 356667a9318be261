"""Suggestion read path and "join a suggestion" flow."""
from typing import List, Optional, Tuple
import logging

from groupmatch.config.settings import settings
from groupmatch.core.errors import EventNotFoundError, StoreError
from groupmatch.core.suggestion_ranker import rank_suggestions
from groupmatch.database.repositories.event_repo import PendingEventRepository
from groupmatch.models.event import Location, PendingEvent, Suggestion, TimeSlot
from groupmatch.services.event_service import EventService

logger = logging.getLogger(__name__)


class SuggestionService:
    def __init__(
        self,
        pending_repo: PendingEventRepository,
        event_service: EventService,
        max_distance_miles: Optional[float] = None,
        limit: Optional[int] = None,
    ):
        self.pending_repo = pending_repo
        self.event_service = event_service
        self.max_distance_miles = (
            settings.MATCH_MAX_DISTANCE_MILES if max_distance_miles is None else max_distance_miles
        )
        self.limit = settings.SUGGESTION_LIMIT if limit is None else limit

    async def get_event_suggestions(
        self,
        user: str,
        user_location: Optional[Location],
    ) -> List[Suggestion]:
        """Top nearby pending events from other users; empty on store errors."""
        try:
            events = await self.pending_repo.list_excluding_user(user)
        except StoreError as e:
            logger.error(f"Error fetching event suggestions: {e}")
            return []

        return rank_suggestions(
            user,
            user_location,
            events,
            max_distance=self.max_distance_miles,
            limit=self.limit,
        )

    async def join_suggestion(
        self,
        suggestion_id: str,
        user: str,
        selected_times: List[TimeSlot],
    ) -> Tuple[PendingEvent, bool]:
        """
        Submit a pending event modelled on a suggestion, with the user's own
        times, and run matching for it.
        """
        suggestion = await self.pending_repo.get(suggestion_id)
        if suggestion is None:
            raise EventNotFoundError(f"Suggested event {suggestion_id} no longer exists")

        request = PendingEvent(
            topic=suggestion.topic,
            group_size=suggestion.group_size,
            scheduled_times=selected_times,
            location=suggestion.location,
            suggested_location=suggestion.suggested_location,
            created_by=user,
            based_on_suggestion=suggestion.id,
        )
        logger.info(f"{user} joining suggestion {suggestion_id}")
        return await self.event_service.submit_event(request)
