"""Pending and planned event repositories."""
from typing import List, Optional
import logging

from groupmatch.config.settings import settings
from groupmatch.database.store import ARRAY_CONTAINS, EQ, NE, DocumentStore
from groupmatch.models.event import PendingEvent, PlannedEvent

logger = logging.getLogger(__name__)


class PendingEventRepository:
    """Handle pending event store operations."""

    def __init__(self, store: DocumentStore, collection: Optional[str] = None):
        self.store = store
        self.collection = collection or settings.PENDING_EVENTS_COLLECTION

    async def create(self, event: PendingEvent) -> PendingEvent:
        """Insert a pending event and return it with its new id."""
        try:
            event_id = await self.store.insert(self.collection, event.to_document())
            return event.model_copy(update={"id": event_id})
        except Exception as e:
            logger.error(f"Error creating pending event: {e}")
            raise

    async def get(self, event_id: str) -> Optional[PendingEvent]:
        doc = await self.store.get_by_id(self.collection, event_id)
        return PendingEvent.from_document(doc) if doc else None

    async def list_excluding_user(self, user: str) -> List[PendingEvent]:
        """All pending events not created by ``user``."""
        docs = await self.store.query_by_field(self.collection, "created_by", NE, user)
        return [PendingEvent.from_document(d) for d in docs]

    async def list_for_user(self, user: str) -> List[PendingEvent]:
        docs = await self.store.query_by_field(self.collection, "created_by", EQ, user)
        return [PendingEvent.from_document(d) for d in docs]

    async def list_all(self) -> List[PendingEvent]:
        docs = await self.store.list_all(self.collection)
        return [PendingEvent.from_document(d) for d in docs]

    async def delete(self, event_id: str) -> None:
        try:
            await self.store.delete_by_id(self.collection, event_id)
        except Exception as e:
            logger.error(f"Error deleting pending event {event_id}: {e}")
            raise


class PlannedEventRepository:
    """Read access to planned events."""

    def __init__(self, store: DocumentStore, collection: Optional[str] = None):
        self.store = store
        self.collection = collection or settings.PLANNED_EVENTS_COLLECTION

    async def list_for_participant(self, user: str) -> List[PlannedEvent]:
        """Planned events whose participants include ``user``."""
        docs = await self.store.query_by_field(
            self.collection, "participants", ARRAY_CONTAINS, user
        )
        return [PlannedEvent.from_document(d) for d in docs]

    async def get(self, planned_event_id: str) -> Optional[PlannedEvent]:
        doc = await self.store.get_by_id(self.collection, planned_event_id)
        return PlannedEvent.from_document(doc) if doc else None
