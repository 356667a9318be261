"""
Shared singleton dependencies for the application.

The document store is created once at startup and reused across requests.
Repositories, the match engine and services are thin and stateless, so they
are built per request around the shared store.
"""
import logging
import random
from typing import Optional

from groupmatch.config.settings import settings
from groupmatch.core.match_engine import MatchEngine
from groupmatch.core.planned_event_factory import PlannedEventFactory
from groupmatch.database.memory_store import InMemoryDocumentStore
from groupmatch.database.repositories.event_repo import (
    PendingEventRepository,
    PlannedEventRepository,
)
from groupmatch.database.store import DocumentStore
from groupmatch.services.event_service import EventService
from groupmatch.services.suggestion_service import SuggestionService

logger = logging.getLogger(__name__)

_store: Optional[DocumentStore] = None
_rng: Optional[random.Random] = None


def init_dependencies(store: Optional[DocumentStore] = None) -> None:
    """
    Initialize shared singletons. Called once at application startup;
    tests may pass their own store.
    """
    global _store, _rng

    if store is not None:
        _store = store
    elif settings.STORE_BACKEND == "memory":
        _store = InMemoryDocumentStore()
    else:
        from groupmatch.database.client import init_supabase
        from groupmatch.database.supabase_store import SupabaseDocumentStore
        _store = SupabaseDocumentStore(init_supabase())

    _rng = random.Random(settings.MATCHING_RANDOM_SEED)
    logger.info(f"Dependencies initialized: store={type(_store).__name__}")


def reset_dependencies() -> None:
    global _store, _rng
    _store = None
    _rng = None


def get_store() -> DocumentStore:
    if _store is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies() first.")
    return _store


def get_match_engine() -> MatchEngine:
    store = get_store()
    factory = PlannedEventFactory(store, rng=_rng)
    return MatchEngine(PendingEventRepository(store), factory)


def get_event_service() -> EventService:
    store = get_store()
    return EventService(
        pending_repo=PendingEventRepository(store),
        planned_repo=PlannedEventRepository(store),
        match_engine=get_match_engine(),
    )


def get_suggestion_service() -> SuggestionService:
    return SuggestionService(
        pending_repo=PendingEventRepository(get_store()),
        event_service=get_event_service(),
    )
