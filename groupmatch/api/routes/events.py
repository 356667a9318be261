"""Pending event, planned event and matching routes."""
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
import logging

from groupmatch.api.schemas.request_schemas import CreateEventRequest
from groupmatch.api.schemas.response_schemas import (
    PendingEventsResponse,
    PlannedEventsResponse,
    SubmitEventResponse,
    SweepResponse,
)
from groupmatch.core.dependencies import get_event_service
from groupmatch.core.errors import EventNotFoundError, NotEventOwnerError, StoreError
from groupmatch.services.event_service import EventService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/events", response_model=SubmitEventResponse, status_code=status.HTTP_201_CREATED)
async def submit_event(
    request: CreateEventRequest,
    service: EventService = Depends(get_event_service),
):
    """Create a pending event and try to match it into a planned event."""
    try:
        event, matched = await service.submit_event(request.to_pending_event())
    except StoreError as e:
        logger.error(f"Failed to submit event: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Event store unavailable. Please try again.",
        )
    return SubmitEventResponse(event=event, matched=matched)


@router.get("/events", response_model=PendingEventsResponse)
async def list_pending_events(
    user: str = Query(..., min_length=1),
    service: EventService = Depends(get_event_service),
):
    try:
        events = await service.get_user_pending_events(user)
    except StoreError as e:
        logger.error(f"Failed to list pending events: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Event store unavailable. Please try again.",
        )
    return PendingEventsResponse(events=events)


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pending_event(
    event_id: str,
    user: str = Query(..., min_length=1),
    service: EventService = Depends(get_event_service),
):
    try:
        await service.delete_pending_event(event_id, user)
    except EventNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotEventOwnerError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except StoreError as e:
        logger.error(f"Failed to delete event {event_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Event store unavailable. Please try again.",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/planned-events", response_model=PlannedEventsResponse)
async def list_planned_events(
    user: str = Query(..., min_length=1),
    service: EventService = Depends(get_event_service),
):
    planned = await service.get_user_planned_events(user)
    return PlannedEventsResponse(planned_events=planned)


@router.post("/matching/sweep", response_model=SweepResponse)
async def sweep_pending_events(service: EventService = Depends(get_event_service)):
    """Re-run matching over all pending events (periodic job trigger)."""
    created = await service.sweep_pending_events()
    return SweepResponse(planned_events_created=created)
