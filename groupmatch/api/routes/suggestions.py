"""Suggestion routes"""
from fastapi import APIRouter, Depends, HTTPException, status
import logging

from groupmatch.api.schemas.request_schemas import JoinSuggestionRequest, SuggestionSearchRequest
from groupmatch.api.schemas.response_schemas import SubmitEventResponse, SuggestionsResponse
from groupmatch.core.dependencies import get_suggestion_service
from groupmatch.core.errors import EventNotFoundError, StoreError
from groupmatch.services.suggestion_service import SuggestionService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/search", response_model=SuggestionsResponse)
async def search_suggestions(
    request: SuggestionSearchRequest,
    service: SuggestionService = Depends(get_suggestion_service),
):
    suggestions = await service.get_event_suggestions(request.user, request.location)
    return SuggestionsResponse(suggestions=suggestions)


@router.post(
    "/{suggestion_id}/join",
    response_model=SubmitEventResponse,
    status_code=status.HTTP_201_CREATED,
)
async def join_suggestion(
    suggestion_id: str,
    request: JoinSuggestionRequest,
    service: SuggestionService = Depends(get_suggestion_service),
):
    """Create the user's own pending event from a suggestion and match it."""
    try:
        event, matched = await service.join_suggestion(
            suggestion_id, request.user, request.scheduled_times
        )
    except EventNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreError as e:
        logger.error(f"Failed to join suggestion {suggestion_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Event store unavailable. Please try again.",
        )
    return SubmitEventResponse(event=event, matched=matched)
