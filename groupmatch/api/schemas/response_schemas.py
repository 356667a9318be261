"""API response schemas"""
from pydantic import BaseModel
from typing import List

from groupmatch.models.event import PendingEvent, PlannedEvent, Suggestion


class SubmitEventResponse(BaseModel):
    event: PendingEvent
    matched: bool


class PendingEventsResponse(BaseModel):
    events: List[PendingEvent]


class PlannedEventsResponse(BaseModel):
    planned_events: List[PlannedEvent]


class SuggestionsResponse(BaseModel):
    suggestions: List[Suggestion]


class SweepResponse(BaseModel):
    planned_events_created: int
