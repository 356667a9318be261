"""API request schemas"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from groupmatch.models.event import Location, PendingEvent, TimeSlot


class CreateEventRequest(BaseModel):
    topic: str = Field(..., min_length=1, max_length=200)
    group_size: int = Field(..., ge=2, le=100)
    scheduled_times: List[TimeSlot] = Field(..., min_length=1)
    location: Location
    suggested_location: Optional[str] = Field(None, max_length=500)
    created_by: str = Field(..., min_length=1, max_length=256)

    @field_validator("topic")
    @classmethod
    def validate_topic(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Topic must not be blank")
        return v

    def to_pending_event(self) -> PendingEvent:
        return PendingEvent(**self.model_dump())


class SuggestionSearchRequest(BaseModel):
    user: str = Field(..., min_length=1, max_length=256)
    location: Location


class JoinSuggestionRequest(BaseModel):
    user: str = Field(..., min_length=1, max_length=256)
    scheduled_times: List[TimeSlot] = Field(..., min_length=1)
