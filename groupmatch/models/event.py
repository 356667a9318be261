"""Pending/planned event data models"""
from datetime import datetime, timezone
import re
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def time_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(value: int) -> str:
    return f"{value // 60:02d}:{value % 60:02d}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class TimeSlot(BaseModel):
    """A half-open availability window [start_time, end_time) on one date."""
    date: str
    start_time: str
    end_time: str

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        if not _DATE_RE.match(v):
            raise ValueError("date must be YYYY-MM-DD")
        datetime.strptime(v, "%Y-%m-%d")
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        if not _TIME_RE.match(v):
            raise ValueError("time must be HH:MM")
        return v

    @model_validator(mode="after")
    def _check_order(self) -> "TimeSlot":
        if time_to_minutes(self.start_time) >= time_to_minutes(self.end_time):
            raise ValueError("start_time must be before end_time")
        return self

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return time_to_minutes(self.end_time)


class OverlapSlot(BaseModel):
    """A common window shared by several events."""
    date: str
    start_time: str
    end_time: str
    duration: int  # minutes

    @property
    def key(self) -> tuple:
        return (self.date, self.start_time, self.end_time)


class MeetingTime(BaseModel):
    """Selected meeting time; the end time is not persisted."""
    date: str
    start_time: str
    duration: int


class Location(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: str = ""

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class PendingEvent(BaseModel):
    """One user's unmatched activity request"""
    id: Optional[str] = None
    topic: str
    group_size: int = Field(..., ge=2)
    scheduled_times: List[TimeSlot] = []
    location: Location = Location()
    suggested_location: Optional[str] = None
    created_by: str
    created_at: str = Field(default_factory=utc_now_iso)
    based_on_suggestion: Optional[str] = None
    version: int = 1

    @property
    def is_matchable(self) -> bool:
        return self.location.has_coordinates and bool(self.scheduled_times)

    def to_document(self) -> dict:
        """Serialize for the document store (the id lives outside the body)."""
        return self.model_dump(mode="json", exclude={"id"})

    @classmethod
    def from_document(cls, doc: dict) -> "PendingEvent":
        return cls.model_validate(doc)


class PlannedEvent(BaseModel):
    """A committed multi-participant activity produced by a match"""
    id: Optional[str] = None
    name: str
    topic: str
    city: str
    event_location: str
    participants: List[str]
    participant_count: int
    original_events: List[str]
    meeting_time: Optional[MeetingTime] = None
    created_at: str = Field(default_factory=utc_now_iso)
    status: str = "planned"

    def to_document(self) -> dict:
        return self.model_dump(mode="json", exclude={"id"})

    @classmethod
    def from_document(cls, doc: dict) -> "PlannedEvent":
        return cls.model_validate(doc)


class Suggestion(BaseModel):
    """A nearby pending event the user could join"""
    event: PendingEvent
    distance: float  # miles, one decimal
    optimal_time: Optional[TimeSlot] = None
    current_participants: int = 1
    spots_left: int
