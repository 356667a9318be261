"""Time-slot intersection and meeting time selection."""
from datetime import date as date_type, datetime
from typing import Iterable, List, Optional, Sequence, Union
import logging

from groupmatch.models.event import (
    MeetingTime,
    OverlapSlot,
    PendingEvent,
    TimeSlot,
    minutes_to_time,
    time_to_minutes,
)

logger = logging.getLogger(__name__)

MIN_MEETING_MINUTES = 60

# Scoring weights
MAX_DURATION_CREDIT = 240
DURATION_WEIGHT = 40
PROXIMITY_WINDOW_DAYS = 30
PROXIMITY_WEIGHT = 30
AFTERNOON_SCORE = 30   # start in [14:00, 18:00]
DAYTIME_SCORE = 20     # start in [10:00, 20:00]
OFF_HOURS_SCORE = 10

Slot = Union[TimeSlot, OverlapSlot]


def _start(slot: Slot) -> int:
    return time_to_minutes(slot.start_time)


def _end(slot: Slot) -> int:
    return time_to_minutes(slot.end_time)


def _as_overlap(slot: Slot) -> OverlapSlot:
    return OverlapSlot(
        date=slot.date,
        start_time=slot.start_time,
        end_time=slot.end_time,
        duration=_end(slot) - _start(slot),
    )


def slots_overlap(slot1: Slot, slot2: Slot) -> bool:
    """Half-open overlap test; slots on different dates never overlap."""
    if slot1.date != slot2.date:
        return False
    return _start(slot1) < _end(slot2) and _start(slot2) < _end(slot1)


def _intersect_slots(slots1: Iterable[Slot], slots2: Iterable[Slot]) -> List[OverlapSlot]:
    slots2 = list(slots2)
    overlaps = []
    for s1 in slots1:
        for s2 in slots2:
            if not slots_overlap(s1, s2):
                continue
            start = max(_start(s1), _start(s2))
            end = min(_end(s1), _end(s2))
            overlaps.append(OverlapSlot(
                date=s1.date,
                start_time=minutes_to_time(start),
                end_time=minutes_to_time(end),
                duration=end - start,
            ))
    return overlaps


def pairwise_overlaps(event_a: PendingEvent, event_b: PendingEvent) -> List[OverlapSlot]:
    """Every overlapping window between two events' scheduled times."""
    return _intersect_slots(event_a.scheduled_times, event_b.scheduled_times)


def _dedupe_and_sort(slots: Iterable[OverlapSlot]) -> List[OverlapSlot]:
    unique = {}
    for slot in slots:
        unique.setdefault(slot.key, slot)
    return sorted(unique.values(), key=lambda s: (s.date, _start(s)))


def common_available_times(events: Sequence[PendingEvent]) -> List[OverlapSlot]:
    """
    Windows in which every event is available.

    Folds left to right: the overlaps of the first two events become the
    base intersected with the third, and so on. The result is deduplicated
    on (date, start, end) and sorted by date then start time.
    """
    if not events:
        return []
    if len(events) == 1:
        return _dedupe_and_sort(_as_overlap(s) for s in events[0].scheduled_times)

    common = pairwise_overlaps(events[0], events[1])
    for event in events[2:]:
        if not common:
            break
        common = _intersect_slots(common, event.scheduled_times)

    return _dedupe_and_sort(common)


def has_time_compatibility(events: Sequence[PendingEvent]) -> bool:
    """True when the group shares at least one window of MIN_MEETING_MINUTES."""
    if len(events) < 2:
        return True
    return any(
        slot.duration >= MIN_MEETING_MINUTES
        for slot in common_available_times(events)
    )


def _time_of_day_score(start_minutes: int) -> int:
    if time_to_minutes("14:00") <= start_minutes <= time_to_minutes("18:00"):
        return AFTERNOON_SCORE
    if time_to_minutes("10:00") <= start_minutes <= time_to_minutes("20:00"):
        return DAYTIME_SCORE
    return OFF_HOURS_SCORE


def score_meeting_slot(slot: OverlapSlot, today: date_type) -> float:
    """Score a candidate window: longer, sooner and mid-afternoon rank higher."""
    score = min(slot.duration, MAX_DURATION_CREDIT) / MAX_DURATION_CREDIT * DURATION_WEIGHT

    days_from_now = (datetime.strptime(slot.date, "%Y-%m-%d").date() - today).days
    if 0 <= days_from_now <= PROXIMITY_WINDOW_DAYS:
        score += (PROXIMITY_WINDOW_DAYS - days_from_now) / PROXIMITY_WINDOW_DAYS * PROXIMITY_WEIGHT

    score += _time_of_day_score(_start(slot))
    return score


def select_optimal_meeting_time(
    common_times: Sequence[OverlapSlot],
    today: Optional[date_type] = None,
) -> Optional[MeetingTime]:
    """Pick the best-scoring window of at least an hour; first wins on ties."""
    viable = [slot for slot in common_times if slot.duration >= MIN_MEETING_MINUTES]
    if not viable:
        return None

    today = today or date_type.today()

    best = viable[0]
    best_score = score_meeting_slot(best, today)
    for slot in viable[1:]:
        score = score_meeting_slot(slot, today)
        if score > best_score:
            best, best_score = slot, score

    logger.debug(f"Selected meeting slot {best.date} {best.start_time} (score {best_score:.1f})")
    return MeetingTime(date=best.date, start_time=best.start_time, duration=best.duration)
