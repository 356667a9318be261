"""Rank nearby pending events as joinable suggestions."""
from typing import List, Optional, Sequence

from groupmatch.core.geo import calculate_distance
from groupmatch.models.event import Location, PendingEvent, Suggestion

# Creator is assumed to be the only current participant
CURRENT_PARTICIPANTS = 1


def rank_suggestions(
    current_user: str,
    user_location: Optional[Location],
    events: Sequence[PendingEvent],
    max_distance: float = 25.0,
    limit: int = 3,
) -> List[Suggestion]:
    """
    Closest joinable events first, fewer open spots breaking ties.

    Events created from an earlier suggestion are skipped so suggestions
    don't chain.
    """
    if user_location is None or not user_location.has_coordinates:
        return []

    suggestions = []
    for event in events:
        if event.created_by == current_user:
            continue
        if event.based_on_suggestion:
            continue
        if not event.location.has_coordinates:
            continue

        distance = calculate_distance(
            user_location.latitude,
            user_location.longitude,
            event.location.latitude,
            event.location.longitude,
        )
        if distance > max_distance:
            continue

        spots_left = event.group_size - CURRENT_PARTICIPANTS
        if spots_left <= 0:
            continue

        suggestions.append(Suggestion(
            event=event,
            distance=round(distance, 1),
            optimal_time=event.scheduled_times[0] if event.scheduled_times else None,
            current_participants=CURRENT_PARTICIPANTS,
            spots_left=spots_left,
        ))

    suggestions.sort(key=lambda s: (s.distance, s.spots_left))
    return suggestions[:limit]
