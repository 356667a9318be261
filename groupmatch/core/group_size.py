"""Group-size tolerance and compatible group search."""
from itertools import combinations
from typing import Dict, Iterator, List, Optional, Sequence
import logging

from groupmatch.core.time_overlap import has_time_compatibility
from groupmatch.models.event import PendingEvent

logger = logging.getLogger(__name__)

MIN_GROUP_SIZE = 2


def get_group_size_range(preferred_size: int) -> Dict[str, int]:
    """Acceptable sizes around a preference: roughly +/-25%, never below 2."""
    tolerance = max(1, preferred_size // 4)
    return {
        "min": max(MIN_GROUP_SIZE, preferred_size - tolerance),
        "max": preferred_size + tolerance,
    }


def is_group_size_acceptable(actual_size: int, preferred_size: int) -> bool:
    size_range = get_group_size_range(preferred_size)
    return size_range["min"] <= actual_size <= size_range["max"]


def _candidate_groups(
    eligible: List[PendingEvent],
    target_size: int,
    total: int,
) -> Iterator[List[PendingEvent]]:
    if target_size == 2:
        for pair in combinations(eligible, 2):
            yield list(pair)
    elif target_size == total:
        yield list(eligible)
    else:
        # First-N only; larger groups are not searched exhaustively.
        yield eligible[:target_size]


def find_compatible_group(events: Sequence[PendingEvent]) -> Optional[List[PendingEvent]]:
    """
    Find a group whose size suits every member and who share a meeting window.

    ``events`` is the seed event followed by its topic/distance candidates.
    Target sizes are tried smallest first; for each size only the events
    whose preference accepts it are eligible. Size 2 tries every pair in
    index order, the full size tries the whole set, anything in between
    tries just the first ``g`` eligible events.

    Returns:
        The first time-compatible group, or None.
    """
    events = list(events)
    total = len(events)

    for target_size in range(MIN_GROUP_SIZE, total + 1):
        eligible = [e for e in events if is_group_size_acceptable(target_size, e.group_size)]
        if len(eligible) < target_size:
            continue

        for group in _candidate_groups(eligible, target_size, total):
            if has_time_compatibility(group):
                logger.debug(f"Compatible group of {target_size} found")
                return group

    return None
