"""Tests for group-size tolerance and compatible group search."""
import pytest

from groupmatch.core.group_size import (
    find_compatible_group,
    get_group_size_range,
    is_group_size_acceptable,
)
from groupmatch.models.event import PendingEvent, TimeSlot


def _event(user, group_size, start="14:00", end="16:00", day="2024-06-01"):
    return PendingEvent(
        id=f"evt-{user}",
        topic="Coffee",
        group_size=group_size,
        scheduled_times=[TimeSlot(date=day, start_time=start, end_time=end)],
        created_by=user,
    )


# ---------------------------------------------------------------------------
# Size ranges
# ---------------------------------------------------------------------------

class TestGroupSizeRange:
    @pytest.mark.parametrize("preferred, expected", [
        (2, {"min": 2, "max": 3}),
        (3, {"min": 2, "max": 4}),
        (4, {"min": 3, "max": 5}),
        (8, {"min": 6, "max": 10}),
        (12, {"min": 9, "max": 15}),
    ])
    def test_ranges(self, preferred, expected):
        assert get_group_size_range(preferred) == expected

    def test_acceptable_bounds_inclusive(self):
        assert is_group_size_acceptable(6, 8)
        assert is_group_size_acceptable(10, 8)
        assert not is_group_size_acceptable(5, 8)
        assert not is_group_size_acceptable(11, 8)

    def test_never_below_two(self):
        assert not is_group_size_acceptable(1, 2)


# ---------------------------------------------------------------------------
# find_compatible_group
# ---------------------------------------------------------------------------

class TestFindCompatibleGroup:
    def test_single_event_has_no_group(self):
        assert find_compatible_group([_event("alice", 2)]) is None

    def test_pair_with_shared_hour(self):
        seed = _event("alice", 2, "14:00", "16:00")
        other = _event("bob", 2, "15:00", "17:00")
        assert find_compatible_group([seed, other]) == [seed, other]

    def test_pair_without_enough_shared_time(self):
        seed = _event("alice", 2, "14:00", "15:00")
        other = _event("bob", 2, "14:30", "16:00")
        assert find_compatible_group([seed, other]) is None

    def test_pairs_tried_in_index_order(self):
        seed = _event("alice", 2, "09:00", "10:00")
        b = _event("bob", 2, "14:00", "16:00")
        c = _event("carol", 2, "14:00", "16:00")
        # (alice, bob) and (alice, carol) share no time; (bob, carol) does
        assert find_compatible_group([seed, b, c]) == [b, c]

    def test_seed_left_out_when_its_size_is_not_accepted(self):
        seed = _event("alice", 8)
        b = _event("bob", 2)
        c = _event("carol", 2)
        assert find_compatible_group([seed, b, c]) == [b, c]

    def test_size_mismatch(self):
        seed = _event("alice", 2)
        other = _event("bob", 8)
        assert find_compatible_group([seed, other]) is None

    def test_first_n_group_for_middle_sizes(self):
        events = [_event(name, 4) for name in ("alice", "bob", "carol", "dave")]
        # size 4 preference accepts 3..5, so pairs are skipped
        assert find_compatible_group(events) == events[:3]

    def test_whole_set_when_target_equals_total(self):
        events = [_event(name, 4) for name in ("alice", "bob", "carol")]
        assert find_compatible_group(events) == events

    def test_first_n_heuristic_is_not_exhaustive(self):
        seed = _event("alice", 4)
        b = _event("bob", 4)
        c = _event("carol", 4, "18:00", "19:00")
        d = _event("dave", 4)
        # {alice, bob, dave} would work, but only [alice, bob, carol] and the
        # full set are tried
        assert find_compatible_group([seed, b, c, d]) is None
