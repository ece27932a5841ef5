"""Tests for greedy breakout group formation and leftover redistribution."""

import logging

from app.schemas.clustering import Attendee, AttendeeGroup
from app.services.group_builder import build_groups, redistribute_leftovers

# =============================================================================
# Helper Functions
# =============================================================================


def make_attendee(attendee_id: str, *interests: str) -> Attendee:
    return Attendee(id=attendee_id, display_name=attendee_id, interests=interests)


def make_blank_attendees(count: int) -> list[Attendee]:
    """Create attendees without interests, ids a0, a1, ..."""
    return [make_attendee(f"a{i}") for i in range(count)]


def member_ids(group: AttendeeGroup) -> list:
    return [m.id for m in group.members]


# =============================================================================
# build_groups
# =============================================================================


class TestBuildGroups:
    """Tests for the greedy growth pass."""

    def test_groups_grow_to_max_size(self):
        groups, leftovers = build_groups(make_blank_attendees(12), min_size=4, max_size=6)

        assert [g.size for g in groups] == [6, 4]
        assert [m.id for m in leftovers] == ["a10", "a11"]

    def test_growth_stops_early_when_remainder_is_too_small(self):
        # After 5 members only 3 remain, which cannot form a group of 4
        groups, leftovers = build_groups(make_blank_attendees(8), min_size=4, max_size=6)

        assert [g.size for g in groups] == [5]
        assert [m.id for m in leftovers] == ["a5", "a6", "a7"]

    def test_exact_multiple_leaves_no_leftovers(self):
        groups, leftovers = build_groups(make_blank_attendees(12), min_size=3, max_size=3)

        assert [g.size for g in groups] == [3, 3, 3, 3]
        assert leftovers == []

    def test_first_unassigned_attendee_seeds_each_group(self):
        attendees = [
            make_attendee("y1", "Yoga"),
            make_attendee("c1", "Chess"),
            make_attendee("y2", "Yoga"),
            make_attendee("c2", "Chess"),
        ]

        groups, _ = build_groups(attendees, min_size=2, max_size=2)

        assert [member_ids(g) for g in groups] == [["y1", "y2"], ["c1", "c2"]]

    def test_most_similar_candidate_is_added(self):
        attendees = [
            make_attendee("a", "Yoga"),
            make_attendee("b", "Chess"),
            make_attendee("c", "Yoga"),
            make_attendee("d", "Chess"),
            make_attendee("e", "Yoga"),
            make_attendee("f", "Chess"),
            make_attendee("g", "Yoga"),
            make_attendee("h", "Chess"),
        ]

        groups, leftovers = build_groups(attendees, min_size=2, max_size=4)

        # After f joins only h remains, too few for a group of 2, so growth stops
        assert [member_ids(g) for g in groups] == [["a", "c", "e", "g"], ["b", "d", "f"]]
        assert [m.id for m in leftovers] == ["h"]

    def test_first_candidate_wins_ties(self):
        attendees = [
            make_attendee("seed", "Yoga"),
            make_attendee("x", "Chess"),
            make_attendee("y", "Jazz"),
        ]

        groups, _ = build_groups(attendees, min_size=2, max_size=2)

        assert member_ids(groups[0]) == ["seed", "x"]

    def test_shared_interests_are_set_on_formed_groups(self):
        attendees = [make_attendee("a", "Yoga"), make_attendee("b", "Yoga", "Chess")]

        groups, _ = build_groups(attendees, min_size=2, max_size=2)

        assert groups[0].shared_interests == ["Yoga"]

    def test_fewer_attendees_than_min_size(self):
        groups, leftovers = build_groups(make_blank_attendees(3), min_size=4, max_size=6)

        assert groups == []
        assert len(leftovers) == 3


# =============================================================================
# redistribute_leftovers
# =============================================================================


class TestRedistributeLeftovers:
    """Tests for leftover placement."""

    def test_leftover_joins_most_similar_group(self):
        groups = [
            AttendeeGroup(members=[make_attendee("y1", "Yoga"), make_attendee("y2", "Yoga")]),
            AttendeeGroup(members=[make_attendee("c1", "Chess"), make_attendee("c2", "Chess")]),
        ]

        redistribute_leftovers(groups, [make_attendee("c3", "Chess")], max_size=3)

        assert member_ids(groups[1]) == ["c1", "c2", "c3"]
        assert groups[0].size == 2

    def test_full_groups_are_skipped(self):
        groups = [
            AttendeeGroup(members=[make_attendee("c1", "Chess"), make_attendee("c2", "Chess")]),
            AttendeeGroup(members=[make_attendee("y1", "Yoga")]),
        ]

        redistribute_leftovers(groups, [make_attendee("c3", "Chess")], max_size=2)

        assert member_ids(groups[1]) == ["y1", "c3"]

    def test_first_group_wins_ties(self):
        groups = [
            AttendeeGroup(members=[make_attendee("a", "Yoga")]),
            AttendeeGroup(members=[make_attendee("b", "Chess")]),
        ]

        redistribute_leftovers(groups, [make_attendee("x", "Jazz")], max_size=4)

        assert member_ids(groups[0]) == ["a", "x"]

    def test_all_groups_full_merges_into_last_group(self, caplog):
        groups = [
            AttendeeGroup(members=make_blank_attendees(2)),
            AttendeeGroup(members=[make_attendee("b0"), make_attendee("b1")]),
        ]

        with caplog.at_level(logging.WARNING, logger="app.services.group_builder"):
            redistribute_leftovers(groups, [make_attendee("late")], max_size=2)

        assert member_ids(groups[1]) == ["b0", "b1", "late"]
        assert groups[0].size == 2
        assert "max size" in caplog.text

    def test_shared_interests_refresh_after_each_placement(self):
        groups = [AttendeeGroup(members=[make_attendee("a", "Jazz"), make_attendee("b", "Chess")])]

        redistribute_leftovers(groups, [make_attendee("c", "Jazz")], max_size=4)

        assert groups[0].shared_interests == ["Jazz"]

    def test_no_groups_creates_one(self):
        groups: list[AttendeeGroup] = []

        redistribute_leftovers(groups, make_blank_attendees(2), max_size=4)

        assert len(groups) == 1
        assert member_ids(groups[0]) == ["a0", "a1"]

    def test_no_leftovers_is_a_no_op(self):
        groups = [AttendeeGroup(members=make_blank_attendees(4))]

        result = redistribute_leftovers(groups, [], max_size=4)

        assert result is groups
        assert groups[0].size == 4
