"""Property-based tests for interest similarity scoring.

Uses Hypothesis to check the bounds and symmetry of pair similarity and
the averaging behaviour of candidate affinity.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from app.schemas.clustering import Attendee
from app.services.interest_similarity import candidate_affinity, pair_similarity

# =============================================================================
# Custom Strategies
# =============================================================================

INTEREST_VOCABULARY = [
    "Yoga", "Hiking", "Coding", "Chess", "Cooking",
    "Running", "Jazz", "Painting", "Photography", "Gaming",
]


def interest_lists() -> st.SearchStrategy[list[str]]:
    """Generate interest lists drawn from a small shared vocabulary."""
    return st.lists(st.sampled_from(INTEREST_VOCABULARY), max_size=6)


@st.composite
def attendees(draw, attendee_id: str | None = None) -> Attendee:
    """Generate a single attendee."""
    return Attendee(
        id=attendee_id or draw(st.uuids()),
        display_name=draw(st.text(max_size=10)),
        interests=tuple(draw(interest_lists())),
    )


def make_attendee(attendee_id: str, *interests: str) -> Attendee:
    return Attendee(id=attendee_id, display_name=attendee_id, interests=interests)


# =============================================================================
# pair_similarity
# =============================================================================


class TestPairSimilarityProperties:
    """Property tests for pair_similarity."""

    @given(a=attendees(), b=attendees())
    @settings(max_examples=100)
    def test_similarity_is_within_bounds(self, a: Attendee, b: Attendee):
        score = pair_similarity(a, b)
        assert 0.0 <= score <= 1.0

    @given(a=attendees(), b=attendees())
    @settings(max_examples=100)
    def test_similarity_is_symmetric(self, a: Attendee, b: Attendee):
        assert pair_similarity(a, b) == pair_similarity(b, a)

    @given(interests=st.lists(st.sampled_from(INTEREST_VOCABULARY), min_size=1, max_size=6))
    @settings(max_examples=100)
    def test_identical_non_empty_interests_score_one(self, interests: list[str]):
        a = Attendee(id="a", display_name="A", interests=tuple(interests))
        # Same set in a different order
        b = Attendee(id="b", display_name="B", interests=tuple(reversed(interests)))
        assert pair_similarity(a, b) == 1.0

    @given(data=st.data())
    @settings(max_examples=100)
    def test_disjoint_interests_score_zero(self, data):
        left = data.draw(st.sets(st.sampled_from(INTEREST_VOCABULARY[:5])))
        right = data.draw(st.sets(st.sampled_from(INTEREST_VOCABULARY[5:])))
        a = Attendee(id="a", display_name="A", interests=tuple(sorted(left)))
        b = Attendee(id="b", display_name="B", interests=tuple(sorted(right)))
        assert pair_similarity(a, b) == 0.0


class TestPairSimilarityExamples:
    """Example-based tests for pair_similarity."""

    def test_partial_overlap(self):
        a = make_attendee("a", "Yoga", "Hiking")
        b = make_attendee("b", "Yoga", "Coding")
        # 1 shared out of 3 distinct
        assert pair_similarity(a, b) == pytest.approx(1 / 3)

    def test_both_empty_is_zero(self):
        assert pair_similarity(make_attendee("a"), make_attendee("b")) == 0.0

    def test_one_empty_is_zero(self):
        assert pair_similarity(make_attendee("a", "Yoga"), make_attendee("b")) == 0.0

    def test_duplicate_interests_are_ignored(self):
        a = make_attendee("a", "Yoga", "Yoga", "Hiking")
        b = make_attendee("b", "Yoga", "Hiking")
        assert a.interests == ("Yoga", "Hiking")
        assert pair_similarity(a, b) == 1.0

    def test_interests_are_case_sensitive(self):
        assert pair_similarity(make_attendee("a", "yoga"), make_attendee("b", "Yoga")) == 0.0


# =============================================================================
# candidate_affinity
# =============================================================================


class TestCandidateAffinity:
    """Tests for candidate_affinity."""

    def test_empty_group_is_zero(self):
        assert candidate_affinity(make_attendee("c", "Yoga"), []) == 0.0

    def test_mean_of_pair_scores(self):
        candidate = make_attendee("c", "Yoga")
        members = [
            make_attendee("m1", "Yoga"),      # 1.0
            make_attendee("m2", "Coding"),    # 0.0
            make_attendee("m3", "Yoga", "Hiking"),  # 0.5
        ]
        assert candidate_affinity(candidate, members) == pytest.approx(0.5)

    @given(candidate=attendees(), members=st.lists(attendees(), max_size=8))
    @settings(max_examples=100)
    def test_affinity_is_within_bounds(self, candidate: Attendee, members: list[Attendee]):
        assert 0.0 <= candidate_affinity(candidate, members) <= 1.0
