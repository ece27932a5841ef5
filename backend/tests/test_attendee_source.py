"""Tests for AttendeeSource."""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.schemas.clustering import Attendee
from app.services.attendee_source import AttendeeSource, to_attendee
from app.services.breakout_store import BreakoutPersistenceError


def create_mock_profile(
    full_name: str | None = "Ada Lovelace",
    avatar_url: str | None = "https://cdn.example.com/ada.png",
    interests: list[str] | None = None,
) -> MagicMock:
    """Create a mock profile with loaded interest links."""
    profile = MagicMock()
    profile.id = uuid.uuid4()
    profile.full_name = full_name
    profile.avatar_url = avatar_url
    links = []
    for name in interests or []:
        link = MagicMock()
        link.interest.name = name
        links.append(link)
    profile.interest_links = links
    return profile


def create_mock_db_returning_rsvps(profiles: list[MagicMock]) -> AsyncMock:
    """Create a mock session whose query yields one RSVP per profile."""
    rsvps = []
    for profile in profiles:
        rsvp = MagicMock()
        rsvp.profile = profile
        rsvps.append(rsvp)

    mock_db = AsyncMock()
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = rsvps
    mock_db.execute.return_value = mock_result
    return mock_db


class TestToAttendee:
    """Tests for profile conversion."""

    def test_maps_profile_fields(self):
        profile = create_mock_profile(interests=["Chess", "Jazz"])

        attendee = to_attendee(profile)

        assert attendee == Attendee(
            id=profile.id,
            display_name="Ada Lovelace",
            avatar_ref="https://cdn.example.com/ada.png",
            interests=("Chess", "Jazz"),
        )

    def test_missing_name_becomes_empty_string(self):
        attendee = to_attendee(create_mock_profile(full_name=None, avatar_url=None))

        assert attendee.display_name == ""
        assert attendee.avatar_ref is None
        assert attendee.interests == ()


class TestListAttendees:
    """Tests for loading an event's attendees."""

    @pytest.mark.asyncio
    async def test_returns_attendees_in_query_order(self):
        profiles = [
            create_mock_profile(full_name="First", interests=["Yoga"]),
            create_mock_profile(full_name="Second", interests=["Coding"]),
        ]
        mock_db = create_mock_db_returning_rsvps(profiles)

        attendees = await AttendeeSource().list_attendees(mock_db, uuid.uuid4())

        assert [a.display_name for a in attendees] == ["First", "Second"]
        assert [a.interests for a in attendees] == [("Yoga",), ("Coding",)]

    @pytest.mark.asyncio
    async def test_no_rsvps_returns_empty_list(self):
        mock_db = create_mock_db_returning_rsvps([])

        assert await AttendeeSource().list_attendees(mock_db, uuid.uuid4()) == []

    @pytest.mark.asyncio
    async def test_query_filters_by_event_and_status(self):
        mock_db = create_mock_db_returning_rsvps([])
        event_id = uuid.uuid4()

        await AttendeeSource(statuses=["going", "maybe"]).list_attendees(mock_db, event_id)

        statement = mock_db.execute.await_args.args[0]
        compiled = statement.compile()
        assert "event_attendees.status IN" in str(compiled)
        assert event_id in compiled.params.values()
        assert ["going", "maybe"] in compiled.params.values()

    @pytest.mark.asyncio
    async def test_query_failure_is_wrapped_with_event_id(self):
        mock_db = AsyncMock()
        mock_db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))
        event_id = uuid.uuid4()

        with pytest.raises(BreakoutPersistenceError) as exc_info:
            await AttendeeSource().list_attendees(mock_db, event_id)

        assert exc_info.value.event_id == event_id
        assert exc_info.value.operation == "load attendees"
        assert isinstance(exc_info.value.cause, OperationalError)

    def test_default_statuses_come_from_settings(self):
        assert AttendeeSource().statuses == ["going"]

    def test_explicit_empty_statuses_are_kept(self):
        assert AttendeeSource(statuses=[]).statuses == []
