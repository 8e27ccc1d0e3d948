from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlmodel import Session

from partnerfinder.core.enums import EventVisibility
from partnerfinder.exceptions.event_exceptions import EventFullError, EventNotFound
from partnerfinder.models.event import Event, EventCreate
from partnerfinder.models.user import User
from partnerfinder.models.utils import GeoCoords
from partnerfinder.services import events as events_service
from partnerfinder.services import friends as friends_services


def _make_friends(session: Session, user: User, other: User) -> None:
    friends_services.request_relationship(
        session=session, requester_id=user.id, target_id=other.id
    )
    friends_services.accept_relationship(
        session=session, accepter_id=other.id, from_user_id=user.id
    )


def test_create_event_owner_joins(
    *,
    db_transaction: Session,
    user_factory: Callable[..., User],
):
    owner = user_factory()
    starts_at = datetime(2030, 5, 1, 18, 0, tzinfo=timezone(timedelta(hours=2)))

    event = events_service.create_event(
        session=db_transaction,
        owner_id=owner.id,
        event_in=EventCreate(
            title="Evening doubles",
            starts_at=starts_at,
            location_coords=GeoCoords(lat=52.09, lng=5.12),
            max_participants=4,
        ),
    )

    assert event.owner
    assert event.joined
    assert event.participants_count == 1
    assert event.created_by is not None
    assert event.created_by.id == owner.id
    assert event.location_coords == GeoCoords(lat=52.09, lng=5.12)
    assert event.starts_at == datetime(2030, 5, 1, 16, 0)


def test_friends_only_event_visibility(
    *,
    db_transaction: Session,
    user_factory: Callable[..., User],
    event_factory: Callable[..., Event],
):
    owner = user_factory()
    friend = user_factory()
    stranger = user_factory()
    _make_friends(db_transaction, owner, friend)
    event = event_factory(owner_id=owner.id, visibility=EventVisibility.FRIENDS)

    assert [e.id for e in events_service.list_events(session=db_transaction, viewer_id=friend.id)] == [
        event.id
    ]
    assert events_service.list_events(session=db_transaction, viewer_id=stranger.id) == []
    with pytest.raises(EventNotFound):
        events_service.join_event(session=db_transaction, event_id=event.id, user_id=stranger.id)


def test_join_and_leave(
    *,
    db_transaction: Session,
    user_factory: Callable[..., User],
    event_factory: Callable[..., Event],
):
    owner = user_factory()
    player = user_factory()
    event = event_factory(owner_id=owner.id)

    joined = events_service.join_event(session=db_transaction, event_id=event.id, user_id=player.id)
    again = events_service.join_event(session=db_transaction, event_id=event.id, user_id=player.id)

    assert joined.joined
    assert not joined.owner
    assert joined.participants_count == 1
    assert again.participants_count == 1

    left = events_service.leave_event(session=db_transaction, event_id=event.id, user_id=player.id)
    assert not left.joined
    assert left.participants_count == 0


def test_join_full_event(
    *,
    db_transaction: Session,
    user_factory: Callable[..., User],
    event_factory: Callable[..., Event],
    event_participant_factory: Callable[..., object],
):
    owner = user_factory()
    event = event_factory(owner_id=owner.id, max_participants=1)
    event_participant_factory(event_id=event.id, user_id=owner.id)

    with pytest.raises(EventFullError):
        events_service.join_event(
            session=db_transaction, event_id=event.id, user_id=user_factory().id
        )


def test_unknown_event(
    *,
    db_transaction: Session,
    user_factory: Callable[..., User],
):
    with pytest.raises(EventNotFound):
        events_service.get_visible_event(
            session=db_transaction, event_id=uuid4(), viewer_id=user_factory().id
        )
