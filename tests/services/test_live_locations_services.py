from collections.abc import Callable
from datetime import timedelta

import pytest
from sqlmodel import Session

from partnerfinder.crud import live_location as live_location_crud
from partnerfinder.exceptions.event_exceptions import NotAnEventParticipant
from partnerfinder.models.event import Event
from partnerfinder.models.live_location import LiveLocation, LiveLocationUpdate
from partnerfinder.models.user import User
from partnerfinder.services import events as events_service
from partnerfinder.services import live_locations as live_locations_service
from partnerfinder.utils import now_utc_naive


@pytest.fixture
def shared_event(
    db_transaction: Session,
    user_factory: Callable[..., User],
    event_factory: Callable[..., Event],
) -> tuple[Event, User, User]:
    owner = user_factory()
    player = user_factory()
    event = event_factory(owner_id=owner.id)
    for user in (owner, player):
        events_service.join_event(session=db_transaction, event_id=event.id, user_id=user.id)
    return event, owner, player


def test_update_overwrites_previous_fix(
    *,
    db_transaction: Session,
    shared_event: tuple[Event, User, User],
):
    event, owner, player = shared_event

    for lat in (52.0, 52.5):
        live_locations_service.update_live_location(
            session=db_transaction,
            event_id=event.id,
            user_id=player.id,
            location_in=LiveLocationUpdate(lat=lat, lng=5.1, accuracy=12),
        )

    locations = live_locations_service.list_live_locations(
        session=db_transaction, event_id=event.id, viewer_id=owner.id
    )
    assert len(locations) == 1
    assert locations[0].lat == 52.5
    assert locations[0].user_id == player.id
    assert locations[0].username == player.username
    assert not locations[0].is_me


def test_update_requires_participation(
    *,
    db_transaction: Session,
    user_factory: Callable[..., User],
    shared_event: tuple[Event, User, User],
):
    event, _, _ = shared_event

    with pytest.raises(NotAnEventParticipant):
        live_locations_service.update_live_location(
            session=db_transaction,
            event_id=event.id,
            user_id=user_factory().id,
            location_in=LiveLocationUpdate(lat=1, lng=1),
        )


def test_stale_locations_are_hidden(
    *,
    db_transaction: Session,
    shared_event: tuple[Event, User, User],
):
    event, owner, player = shared_event
    db_transaction.add(
        LiveLocation(
            event_id=event.id,
            user_id=player.id,
            lat=1,
            lng=1,
            updated_at=now_utc_naive() - timedelta(hours=1),
        )
    )
    db_transaction.commit()

    assert (
        live_locations_service.list_live_locations(
            session=db_transaction, event_id=event.id, viewer_id=owner.id
        )
        == []
    )


def test_stop_sharing_and_leave_remove_location(
    *,
    db_transaction: Session,
    shared_event: tuple[Event, User, User],
):
    event, owner, player = shared_event
    location_in = LiveLocationUpdate(lat=10, lng=10)

    live_locations_service.update_live_location(
        session=db_transaction, event_id=event.id, user_id=owner.id, location_in=location_in
    )
    live_locations_service.stop_sharing(
        session=db_transaction, event_id=event.id, user_id=owner.id
    )
    # Stopping twice is fine
    live_locations_service.stop_sharing(
        session=db_transaction, event_id=event.id, user_id=owner.id
    )
    assert not live_location_crud.delete_live_location(
        session=db_transaction, event_id=event.id, user_id=owner.id
    )

    live_locations_service.update_live_location(
        session=db_transaction, event_id=event.id, user_id=player.id, location_in=location_in
    )
    events_service.leave_event(session=db_transaction, event_id=event.id, user_id=player.id)
    assert db_transaction.get(LiveLocation, (event.id, player.id)) is None
