from datetime import datetime, timezone
from logging import getLogger
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from partnerfinder.converters import event as event_converters
from partnerfinder.core.enums import EventVisibility
from partnerfinder.crud import event as event_crud
from partnerfinder.crud import live_location as live_location_crud
from partnerfinder.crud import relationship as relationship_crud
from partnerfinder.crud import user as users_crud
from partnerfinder.exceptions.base import AppError
from partnerfinder.exceptions.event_exceptions import (
    EventFullError,
    EventNotFound,
    NotAnEventParticipant,
)
from partnerfinder.models.event import Event, EventCreate
from partnerfinder.schemas.event import EventPublic

logger = getLogger(__name__)


def _as_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def get_visible_event(*, session: Session, event_id: UUID, viewer_id: UUID) -> Event:
    """
    Get an event the viewer is allowed to see.

    Raises:
        EventNotFound: If the event does not exist or is a friends-only event
            of someone the viewer is not friends with.
    """
    event = event_crud.get_event(session=session, event_id=event_id)
    if event is None:
        raise EventNotFound(event_id)
    if event.visibility == EventVisibility.FRIENDS and event.owner_id != viewer_id:
        friend_ids = relationship_crud.get_friend_ids(session=session, user_id=viewer_id)
        if event.owner_id not in friend_ids:
            raise EventNotFound(event_id)
    return event


def require_participant(*, session: Session, event_id: UUID, user_id: UUID) -> Event:
    """
    Get an event the user has joined.

    Raises:
        EventNotFound: If the event is unknown or invisible to the user.
        NotAnEventParticipant: If the user has not joined the event.
    """
    event = get_visible_event(session=session, event_id=event_id, viewer_id=user_id)
    participant = event_crud.get_participant(
        session=session, event_id=event_id, user_id=user_id
    )
    if participant is None:
        raise NotAnEventParticipant(user_id, event_id)
    return event


def _to_public(*, session: Session, event: Event, viewer_id: UUID) -> EventPublic:
    joined = (
        event_crud.get_participant(session=session, event_id=event.id, user_id=viewer_id)
        is not None
    )
    return event_converters.to_public(
        event,
        viewer_id=viewer_id,
        participants_count=event_crud.count_participants(session=session, event_id=event.id),
        joined=joined,
        owner=users_crud.get_user_by_id(session=session, user_id=event.owner_id),
    )


def create_event(
    *,
    session: Session,
    owner_id: UUID,
    event_in: EventCreate,
) -> EventPublic:
    """
    Create an event; its creator joins it right away.

    Raises:
        AppError: For any (unexpected) database errors.
    """
    event_in = event_in.model_copy(update={"starts_at": _as_utc_naive(event_in.starts_at)})
    try:
        event = event_crud.create_event(
            session=session, event_create=event_in, owner_id=owner_id
        )
        event_crud.add_participant(session=session, event_id=event.id, user_id=owner_id)
        session.commit()
    except Exception as e:
        session.rollback()
        raise AppError from e
    session.refresh(event)
    logger.info("User %s created event %s", owner_id, event.id)
    return _to_public(session=session, event=event, viewer_id=owner_id)


def list_events(*, session: Session, viewer_id: UUID) -> list[EventPublic]:
    """
    Get all events visible to a user, soonest first, with membership details.
    """
    friend_ids = relationship_crud.get_friend_ids(session=session, user_id=viewer_id)
    events = event_crud.get_visible_events(
        session=session, viewer_id=viewer_id, friend_ids=friend_ids
    )
    event_ids = [event.id for event in events]
    counts = event_crud.get_participant_counts(session=session, event_ids=event_ids)
    joined_ids = event_crud.get_joined_event_ids(
        session=session, user_id=viewer_id, event_ids=event_ids
    )
    owners = users_crud.get_users_by_ids(
        session=session, user_ids=list({event.owner_id for event in events})
    )
    return [
        event_converters.to_public(
            event,
            viewer_id=viewer_id,
            participants_count=counts.get(event.id, 0),
            joined=event.id in joined_ids,
            owner=owners.get(event.owner_id),
        )
        for event in events
    ]


def join_event(*, session: Session, event_id: UUID, user_id: UUID) -> EventPublic:
    """
    Join an event. Joining twice is a no-op.

    Raises:
        EventNotFound: If the event is unknown or invisible to the user.
        EventFullError: If the event has reached its participant limit.
    """
    event = get_visible_event(session=session, event_id=event_id, viewer_id=user_id)
    already_joined = event_crud.get_participant(
        session=session, event_id=event_id, user_id=user_id
    )
    if already_joined is None:
        participants = event_crud.count_participants(session=session, event_id=event_id)
        if participants >= event.max_participants:
            raise EventFullError(event_id)
        try:
            event_crud.add_participant(session=session, event_id=event_id, user_id=user_id)
            session.commit()
        except IntegrityError:
            # Joined concurrently from another request
            session.rollback()
        except Exception as e:
            session.rollback()
            raise AppError from e
        logger.info("User %s joined event %s", user_id, event_id)
    return _to_public(session=session, event=event, viewer_id=user_id)


def leave_event(*, session: Session, event_id: UUID, user_id: UUID) -> EventPublic:
    """
    Leave an event. Any live location the user shared for it is removed too.

    Raises:
        EventNotFound: If the event is unknown or invisible to the user.
    """
    event = get_visible_event(session=session, event_id=event_id, viewer_id=user_id)
    try:
        live_location_crud.delete_live_location(
            session=session, event_id=event_id, user_id=user_id
        )
        left = event_crud.remove_participant(
            session=session, event_id=event_id, user_id=user_id
        )
        session.commit()
    except Exception as e:
        session.rollback()
        raise AppError from e
    if left:
        logger.info("User %s left event %s", user_id, event_id)
    return _to_public(session=session, event=event, viewer_id=user_id)
