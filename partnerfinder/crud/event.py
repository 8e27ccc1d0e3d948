from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from partnerfinder.core.enums import EventVisibility
from partnerfinder.models.event import Event, EventCreate, EventParticipant


def create_event(
    *,
    session: Session,
    event_create: EventCreate,
    owner_id: UUID,
) -> Event:
    """
    Create a new event owned by the given user.

    Parameters:
        session (Session): The database session.
        event_create (EventCreate): The event data.
        owner_id (UUID): The ID of the creating user.
    Returns:
        Event: The created event.
    """
    coords = event_create.location_coords
    db_obj = Event(
        **event_create.model_dump(exclude={"location_coords"}),
        location_lat=coords.lat if coords else None,
        location_lng=coords.lng if coords else None,
        owner_id=owner_id,
    )
    session.add(db_obj)
    session.flush()
    return db_obj


def get_event(*, session: Session, event_id: UUID) -> Event | None:
    return session.get(Event, event_id)


def get_visible_events(
    *,
    session: Session,
    viewer_id: UUID,
    friend_ids: list[UUID],
) -> list[Event]:
    """
    Get the events a user may see, soonest first.

    Public events are visible to everyone. Friends-only events are visible to
    their owner and to the owner's accepted friends.

    Parameters:
        session (Session): The database session.
        viewer_id (UUID): The ID of the viewing user.
        friend_ids (list[UUID]): IDs of the viewer's accepted friends.
    Returns:
        list[Event]: The visible events.
    """
    stmt = (
        select(Event)
        .where(
            or_(
                Event.visibility == EventVisibility.PUBLIC,
                col(Event.owner_id).in_([viewer_id, *friend_ids]),
            )
        )
        .order_by(col(Event.starts_at), col(Event.created_at))
    )
    return list(session.exec(stmt).all())


def get_participant(
    *,
    session: Session,
    event_id: UUID,
    user_id: UUID,
) -> EventParticipant | None:
    return session.get(EventParticipant, (event_id, user_id))


def count_participants(*, session: Session, event_id: UUID) -> int:
    stmt = select(func.count()).select_from(EventParticipant).where(
        EventParticipant.event_id == event_id
    )
    return session.exec(stmt).one()


def get_participant_counts(
    *,
    session: Session,
    event_ids: list[UUID],
) -> dict[UUID, int]:
    if not event_ids:
        return {}
    stmt = (
        select(EventParticipant.event_id, func.count())
        .where(col(EventParticipant.event_id).in_(event_ids))
        .group_by(col(EventParticipant.event_id))
    )
    return {event_id: count for event_id, count in session.exec(stmt).all()}


def get_joined_event_ids(
    *,
    session: Session,
    user_id: UUID,
    event_ids: list[UUID],
) -> set[UUID]:
    if not event_ids:
        return set()
    stmt = select(EventParticipant.event_id).where(
        EventParticipant.user_id == user_id,
        col(EventParticipant.event_id).in_(event_ids),
    )
    return set(session.exec(stmt).all())


def add_participant(
    *,
    session: Session,
    event_id: UUID,
    user_id: UUID,
) -> EventParticipant:
    """
    Add a user to an event.

    Raises:
        IntegrityError: If the user already joined the event.
    """
    participant = EventParticipant(event_id=event_id, user_id=user_id)
    session.add(participant)
    session.flush()
    return participant


def remove_participant(
    *,
    session: Session,
    event_id: UUID,
    user_id: UUID,
) -> bool:
    """
    Remove a user from an event.

    Returns:
        bool: True if the user was a participant, False otherwise.
    """
    participant = get_participant(session=session, event_id=event_id, user_id=user_id)
    if participant is None:
        return False
    session.delete(participant)
    session.flush()
    return True
