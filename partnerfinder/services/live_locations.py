from datetime import timedelta
from logging import getLogger
from uuid import UUID

from sqlmodel import Session

from partnerfinder.converters import live_location as live_location_converters
from partnerfinder.core.config import settings
from partnerfinder.crud import live_location as live_location_crud
from partnerfinder.exceptions.base import AppError
from partnerfinder.models.auth_schemas import Message
from partnerfinder.models.live_location import LiveLocationUpdate
from partnerfinder.schemas.live_location import LiveLocationPublic
from partnerfinder.services import events as events_service
from partnerfinder.utils import now_utc_naive

logger = getLogger(__name__)


def update_live_location(
    *,
    session: Session,
    event_id: UUID,
    user_id: UUID,
    location_in: LiveLocationUpdate,
) -> Message:
    """
    Store the caller's current position for an event.

    Raises:
        EventNotFound: If the event is unknown or invisible to the user.
        NotAnEventParticipant: If the user has not joined the event.
        AppError: For any other (unexpected) errors.
    """
    events_service.require_participant(session=session, event_id=event_id, user_id=user_id)
    try:
        live_location_crud.upsert_live_location(
            session=session,
            event_id=event_id,
            user_id=user_id,
            location_in=location_in,
        )
        session.commit()
    except Exception as e:
        session.rollback()
        raise AppError from e
    return Message(message="Live location updated.")


def stop_sharing(
    *,
    session: Session,
    event_id: UUID,
    user_id: UUID,
) -> Message:
    """
    Remove the caller's position for an event. Stopping twice is a no-op.

    Raises:
        EventNotFound: If the event is unknown or invisible to the user.
    """
    events_service.get_visible_event(session=session, event_id=event_id, viewer_id=user_id)
    try:
        removed = live_location_crud.delete_live_location(
            session=session, event_id=event_id, user_id=user_id
        )
        session.commit()
    except Exception as e:
        session.rollback()
        raise AppError from e
    if removed:
        logger.info("User %s stopped sharing their location for event %s", user_id, event_id)
    return Message(message="Live location sharing stopped.")


def list_live_locations(
    *,
    session: Session,
    event_id: UUID,
    viewer_id: UUID,
) -> list[LiveLocationPublic]:
    """
    Get the current positions shared for an event.

    Positions older than the configured time-to-live are left out.

    Raises:
        EventNotFound: If the event is unknown or invisible to the viewer.
        NotAnEventParticipant: If the viewer has not joined the event.
    """
    events_service.require_participant(session=session, event_id=event_id, user_id=viewer_id)
    updated_since = now_utc_naive() - timedelta(seconds=settings.LIVE_LOCATION_TTL_SECONDS)
    rows = live_location_crud.get_live_locations(
        session=session, event_id=event_id, updated_since=updated_since
    )
    return [
        live_location_converters.to_public(location, user=user, viewer_id=viewer_id)
        for location, user in rows
    ]
