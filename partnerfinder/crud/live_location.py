from datetime import datetime
from uuid import UUID

from sqlmodel import Session, col, select

from partnerfinder.models.live_location import LiveLocation, LiveLocationUpdate
from partnerfinder.models.user import User
from partnerfinder.utils import now_utc_naive


def upsert_live_location(
    *,
    session: Session,
    event_id: UUID,
    user_id: UUID,
    location_in: LiveLocationUpdate,
) -> LiveLocation:
    """
    Store the latest fix of a user for an event, replacing any previous one.

    Parameters:
        session (Session): The database session.
        event_id (UUID): The event the fix belongs to.
        user_id (UUID): The sharing user.
        location_in (LiveLocationUpdate): The new fix.
    Returns:
        LiveLocation: The stored fix.
    """
    fix_data = location_in.model_dump()
    location = session.get(LiveLocation, (event_id, user_id))
    if location is None:
        location = LiveLocation(event_id=event_id, user_id=user_id, **fix_data)
    else:
        location.sqlmodel_update(fix_data)
    location.updated_at = now_utc_naive()
    session.add(location)
    session.flush()
    return location


def delete_live_location(
    *,
    session: Session,
    event_id: UUID,
    user_id: UUID,
) -> bool:
    """
    Remove the fix of a user for an event.

    Returns:
        bool: True if a fix was removed, False if the user was not sharing.
    """
    location = session.get(LiveLocation, (event_id, user_id))
    if location is None:
        return False
    session.delete(location)
    session.flush()
    return True


def get_live_locations(
    *,
    session: Session,
    event_id: UUID,
    updated_since: datetime,
) -> list[tuple[LiveLocation, User]]:
    """
    Get the current fixes for an event together with the sharing users.

    Parameters:
        session (Session): The database session.
        event_id (UUID): The event to list fixes for.
        updated_since (datetime): Fixes older than this are left out.
    Returns:
        list[tuple[LiveLocation, User]]: Fixes with their users, most recent first.
    """
    stmt = (
        select(LiveLocation, User)
        .join(User, col(User.id) == LiveLocation.user_id)
        .where(
            LiveLocation.event_id == event_id,
            col(LiveLocation.updated_at) >= updated_since,
        )
        .order_by(col(LiveLocation.updated_at).desc())
    )
    return list(session.exec(stmt).all())
