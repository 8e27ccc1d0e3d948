from uuid import UUID

from partnerfinder.converters.user import to_coords
from partnerfinder.models.event import Event
from partnerfinder.models.user import User
from partnerfinder.schemas.event import EventCreatorPublic, EventPublic


def to_public(
    event: Event,
    *,
    viewer_id: UUID,
    participants_count: int,
    joined: bool,
    owner: User | None,
) -> EventPublic:
    """
    Converts an Event object to the representation shown to one viewer.

    Parameters:
        event (Event): The event to convert.
        viewer_id (UUID): The user the event is shown to.
        participants_count (int): Number of users that joined the event.
        joined (bool): Whether the viewer joined the event.
        owner (User | None): The creator of the event, if still present.
    Returns:
        EventPublic: The converted event.
    """
    created_by = (
        EventCreatorPublic(id=owner.id, username=owner.username, email=owner.email)
        if owner
        else None
    )
    return EventPublic(
        id=event.id,
        title=event.title,
        sport=event.sport,
        description=event.description,
        starts_at=event.starts_at,
        location_name=event.location_name,
        location_coords=to_coords(event.location_lat, event.location_lng),
        visibility=event.visibility,
        max_participants=event.max_participants,
        participants_count=participants_count,
        joined=joined,
        owner=event.owner_id == viewer_id,
        created_by=created_by,
    )
