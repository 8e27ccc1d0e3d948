from uuid import UUID

from partnerfinder.models.live_location import LiveLocation
from partnerfinder.models.user import User
from partnerfinder.schemas.live_location import LiveLocationPublic


def to_public(location: LiveLocation, *, user: User, viewer_id: UUID) -> LiveLocationPublic:
    return LiveLocationPublic(
        user_id=location.user_id,
        username=user.username,
        lat=location.lat,
        lng=location.lng,
        accuracy=location.accuracy,
        heading=location.heading,
        speed=location.speed,
        updated_at=location.updated_at,
        is_me=location.user_id == viewer_id,
    )
