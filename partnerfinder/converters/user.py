from partnerfinder.models.user import User
from partnerfinder.models.utils import GeoCoords
from partnerfinder.schemas.user import UserPublic


def to_coords(lat: float | None, lng: float | None) -> GeoCoords | None:
    if lat is None or lng is None:
        return None
    return GeoCoords(lat=lat, lng=lng)


def to_public(user: User) -> UserPublic:
    """
    Converts a User object to its public representation.

    The password hash never leaves the server; coordinates are folded into a
    single ``locationCoords`` object.
    """
    User.model_validate(user)
    return UserPublic(
        id=user.id,
        email=user.email,
        username=user.username,
        full_name=user.full_name,
        skill=user.skill,
        location=user.location,
        location_coords=to_coords(user.location_lat, user.location_lng),
        sports=list(user.sports or []),
    )
