from uuid import UUID

from partnerfinder.models.utils import CamelModel, GeoCoords

__all__ = [
    "UserPublic",
    "UserEnvelope",
    "UserWithMessage",
    "PartnersPublic",
]


class UserPublic(CamelModel):
    id: UUID
    email: str
    username: str
    full_name: str
    skill: str | None
    location: str | None
    location_coords: GeoCoords | None
    sports: list[str]


class UserEnvelope(CamelModel):
    user: UserPublic


class UserWithMessage(CamelModel):
    message: str
    user: UserPublic


class PartnersPublic(CamelModel):
    partners: list[UserPublic]
