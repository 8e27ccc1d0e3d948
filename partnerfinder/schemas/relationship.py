from datetime import datetime

from pydantic import Field

from partnerfinder.core.enums import RelationshipStatus
from partnerfinder.models.utils import CamelModel

from .user import UserPublic

__all__ = [
    "RelationshipStatusPublic",
    "RelationshipRequestResult",
    "RelationshipStatePublic",
    "FriendsPublic",
    "FriendRequestPublic",
    "FriendRequestsPublic",
    "UserIdIn",
]


class UserIdIn(CamelModel):
    user_id: str | None = None


class RelationshipStatusPublic(CamelModel):
    status: RelationshipStatus


class RelationshipRequestResult(RelationshipStatusPublic):
    # Only used to pick the response code, never serialized
    created: bool = Field(default=False, exclude=True)


class RelationshipStatePublic(RelationshipStatusPublic):
    can_message: bool


class FriendsPublic(CamelModel):
    friends: list[UserPublic]


class FriendRequestPublic(CamelModel):
    from_user: UserPublic = Field(alias="from")
    created_at: datetime


class FriendRequestsPublic(CamelModel):
    requests: list[FriendRequestPublic]
