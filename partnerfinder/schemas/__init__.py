from .event import EventCreatorPublic, EventEnvelope, EventPublic, EventsPublic
from .live_location import LiveLocationPublic, LiveLocationsPublic
from .relationship import (
    FriendRequestPublic,
    FriendRequestsPublic,
    FriendsPublic,
    RelationshipRequestResult,
    RelationshipStatePublic,
    RelationshipStatusPublic,
    UserIdIn,
)
from .user import PartnersPublic, UserEnvelope, UserPublic, UserWithMessage

__all__ = [
    "EventCreatorPublic",
    "EventEnvelope",
    "EventPublic",
    "EventsPublic",
    "FriendRequestPublic",
    "FriendRequestsPublic",
    "FriendsPublic",
    "LiveLocationPublic",
    "LiveLocationsPublic",
    "PartnersPublic",
    "RelationshipRequestResult",
    "RelationshipStatePublic",
    "RelationshipStatusPublic",
    "UserEnvelope",
    "UserIdIn",
    "UserPublic",
    "UserWithMessage",
]
