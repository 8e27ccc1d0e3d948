from enum import Enum, unique


@unique
class RelationshipStatus(str, Enum):
    NONE = "none"
    PENDING = "pending"
    ACCEPTED = "accepted"


@unique
class EventVisibility(str, Enum):
    PUBLIC = "public"
    FRIENDS = "friends"
