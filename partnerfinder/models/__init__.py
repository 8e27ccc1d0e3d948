from .utils import *
from .user import *
from .auth_schemas import *
from .relationship import *
from .event import *
from .live_location import *

__all__ = [
    "CamelModel",
    "GeoCoords",
    "User",
    "UserBase",
    "UserRegister",
    "UserLogin",
    "UserUpdateMe",
    "UpdatePassword",
    "Message",
    "TokenPayload",
    "UserRelationship",
    "Event",
    "EventCreate",
    "EventParticipant",
    "LiveLocation",
    "LiveLocationUpdate",
]
