from datetime import datetime
from uuid import UUID

from partnerfinder.core.enums import EventVisibility
from partnerfinder.models.utils import CamelModel, GeoCoords

__all__ = [
    "EventCreatorPublic",
    "EventPublic",
    "EventEnvelope",
    "EventsPublic",
]


class EventCreatorPublic(CamelModel):
    id: UUID
    username: str
    email: str


class EventPublic(CamelModel):
    id: UUID
    title: str
    sport: str | None
    description: str | None
    starts_at: datetime
    location_name: str | None
    location_coords: GeoCoords | None
    visibility: EventVisibility
    max_participants: int
    participants_count: int
    joined: bool
    owner: bool
    created_by: EventCreatorPublic | None


class EventEnvelope(CamelModel):
    event: EventPublic


class EventsPublic(CamelModel):
    events: list[EventPublic]
