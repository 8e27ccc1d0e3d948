import uuid
from datetime import datetime

from pydantic import Field as PydanticField
from sqlalchemy import Enum as SAEnum
from sqlmodel import Column, Field, SQLModel

from partnerfinder.core.enums import EventVisibility
from partnerfinder.models.utils import CamelModel, GeoCoords
from partnerfinder.utils import now_utc_naive

__all__ = [
    "EventCreate",
    "Event",
    "EventParticipant",
]


# Properties to receive on event creation
class EventCreate(CamelModel):
    title: str = PydanticField(min_length=1, max_length=255)
    sport: str | None = PydanticField(default=None, max_length=64)
    description: str | None = PydanticField(default=None, max_length=2000)
    starts_at: datetime
    location_name: str | None = PydanticField(default=None, max_length=255)
    location_coords: GeoCoords | None = None
    visibility: EventVisibility = EventVisibility.PUBLIC
    max_participants: int = PydanticField(default=10, ge=1, le=1000)


class Event(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(max_length=255)
    sport: str | None = Field(default=None, max_length=64)
    description: str | None = Field(default=None, max_length=2000)
    starts_at: datetime = Field(index=True)
    location_name: str | None = Field(default=None, max_length=255)
    location_lat: float | None = Field(default=None)
    location_lng: float | None = Field(default=None)
    visibility: EventVisibility = Field(
        default=EventVisibility.PUBLIC,
        sa_column=Column(SAEnum(EventVisibility, native_enum=False), nullable=False),
    )
    max_participants: int = Field(default=10)
    owner_id: uuid.UUID = Field(foreign_key="user.id", index=True)
    created_at: datetime = Field(default_factory=now_utc_naive)


class EventParticipant(SQLModel, table=True):
    event_id: uuid.UUID = Field(foreign_key="event.id", primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="user.id", primary_key=True)
    joined_at: datetime = Field(default_factory=now_utc_naive)
