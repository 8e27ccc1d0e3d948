from datetime import datetime
from uuid import UUID

from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

from partnerfinder.models.utils import CamelModel
from partnerfinder.utils import now_utc_naive

__all__ = [
    "LiveLocationUpdate",
    "LiveLocation",
]


# Out-of-range coordinates are rejected rather than clamped
class LiveLocationUpdate(CamelModel):
    lat: float = PydanticField(ge=-90, le=90)
    lng: float = PydanticField(ge=-180, le=180)
    accuracy: float | None = PydanticField(default=None, ge=0)
    heading: float | None = PydanticField(default=None, ge=0, le=360)
    speed: float | None = PydanticField(default=None, ge=0)


# Latest fix per (event, user); overwritten on every update
class LiveLocation(SQLModel, table=True):
    event_id: UUID = Field(foreign_key="event.id", primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", primary_key=True)
    lat: float
    lng: float
    accuracy: float | None = None
    heading: float | None = None
    speed: float | None = None
    updated_at: datetime = Field(default_factory=now_utc_naive, index=True)
