from datetime import datetime
from uuid import UUID

from partnerfinder.models.utils import CamelModel

__all__ = [
    "LiveLocationPublic",
    "LiveLocationsPublic",
]


class LiveLocationPublic(CamelModel):
    user_id: UUID
    username: str
    lat: float
    lng: float
    accuracy: float | None
    heading: float | None
    speed: float | None
    updated_at: datetime
    is_me: bool = False


class LiveLocationsPublic(CamelModel):
    locations: list[LiveLocationPublic]
