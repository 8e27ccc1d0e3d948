from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

from partnerfinder.models.utils import CamelModel, GeoCoords

__all__ = [
    "UserUpdateMe",
    "UpdatePassword",
    "Message",
    "TokenPayload",
]


class UserUpdateMe(CamelModel):
    full_name: str | None = PydanticField(default=None, min_length=1, max_length=255)
    skill: str | None = PydanticField(default=None, max_length=64)
    location: str | None = PydanticField(default=None, max_length=255)
    location_coords: GeoCoords | None = None
    sports: list[str] | None = None


class UpdatePassword(CamelModel):
    current_password: str = PydanticField(min_length=1, max_length=255)
    new_password: str = PydanticField(min_length=1, max_length=255)


# Generic message
class Message(SQLModel):
    message: str


# Contents of the session token
class TokenPayload(SQLModel):
    sub: str | None = Field(
        default=None, description="Subject of the token, the user ID"
    )
