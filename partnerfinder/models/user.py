import uuid
from datetime import datetime

from pydantic import EmailStr
from pydantic import Field as PydanticField
from sqlmodel import JSON, Column, Field, SQLModel

from partnerfinder.models.utils import CamelModel
from partnerfinder.utils import now_utc_naive

__all__ = [
    "UserBase",
    "UserRegister",
    "UserLogin",
    "User",
]


# Shared properties
class UserBase(SQLModel):
    email: EmailStr = Field(unique=True, index=True, max_length=255)
    username: str = Field(unique=True, index=True, max_length=64)
    full_name: str = Field(max_length=255)
    skill: str | None = Field(default=None, max_length=64)
    location: str | None = Field(default=None, max_length=255)
    location_lat: float | None = Field(default=None, ge=-90, le=90)
    location_lng: float | None = Field(default=None, ge=-180, le=180)
    sports: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))


# Properties to receive via API on registration
class UserRegister(CamelModel):
    full_name: str = PydanticField(min_length=1, max_length=255)
    username: str = PydanticField(min_length=1, max_length=64)
    email: EmailStr = PydanticField(max_length=255)
    password: str = PydanticField(min_length=1, max_length=255)


class UserLogin(CamelModel):
    email: str = PydanticField(min_length=1, max_length=255)
    password: str = PydanticField(min_length=1, max_length=255)


# Database model, database table inferred from class name
class User(UserBase, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    hashed_password: str
    created_at: datetime = Field(default_factory=now_utc_naive, index=True)
