from datetime import datetime
from uuid import UUID

from sqlalchemy import Enum as SAEnum
from sqlmodel import Column, Field, SQLModel

from partnerfinder.core.enums import RelationshipStatus
from partnerfinder.utils import now_utc_naive

__all__ = [
    "UserRelationship",
]


class UserRelationship(SQLModel, table=True):
    """
    Friendship lifecycle between exactly two users.

    One row per unordered pair: ``pair_key`` is built from both user ids in
    sorted order, and ``user_a_id``/``user_b_id`` hold the pair in that order.
    ``version`` is bumped on every status change and guards concurrent writers.
    """

    pair_key: str = Field(primary_key=True, max_length=80)
    user_a_id: UUID = Field(foreign_key="user.id", index=True)
    user_b_id: UUID = Field(foreign_key="user.id", index=True)
    requester_id: UUID = Field(foreign_key="user.id")
    addressee_id: UUID = Field(foreign_key="user.id", index=True)
    status: RelationshipStatus = Field(
        default=RelationshipStatus.PENDING,
        sa_column=Column(SAEnum(RelationshipStatus, native_enum=False), nullable=False),
    )
    created_at: datetime = Field(default_factory=now_utc_naive)
    updated_at: datetime = Field(default_factory=now_utc_naive)
    accepted_at: datetime | None = Field(default=None)
    version: int = Field(default=1)
