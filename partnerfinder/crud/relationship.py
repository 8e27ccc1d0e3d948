from datetime import datetime
from uuid import UUID

from sqlalchemy import or_, update
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session, col, select

from partnerfinder.core.enums import RelationshipStatus
from partnerfinder.models.relationship import UserRelationship
from partnerfinder.utils import now_utc_naive

PAIR_KEY_SEPARATOR = "__"


def pair_key(user_id: UUID | str, other_id: UUID | str) -> str:
    """
    Canonical key of an unordered pair of users.

    Parameters:
        user_id (UUID | str): One of the users.
        other_id (UUID | str): The other user.
    Returns:
        str: Both ids sorted lexicographically and joined, so that
        ``pair_key(a, b) == pair_key(b, a)``.
    """
    return PAIR_KEY_SEPARATOR.join(sorted((str(user_id), str(other_id))))


def get_relationship(
    *,
    session: Session,
    user_id: UUID,
    other_id: UUID,
) -> UserRelationship | None:
    """
    Get the relationship record between two users, in either direction.

    Parameters:
        session (Session): The database session.
        user_id (UUID): One of the users.
        other_id (UUID): The other user.
    Returns:
        UserRelationship | None: The record if one exists, otherwise None.
    """
    return session.get(UserRelationship, pair_key(user_id, other_id))


def create_relationship(
    *,
    session: Session,
    requester_id: UUID,
    addressee_id: UUID,
    created_at: datetime | None = None,
) -> UserRelationship:
    """
    Create a pending relationship from requester to addressee.

    Parameters:
        session (Session): The database session.
        requester_id (UUID): The user sending the request.
        addressee_id (UUID): The user receiving the request.
    Returns:
        UserRelationship: The created record.
    Raises:
        IntegrityError: If a record already exists for the pair.
    """
    now = created_at or now_utc_naive()
    user_a_id, user_b_id = sorted((requester_id, addressee_id), key=str)
    relationship = UserRelationship(
        pair_key=pair_key(requester_id, addressee_id),
        user_a_id=user_a_id,
        user_b_id=user_b_id,
        requester_id=requester_id,
        addressee_id=addressee_id,
        status=RelationshipStatus.PENDING,
        created_at=now,
        updated_at=now,
    )
    session.add(relationship)
    session.flush()
    return relationship


def mark_accepted(
    *,
    session: Session,
    relationship: UserRelationship,
    accepted_at: datetime | None = None,
) -> UserRelationship:
    """
    Move a relationship to accepted, provided nobody changed it since it was read.

    The write only applies if the stored version still equals the version of
    the given record; the stored version is then incremented.

    Parameters:
        session (Session): The database session.
        relationship (UserRelationship): The record as previously read.
    Returns:
        UserRelationship: The refreshed record.
    Raises:
        StaleDataError: If the stored record has a different version.
    """
    now = accepted_at or now_utc_naive()
    expected_version = relationship.version
    result = session.exec(  # type: ignore[call-overload]
        update(UserRelationship)
        .where(
            col(UserRelationship.pair_key) == relationship.pair_key,
            col(UserRelationship.version) == expected_version,
        )
        .values(
            status=RelationshipStatus.ACCEPTED,
            updated_at=now,
            accepted_at=now,
            version=expected_version + 1,
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise StaleDataError(
            f"Relationship {relationship.pair_key} changed after version {expected_version}"
        )
    session.refresh(relationship)
    return relationship


def get_accepted_relationships(
    *,
    session: Session,
    user_id: UUID,
) -> list[UserRelationship]:
    """
    Get all accepted relationships a user is part of, oldest acceptance first.
    """
    stmt = (
        select(UserRelationship)
        .where(
            or_(
                UserRelationship.user_a_id == user_id,
                UserRelationship.user_b_id == user_id,
            ),
            UserRelationship.status == RelationshipStatus.ACCEPTED,
        )
        .order_by(col(UserRelationship.accepted_at), col(UserRelationship.pair_key))
    )
    return list(session.exec(stmt).all())


def get_incoming_requests(
    *,
    session: Session,
    user_id: UUID,
) -> list[UserRelationship]:
    """
    Get all pending relationships addressed to a user, oldest first.
    """
    stmt = (
        select(UserRelationship)
        .where(
            UserRelationship.addressee_id == user_id,
            UserRelationship.status == RelationshipStatus.PENDING,
        )
        .order_by(col(UserRelationship.created_at), col(UserRelationship.pair_key))
    )
    return list(session.exec(stmt).all())


def get_friend_ids(*, session: Session, user_id: UUID) -> list[UUID]:
    return [
        other_party(relationship, user_id)
        for relationship in get_accepted_relationships(session=session, user_id=user_id)
    ]


def other_party(relationship: UserRelationship, user_id: UUID) -> UUID:
    if relationship.user_a_id == user_id:
        return relationship.user_b_id
    return relationship.user_a_id
