from logging import getLogger
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session

from partnerfinder.converters import user as user_converters
from partnerfinder.core.enums import RelationshipStatus
from partnerfinder.crud import relationship as relationship_crud
from partnerfinder.crud import user as users_crud
from partnerfinder.exceptions.base import AppError
from partnerfinder.exceptions.friends_exceptions import (
    CannotBefriendSelfError,
    FriendRequestNotFoundError,
    NotRequestAddresseeError,
    RelationshipConflictError,
)
from partnerfinder.exceptions.input_exceptions import InvalidUserId, MissingField
from partnerfinder.exceptions.user_exceptions import UserNotFound
from partnerfinder.models.relationship import UserRelationship
from partnerfinder.schemas.relationship import (
    FriendRequestPublic,
    RelationshipRequestResult,
    RelationshipStatePublic,
    RelationshipStatusPublic,
)
from partnerfinder.schemas.user import UserPublic

logger = getLogger(__name__)


def parse_user_id(raw: str | None) -> UUID:
    """
    Turn a user id taken from a request body into a UUID.

    Raises:
        MissingField: If the id is absent or blank.
        InvalidUserId: If the id is not a UUID.
    """
    value = (raw or "").strip()
    if not value:
        raise MissingField("userId")
    try:
        return UUID(value)
    except ValueError as e:
        raise InvalidUserId(value) from e


def _accept(
    *,
    session: Session,
    relationship: UserRelationship,
    user_id: UUID,
    other_id: UUID,
) -> None:
    try:
        relationship_crud.mark_accepted(session=session, relationship=relationship)
        session.commit()
    except StaleDataError as e:
        session.rollback()
        raise RelationshipConflictError(user_id, other_id) from e
    except Exception as e:
        session.rollback()
        raise AppError from e
    logger.info("Relationship %s accepted by %s", relationship.pair_key, user_id)


def request_relationship(
    *,
    session: Session,
    requester_id: UUID,
    target_id: UUID,
) -> RelationshipRequestResult:
    """
    Ask another user to become friends.

    With no record yet a pending one is created. Re-requesting an
    outstanding request or an existing friendship changes nothing. If the
    target already asked the requester, the request counts as acceptance.

    Raises:
        CannotBefriendSelfError: If requester and target are the same user.
        UserNotFound: If the target does not exist.
        RelationshipConflictError: If another request changed the pair concurrently.
        AppError: For any other (unexpected) errors.
    """
    if requester_id == target_id:
        raise CannotBefriendSelfError()
    if users_crud.get_user_by_id(session=session, user_id=target_id) is None:
        raise UserNotFound(target_id)

    existing = relationship_crud.get_relationship(
        session=session, user_id=requester_id, other_id=target_id
    )
    if existing is None:
        try:
            relationship_crud.create_relationship(
                session=session,
                requester_id=requester_id,
                addressee_id=target_id,
            )
            session.commit()
        except IntegrityError as e:
            session.rollback()
            raise RelationshipConflictError(requester_id, target_id) from e
        except Exception as e:
            session.rollback()
            raise AppError from e
        logger.info("Friend request sent from %s to %s", requester_id, target_id)
        return RelationshipRequestResult(status=RelationshipStatus.PENDING, created=True)

    if existing.status == RelationshipStatus.ACCEPTED:
        return RelationshipRequestResult(status=RelationshipStatus.ACCEPTED)
    if existing.requester_id == requester_id:
        return RelationshipRequestResult(status=RelationshipStatus.PENDING)

    _accept(
        session=session,
        relationship=existing,
        user_id=requester_id,
        other_id=target_id,
    )
    return RelationshipRequestResult(status=RelationshipStatus.ACCEPTED)


def accept_relationship(
    *,
    session: Session,
    accepter_id: UUID,
    from_user_id: UUID,
) -> RelationshipStatusPublic:
    """
    Accept a friend request from from_user_id to accepter_id.

    Accepting a friendship that is already accepted is a no-op.

    Raises:
        FriendRequestNotFoundError: If there is no record between the users.
        NotRequestAddresseeError: If the accepter sent the request themselves.
        RelationshipConflictError: If the record changed concurrently.
        AppError: For any other (unexpected) errors.
    """
    existing = relationship_crud.get_relationship(
        session=session, user_id=accepter_id, other_id=from_user_id
    )
    if existing is None:
        raise FriendRequestNotFoundError(from_user_id, accepter_id)
    if existing.status == RelationshipStatus.ACCEPTED:
        return RelationshipStatusPublic(status=RelationshipStatus.ACCEPTED)
    if existing.addressee_id != accepter_id:
        raise NotRequestAddresseeError(accepter_id)

    _accept(
        session=session,
        relationship=existing,
        user_id=accepter_id,
        other_id=from_user_id,
    )
    return RelationshipStatusPublic(status=RelationshipStatus.ACCEPTED)


def list_friends(*, session: Session, user_id: UUID) -> list[UserPublic]:
    """
    Get the public profiles of a user's friends, in order of acceptance.
    """
    friend_ids = relationship_crud.get_friend_ids(session=session, user_id=user_id)
    users = users_crud.get_users_by_ids(session=session, user_ids=friend_ids)
    return [
        user_converters.to_public(users[friend_id])
        for friend_id in friend_ids
        if friend_id in users
    ]


def list_incoming_requests(
    *,
    session: Session,
    user_id: UUID,
) -> list[FriendRequestPublic]:
    """
    Get the pending requests addressed to a user, oldest first.
    """
    pending = relationship_crud.get_incoming_requests(session=session, user_id=user_id)
    users = users_crud.get_users_by_ids(
        session=session, user_ids=[relationship.requester_id for relationship in pending]
    )
    return [
        FriendRequestPublic(
            from_user=user_converters.to_public(users[relationship.requester_id]),
            created_at=relationship.created_at,
        )
        for relationship in pending
        if relationship.requester_id in users
    ]


def relationship_status(
    *,
    session: Session,
    user_id: UUID,
    other_id: UUID,
) -> RelationshipStatePublic:
    """
    Get the relationship state between two users.

    ``can_message`` gates direct messaging and only holds for accepted friends.
    """
    existing = relationship_crud.get_relationship(
        session=session, user_id=user_id, other_id=other_id
    )
    status = existing.status if existing else RelationshipStatus.NONE
    return RelationshipStatePublic(
        status=status,
        can_message=status == RelationshipStatus.ACCEPTED,
    )
