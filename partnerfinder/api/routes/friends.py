import uuid

from fastapi import APIRouter, Response, status

from partnerfinder.api.deps import (
    CurrentUser,
    SessionDep,
)
from partnerfinder.schemas.relationship import (
    FriendRequestsPublic,
    FriendsPublic,
    RelationshipStatePublic,
    RelationshipStatusPublic,
    UserIdIn,
)
from partnerfinder.services import friends as friends_service

router = APIRouter(prefix="/friends", tags=["friends"])


@router.get("", response_model=FriendsPublic)
def list_friends(*, session: SessionDep, current_user: CurrentUser) -> FriendsPublic:
    return FriendsPublic(
        friends=friends_service.list_friends(session=session, user_id=current_user.id)
    )


@router.get("/requests", response_model=FriendRequestsPublic)
def list_friend_requests(
    *, session: SessionDep, current_user: CurrentUser
) -> FriendRequestsPublic:
    return FriendRequestsPublic(
        requests=friends_service.list_incoming_requests(
            session=session, user_id=current_user.id
        )
    )


@router.post("/request", response_model=RelationshipStatusPublic)
def send_friend_request(
    *,
    session: SessionDep,
    current_user: CurrentUser,
    response: Response,
    body: UserIdIn = UserIdIn(),
) -> RelationshipStatusPublic:
    result = friends_service.request_relationship(
        session=session,
        requester_id=current_user.id,
        target_id=friends_service.parse_user_id(body.user_id),
    )
    if result.created:
        response.status_code = status.HTTP_201_CREATED
    return result


@router.post("/accept", response_model=RelationshipStatusPublic)
def accept_friend_request(
    *,
    session: SessionDep,
    current_user: CurrentUser,
    body: UserIdIn = UserIdIn(),
) -> RelationshipStatusPublic:
    return friends_service.accept_relationship(
        session=session,
        accepter_id=current_user.id,
        from_user_id=friends_service.parse_user_id(body.user_id),
    )


@router.get("/status/{user_id}", response_model=RelationshipStatePublic)
def get_relationship_status(
    *,
    session: SessionDep,
    current_user: CurrentUser,
    user_id: uuid.UUID,
) -> RelationshipStatePublic:
    return friends_service.relationship_status(
        session=session,
        user_id=current_user.id,
        other_id=user_id,
    )
