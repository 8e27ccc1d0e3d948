from fastapi import APIRouter

from partnerfinder.api.deps import (
    CurrentUser,
    SessionDep,
)
from partnerfinder.converters import user as user_converters
from partnerfinder.models.auth_schemas import Message, UpdatePassword, UserUpdateMe
from partnerfinder.schemas.user import UserPublic
from partnerfinder.services import me as me_service

router = APIRouter(prefix="/me", tags=["me"])


@router.get("", response_model=UserPublic)
def get_current_user(current_user: CurrentUser) -> UserPublic:
    return user_converters.to_public(current_user)


@router.patch("", response_model=UserPublic)
def update_user_me(
    *, session: SessionDep, user_in: UserUpdateMe, current_user: CurrentUser
) -> UserPublic:
    return me_service.update_me(
        session=session, user_in=user_in, current_user=current_user
    )


@router.patch("/password", response_model=Message)
def update_password_me(
    *, session: SessionDep, body: UpdatePassword, current_user: CurrentUser
) -> Message:
    return me_service.update_password(
        session=session, body=body, current_user=current_user
    )
