from logging import getLogger

from sqlmodel import Session

from partnerfinder.converters import user as user_converters
from partnerfinder.core.security import verify_password
from partnerfinder.crud import user as users_crud
from partnerfinder.exceptions.auth_exceptions import IncorrectPassword
from partnerfinder.models.auth_schemas import Message, UpdatePassword, UserUpdateMe
from partnerfinder.models.user import User
from partnerfinder.schemas.user import UserPublic

logger = getLogger(__name__)


def update_me(
    *,
    session: Session,
    user_in: UserUpdateMe,
    current_user: User,
) -> UserPublic:
    users_crud.update_user(session=session, db_user=current_user, user_in=user_in)
    session.commit()
    session.refresh(current_user)
    return user_converters.to_public(current_user)


def update_password(
    *,
    session: Session,
    body: UpdatePassword,
    current_user: User,
) -> Message:
    if not verify_password(body.current_password, current_user.hashed_password):
        raise IncorrectPassword()
    users_crud.set_password(
        session=session, db_user=current_user, password=body.new_password
    )
    session.commit()
    logger.info("User %s changed their password", current_user.id)
    return Message(message="Password updated successfully")
