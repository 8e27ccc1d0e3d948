from logging import getLogger

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from partnerfinder.crud import user as users_crud
from partnerfinder.exceptions.auth_exceptions import InvalidCredentials
from partnerfinder.exceptions.base import AppError
from partnerfinder.exceptions.user_exceptions import (
    EmailAlreadyExists,
    UsernameAlreadyExists,
)
from partnerfinder.models.user import User, UserLogin, UserRegister

logger = getLogger(__name__)


def register_user(
    *,
    session: Session,
    user_in: UserRegister,
) -> User:
    """
    Register a new user.

    Email addresses and usernames are unique regardless of case.

    Raises:
        EmailAlreadyExists: If the email address is taken.
        UsernameAlreadyExists: If the username is taken.
        AppError: For any other (unexpected) errors.
    """
    if users_crud.get_user_by_email(session=session, email=str(user_in.email)):
        raise EmailAlreadyExists(str(user_in.email))
    if users_crud.get_user_by_username(session=session, username=user_in.username):
        raise UsernameAlreadyExists(user_in.username)
    try:
        user = users_crud.create_user(session=session, user_register=user_in)
        session.commit()
    except IntegrityError as e:
        # Lost a race against a concurrent registration with the same email
        session.rollback()
        raise EmailAlreadyExists(str(user_in.email)) from e
    except Exception as e:
        session.rollback()
        raise AppError from e
    session.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


def login(
    *,
    session: Session,
    user_in: UserLogin,
) -> User:
    """
    Check a user's credentials.

    Raises:
        InvalidCredentials: If the email is unknown or the password is wrong.
    """
    user = users_crud.authenticate(
        session=session, email=user_in.email, password=user_in.password
    )
    if user is None:
        raise InvalidCredentials()
    return user
