from collections.abc import Generator
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from pydantic import ValidationError
from sqlmodel import Session

from partnerfinder.core import security
from partnerfinder.core.config import settings
from partnerfinder.core.db import engine
from partnerfinder.exceptions.auth_exceptions import NotAuthenticated
from partnerfinder.models.auth_schemas import TokenPayload
from partnerfinder.models.user import User

cookie_scheme = APIKeyCookie(name=settings.COOKIE_NAME, auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]
CookieTokenDep = Annotated[str | None, Depends(cookie_scheme)]
BearerTokenDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_current_user(
    session: SessionDep,
    cookie_token: CookieTokenDep,
    bearer: BearerTokenDep,
) -> User:
    """
    Resolve the caller from the session cookie, or from a bearer token when
    no cookie is sent.

    Raises:
        NotAuthenticated: If no valid token is present or its user is gone.
    """
    token = cookie_token or (bearer.credentials if bearer else None)
    if not token:
        raise NotAuthenticated()
    try:
        payload = security.decode_access_token(token)
        token_data = TokenPayload(**payload)
        user_id = UUID(token_data.sub or "")
    except (JWTError, ValidationError, ValueError) as e:
        raise NotAuthenticated() from e
    user = session.get(User, user_id)
    if user is None:
        raise NotAuthenticated()
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
