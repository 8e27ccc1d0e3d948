from fastapi import APIRouter, Response, status

from partnerfinder.api.deps import CurrentUser, SessionDep
from partnerfinder.converters import user as user_converters
from partnerfinder.core import security
from partnerfinder.core.config import settings
from partnerfinder.models.auth_schemas import Message
from partnerfinder.models.user import User, UserLogin, UserRegister
from partnerfinder.schemas.user import UserEnvelope, UserWithMessage
from partnerfinder.services import users as users_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, user: User) -> None:
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=security.create_access_token(user.id),
        max_age=settings.access_token_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
        path="/",
    )


@router.post(
    "/register",
    response_model=UserWithMessage,
    status_code=status.HTTP_201_CREATED,
)
def register(
    *, session: SessionDep, response: Response, user_in: UserRegister
) -> UserWithMessage:
    user = users_service.register_user(session=session, user_in=user_in)
    _set_session_cookie(response, user)
    return UserWithMessage(message="Registered", user=user_converters.to_public(user))


@router.post("/login", response_model=UserWithMessage)
def login(
    *, session: SessionDep, response: Response, user_in: UserLogin
) -> UserWithMessage:
    user = users_service.login(session=session, user_in=user_in)
    _set_session_cookie(response, user)
    return UserWithMessage(message="Logged in", user=user_converters.to_public(user))


@router.get("/me", response_model=UserEnvelope)
def read_me(current_user: CurrentUser) -> UserEnvelope:
    return UserEnvelope(user=user_converters.to_public(current_user))


@router.post("/logout", response_model=Message)
def logout(response: Response) -> Message:
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
        path="/",
    )
    return Message(message="Logged out")
