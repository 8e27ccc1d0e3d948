from uuid import UUID

from fastapi import status

from .base import AppError


class UserNotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, user_id: UUID):
        detail = f"User with id {user_id} not found."
        super().__init__(detail)


class EmailAlreadyExists(AppError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, email: str):
        detail = f"User with email {email} already exists."
        super().__init__(detail)


class UsernameAlreadyExists(AppError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, username: str):
        detail = f"User with username {username} already exists."
        super().__init__(detail)
