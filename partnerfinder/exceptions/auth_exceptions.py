from fastapi import status

from .base import AppError


class NotAuthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(self):
        super().__init__("Not authenticated.")


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self):
        super().__init__("Invalid email or password.")


class IncorrectPassword(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self):
        super().__init__("Incorrect password.")
