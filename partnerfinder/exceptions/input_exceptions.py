from fastapi import status

from .base import AppError


class MissingField(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: str):
        super().__init__(f"Missing {field}.")


class InvalidUserId(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, value: str):
        super().__init__(f"'{value}' is not a valid user id.")
