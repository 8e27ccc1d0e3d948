from uuid import UUID

from fastapi import status

from .base import AppError


class EventNotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, event_id: UUID):
        detail = f"Event with id {event_id} not found."
        super().__init__(detail)


class EventFullError(AppError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, event_id: UUID):
        detail = f"Event with id {event_id} has no free spots left."
        super().__init__(detail)


class NotAnEventParticipant(AppError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, user_id: UUID, event_id: UUID):
        detail = f"User with id {user_id} has not joined event {event_id}."
        super().__init__(detail)
