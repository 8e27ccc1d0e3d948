from uuid import UUID

from fastapi import status

from .base import AppError


class FriendRequestNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, sender_id: UUID, receiver_id: UUID):
        detail = f"Friend request not found. User with id {sender_id} has no pending request to user {receiver_id}."
        super().__init__(detail)


class NotRequestAddresseeError(AppError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, user_id: UUID):
        detail = f"User with id {user_id} is not the addressee of this friend request and cannot accept it."
        super().__init__(detail)


class CannotBefriendSelfError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self):
        super().__init__("Cannot send a friend request to yourself.")


class RelationshipConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, user_id: UUID, other_id: UUID):
        detail = f"The relationship between {user_id} and {other_id} was modified concurrently. Please retry."
        super().__init__(detail)
