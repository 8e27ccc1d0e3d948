from uuid import UUID

from fastapi import APIRouter, status

from partnerfinder.api.deps import (
    CurrentUser,
    SessionDep,
)
from partnerfinder.models.auth_schemas import Message
from partnerfinder.models.event import EventCreate
from partnerfinder.models.live_location import LiveLocationUpdate
from partnerfinder.schemas.event import EventEnvelope, EventsPublic
from partnerfinder.schemas.live_location import LiveLocationsPublic
from partnerfinder.services import events as events_service
from partnerfinder.services import live_locations as live_locations_service

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=EventsPublic)
def list_events(*, session: SessionDep, current_user: CurrentUser) -> EventsPublic:
    return EventsPublic(
        events=events_service.list_events(session=session, viewer_id=current_user.id)
    )


@router.post("", response_model=EventEnvelope, status_code=status.HTTP_201_CREATED)
def create_event(
    *, session: SessionDep, current_user: CurrentUser, event_in: EventCreate
) -> EventEnvelope:
    return EventEnvelope(
        event=events_service.create_event(
            session=session, owner_id=current_user.id, event_in=event_in
        )
    )


@router.post("/{event_id}/join", response_model=EventEnvelope)
def join_event(
    *, session: SessionDep, current_user: CurrentUser, event_id: UUID
) -> EventEnvelope:
    return EventEnvelope(
        event=events_service.join_event(
            session=session, event_id=event_id, user_id=current_user.id
        )
    )


@router.post("/{event_id}/leave", response_model=EventEnvelope)
def leave_event(
    *, session: SessionDep, current_user: CurrentUser, event_id: UUID
) -> EventEnvelope:
    return EventEnvelope(
        event=events_service.leave_event(
            session=session, event_id=event_id, user_id=current_user.id
        )
    )


@router.put("/{event_id}/live-location", response_model=Message)
def update_live_location(
    *,
    session: SessionDep,
    current_user: CurrentUser,
    event_id: UUID,
    location_in: LiveLocationUpdate,
) -> Message:
    return live_locations_service.update_live_location(
        session=session,
        event_id=event_id,
        user_id=current_user.id,
        location_in=location_in,
    )


@router.delete("/{event_id}/live-location", response_model=Message)
def stop_live_location(
    *, session: SessionDep, current_user: CurrentUser, event_id: UUID
) -> Message:
    return live_locations_service.stop_sharing(
        session=session, event_id=event_id, user_id=current_user.id
    )


@router.get("/{event_id}/live-locations", response_model=LiveLocationsPublic)
def list_live_locations(
    *, session: SessionDep, current_user: CurrentUser, event_id: UUID
) -> LiveLocationsPublic:
    return LiveLocationsPublic(
        locations=live_locations_service.list_live_locations(
            session=session, event_id=event_id, viewer_id=current_user.id
        )
    )
