from fastapi import APIRouter, Query

from partnerfinder.api.deps import (
    CurrentUser,
    SessionDep,
)
from partnerfinder.schemas.user import PartnersPublic
from partnerfinder.services import partners as partners_service

router = APIRouter(prefix="/partners", tags=["partners"])


@router.get("/find-partner", response_model=PartnersPublic)
def find_partner(
    *,
    session: SessionDep,
    current_user: CurrentUser,
    q: str | None = Query(None, max_length=255),
    skill: str | None = Query(None, max_length=64),
    location: str | None = Query(None, max_length=255),
) -> PartnersPublic:
    return PartnersPublic(
        partners=partners_service.find_partners(
            session=session,
            requester_id=current_user.id,
            query=q,
            skill=skill,
            location=location,
        )
    )
