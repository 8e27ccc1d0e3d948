from uuid import UUID

from sqlmodel import Session

from partnerfinder.converters import user as user_converters
from partnerfinder.core.config import settings
from partnerfinder.crud import user as users_crud
from partnerfinder.schemas.user import UserPublic


def _normalize(term: str | None) -> str:
    return (term or "").strip()


def find_partners(
    *,
    session: Session,
    requester_id: UUID,
    query: str | None = None,
    skill: str | None = None,
    location: str | None = None,
    limit: int | None = None,
) -> list[UserPublic]:
    """
    Get users the requester could team up with.

    Users that already share a pending or accepted relationship with the
    requester are left out. Blank filters are ignored.

    Parameters:
        session (Session): Database session.
        requester_id (UUID): ID of the searching user.
        query (str | None): Free text matched against username, full name and email.
        skill (str | None): Substring of the skill level.
        location (str | None): Substring of the location text.
        limit (int | None): Maximum number of results, capped at the configured search limit.
    Returns:
        list[UserPublic]: The candidate partners.
    """
    max_results = settings.PARTNER_SEARCH_LIMIT
    if limit is not None:
        max_results = min(limit, max_results)
    users_db = users_crud.search_partners(
        session=session,
        requester_id=requester_id,
        query=_normalize(query),
        skill=_normalize(skill),
        location=_normalize(location),
        limit=max_results,
    )
    return [user_converters.to_public(user) for user in users_db]
