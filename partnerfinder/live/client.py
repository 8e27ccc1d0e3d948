from logging import getLogger
from typing import Any

import httpx
from pydantic import ValidationError

from partnerfinder.schemas.live_location import LiveLocationPublic, LiveLocationsPublic

logger = getLogger(__name__)


class LiveLocationRequestError(Exception):
    """A live-location call to the backend failed (transport error or non-2xx answer)."""


class LiveLocationClient:
    """
    Thin async wrapper around the live-location endpoints of one backend.

    The caller owns the ``httpx.AsyncClient``: it carries the base URL
    (including the API prefix) and the session cookie or bearer header.
    """

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise LiveLocationRequestError(f"{method} {url} failed: {e}") from e
        if response.is_error:
            detail = response.text or f"status {response.status_code}"
            raise LiveLocationRequestError(
                f"{method} {url} failed ({response.status_code}): {detail}"
            )
        return response

    async def put_live_location(self, event_id: str, payload: dict[str, Any]) -> None:
        await self._request("PUT", f"/events/{event_id}/live-location", json=payload)

    async def stop_live_location(self, event_id: str) -> None:
        await self._request("DELETE", f"/events/{event_id}/live-location")

    async def get_live_locations(self, event_id: str) -> list[LiveLocationPublic]:
        url = f"/events/{event_id}/live-locations"
        response = await self._request("GET", url)
        try:
            return LiveLocationsPublic.model_validate(response.json()).locations
        except (ValueError, ValidationError) as e:
            raise LiveLocationRequestError(f"GET {url} returned an unreadable body") from e
