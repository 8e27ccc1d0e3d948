import asyncio
import contextlib
import time
from logging import getLogger
from types import TracebackType
from uuid import UUID

from partnerfinder.schemas.live_location import LiveLocationPublic

from .client import LiveLocationClient, LiveLocationRequestError
from .geolocation import clamp

DEFAULT_POLL_SECONDS = 3.0
MIN_POLL_SECONDS = 1.0
MAX_POLL_SECONDS = 15.0

logger = getLogger(__name__)


class LiveLocationPoller:
    """
    Keeps the list of live positions for an event up to date.

    Each poll replaces the whole list. Runs independently of whether the
    local user is sharing.
    """

    def __init__(
        self,
        *,
        client: LiveLocationClient,
        event_id: str,
        viewer_id: UUID | str | None = None,
        poll_seconds: float = DEFAULT_POLL_SECONDS,
    ) -> None:
        self._client = client
        self._event_id = event_id
        self._viewer_id = str(viewer_id) if viewer_id is not None else None
        self.interval = clamp(poll_seconds, MIN_POLL_SECONDS, MAX_POLL_SECONDS)

        self.locations: list[LiveLocationPublic] = []
        self.last_sync_at: float | None = None
        self.error: str | None = None
        self._task: asyncio.Task[None] | None = None

    async def __aenter__(self) -> "LiveLocationPoller":
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.stop()

    def _is_me(self, location: LiveLocationPublic) -> bool:
        return self._viewer_id is not None and str(location.user_id) == self._viewer_id

    async def refresh(self) -> list[LiveLocationPublic]:
        try:
            locations = await self._client.get_live_locations(self._event_id)
        except LiveLocationRequestError as e:
            self.error = str(e)
            logger.warning("Could not load live locations for event %s: %s", self._event_id, e)
            return self.locations

        self.locations = [
            location.model_copy(update={"is_me": self._is_me(location)})
            for location in locations
        ]
        self.last_sync_at = time.time()
        self.error = None
        return self.locations

    async def run(self) -> None:
        while True:
            await self.refresh()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self.run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
