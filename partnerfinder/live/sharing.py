import asyncio
import math
from collections.abc import Awaitable, Callable
from dataclasses import replace
from enum import Enum, unique
from logging import getLogger
from types import TracebackType
from typing import Any

from .client import LiveLocationClient, LiveLocationRequestError
from .geolocation import DeviceFix, Geolocation, GeolocationError, clamp

# Coarse network-based fixes (IP, cell towers) are not broadcast as live
MAX_ACCEPTABLE_ACCURACY_M = 1500.0
MIN_SEND_INTERVAL_SECONDS = 1.2
FIRST_FIX_TIMEOUT_SECONDS = 20.0

logger = getLogger(__name__)


@unique
class SharingState(str, Enum):
    IDLE = "idle"
    SHARING = "sharing"


class LiveLocationSharer:
    """
    Shares the device position of the local user for one event.

    While sharing, every device fix that is precise enough replaces the
    queued one, and the queue is drained with at most one request in flight
    and at least ``min_send_interval`` seconds between the starts of two
    submissions. Only the latest fix is ever sent.

    Failed uploads are reported through ``error`` and retried implicitly by
    the next fix. A device error ends the sharing session. Use as an async
    context manager to make sure the device watch is released.
    """

    def __init__(
        self,
        *,
        client: LiveLocationClient,
        geolocation: Geolocation,
        event_id: str,
        min_send_interval: float = MIN_SEND_INTERVAL_SECONDS,
        max_accuracy: float = MAX_ACCEPTABLE_ACCURACY_M,
        on_sent: Callable[[], Awaitable[Any]] | None = None,
    ) -> None:
        self._client = client
        self._geolocation = geolocation
        self._event_id = event_id
        self._min_send_interval = min_send_interval
        self._max_accuracy = max_accuracy
        self._on_sent = on_sent

        self.state = SharingState.IDLE
        self.error: str | None = None
        self.gps_warning: str | None = None
        self.device_fix: DeviceFix | None = None
        self.submissions = 0

        self._loop: asyncio.AbstractEventLoop | None = None
        self._watch_handle: Any = None
        self._queued: dict[str, Any] | None = None
        self._in_flight = False
        self._timer: asyncio.TimerHandle | None = None
        self._last_sent_at: float | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        # Bumped on every start; uploads only report back to the session that sent them
        self._session = 0

    @property
    def sharing(self) -> bool:
        return self.state is SharingState.SHARING

    async def __aenter__(self) -> "LiveLocationSharer":
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.stop()

    def start(self) -> None:
        """Begin sharing. Must be called from a running event loop."""
        if self.sharing:
            return
        self._loop = asyncio.get_running_loop()
        self._session += 1
        self.error = None
        self.gps_warning = None
        self.state = SharingState.SHARING

        try:
            # Some devices hand out an old cached fix first; ask for a fresh one
            self._geolocation.get_current_fix(
                self.handle_fix,
                self._on_first_fix_error,
                high_accuracy=True,
                maximum_age=0,
                timeout=FIRST_FIX_TIMEOUT_SECONDS,
            )
            self._watch_handle = self._geolocation.watch(self.handle_fix, self._on_watch_error)
        except GeolocationError as e:
            self._release_watch()
            self.state = SharingState.IDLE
            self.error = str(e) or "Failed to read device location"
            logger.warning("Could not start location sharing for event %s: %s", self._event_id, e)
            return
        logger.info("Started sharing location for event %s", self._event_id)

    async def stop(self) -> None:
        """
        Stop sharing and tell the backend, best effort.

        A failing notification is logged and otherwise ignored; locally the
        session is stopped either way.
        """
        was_sharing = self.sharing
        self.state = SharingState.IDLE
        self._release_watch()
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._queued = None
        self.gps_warning = None
        if not was_sharing:
            return

        logger.info("Stopped sharing location for event %s", self._event_id)
        try:
            await self._client.stop_live_location(self._event_id)
        except LiveLocationRequestError as e:
            logger.info("Backend was not told that sharing stopped: %s", e)

    def handle_fix(self, fix: DeviceFix) -> None:
        """Take one device reading into account."""
        if not self.sharing:
            return
        fix = replace(fix, lat=clamp(fix.lat, -90, 90), lng=clamp(fix.lng, -180, 180))
        self.device_fix = fix

        accuracy = fix.accuracy
        if accuracy is not None and math.isfinite(accuracy) and accuracy > self._max_accuracy:
            self.gps_warning = (
                f"Low GPS accuracy (±{round(accuracy)}m). "
                "Enable precise location and try again."
            )
            return

        self.gps_warning = None
        self._queued = {
            "lat": fix.lat,
            "lng": fix.lng,
            "accuracy": accuracy,
            "heading": fix.heading,
            "speed": fix.speed,
        }
        self._schedule_flush()

    def _release_watch(self) -> None:
        handle, self._watch_handle = self._watch_handle, None
        if handle is not None:
            self._geolocation.cancel(handle)

    def _on_first_fix_error(self, error: GeolocationError) -> None:
        # The watch reports the same problem; only log it here
        logger.debug("Initial position request failed: %s", error)

    def _on_watch_error(self, error: GeolocationError) -> None:
        if not self.sharing or self._loop is None:
            return
        self.error = str(error) or "Failed to read device location"
        logger.warning("Device location failed for event %s: %s", self._event_id, error)
        self._spawn(self.stop())

    def _remaining_delay(self) -> float:
        if self._last_sent_at is None or self._loop is None:
            return 0.0
        elapsed = self._loop.time() - self._last_sent_at
        return max(0.0, self._min_send_interval - elapsed)

    def _schedule_flush(self) -> None:
        if self._timer is not None or self._loop is None:
            return
        self._timer = self._loop.call_later(self._remaining_delay(), self._on_timer)

    def _on_timer(self) -> None:
        self._timer = None
        if self.sharing:
            self._spawn(self._flush())

    def _spawn(self, coro: Awaitable[None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)  # type: ignore[arg-type]
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _is_current(self, session: int) -> bool:
        return self.sharing and self._session == session

    async def _flush(self) -> None:
        if self._in_flight or self._queued is None or not self.sharing:
            # An in-flight submission picks the queued fix up when it completes
            return
        if self._remaining_delay() > 0:
            self._schedule_flush()
            return

        payload, self._queued = self._queued, None
        session = self._session
        self._in_flight = True
        self._last_sent_at = asyncio.get_running_loop().time()
        self.submissions += 1
        try:
            await self._client.put_live_location(self._event_id, payload)
        except LiveLocationRequestError as e:
            if self._is_current(session):
                self.error = str(e)
                logger.warning("Live location upload failed for event %s: %s", self._event_id, e)
        else:
            if self._is_current(session):
                self.error = None
                if self._on_sent is not None:
                    await self._on_sent()
        finally:
            self._in_flight = False
            if self._queued is not None and self.sharing:
                self._schedule_flush()
