import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol


class GeolocationError(Exception):
    """The device could not provide a position (permission denied, timeout, no signal)."""


@dataclass(frozen=True)
class DeviceFix:
    lat: float
    lng: float
    accuracy: float | None = None
    heading: float | None = None
    speed: float | None = None
    at: float = field(default_factory=time.time)


FixCallback = Callable[[DeviceFix], None]
ErrorCallback = Callable[[GeolocationError], None]


class Geolocation(Protocol):
    """
    Device positioning API.

    Callbacks are expected to run on the event loop thread of the consumer.
    """

    def watch(self, on_fix: FixCallback, on_error: ErrorCallback) -> Any: ...

    def cancel(self, handle: Any) -> None: ...

    def get_current_fix(
        self,
        on_fix: FixCallback,
        on_error: ErrorCallback,
        *,
        high_accuracy: bool = True,
        maximum_age: float = 0,
        timeout: float = 20.0,
    ) -> None: ...


def clamp(value: float, minimum: float, maximum: float) -> float:
    return min(maximum, max(minimum, value))
