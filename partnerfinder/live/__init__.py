from .client import LiveLocationClient, LiveLocationRequestError
from .geolocation import DeviceFix, Geolocation, GeolocationError
from .poller import LiveLocationPoller
from .sharing import LiveLocationSharer, SharingState

__all__ = [
    "DeviceFix",
    "Geolocation",
    "GeolocationError",
    "LiveLocationClient",
    "LiveLocationPoller",
    "LiveLocationRequestError",
    "LiveLocationSharer",
    "SharingState",
]
