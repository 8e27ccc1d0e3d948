from datetime import datetime, timezone


def now_utc_naive() -> datetime:
    """Current UTC time without tzinfo, the form timestamps are stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
