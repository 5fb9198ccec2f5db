import time

# Set once at import time, which is process start for the server
_STARTED_AT = time.monotonic()


def get_uptime_seconds() -> float:
    """Seconds since the application process started."""
    return round(time.monotonic() - _STARTED_AT, 3)
