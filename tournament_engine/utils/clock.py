from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware current UTC time for row timestamps."""
    return datetime.now(timezone.utc)
