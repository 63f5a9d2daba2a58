from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


DEFAULT_CATEGORY_COLOR = "#3B82F6"
