from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


def format_date(value: datetime) -> str:
    """Render a date the way the concierge shows it to staff and models (MM/DD/YYYY)."""
    return value.strftime("%m/%d/%Y")


def to_utc(value: datetime) -> datetime:
    """Convert to UTC; naive datetimes are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
