from datetime import datetime, timezone

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def as_utc(value: datetime) -> datetime:
    """
    Naive datetimes are taken to be UTC already; aware ones are converted.
    Everything stored or compared against started_at goes through here so
    naive and offset inputs never meet.
    """
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
