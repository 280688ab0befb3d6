from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """Current time as a naive UTC datetime (the form stored everywhere)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_iso(value):
    """Serialize a date/datetime for JSON; None passes through"""
    if value is None:
        return None
    return value.isoformat()


def from_iso(value):
    """Re-hydrate an ISO string written by to_iso; None passes through"""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
