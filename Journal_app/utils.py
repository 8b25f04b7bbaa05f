from datetime import datetime, date, time, timezone


def isoformat_z(value):
    """Naive UTC datetime -> '2024-01-02T09:30:00Z' (None passes through)"""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat() + 'Z'


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_datetime(raw, end_of_day=False, tz=None):
    """
    Parse a query-string timestamp into a naive UTC datetime.

    Accepts full ISO-8601 (with or without offset, trailing 'Z' allowed) and
    plain dates. A plain date is a calendar day in tz (UTC when tz is None) and
    maps to the start of that day, or to its last microsecond when end_of_day
    is set so range filters include the whole day.
    Raises ValueError on anything else.
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        raise ValueError("empty date")

    if len(text) == 10:
        day = date.fromisoformat(text)
        bound = datetime.combine(day, time.max if end_of_day else time.min)
        if tz is None:
            return bound
        return to_naive_utc(tz.localize(bound))

    if text.endswith('Z') or text.endswith('z'):
        text = text[:-1] + '+00:00'
    return to_naive_utc(datetime.fromisoformat(text))
