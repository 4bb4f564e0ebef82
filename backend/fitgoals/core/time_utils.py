from datetime import date, datetime, time, timedelta, timezone


def to_local_datetime(dt, tz_name: str | None = None):
    """Convert a datetime from source tz (assume UTC if naive) to local or given tz.

    - If `tz_name` is 'local' or None: use system local timezone.
    - If `tz_name` is IANA tz name (e.g., 'America/New_York'): use that.
    - If `dt` has no tzinfo, assume UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if tz_name and tz_name != "local":
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
        try:
            return dt.astimezone(ZoneInfo(tz_name))
        except ZoneInfoNotFoundError:
            return dt.astimezone()
    return dt.astimezone()


def to_instant(value, tz_name: str | None = None) -> datetime:
    """Normalize any supported timestamp into an aware UTC datetime.

    Accepts:
      - datetime (naive values are taken as UTC)
      - date (midnight of that calendar day in `tz_name`)
      - ISO-8601 strings ('2025-01-01', '2025-01-01T07:00:00Z')
      - int/float POSIX seconds
      - storage timestamp wrappers exposing `to_datetime()` or `ToDatetime()`

    This is the only place entry timestamps get converted; everything
    downstream works with the canonical value.
    """
    if value is None:
        raise ValueError("Timestamp is required")

    for attr in ("to_datetime", "ToDatetime"):
        converter = getattr(value, attr, None)
        if callable(converter):
            value = converter()
            break

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, date):
        midnight = datetime.combine(value, time.min)
        return _attach_zone(midnight, tz_name).astimezone(timezone.utc)

    if isinstance(value, bool):
        raise ValueError(f"Unsupported timestamp: {value!r}")

    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)

    if isinstance(value, str):
        s = value.strip()
        if s == "":
            raise ValueError("Timestamp is required")
        try:
            parsed = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"Unrecognized timestamp: {value!r}")
        if len(s) == 10:
            return to_instant(parsed.date(), tz_name)
        return to_instant(parsed)

    raise ValueError(f"Unsupported timestamp: {value!r}")


def _attach_zone(naive: datetime, tz_name: str | None) -> datetime:
    if tz_name and tz_name != "local":
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
        try:
            return naive.replace(tzinfo=ZoneInfo(tz_name))
        except ZoneInfoNotFoundError:
            pass
    return naive.astimezone()


def local_day(instant, tz_name: str | None = None) -> date:
    """Calendar day an instant falls on in the configured timezone."""
    if isinstance(instant, date) and not isinstance(instant, datetime):
        return instant
    return to_local_datetime(instant, tz_name).date()


def today_local(tz_name: str | None = None) -> date:
    return local_day(datetime.now(timezone.utc), tz_name)


def days_until(target: date, today: date) -> int:
    """Whole days from `today` until `target`, never negative."""
    return max(0, (target - today).days)


def previous_day(d: date) -> date:
    return d - timedelta(days=1)
