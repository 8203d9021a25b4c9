"""
Bucket alignment for calendar-aware time units.

Maps an absolute instant to the start of its containing bucket. Calendar
fields are evaluated in a caller-supplied time zone; bucket keys are returned
as UTC datetimes so keys from different zones compare consistently.

Bucket conventions:
- MINUTE / HOUR: sub-unit fields truncated in local time
- DAY: local midnight
- WEEK: local midnight of the Sunday on or before the date
- MONTH: local midnight on the first of the month
- YEAR: local midnight on 1 January
"""

from collections.abc import Iterator
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..errors import InvalidTimeZoneError
from ..types.common import TimeUnit, require_aware

# datetime.weekday() numbering (Monday == 0)
WEEK_START = 6

ONE_MINUTE = timedelta(minutes=1)


def resolve_time_zone(time_zone: str | tzinfo) -> tzinfo:
    """
    Resolve an IANA zone identifier to a tzinfo.

    Args:
        time_zone: Zone identifier (e.g. "Asia/Seoul") or a tzinfo instance

    Returns:
        tzinfo for the zone

    Raises:
        InvalidTimeZoneError: If the identifier is unknown or malformed
    """
    if isinstance(time_zone, tzinfo):
        return time_zone
    if not isinstance(time_zone, str) or not time_zone:
        raise InvalidTimeZoneError(str(time_zone))
    try:
        return ZoneInfo(time_zone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidTimeZoneError(time_zone) from e


def _period_start(day: date, time_unit: TimeUnit) -> date:
    if time_unit == TimeUnit.WEEK:
        return day - timedelta(days=(day.weekday() - WEEK_START) % 7)
    if time_unit == TimeUnit.MONTH:
        return day.replace(day=1)
    if time_unit == TimeUnit.YEAR:
        return day.replace(month=1, day=1)
    return day


def align_to_bucket(
    instant: datetime,
    time_unit: TimeUnit,
    time_zone: str | tzinfo = "UTC",
) -> datetime:
    """
    Align an instant down to the start of its bucket.

    Args:
        instant: Timezone-aware instant
        time_unit: Bucket granularity
        time_zone: Zone in which calendar fields are evaluated

    Returns:
        Bucket start as a UTC datetime

    Raises:
        NaiveDatetimeError: If instant has no time zone
        InvalidTimeZoneError: If time_zone cannot be resolved
    """
    require_aware(instant)
    zone = resolve_time_zone(time_zone)
    local = instant.astimezone(zone)

    if time_unit == TimeUnit.MINUTE:
        aligned = local.replace(second=0, microsecond=0)
    elif time_unit == TimeUnit.HOUR:
        aligned = local.replace(minute=0, second=0, microsecond=0)
    else:
        day = _period_start(local.date(), time_unit)
        aligned = datetime.combine(day, time(), tzinfo=zone)

    return aligned.astimezone(UTC)


def next_bucket(
    bucket_key: datetime,
    time_unit: TimeUnit,
    time_zone: str | tzinfo = "UTC",
) -> datetime:
    """Return the start of the bucket that follows bucket_key."""
    zone = resolve_time_zone(time_zone)

    if time_unit == TimeUnit.MINUTE:
        return align_to_bucket(bucket_key + ONE_MINUTE, time_unit, zone)
    if time_unit == TimeUnit.HOUR:
        return align_to_bucket(bucket_key + timedelta(hours=1), time_unit, zone)

    day = bucket_key.astimezone(zone).date()
    if time_unit == TimeUnit.DAY:
        day = day + timedelta(days=1)
    elif time_unit == TimeUnit.WEEK:
        day = day + timedelta(days=7)
    elif time_unit == TimeUnit.MONTH:
        day = date(day.year + day.month // 12, day.month % 12 + 1, 1)
    else:
        day = date(day.year + 1, 1, 1)

    return datetime.combine(_period_start(day, time_unit), time(), tzinfo=zone).astimezone(UTC)


def iter_buckets(
    first_key: datetime,
    last_key: datetime,
    time_unit: TimeUnit,
    time_zone: str | tzinfo = "UTC",
) -> Iterator[datetime]:
    """Yield every bucket start from first_key through last_key inclusive."""
    zone = resolve_time_zone(time_zone)
    current = align_to_bucket(first_key, time_unit, zone)
    end = align_to_bucket(last_key, time_unit, zone)
    while current <= end:
        yield current
        current = next_bucket(current, time_unit, zone)


def local_date(instant: datetime, time_zone: str | tzinfo = "UTC") -> date:
    """Calendar date of instant in the given zone."""
    return instant.astimezone(resolve_time_zone(time_zone)).date()
