"""
Attendance scoring rules.

Pure functions shared by the recording path, the reward service and the
scheduled jobs. Nothing in here touches the database.
"""
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Optional, Tuple, Union
from zoneinfo import ZoneInfo

from worklogix.models.shared.enums import AttendanceStatus

ATTENDED_STATUSES = frozenset({
    AttendanceStatus.ON_TIME,
    AttendanceStatus.PRESENT,
    AttendanceStatus.SLIGHTLY_LATE,
    AttendanceStatus.LATE,
    AttendanceStatus.VERY_LATE,
})

LATE_STATUSES = frozenset({
    AttendanceStatus.SLIGHTLY_LATE,
    AttendanceStatus.LATE,
    AttendanceStatus.VERY_LATE,
})

BASE_POINTS = {
    AttendanceStatus.ON_TIME: 10,
    AttendanceStatus.PRESENT: 10,
    AttendanceStatus.SLIGHTLY_LATE: 7,
    AttendanceStatus.LATE: 5,
    AttendanceStatus.VERY_LATE: 3,
}

FULL_DAY_HOURS = 9
FULL_DAY_BONUS = 5

Number = Union[int, float, Decimal]


def _as_status(status) -> Optional[AttendanceStatus]:
    if isinstance(status, AttendanceStatus):
        return status
    try:
        return AttendanceStatus(status)
    except ValueError:
        return None


def calculate_daily_points(status, total_hours: Optional[Number]) -> int:
    """Base points for the status tier, plus a flat bonus for a full day"""
    points = BASE_POINTS.get(_as_status(status), 0)
    if total_hours is not None and Decimal(str(total_hours)) >= FULL_DAY_HOURS:
        points += FULL_DAY_BONUS
    return points


def is_attended(status) -> bool:
    return _as_status(status) in ATTENDED_STATUSES


def is_late(status) -> bool:
    return _as_status(status) in LATE_STATUSES


def parse_clock(value: str) -> time:
    """Parse a company's HH:MM work-hour setting"""
    hour, minute = (int(part) for part in value.split(":")[:2])
    return time(hour=hour, minute=minute)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure datetime is timezone-aware (UTC)."""
    if dt is None:
        return None
    if dt.tzinfo is None:  # naive -> assume UTC
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def local_datetime(day: date, clock: str, tz_name: str) -> datetime:
    """The UTC instant of a wall-clock time on a given local day"""
    local = datetime.combine(day, parse_clock(clock)).replace(tzinfo=ZoneInfo(tz_name))
    return local.astimezone(timezone.utc)


def local_today(now: datetime, tz_name: str) -> date:
    return ensure_utc(now).astimezone(ZoneInfo(tz_name)).date()


def classify_login(
    login_at: datetime,
    work_start: datetime,
    slightly_late_minutes: int = 15,
    late_minutes: int = 60,
) -> Tuple[AttendanceStatus, int]:
    """Lateness tier and minutes late for a login against the day's start"""
    delta = ensure_utc(login_at) - ensure_utc(work_start)
    minutes = int(delta.total_seconds() // 60)
    if minutes <= 0:
        return AttendanceStatus.ON_TIME, 0
    if minutes <= slightly_late_minutes:
        return AttendanceStatus.SLIGHTLY_LATE, minutes
    if minutes <= late_minutes:
        return AttendanceStatus.LATE, minutes
    return AttendanceStatus.VERY_LATE, minutes


def day_gap(previous: date, current: date) -> int:
    """Whole calendar days from previous to current"""
    return abs((current - previous).days)


def hours_between(start: datetime, end: datetime) -> Decimal:
    seconds = (ensure_utc(end) - ensure_utc(start)).total_seconds()
    return round(Decimal(max(seconds, 0)) / Decimal(3600), 2)


def standard_hours(work_start_time: str, work_end_time: str) -> Decimal:
    """Length of the company's working day in hours"""
    start = parse_clock(work_start_time)
    end = parse_clock(work_end_time)
    span = datetime.combine(date.min, end) - datetime.combine(date.min, start)
    if span < timedelta(0):
        span += timedelta(days=1)
    return round(Decimal(span.total_seconds()) / Decimal(3600), 2)


def overtime_hours(total_hours: Decimal, standard: Decimal) -> Decimal:
    return max(total_hours - standard, Decimal("0"))
