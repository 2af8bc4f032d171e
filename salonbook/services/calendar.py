"""Timestamp parsing and calendar-day helpers shared by the reminder logic.

Customer records carry dates as strings written by several clients over
time: plain ``yyyy-MM-dd`` dates, full ISO timestamps with or without an
offset, and occasionally garbage. Everything here returns ``None`` for the
garbage instead of raising.
"""

from datetime import date, datetime


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO date or date-time string, or return None."""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


def to_local(moment: datetime, now: datetime) -> datetime:
    """Express ``moment`` on the same clock as ``now``.

    Offset-aware values are converted into now's zone. Naive values are
    taken to already be local time.
    """
    if moment.tzinfo is not None and now.tzinfo is not None:
        return moment.astimezone(now.tzinfo)
    if moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    if now.tzinfo is not None:
        return moment.replace(tzinfo=now.tzinfo)
    return moment


def local_moment(value: str | None, now: datetime) -> datetime | None:
    """Parse ``value`` and express it on now's clock."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return to_local(parsed, now)


def local_day(value: str | None, now: datetime) -> date | None:
    """Calendar day of ``value`` in now's zone."""
    moment = local_moment(value, now)
    return moment.date() if moment is not None else None


def day_string(now: datetime) -> str:
    """``yyyy-MM-dd`` for the calendar day of ``now``."""
    return now.date().isoformat()


# Month names are fixed rather than taken from the process locale so labels
# stay stable between servers.
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_display_date(day: date) -> str:
    """``dd MMM yyyy``, e.g. ``05 Oct 2026``."""
    return f"{day.day:02d} {MONTH_ABBREVIATIONS[day.month - 1]} {day.year}"


def parse_display_date(label: str) -> date | None:
    """Inverse of ``format_display_date``; None for anything else."""
    parts = label.split()
    if len(parts) != 3 or parts[1] not in MONTH_ABBREVIATIONS:
        return None
    try:
        return date(int(parts[2]), MONTH_ABBREVIATIONS.index(parts[1]) + 1, int(parts[0]))
    except ValueError:
        return None
