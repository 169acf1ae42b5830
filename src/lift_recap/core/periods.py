"""
Recap period resolution and navigation.

Weeks run Sunday through Saturday.  Ranges are inclusive: start is midnight
of the first day and end is the last millisecond of the final day.

"now" is always an explicit argument (defaulting to the wall clock) so that
labels and navigation limits are reproducible in tests.
"""

import calendar
from datetime import datetime, timedelta

from .config import DAYS_PER_WEEK, END_OF_DAY, MONTH_NAMES, YEAR_SUBTITLE
from .models import DateRange, PeriodRange, check_period


def start_of_day(moment: datetime) -> datetime:
    """Midnight of the day containing moment."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(moment: datetime) -> datetime:
    """Last millisecond of the day containing moment."""
    return datetime.combine(moment.date(), END_OF_DAY)


def week_start(moment: datetime) -> datetime:
    """Midnight of the Sunday that starts the week containing moment."""
    days_since_sunday = (moment.weekday() + 1) % DAYS_PER_WEEK
    return start_of_day(moment - timedelta(days=days_since_sunday))


def add_months(moment: datetime, months: int) -> datetime:
    """
    Shift moment by a number of calendar months.

    The day of month is clamped to the target month's length, so
    Mar 31 minus one month is Feb 28 (or 29).
    """
    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _short_date(moment: datetime) -> str:
    return f"{MONTH_NAMES[moment.month - 1][:3]} {moment.day}"


def week_range(reference_date: datetime, now: datetime) -> PeriodRange:
    """
    Resolve the Sunday-Saturday week containing reference_date.

    Label: "This Week", "Last Week" or "N Weeks Ago" relative to now's week.
    Subtitle: "Mar 2 - Mar 8".
    """
    start = week_start(reference_date)
    end = end_of_day(start + timedelta(days=DAYS_PER_WEEK - 1))

    this_week_start = week_start(now)
    label = "This Week"
    if start < this_week_start:
        weeks_ago = (this_week_start.date() - start.date()).days // DAYS_PER_WEEK
        label = "Last Week" if weeks_ago == 1 else f"{weeks_ago} Weeks Ago"

    subtitle = f"{_short_date(start)} - {_short_date(end)}"
    return PeriodRange("week", DateRange(start, end), label, subtitle)


def month_range(reference_date: datetime, now: datetime) -> PeriodRange:
    """
    Resolve the calendar month containing reference_date.

    Label: "This Month", the month name, or "Month YYYY" for another year.
    Subtitle: the four-digit year.
    """
    year, month = reference_date.year, reference_date.month
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1)
    end = datetime.combine(datetime(year, month, last_day).date(), END_OF_DAY)

    month_name = MONTH_NAMES[month - 1]
    if year != now.year:
        label = f"{month_name} {year}"
    elif month == now.month:
        label = "This Month"
    else:
        label = month_name

    return PeriodRange("month", DateRange(start, end), label, str(year))


def year_range(reference_date: datetime, now: datetime) -> PeriodRange:
    """Resolve the calendar year containing reference_date."""
    year = reference_date.year
    start = datetime(year, 1, 1)
    end = datetime.combine(datetime(year, 12, 31).date(), END_OF_DAY)
    label = "This Year" if year == now.year else str(year)
    return PeriodRange("year", DateRange(start, end), label, YEAR_SUBTITLE)


def resolve_period(
    period: str,
    reference_date: datetime,
    now: datetime | None = None,
) -> PeriodRange:
    """
    Resolve the range, label and subtitle of a recap period.

    Args:
        period: "week", "month" or "year"
        reference_date: Any moment inside the wanted period
        now: Moment used for relative labels (default: wall clock)

    Returns:
        PeriodRange

    Raises:
        ValueError: If period is not a known kind
    """
    check_period(period)
    if now is None:
        now = datetime.now()

    if period == "week":
        return week_range(reference_date, now)
    if period == "month":
        return month_range(reference_date, now)
    return year_range(reference_date, now)


def _shift(period: str, current_date: datetime, steps: int) -> datetime:
    check_period(period)
    if period == "week":
        return current_date + timedelta(days=DAYS_PER_WEEK * steps)
    if period == "month":
        return add_months(current_date, steps)
    return add_months(current_date, 12 * steps)


def get_previous_period(period: str, current_date: datetime) -> datetime:
    """Reference date one week, month or year before current_date."""
    return _shift(period, current_date, -1)


def get_next_period(period: str, current_date: datetime) -> datetime:
    """Reference date one week, month or year after current_date."""
    return _shift(period, current_date, 1)


def can_go_next(
    period: str,
    current_date: datetime,
    now: datetime | None = None,
) -> bool:
    """
    True if the period containing current_date lies strictly before now's period.

    Buckets are compared, not raw dates: any date inside the current week,
    month or year returns False.
    """
    check_period(period)
    if now is None:
        now = datetime.now()

    if period == "week":
        return week_start(current_date) < week_start(now)
    if period == "month":
        viewing = current_date.year * 12 + current_date.month
        current = now.year * 12 + now.month
        return viewing < current
    return current_date.year < now.year
