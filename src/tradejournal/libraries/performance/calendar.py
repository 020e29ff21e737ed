"""Calendar-boundary arithmetic for journal periods.

All dates are naive calendar days. Weeks run Sunday through Saturday.
"""

from datetime import date, timedelta

ONE_DAY = timedelta(days=1)


def start_of_week(day: date) -> date:
    """
    Sunday on or before `day`.

    Example:
        >>> start_of_week(date(2025, 3, 5))  # Wednesday
        datetime.date(2025, 3, 2)
    """
    # date.weekday(): Monday=0 ... Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def end_of_week(day: date) -> date:
    """Saturday on or after `day`."""
    return start_of_week(day) + timedelta(days=6)


def start_of_month(day: date) -> date:
    """First day of the month containing `day`."""
    return day.replace(day=1)


def start_of_year(day: date) -> date:
    """January 1st of the year containing `day`."""
    return date(day.year, 1, 1)


def same_week(day: date, reference: date) -> bool:
    """True if both days fall in the same Sunday-Saturday week."""
    return start_of_week(day) == start_of_week(reference)


def same_month(day: date, reference: date) -> bool:
    """True if both days fall in the same calendar month."""
    return (day.year, day.month) == (reference.year, reference.month)


def day_of_year(day: date) -> int:
    """1-based ordinal day within the year (Jan 1st = 1)."""
    return (day - start_of_year(day)).days + 1


def month_key(day: date) -> tuple[int, int]:
    """(year, month) bucket key."""
    return (day.year, day.month)
