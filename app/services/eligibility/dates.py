"""
Calendar arithmetic used by the eligibility rules.

Differences are calendar based: ages count birthdays, month differences only
look at year and month numbers. Additions of months or years that land past
the end of the target month roll forward into the next month, so
2020-02-29 plus one year is 2021-03-01.
"""
from datetime import date, datetime, timedelta


def as_date(value) -> date:
    """Reduce a datetime to its calendar date; pass dates through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def calculate_age(date_of_birth: date, current_date: date) -> int:
    """Whole years between birth and current_date."""
    age = current_date.year - date_of_birth.year
    if (current_date.month, current_date.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def days_between(start: date, end: date) -> int:
    return abs((end - start).days)


def weeks_between(start: date, end: date) -> int:
    return days_between(start, end) // 7


def months_between(start: date, end: date) -> int:
    """Month-number difference; negative when start is after end."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def add_months(value: date, months: int) -> date:
    total = value.month - 1 + months
    first_of_month = date(value.year + total // 12, total % 12 + 1, 1)
    return first_of_month + timedelta(days=value.day - 1)


def add_years(value: date, years: int) -> date:
    return add_months(value, years * 12)
