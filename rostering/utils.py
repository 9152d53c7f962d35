import calendar
import datetime as dt
import math
from dateutil.rrule import rrule, DAILY


def date_list(start: dt.date, end: dt.date):
    return [d.date() for d in rrule(DAILY, dtstart=start, until=end)]


def month_dates(year: int, month0: int):
    """All calendar dates of a month, given a zero-based month index."""
    first = dt.date(year, month0 + 1, 1)
    last = dt.date(year, month0 + 1, days_in_month(year, month0))
    return date_list(first, last)


def days_in_month(year: int, month0: int) -> int:
    return calendar.monthrange(year, month0 + 1)[1]


def first_weekday(year: int, month0: int) -> int:
    """Weekday of the 1st with Sunday as 0."""
    return (dt.date(year, month0 + 1, 1).weekday() + 1) % 7


def weeks_in_month(year: int, month0: int) -> int:
    return math.ceil((first_weekday(year, month0) + days_in_month(year, month0)) / 7)


def week_index(first_wd: int, day_num: int) -> int:
    return (first_wd + day_num - 1) // 7

