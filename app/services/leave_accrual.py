"""
Leave accrual rules.

Pure functions over dates: how many days an employee has accrued,
how many days a request consumes, and which requests touch a month.
Nothing here touches the database.
"""
import calendar
from datetime import date
from typing import Iterable, Optional, Tuple

from app.core.exceptions import ValidationFailed
from app.models.leave_request import LeaveType

# Days credited per elapsed calendar month
MONTHLY_LEAVE_ALLOCATION = {
    LeaveType.CASUAL.value: 1,
    LeaveType.SICK.value: 1,
}

HALF_DAY = 0.5


def _type_key(leave_type) -> str:
    return leave_type.value if isinstance(leave_type, LeaveType) else str(leave_type)


def monthly_rate(leave_type) -> float:
    key = _type_key(leave_type)
    if key not in MONTHLY_LEAVE_ALLOCATION:
        raise ValidationFailed(f"Unknown leave type: {key}")
    return MONTHLY_LEAVE_ALLOCATION[key]


def elapsed_months(doj: date, today: date) -> int:
    """
    Months accrued in today's calendar year.

    Joined this year: joining month through the current month, inclusive.
    Joined in a prior year: the whole year. Joined after this year: nothing.
    """
    if doj.year == today.year:
        return max(0, today.month - doj.month + 1)
    if doj.year < today.year:
        return 12
    # Future joining date: nothing, not the months elapsed so far this year
    return 0


def calculate_available_leaves(doj: date, leave_type, today: Optional[date] = None) -> float:
    today = today or date.today()
    return elapsed_months(doj, today) * monthly_rate(leave_type)


def count_leave_days(from_date: date, end_date: date, is_half_day: bool = False) -> float:
    """Days a request consumes; the date range is inclusive."""
    if is_half_day:
        if from_date != end_date:
            raise ValidationFailed("For half day leave, from date and end date must be the same")
        return HALF_DAY

    total_days = (end_date - from_date).days + 1
    if total_days <= 0:
        raise ValidationFailed("End date must be after or equal to start date")
    return float(total_days)


def year_bounds(year: int) -> Tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def overlaps(from_date: date, end_date: date, period_start: date, period_end: date) -> bool:
    """True if the leave starts in, ends in, or spans across the period."""
    starts_within = period_start <= from_date <= period_end
    ends_within = period_start <= end_date <= period_end
    spans = from_date < period_start and end_date > period_end
    return starts_within or ends_within or spans


def sum_days(leaves: Iterable) -> float:
    return float(sum(leave.total_days for leave in leaves))


def breakdown_start_month(doj: date, year: int) -> int:
    """First month of the breakdown: the joining month in the joining year, January otherwise."""
    if doj.year == year:
        return doj.month
    return 1
