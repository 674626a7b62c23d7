import pytest
from datetime import date
from app.core.exceptions import ValidationFailed
from app.services import leave_accrual


def test_january_joiner_has_twelve_days_by_december():
    for leave_type in ("casual", "sick"):
        assert leave_accrual.calculate_available_leaves(date(2025, 1, 10), leave_type, today=date(2025, 12, 5)) == 12


@pytest.mark.parametrize("joining_month,current_month", [(1, 1), (3, 7), (6, 6), (11, 12)])
def test_current_year_joiner_accrues_from_joining_month(joining_month, current_month):
    doj = date(2025, joining_month, 20)
    today = date(2025, current_month, 1)
    assert leave_accrual.calculate_available_leaves(doj, "casual", today) == current_month - joining_month + 1


def test_prior_year_joiner_gets_full_year():
    assert leave_accrual.calculate_available_leaves(date(2019, 8, 1), "sick", today=date(2025, 2, 1)) == 12


def test_joining_later_this_year_is_floored_at_zero():
    assert leave_accrual.calculate_available_leaves(date(2025, 9, 1), "casual", today=date(2025, 4, 1)) == 0


def test_joining_in_a_future_year_accrues_nothing():
    assert leave_accrual.calculate_available_leaves(date(2026, 1, 1), "casual", today=date(2025, 12, 31)) == 0


def test_unknown_leave_type_is_rejected():
    with pytest.raises(ValidationFailed):
        leave_accrual.calculate_available_leaves(date(2025, 1, 1), "annual", today=date(2025, 3, 1))


def test_half_day_consumes_half():
    assert leave_accrual.count_leave_days(date(2025, 3, 4), date(2025, 3, 4), is_half_day=True) == 0.5


def test_half_day_requires_same_dates():
    with pytest.raises(ValidationFailed) as exc:
        leave_accrual.count_leave_days(date(2025, 3, 4), date(2025, 3, 5), is_half_day=True)
    assert "must be the same" in exc.value.message


def test_full_day_counts_inclusive_range():
    assert leave_accrual.count_leave_days(date(2025, 3, 4), date(2025, 3, 4)) == 1
    assert leave_accrual.count_leave_days(date(2025, 3, 4), date(2025, 3, 6)) == 3
    assert leave_accrual.count_leave_days(date(2025, 2, 27), date(2025, 3, 2)) == 4


def test_end_before_start_is_rejected():
    with pytest.raises(ValidationFailed):
        leave_accrual.count_leave_days(date(2025, 3, 6), date(2025, 3, 4))


def test_month_bounds_handles_leap_february():
    assert leave_accrual.month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert leave_accrual.month_bounds(2025, 2) == (date(2025, 2, 1), date(2025, 2, 28))


def test_overlap_rules():
    march = leave_accrual.month_bounds(2025, 3)
    # starts within
    assert leave_accrual.overlaps(date(2025, 3, 30), date(2025, 4, 2), *march)
    # ends within
    assert leave_accrual.overlaps(date(2025, 2, 27), date(2025, 3, 1), *march)
    # spans the whole month
    assert leave_accrual.overlaps(date(2025, 2, 20), date(2025, 4, 5), *march)
    # entirely outside
    assert not leave_accrual.overlaps(date(2025, 4, 1), date(2025, 4, 3), *march)


def test_breakdown_start_month():
    assert leave_accrual.breakdown_start_month(date(2024, 5, 3), 2025) == 1
    assert leave_accrual.breakdown_start_month(date(2025, 5, 3), 2025) == 5
    assert leave_accrual.breakdown_start_month(date(2026, 5, 3), 2025) == 1
