from datetime import date, timedelta

import pytest

from src.timeclock.timeclock.core.enums import ActivityState, BreakKind
from src.timeclock.timeclock.core.exceptions import (
    BreakOverLimitError,
    InvalidIntervalError,
    StorageError,
    ValidationError,
)


def test_start_break_closes_work_at_same_instant(service, clock, work_repo, break_repo):
    service.start_task(1, 1, 10)
    clock.advance(minutes=45)

    brk = service.start_break(1, "paid")

    work = work_repo.all()[0]
    assert work.end_time == brk.start_time == clock.now()
    assert work.duration_minutes == 45
    assert work.shift_id == 1
    assert break_repo.find_open(1) == brk


def test_never_both_open(service, clock, work_repo, break_repo):
    service.start_task(1, 1, 10)
    clock.advance(minutes=10)
    service.start_break(1, BreakKind.UNPAID)
    clock.advance(minutes=10)
    service.start_task(1, 1, 11)

    assert work_repo.find_open(1) is not None
    assert break_repo.find_open(1) is None
    assert service.current_state(1).state is ActivityState.WORKING


def test_end_task_twice_is_noop(service, clock):
    service.start_task(1, 1, 10)
    clock.advance(minutes=30)

    assert service.end_task(1).duration_minutes == 30
    assert service.end_task(1) is None
    assert service.current_state(1).state is ActivityState.IDLE


def test_end_break_when_idle_is_noop(service):
    assert service.end_break(1) is None


def test_daily_totals(service, clock):
    service.start_task(1, 1, 10)
    clock.advance(minutes=45)
    service.start_break(1, "paid")
    clock.advance(minutes=10)
    service.end_break(1)

    totals = service.daily_totals(1, date(2026, 2, 2))

    assert totals.work_minutes == 45
    assert totals.paid_break_minutes == 10
    assert totals.unpaid_break_minutes == 0
    assert totals.break_minutes == 10


def test_daily_totals_include_open_entry_live(service, clock):
    service.start_task(1, 1, 10)
    clock.advance(minutes=20)

    assert service.daily_totals(1, date(2026, 2, 2)).work_minutes == 20
    clock.advance(minutes=5)
    assert service.daily_totals(1, date(2026, 2, 2)).work_minutes == 25


def test_daily_totals_of_other_day_are_empty(service, clock):
    service.start_task(1, 1, 10)
    clock.advance(minutes=20)
    service.end_task(1)

    totals = service.daily_totals(1, date(2026, 2, 1))
    assert (totals.work_minutes, totals.break_minutes) == (0, 0)


def test_current_state(service, clock):
    assert service.current_state(1).state is ActivityState.IDLE

    work = service.start_task(1, 1, 10)
    state = service.current_state(1)
    assert state.state is ActivityState.WORKING
    assert state.entry == work

    clock.advance(minutes=1)
    brk = service.start_break(1, "unpaid")
    state = service.current_state(1)
    assert state.state is ActivityState.ON_BREAK
    assert state.entry == brk


def test_break_over_limit_then_confirmed(service, clock, break_repo):
    service.start_break(1, "paid")
    clock.advance(minutes=16)

    with pytest.raises(BreakOverLimitError):
        service.end_break(1)
    assert service.current_state(1).state is ActivityState.ON_BREAK

    assert service.end_break(1, confirm_over_limit=True).duration_minutes == 16
    assert service.break_limit(BreakKind.PAID) == 15


def test_todays_activity_is_ordered(service, clock):
    service.start_task(1, 1, 10)
    clock.advance(minutes=30)
    service.start_break(1, "paid")
    clock.advance(minutes=5)
    service.start_task(1, 2, 20)
    clock.advance(minutes=15)

    activity = service.todays_activity(1)

    assert activity.entry_date == date(2026, 2, 2)
    assert [e.task_id for e in activity.work_entries] == [10, 20]
    assert len(activity.break_entries) == 1
    assert activity.totals.work_minutes == 45
    assert activity.totals.paid_break_minutes == 5


@pytest.mark.parametrize("employee_id", [0, -3, None, "abc"])
def test_invalid_employee_id(service, employee_id):
    with pytest.raises(ValidationError):
        service.start_task(employee_id, 1, 10)


def test_task_must_belong_to_department(service, work_repo):
    with pytest.raises(ValidationError, match="does not belong"):
        service.start_task(1, 2, 10)
    with pytest.raises(ValidationError):
        service.start_task(1, 1, 999)
    assert work_repo.all() == []


def test_unknown_break_kind(service, break_repo):
    with pytest.raises(ValidationError, match="Unknown break kind"):
        service.start_break(1, "lunch")
    assert break_repo.all() == []


def test_break_kind_is_case_insensitive(service):
    assert service.start_break(1, " PAID ").break_kind is BreakKind.PAID


def test_invalid_interval_leaves_entry_open(service, clock, work_repo):
    work = service.start_task(1, 1, 10)
    clock.advance(minutes=-5)

    with pytest.raises(InvalidIntervalError):
        service.end_task(1)
    with pytest.raises(InvalidIntervalError):
        service.start_break(1, "paid")

    assert work_repo.find_open(1) == work


def test_storage_failure_propagates(service, work_repo):
    work_repo.fail_inserts = True

    with pytest.raises(StorageError):
        service.start_task(1, 1, 10)

    assert service.current_state(1).state is ActivityState.IDLE


def test_storage_failure_after_auto_close_leaves_employee_idle(service, clock, work_repo):
    first = service.start_task(1, 1, 10)
    clock.advance(minutes=25)
    work_repo.fail_inserts = True

    with pytest.raises(StorageError):
        service.start_task(1, 1, 11)

    assert service.current_state(1).state is ActivityState.IDLE
    closed = work_repo.get_by_id(first.entry_id)
    assert closed.end_time == clock.now()
    assert closed.duration_minutes == 25


def test_employees_are_independent(service, clock):
    service.start_task(1, 1, 10)
    service.start_break(2, "unpaid")
    clock.advance(minutes=10)

    assert service.current_state(1).state is ActivityState.WORKING
    assert service.current_state(2).state is ActivityState.ON_BREAK
    assert service.end_task(2) is None
