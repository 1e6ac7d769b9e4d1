import threading
from collections import defaultdict

from src.timeclock.timeclock.timesheet.locks import EmployeeLocks


def _run_parallel(workers):
    barrier = threading.Barrier(len(workers))
    errors = []

    def wrap(fn):
        def run():
            barrier.wait()
            try:
                fn()
            except Exception as exc:  # collected and asserted below
                errors.append(exc)

        return run

    threads = [threading.Thread(target=wrap(fn)) for fn in workers]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return errors


def test_same_employee_commands_never_leave_two_open_entries(build, make_clock, fixed_now, work_repo, break_repo):
    clock = make_clock(fixed_now, stepping=True)
    service = build(clock).time_accounting_service

    def clock_in():
        for _ in range(20):
            service.start_task(1, 1, 10)

    def go_on_break():
        for _ in range(20):
            service.start_break(1, "paid")

    errors = _run_parallel([clock_in, go_on_break, clock_in, go_on_break])

    assert errors == []

    open_work = [e for e in work_repo.all() if e.is_open]
    open_breaks = [e for e in break_repo.all() if e.is_open]
    assert len(open_work) + len(open_breaks) == 1

    for entry in work_repo.all() + break_repo.all():
        if not entry.is_open:
            assert entry.end_time > entry.start_time


def test_entries_of_one_employee_do_not_overlap(build, make_clock, fixed_now, work_repo, break_repo):
    clock = make_clock(fixed_now, stepping=True)
    service = build(clock).time_accounting_service

    def employee(employee_id):
        def run():
            for i in range(15):
                if i % 2:
                    service.start_break(employee_id, "unpaid")
                else:
                    service.start_task(employee_id, 1, 10)
            service.end_task(employee_id)
            service.end_break(employee_id)

        return run

    errors = _run_parallel([employee(1), employee(2), employee(3)])
    assert errors == []

    by_employee = defaultdict(list)
    for entry in work_repo.all() + break_repo.all():
        by_employee[entry.employee_id].append(entry)

    for entries in by_employee.values():
        entries.sort(key=lambda e: e.start_time)
        for prev, nxt in zip(entries, entries[1:]):
            assert prev.end_time is not None
            assert prev.end_time <= nxt.start_time


def test_lock_registry_holds_one_lock_per_employee():
    locks = EmployeeLocks()
    for employee_id in [1, 2, 1, 3, 2, 1]:
        with locks.hold(employee_id):
            pass

    assert len(locks._locks) == 3
    assert locks._lock_for(1) is locks._lock_for(1)
