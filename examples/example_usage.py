"""Example: drive the time accounting service without Flask.

Controllers are a thin layer; clocking rules live in the services.
"""

import importlib

from config import get_settings_module

from src.timeclock.timeclock.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, timezone_name=settings.TIMEZONE)
    svc = container.time_accounting_service

    svc.start_task(1, 1, 1)
    svc.start_break(1, "paid")
    print(svc.current_state(1))
    print(svc.daily_totals(1, container.clock.local_date(container.clock.now())))


if __name__ == "__main__":
    main()
