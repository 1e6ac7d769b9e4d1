"""Timeclock package.

Time accounting engine for employee work and break sessions, organized by
feature modules (shifts, timesheet, employees, reports, ...) with a thin
Flask controller layer over service/repository layers.
"""
