"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAID_BREAK_LIMIT_MINUTES = 15
DEFAULT_UNPAID_BREAK_LIMIT_MINUTES = 30
DEFAULT_TIMEZONE = "UTC"

PIN_LENGTH = 4
EMPLOYEE_CODE_PREFIX = "EMP"
