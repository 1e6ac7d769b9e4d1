from __future__ import annotations

import logging
import random
import re
from typing import Callable, Optional

from werkzeug.security import generate_password_hash

from ..common.clock import Clock
from ..common.validators import require_non_empty, require_pin, require_positive_id
from ..core.constants import EMPLOYEE_CODE_PREFIX, PIN_LENGTH
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def generate_employee_code(name: str, *, rand: Callable[[int, int], int] = random.randint) -> str:
    """``EMP_<lowercased_name>_<4 digits>``."""

    name_part = re.sub(r"\s+", "_", name.strip().lower())
    return f"{EMPLOYEE_CODE_PREFIX}_{name_part}_{rand(1000, 9999)}"


class EmployeeService:
    """Use case: employee registration and PIN lifecycle.

    Only the lifecycle (PIN required vs PIN set) matters to time accounting;
    checking a PIN at sign-in is handled by the surrounding application.
    """

    def __init__(self, employees: EmployeeRepository, clock: Clock, *, code_generator=generate_employee_code):
        self._employees = employees
        self._clock = clock
        self._code_generator = code_generator

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(require_positive_id(employee_id, "Employee"))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def find_by_name(self, name: str) -> Optional[Employee]:
        """Exact (trimmed) name lookup used at sign-in."""

        return self._employees.get_by_name(require_non_empty(name, "Name"))

    def register_employee(self, *, name: str, is_temp: bool = False, position: str = "Employee") -> Employee:
        name = require_non_empty(name, "Name")
        position = (position or "").strip() or "Employee"

        if self._employees.get_by_name(name):
            raise ValidationError("An employee with this name already exists")

        code = self._code_generator(name)
        while self._employees.get_by_code(code):
            code = self._code_generator(name)

        employee_id = self._employees.create(name=name, employee_code=code, is_temp=bool(is_temp), position=position)
        logger.info("Registered employee %s (%s)", employee_id, code)
        return Employee(employee_id=employee_id, name=name, employee_code=code, is_temp=bool(is_temp), position=position)

    def requires_pin_setup(self, employee_id: int) -> bool:
        return self.get(employee_id).requires_pin_setup

    def set_pin(self, employee_id: int, *, pin: str, confirm_pin: str) -> None:
        employee = self.get(employee_id)
        require_pin(pin, length=PIN_LENGTH)
        if pin != confirm_pin:
            raise ValidationError("PINs do not match")

        self._employees.set_pin(
            employee.employee_id,
            pin_hash=generate_password_hash(pin),
            pin_set_at=self._clock.now(),
        )
        logger.info("Employee %s set a PIN", employee.employee_id)

    def reset_pin(self, employee_id: int) -> None:
        """Admin reset: the employee must choose a new PIN on next sign-in."""

        employee = self.get(employee_id)
        self._employees.clear_pin(employee.employee_id)
        logger.info("PIN of employee %s was reset", employee.employee_id)
