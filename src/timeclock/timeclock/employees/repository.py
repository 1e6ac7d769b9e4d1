from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Giao diện repository cho Employee.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create(self, *, name: str, employee_code: str, is_temp: bool, position: str) -> int:
        raise NotImplementedError

    def set_pin(self, employee_id: int, *, pin_hash: str, pin_set_at: datetime) -> bool:
        raise NotImplementedError

    def clear_pin(self, employee_id: int) -> bool:
        raise NotImplementedError
