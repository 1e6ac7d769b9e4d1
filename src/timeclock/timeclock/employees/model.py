from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Thực thể miền (domain): Nhân viên.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    ``pin_set_at`` is None while the employee still has to choose a PIN.
    """

    employee_id: int
    name: str
    employee_code: str
    is_temp: bool = False
    position: str = "Employee"
    pin_set_at: Optional[datetime] = None

    @property
    def requires_pin_setup(self) -> bool:
        return self.pin_set_at is None
