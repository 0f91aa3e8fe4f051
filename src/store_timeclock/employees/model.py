from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Employee:
    """Thực thể miền (domain): Nhân viên cửa hàng.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    """

    employee_id: int
    name: str
    pin: str
