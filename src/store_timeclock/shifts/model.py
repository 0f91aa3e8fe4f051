from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class Shift:
    """Thực thể miền (domain): Ca làm việc (Shift).

    Grace values are minutes of tolerance around the shift boundaries. They are
    kept as ``None`` when not configured; the ``*_minutes`` properties read an
    absent value as 0.
    """

    shift_id: str
    name: str
    short_name: str
    start_time: time
    end_time: time
    color: str = ""
    clock_in_before: Optional[int] = None
    clock_in_after: Optional[int] = None
    clock_out_before: Optional[int] = None
    clock_out_after: Optional[int] = None

    @property
    def clock_in_before_minutes(self) -> int:
        return self.clock_in_before or 0

    @property
    def clock_in_after_minutes(self) -> int:
        return self.clock_in_after or 0

    @property
    def clock_out_before_minutes(self) -> int:
        return self.clock_out_before or 0

    @property
    def clock_out_after_minutes(self) -> int:
        return self.clock_out_after or 0
