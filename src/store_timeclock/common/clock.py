from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol

from .datetime_utils import now_local


class Clock(Protocol):
    """Clock provider: every time-window and deviation rule reads "now" from here."""

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    def now(self) -> datetime:
        return now_local()


class FixedClock:
    """Pinned clock for tests and replays."""

    def __init__(self, moment: datetime):
        self._moment = moment

    def now(self) -> datetime:
        return self._moment

    def set(self, moment: datetime) -> None:
        self._moment = moment

    def advance(self, **kwargs) -> datetime:
        self._moment += timedelta(**kwargs)
        return self._moment
