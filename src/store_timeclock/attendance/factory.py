from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ClockAction
from .strategies.base import ClockStrategy
from .strategies.clock_in_strategy import ClockInStrategy
from .strategies.clock_out_strategy import ClockOutStrategy


@dataclass
class ClockStrategyFactory:
    """Factory Pattern: choose the window/deviation rules for an action."""

    def for_action(self, action: ClockAction) -> ClockStrategy:
        if action == ClockAction.CLOCK_IN:
            return ClockInStrategy()
        if action == ClockAction.CLOCK_OUT:
            return ClockOutStrategy()
        raise ValueError(f"Unsupported clock action: {action!r}")
