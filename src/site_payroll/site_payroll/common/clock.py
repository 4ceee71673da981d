"""Injectable time source.

Services take a ``Clock`` instead of calling ``datetime.now()`` so tests can
pin "today" (future-date checks, submission timestamps).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Current local time."""
        raise NotImplementedError

    def today(self) -> date:
        """Caller's local calendar date."""
        return self.now().date()


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """Test clock: returns the same instant until ``set`` is called."""

    def __init__(self, fixed: datetime):
        self._fixed = fixed

    def now(self) -> datetime:
        return self._fixed

    def set(self, fixed: datetime) -> None:
        self._fixed = fixed
