from datetime import date, datetime, time, timedelta
from typing import Protocol


class Clock(Protocol):
    """Supplies the user-local calendar date."""

    def today(self) -> date: ...

    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock of the running machine"""

    def today(self) -> date:
        return date.today()

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Clock pinned to one day, moved forward explicitly"""

    def __init__(self, day: date):
        self.day = day

    def today(self) -> date:
        return self.day

    def now(self) -> datetime:
        return datetime.combine(self.day, time(hour=12))

    def advance(self, days: int = 1) -> date:
        self.day = self.day + timedelta(days=days)
        return self.day
