"""Clock port used for coupon activity and order dates."""

from datetime import date, datetime
from typing import Protocol


class Clock(Protocol):
    """Port supplying the current instant and calendar date."""

    def now(self) -> datetime:
        raise NotImplementedError()

    def today(self) -> date:
        raise NotImplementedError()


class SystemClock(Clock):
    """Wall clock in the process local time zone."""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return date.today()


class FixedClock(Clock):
    """Clock frozen at a given instant; ``advance_to`` moves it.

    Intended for tests and deterministic replays.
    """

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def today(self) -> date:
        return self.instant.date()

    def advance_to(self, instant: datetime) -> None:
        self.instant = instant
