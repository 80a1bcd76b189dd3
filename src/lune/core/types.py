from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Tuple

from .errors import InvalidArgumentError


class Phase(IntEnum):
    """Quarter-phase selector; the value times 0.25 is the fraction of a lunation."""
    NEW = 0
    FIRST = 1
    FULL = 2
    LAST = 3

    @property
    def fraction(self) -> float:
        return 0.25 * int(self)

    @classmethod
    def normalize(cls, selector: int) -> "Phase":
        """Accept a Phase or any int; integers wrap modulo 4."""
        if isinstance(selector, bool) or not isinstance(selector, int):
            raise InvalidArgumentError(f"phase selector must be an int or Phase, got {type(selector).__name__}")
        return cls(selector % 4)

    @classmethod
    def from_name(cls, name: str) -> "Phase":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise InvalidArgumentError(f"Unknown phase '{name}'. Available: {[p.name.lower() for p in cls]}") from None


PHASE_NEW = Phase.NEW
PHASE_FIRST = Phase.FIRST
PHASE_FULL = Phase.FULL
PHASE_LAST = Phase.LAST


@dataclass(frozen=True)
class PhaseInfo:
    """Instantaneous lunar phase snapshot.

    phase: fraction of the current lunation in [0, 1), 0 = new moon
    illuminated: lit fraction of the disk in [0, 1]
    age: days since the last new moon
    distance, sun_distance: km from the centre of the Earth
    angular_diameter, sun_angular_diameter: degrees
    """
    phase: float
    illuminated: float
    age: float
    distance: float
    angular_diameter: float
    sun_distance: float
    sun_angular_diameter: float


@dataclass(frozen=True)
class PhaseHunt:
    """The quarter phases of the lunation containing a given instant."""
    new_date: datetime
    q1_date: datetime
    full_date: datetime
    q3_date: datetime
    nextnew_date: datetime

    def dates(self) -> Tuple[datetime, datetime, datetime, datetime, datetime]:
        return (self.new_date, self.q1_date, self.full_date, self.q3_date, self.nextnew_date)
