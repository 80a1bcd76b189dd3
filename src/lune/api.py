from __future__ import annotations

from datetime import datetime
from typing import Iterator, List, Optional

from .core.time import Instant, as_utc_datetime
from .core.types import Phase, PhaseHunt, PhaseInfo
from .reference import julian
from .reference import phases as _phases
from .reference.lunar import lunar_phase


def from_datetime(dt: Instant) -> float:
    """Instant -> Julian date (UTC)."""
    return julian.from_datetime(as_utc_datetime(dt))


def to_datetime(jd: float) -> datetime:
    """Julian date (UTC) -> timezone-aware UTC datetime."""
    return julian.to_datetime(jd)


def phase(when: Optional[Instant] = None) -> PhaseInfo:
    """Phase, illumination, age and distances of the Moon (and Sun) at `when` (default: now)."""
    dt = as_utc_datetime(when, default_now=True)
    return lunar_phase(julian.from_datetime(dt))


def phase_hunt(when: Optional[Instant] = None) -> PhaseHunt:
    """The five quarter phases, new moon to next new moon, surrounding `when` (default: now)."""
    dt = as_utc_datetime(when, default_now=True)
    return _phases.hunt(dt)


def iter_phase_range(start: Instant, end: Instant, selector: int = Phase.NEW) -> Iterator[datetime]:
    """Lazily yield each `selector` phase in [start, end]; the bounds may be given in either order."""
    a = as_utc_datetime(start)
    b = as_utc_datetime(end)
    sel = Phase.normalize(selector)
    if b < a:
        a, b = b, a
    return _phases.iter_range(a, b, sel)


def phase_range(start: Instant, end: Instant, selector: int = Phase.NEW) -> List[datetime]:
    return list(iter_phase_range(start, end, selector))
