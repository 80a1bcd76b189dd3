"""lune public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .api import (
    phase,
    phase_hunt,
    phase_range,
    iter_phase_range,
    from_datetime,
    to_datetime,
)
from .core.types import (
    Phase,
    PhaseInfo,
    PhaseHunt,
    PHASE_NEW,
    PHASE_FIRST,
    PHASE_FULL,
    PHASE_LAST,
)
from .core.errors import (
    LuneError,
    InvalidArgumentError,
    OutOfRangeError,
    NonConvergenceError,
)

__all__ = [
    "phase",
    "phase_hunt",
    "phase_range",
    "iter_phase_range",
    "from_datetime",
    "to_datetime",
    "Phase",
    "PhaseInfo",
    "PhaseHunt",
    "PHASE_NEW",
    "PHASE_FIRST",
    "PHASE_FULL",
    "PHASE_LAST",
    "LuneError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "NonConvergenceError",
]
