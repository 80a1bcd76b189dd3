# reference/phases.py

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterator, Tuple

from . import astro_args as aa
from . import julian
from ..core.errors import NonConvergenceError
from ..core.time import days_before, lunation_index_estimate
from ..core.types import Phase, PhaseHunt

logger = logging.getLogger(__name__)

# Days to step back before estimating k, so the first estimate lands before
# the new moon that opens the bracketing lunation.
HUNT_LOOKBACK_DAYS = 45.0
MAX_SEARCH_ITERS = 100


# (m, m', f, coefficient in days): coefficient * sin(m*M + m'*M' + f*F)
# The leading sin(M) term carries a t-dependent coefficient and is applied separately.
NEW_FULL_TERMS = (
    (2, 0, 0, 0.0021),
    (0, 1, 0, -0.4068),
    (0, 2, 0, 0.0161),
    (0, 3, 0, -0.0004),
    (0, 0, 2, 0.0104),
    (1, 1, 0, -0.0051),
    (1, -1, 0, -0.0074),
    (1, 0, 2, 0.0004),
    (-1, 0, 2, -0.0004),
    (0, 1, 2, -0.0006),
    (0, -1, 2, 0.0010),
    (1, 2, 0, 0.0005),
)

QUARTER_TERMS = (
    (2, 0, 0, 0.0021),
    (0, 1, 0, -0.6280),
    (0, 2, 0, 0.0089),
    (0, 3, 0, -0.0004),
    (0, 0, 2, 0.0079),
    (1, 1, 0, -0.0119),
    (1, -1, 0, -0.0047),
    (1, 0, 2, 0.0003),
    (-1, 0, 2, -0.0004),
    (0, 1, 2, -0.0006),
    (0, -1, 2, 0.0021),
    (1, 2, 0, 0.0003),
    (1, -2, 0, 0.0004),
    (2, 1, 0, -0.0003),
)


def _mean_phase_poly(k: float, t: float) -> float:
    return (
        aa.MEAN_PHASE_BASE_JD
        + aa.SYNODIC_MONTH * k
        + (0.0001178 - 0.000000155 * t) * t * t
        + 0.00033 * aa.dsin(166.56 + (132.87 - 0.009173 * t) * t)
    )


def meanphase(sdate: float, k: float) -> float:
    """
    JD of the mean new moon for lunation index k. The base date sdate (JD)
    only drives the small secular terms, as Julian centuries from 1900
    January 1 noon.
    """
    t = (sdate - aa.MEAN_PHASE_EPOCH_JD) / aa.JULIAN_CENTURY_DAYS
    return _mean_phase_poly(k, t)


def _correction(terms, m: float, mprime: float, f: float) -> float:
    s = 0.0
    for a, b, c, coef in terms:
        s += coef * aa.dsin(a * m + b * mprime + c * f)
    return s


def truephase_jd(k: float, selector: int) -> float:
    """
    Corrected JD of the phase `selector` in lunation k (mean phase plus the
    periodic terms for the Sun's and Moon's anomalies and the Moon's
    argument of latitude).
    """
    sel = Phase.normalize(selector)
    k = k + sel.fraction

    # Julian centuries from 1900 January 0.5
    t = k / aa.LUNATIONS_PER_CENTURY

    pt = _mean_phase_poly(k, t)

    # Sun's mean anomaly
    m = 359.2242 + 29.10535608 * k - (0.0000333 - 0.00000347 * t) * t * t
    # Moon's mean anomaly
    mprime = 306.0253 + 385.81691806 * k + (0.0107306 + 0.00001236 * t) * t * t
    # Moon's argument of latitude
    f = 21.2964 + 390.67050646 * k - (0.0016528 - 0.00000239 * t) * t * t

    if sel in (Phase.NEW, Phase.FULL):
        pt += (0.1734 - 0.000393 * t) * aa.dsin(m) + _correction(NEW_FULL_TERMS, m, mprime, f)
    else:
        pt += (0.1721 - 0.0004 * t) * aa.dsin(m) + _correction(QUARTER_TERMS, m, mprime, f)
        quarter = 0.0028 - 0.0004 * aa.dcos(m) + 0.0003 * aa.dcos(mprime)
        pt += quarter if sel is Phase.FIRST else -quarter

    return pt


def truephase(k: float, selector: int) -> datetime:
    return julian.to_datetime(truephase_jd(k, selector))


# ============================================================
# Searches
# ============================================================

def bracket_lunation(sdate: datetime) -> Tuple[int, int]:
    """
    Lunation indices (k1, k1 + 1) whose new moons bracket sdate.

    The mean new moons are walked forward from a coarse estimate taken
    45 days earlier until nt1 <= jd < nt2; the bracket is then nudged by
    one lunation if a true new moon falls on the wrong side of sdate.
    """
    jd = julian.from_datetime(sdate)
    adate = days_before(sdate, HUNT_LOOKBACK_DAYS)

    k1 = lunation_index_estimate(adate)
    nt1 = meanphase(julian.from_datetime(adate), k1)
    a_jd = nt1

    for i in range(MAX_SEARCH_ITERS):
        a_jd += aa.SYNODIC_MONTH
        k2 = k1 + 1
        nt2 = meanphase(a_jd, k2)
        if nt1 <= jd < nt2:
            logger.debug("bracketed %s by mean lunations %d..%d after %d steps", sdate.isoformat(), k1, k2, i + 1)
            break
        nt1 = nt2
        k1 = k2
    else:
        logger.error("mean phase search from %s did not bracket in %d steps", sdate.isoformat(), MAX_SEARCH_ITERS)
        raise NonConvergenceError(f"phase hunt did not bracket {sdate.isoformat()} within {MAX_SEARCH_ITERS} lunations")

    # Compared as epoch offsets so a neighbouring new moon outside the
    # datetime range does not fail the search.
    offset = sdate - julian.UNIX_EPOCH
    if offset < julian.to_epoch_offset(truephase_jd(k1, Phase.NEW)):
        k1 -= 1
    elif offset >= julian.to_epoch_offset(truephase_jd(k1 + 1, Phase.NEW)):
        k1 += 1
    return k1, k1 + 1


def hunt(sdate: datetime) -> PhaseHunt:
    k1, k2 = bracket_lunation(sdate)
    return PhaseHunt(
        new_date=truephase(k1, Phase.NEW),
        q1_date=truephase(k1, Phase.FIRST),
        full_date=truephase(k1, Phase.FULL),
        q3_date=truephase(k1, Phase.LAST),
        nextnew_date=truephase(k2, Phase.NEW),
    )


def iter_range(start: datetime, end: datetime, selector: int) -> Iterator[datetime]:
    """
    Yield every instant of phase `selector` in [start, end], in order.
    Callers pass start <= end.
    """
    sel = Phase.normalize(selector)
    k = lunation_index_estimate(days_before(start, HUNT_LOOKBACK_DAYS))

    lo = start - julian.UNIX_EPOCH
    hi = end - julian.UNIX_EPOCH
    offset = julian.to_epoch_offset(truephase_jd(k, sel))
    skipped = 0
    while offset < lo:
        skipped += 1
        if skipped > MAX_SEARCH_ITERS:
            logger.error("phase range seed for %s still short after %d lunations", start.isoformat(), MAX_SEARCH_ITERS)
            raise NonConvergenceError(f"phase range did not reach {start.isoformat()} within {MAX_SEARCH_ITERS} lunations")
        k += 1
        offset = julian.to_epoch_offset(truephase_jd(k, sel))

    while offset <= hi:
        yield julian.UNIX_EPOCH + offset
        k += 1
        offset = julian.to_epoch_offset(truephase_jd(k, sel))
