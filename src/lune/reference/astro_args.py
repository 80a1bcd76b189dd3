from __future__ import annotations

import logging
import math

from ..core.errors import NonConvergenceError

logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# Astronomical constants (epoch 1980.0 elements)
# Angles are in degrees, distances in kilometres, times in days.
# ------------------------------------------------------------

# 1980 January 0.0 as JD. 2444239.5 is the calendar value, but the element
# set below was fitted against 2444238.5.
EPOCH_1980 = 2444238.5

# Sun / Earth orbit
ECLIPTIC_LONGITUDE_EPOCH = 278.833540    # ecliptic longitude of the Sun at epoch
ECLIPTIC_LONGITUDE_PERIGEE = 282.596403  # ecliptic longitude of the Sun at perigee
ECCENTRICITY = 0.016718                  # eccentricity of Earth's orbit
SUN_SMAXIS = 1.49585e8                   # semi-major axis of Earth's orbit
SUN_ANGULAR_SIZE_SMAXIS = 0.533128       # Sun's angular size at semi-major axis distance
TROPICAL_YEAR = 365.2422

# Moon
MOON_MEAN_LONGITUDE_EPOCH = 64.975464    # Moon's mean longitude at epoch
MOON_MEAN_PERIGEE_EPOCH = 349.383063     # mean longitude of the perigee at epoch
MOON_ECCENTRICITY = 0.054900
MOON_ANGULAR_SIZE = 0.5181               # angular size at semi-major axis distance
MOON_SMAXIS = 384401.0
MOON_DAILY_MOTION = 13.1763966           # mean longitude, degrees per day
MOON_PERIGEE_DAILY_MOTION = 0.1114041    # perigee regression folded into the mean anomaly

SYNODIC_MONTH = 29.53058868  # new Moon to new Moon, days

# Mean phase series (lunations counted from 1900 January)
MEAN_PHASE_BASE_JD = 2415020.75933
MEAN_PHASE_EPOCH_JD = 2415021.0  # 1900 January 1, 12h UTC
LUNATIONS_PER_CENTURY = 1236.85
LUNATIONS_PER_YEAR = 12.3685

JULIAN_CENTURY_DAYS = 36525.0

KEPLER_EPSILON = 1e-6
KEPLER_MAX_ITERS = 100


# ------------------------------------------------------------
# Angle helpers (all trig on degrees goes through torad)
# ------------------------------------------------------------

def fixangle(a: float) -> float:
    """Wrap degrees to [0,360); negative input wraps forward."""
    return a - 360.0 * math.floor(a / 360.0)

def torad(d: float) -> float:
    return d * (math.pi / 180.0)

def todeg(r: float) -> float:
    return r * (180.0 / math.pi)

def dsin(d: float) -> float:
    return math.sin(torad(d))

def dcos(d: float) -> float:
    return math.cos(torad(d))


# ------------------------------------------------------------
# Kepler's equation
# ------------------------------------------------------------

def kepler(m_deg: float, ecc: float, *, epsilon: float = KEPLER_EPSILON, max_iters: int = KEPLER_MAX_ITERS) -> float:
    """
    Solve E - e*sin(E) = M for the eccentric anomaly E (radians), given the
    mean anomaly M in degrees. Newton iteration from E0 = M:
        E <- E - (E - e sin E - M) / (1 - e cos E)
    stopping once the residual of the previous step is <= epsilon.
    """
    m = torad(m_deg)
    e = m
    for i in range(max_iters):
        delta = e - ecc * math.sin(e) - m
        e -= delta / (1.0 - ecc * math.cos(e))
        if abs(delta) <= epsilon:
            logger.debug("kepler(M=%.6f, e=%.6f) converged in %d iterations", m_deg, ecc, i + 1)
            return e
    logger.error("kepler(M=%.6f, e=%.6f) did not converge in %d iterations", m_deg, ecc, max_iters)
    raise NonConvergenceError(f"Kepler solver did not converge within {max_iters} iterations (M={m_deg}, e={ecc})")


def true_anomaly_deg(ecc_anomaly: float, ecc: float) -> float:
    """Eccentric anomaly (radians) -> true anomaly (degrees)."""
    return 2.0 * todeg(math.atan(math.sqrt((1.0 + ecc) / (1.0 - ecc)) * math.tan(ecc_anomaly / 2.0)))
