# reference/lunar.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from . import astro_args as aa
from .solar import SolarCoordinates, solar_position
from ..core.types import PhaseInfo


@dataclass(frozen=True)
class LunarCoordinates:
    """Lunar true longitude, distance and apparent size (degrees, km)."""
    L_true_deg: float
    anomaly_deg: float    # corrected mean anomaly plus equation of the centre
    distance_km: float
    angular_diameter_deg: float


def lunar_position(jd: float, sun: Optional[SolarCoordinates] = None) -> LunarCoordinates:
    """
    Moon's true longitude for a given JD: mean longitude plus evection,
    annual equation, equation of the centre and variation.
    """
    if sun is None:
        sun = solar_position(jd)
    day = jd - aa.EPOCH_1980

    # Moon's mean longitude
    ml = aa.fixangle(aa.MOON_DAILY_MOTION * day + aa.MOON_MEAN_LONGITUDE_EPOCH)
    # Moon's mean anomaly
    MM = aa.fixangle(ml - aa.MOON_PERIGEE_DAILY_MOTION * day - aa.MOON_MEAN_PERIGEE_EPOCH)

    evection = 1.2739 * aa.dsin(2.0 * (ml - sun.lambda_deg) - MM)
    annual_eq = 0.1858 * aa.dsin(sun.M_deg)
    A3 = 0.37 * aa.dsin(sun.M_deg)

    MmP = MM + evection - annual_eq - A3

    # Equation of the centre
    mEc = 6.2886 * aa.dsin(MmP)
    A4 = 0.214 * aa.dsin(2.0 * MmP)

    lP = ml + evection + mEc - annual_eq + A4

    variation = 0.6583 * aa.dsin(2.0 * (lP - sun.lambda_deg))
    lPP = lP + variation

    e = aa.MOON_ECCENTRICITY
    dist = (aa.MOON_SMAXIS * (1.0 - e * e)) / (1.0 + e * aa.dcos(MmP + mEc))

    return LunarCoordinates(
        L_true_deg=lPP,
        anomaly_deg=MmP + mEc,
        distance_km=dist,
        angular_diameter_deg=aa.MOON_ANGULAR_SIZE / (dist / aa.MOON_SMAXIS),
    )


def lunar_phase(jd: float) -> PhaseInfo:
    """
    Phase snapshot at a given JD. The Moon's age in degrees is its true
    longitude minus the Sun's geometric longitude.
    """
    sun = solar_position(jd)
    moon = lunar_position(jd, sun)

    age_deg = moon.L_true_deg - sun.lambda_deg
    phase = aa.fixangle(age_deg) / 360.0
    if phase >= 1.0:
        # fixangle of a tiny negative angle rounds up to 360.0
        phase = 0.0

    return PhaseInfo(
        phase=phase,
        illuminated=(1.0 - aa.dcos(age_deg)) / 2.0,
        age=aa.SYNODIC_MONTH * phase,
        distance=moon.distance_km,
        angular_diameter=moon.angular_diameter_deg,
        sun_distance=sun.distance_km,
        sun_angular_diameter=sun.angular_diameter_deg,
    )
