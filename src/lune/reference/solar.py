# reference/solar.py

from __future__ import annotations

from dataclasses import dataclass

from . import astro_args as aa


@dataclass(frozen=True)
class SolarCoordinates:
    """Geometric solar position (degrees, km)."""
    M_deg: float          # mean anomaly, epoch 1980 coordinates
    lambda_deg: float     # geometric ecliptic longitude
    distance_km: float
    angular_diameter_deg: float


def solar_position(jd: float) -> SolarCoordinates:
    """
    Two-body solar position for a given JD, referred to the 1980.0 elements.
    The true anomaly comes from Kepler's equation.
    """
    day = jd - aa.EPOCH_1980

    # Mean anomaly of the Sun
    N = aa.fixangle((360.0 / aa.TROPICAL_YEAR) * day)
    # Convert from perigee coordinates to epoch 1980
    M = aa.fixangle(N + aa.ECLIPTIC_LONGITUDE_EPOCH - aa.ECLIPTIC_LONGITUDE_PERIGEE)

    E = aa.kepler(M, aa.ECCENTRICITY)
    Ec = aa.true_anomaly_deg(E, aa.ECCENTRICITY)

    lambda_sun = aa.fixangle(Ec + aa.ECLIPTIC_LONGITUDE_PERIGEE)

    # Orbital distance factor
    F = (1.0 + aa.ECCENTRICITY * aa.dcos(Ec)) / (1.0 - aa.ECCENTRICITY * aa.ECCENTRICITY)

    return SolarCoordinates(
        M_deg=M,
        lambda_deg=lambda_sun,
        distance_km=aa.SUN_SMAXIS / F,
        angular_diameter_deg=F * aa.SUN_ANGULAR_SIZE_SMAXIS,
    )
