# equisol/core/seasons.py
# -----------------------------------------------------------------------------
# Equinox & Solstice Instants (Meeus, Astronomical Algorithms 2nd ed., ch. 27)
#
# Pipeline:
#   • Mean instant JDE0 from a quartic in millennia from 2000 (table 27.B)
#   • Sum S of the 24 periodic terms (table 27.C)
#   • Scale factor Δλ from the Sun's varying angular speed
#   • JDE = JDE0 + 0.00001·S / Δλ
#
# Accuracy:
#   • About one minute for years 1000–3000
#   • Other years are extrapolated without error
#
# Public API:
#   mean_julian_date(kind, year) -> float
#   periodic_sum(t) -> float
#   scale_factor(t) -> float
#   precise_julian_date(kind, year) -> float
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
import logging
from enum import Enum
from typing import Dict, Tuple

log = logging.getLogger(__name__)

__all__ = [
    "EventKind",
    "SeasonComputationError",
    "SUPPORTED_YEAR_RANGE",
    "is_supported_year",
    "mean_julian_date",
    "julian_centuries",
    "periodic_sum",
    "scale_factor",
    "precise_julian_date",
]

# ───────────────────────────── Constants ─────────────────────────────

JD_J2000 = 2451545.0
DAYS_PER_JULIAN_CENTURY = 36525.0
SUPPORTED_YEAR_RANGE = (1000, 3000)


class EventKind(Enum):
    """The four seasonal events, in calendar order."""
    SPRING = "spring"   # March equinox
    SUMMER = "summer"   # June solstice
    AUTUMN = "autumn"   # September equinox
    WINTER = "winter"   # December solstice

    @property
    def index(self) -> int:
        """Row of this event in the coefficient tables (0-3)."""
        return _EVENT_ORDER.index(self)


_EVENT_ORDER: Tuple[EventKind, ...] = tuple(EventKind)

# Table 27.B, years +1000 to +3000: (c0, c1, c2, c3, c4)
_MEAN_TIME_COEFFICIENTS: Dict[EventKind, Tuple[float, float, float, float, float]] = {
    EventKind.SPRING: (2451623.80984, 365242.37404, 0.05169, -0.00411, -0.00057),
    EventKind.SUMMER: (2451716.56767, 365241.62603, 0.00325, 0.00888, -0.00030),
    EventKind.AUTUMN: (2451810.21715, 365242.01767, -0.11575, 0.00337, 0.00078),
    EventKind.WINTER: (2451900.05952, 365242.74049, -0.06223, -0.00823, 0.00032),
}

# Table 27.C: amplitude A, phase B (deg), rate C (deg per Julian century)
_PERIODIC_A: Tuple[int, ...] = (
    485, 203, 199, 182, 156, 136, 77, 74, 70, 58, 52, 50,
    45, 44, 29, 18, 17, 16, 14, 12, 12, 12, 9, 8,
)
_PERIODIC_B: Tuple[float, ...] = (
    324.96, 337.23, 342.08, 27.85, 73.14, 171.52, 222.54, 296.72,
    243.58, 119.81, 297.17, 21.02, 247.54, 325.15, 60.93, 155.12,
    288.79, 198.04, 199.76, 95.39, 287.11, 320.81, 227.73, 15.45,
)
_PERIODIC_C: Tuple[float, ...] = (
    1934.136, 32964.467, 20.186, 445267.112, 45036.886, 22518.443,
    65928.934, 3034.906, 9037.513, 33718.147, 150.678, 2281.226,
    29929.562, 31555.956, 4443.417, 67555.328, 4562.452, 62894.029,
    31436.921, 14577.848, 31931.756, 34777.259, 1222.114, 16859.074,
)

# ───────────────────────────── Exception Hierarchy ─────────────────────────────

class SeasonComputationError(Exception):
    """Internal inconsistency in the season computation."""
    pass

# ───────────────────────────── Core Computations ─────────────────────────────

def is_supported_year(year: int) -> bool:
    """True when ``year`` lies in the range the method is accurate for."""
    lo, hi = SUPPORTED_YEAR_RANGE
    return lo <= year <= hi


def mean_julian_date(kind: EventKind, year: int) -> float:
    """
    Mean instant (JDE0) of a seasonal event.

    Args:
        kind: Which equinox or solstice
        year: Calendar year; values outside 1000-3000 are extrapolated

    Returns:
        Julian Ephemeris Day of the uncorrected event
    """
    c0, c1, c2, c3, c4 = _MEAN_TIME_COEFFICIENTS[kind]
    y = (year - 2000) / 1000.0
    return c0 + c1 * y + c2 * y**2 + c3 * y**3 + c4 * y**4


def julian_centuries(jd: float) -> float:
    """Julian centuries elapsed since J2000.0."""
    return (jd - JD_J2000) / DAYS_PER_JULIAN_CENTURY


def periodic_sum(t: float) -> float:
    """Sum S of the 24 periodic terms at ``t`` Julian centuries from J2000.0."""
    return math.fsum(
        a * math.cos(math.radians(b + c * t))
        for a, b, c in zip(_PERIODIC_A, _PERIODIC_B, _PERIODIC_C)
    )


def scale_factor(t: float) -> float:
    """Δλ weighting applied to the periodic sum."""
    w = 35999.373 * t - 2.47
    return 1.0 + 0.0334 * math.cos(math.radians(w)) + 0.0007 * math.cos(math.radians(2.0 * w))


def precise_julian_date(kind: EventKind, year: int) -> float:
    """
    Corrected instant of a seasonal event as a UT Julian Date.

    Raises:
        SeasonComputationError: Scale factor is not positive
    """
    if not is_supported_year(year):
        log.debug("Year %d outside %s; extrapolating", year, SUPPORTED_YEAR_RANGE)

    jde0 = mean_julian_date(kind, year)
    t = julian_centuries(jde0)
    dl = scale_factor(t)
    if dl <= 0.0:
        raise SeasonComputationError(
            f"Non-positive scale factor {dl!r} for {kind.value} {year}"
        )
    s = periodic_sum(t)
    jde = jde0 + (0.00001 * s) / dl

    log.debug("%s %d: JDE0=%.6f T=%.9f S=%.3f dL=%.6f JDE=%.6f",
              kind.value, year, jde0, t, s, dl, jde)
    return jde
