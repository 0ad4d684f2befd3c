# equisol/core/timescales.py
# -----------------------------------------------------------------------------
# Julian Date ↔ Civil Calendar & Timezone Localization
#
# Conversions:
#   • JD → proleptic Gregorian civil date-time (Meeus ch. 7, truncated fields)
#   • Civil date-time → JD via ERFA cal2jd (round-trip checks)
#   • UT JD → local JD using the zone's UTC offset
#
# Timezone Handling:
#   • Offsets come from an injected OffsetProvider (zoneinfo by default)
#   • The offset is resolved at the UT civil reading taken as local wall
#     clock, so instants within a few hours of a DST change may pick the
#     neighbouring offset
#
# Public API:
#   jd_to_civil(jd, timezone) -> CivilDateTime
#   civil_to_jd(civil) -> float
#   ut_to_local_jd(ut_jd, timezone, provider) -> float
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
import logging
from dataclasses import dataclass, asdict
from datetime import MAXYEAR, MINYEAR, datetime
from functools import lru_cache
from typing import Any, Dict, Optional, Protocol
from zoneinfo import ZoneInfo

import erfa  # pyERFA - SOFA/ERFA calendar routines

log = logging.getLogger(__name__)

__all__ = [
    "CivilDateTime",
    "OffsetProvider",
    "ZoneInfoOffsetProvider",
    "default_offset_provider",
    "jd_to_civil",
    "civil_to_jd",
    "ut_to_local_jd",
]

# ───────────────────────────── Constants ─────────────────────────────

UTC_ZONE = "UTC"
SECONDS_PER_DAY = 86400.0
ONE_JULIAN_HOUR = 1.0 / 24.0
JD_GREGORIAN_ALPHA_EPOCH = 1867216.25
# Float noise in the day fraction of a JD near 2.4e6 is ~40 microseconds
SECONDS_OF_DAY_DECIMALS = 3

# ───────────────────────────── Data Structures ─────────────────────────────

@dataclass(frozen=True)
class CivilDateTime:
    """Calendar reading of a Julian Date, truncated to whole seconds."""
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    timezone: str = UTC_ZONE

    def to_naive(self) -> datetime:
        return datetime(self.year, self.month, self.day, self.hour, self.minute, self.second)

    def to_datetime(self, provider: Optional[OffsetProvider] = None) -> datetime:
        """Timezone-aware datetime for this reading in its own zone."""
        provider = provider or default_offset_provider()
        return provider.zoned_datetime(self.timezone, self)

    def isoformat(self) -> str:
        return (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
            f"T{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

# ───────────────────────────── Offset Providers ─────────────────────────────

class OffsetProvider(Protocol):
    """Calendar library seam: zone offsets and zone-aware construction."""

    def offset_seconds(self, zone: str, naive: datetime) -> int:
        """UTC offset of ``zone`` at wall-clock time ``naive``, in seconds."""
        ...

    def zoned_datetime(self, zone: str, civil: CivilDateTime) -> datetime:
        """Aware datetime carrying the civil fields in ``zone``."""
        ...


@lru_cache(maxsize=1000)
def _get_timezone_offset_cached(tz_name: str, year: int, month: int, day: int,
                                hour: int, minute: int, second: int) -> int:
    """Cached zoneinfo offset lookup; ambiguous wall times resolve with fold=0."""
    zone = ZoneInfo(tz_name)
    aware = datetime(year, month, day, hour, minute, second, tzinfo=zone)
    offset = aware.utcoffset()
    if offset is None:
        raise ValueError(f"Timezone {tz_name} returned None offset")
    return int(offset.total_seconds())


class ZoneInfoOffsetProvider:
    """OffsetProvider backed by the IANA database through ``zoneinfo``.

    Unknown zone names raise ``zoneinfo.ZoneInfoNotFoundError``.
    """

    def offset_seconds(self, zone: str, naive: datetime) -> int:
        return _get_timezone_offset_cached(
            zone, naive.year, naive.month, naive.day,
            naive.hour, naive.minute, naive.second,
        )

    def zoned_datetime(self, zone: str, civil: CivilDateTime) -> datetime:
        return civil.to_naive().replace(tzinfo=ZoneInfo(zone))


_DEFAULT_PROVIDER = ZoneInfoOffsetProvider()


def default_offset_provider() -> OffsetProvider:
    return _DEFAULT_PROVIDER

# ───────────────────────────── Calendar Conversion ─────────────────────────────

def jd_to_civil(jd: float, timezone: str = UTC_ZONE) -> CivilDateTime:
    """
    Convert a Julian Date to a proleptic Gregorian calendar reading.

    Every field is truncated, never rounded. A seconds-of-day value that
    reaches 86400 after noise removal carries into the next day.

    Args:
        jd: Julian Date (UT or local, the conversion is zone-agnostic)
        timezone: Zone name recorded on the result

    Returns:
        CivilDateTime with whole-second resolution
    """
    jd = jd + 0.5
    z = math.floor(jd)
    hms = round((jd - z) * SECONDS_PER_DAY, SECONDS_OF_DAY_DECIMALS)
    if hms >= SECONDS_PER_DAY:
        z += 1
        hms -= SECONDS_PER_DAY

    alpha = math.floor((z - JD_GREGORIAN_ALPHA_EPOCH) / 36524.25)
    a = z + 1 + alpha - math.floor(alpha / 4) + 1524
    b = math.floor((a - 122.1) / 365.25)
    c = math.floor(365.25 * b)
    d = math.floor((a - c) / 30.6001)

    month = d - 1 if d < 14 else d - 13
    year = b - 4716 if month > 2 else b - 4715
    day = a - c - math.floor(30.6001 * d)

    whole = int(hms)
    return CivilDateTime(
        year=int(year),
        month=int(month),
        day=int(day),
        hour=whole // 3600,
        minute=(whole // 60) % 60,
        second=whole % 60,
        timezone=timezone,
    )


def civil_to_jd(civil: CivilDateTime) -> float:
    """Julian Date of a civil reading (proleptic Gregorian, via ERFA)."""
    djm0, djm = erfa.cal2jd(civil.year, civil.month, civil.day)
    seconds = civil.hour * 3600 + civil.minute * 60 + civil.second
    return float(djm0) + float(djm) + seconds / SECONDS_PER_DAY

# ───────────────────────────── Timezone Localization ─────────────────────────────

def _nominal_wall_clock(civil: CivilDateTime) -> datetime:
    """Naive datetime for an offset lookup, year clamped to what datetime holds."""
    year = min(max(civil.year, MINYEAR), MAXYEAR)
    day = civil.day
    if year != civil.year and civil.month == 2 and day == 29:
        day = 28
    return datetime(year, civil.month, day, civil.hour, civil.minute, civil.second)


def ut_to_local_jd(ut_jd: float, timezone: str,
                   provider: Optional[OffsetProvider] = None) -> float:
    """
    Shift a UT Julian Date by the zone's UTC offset.

    The offset is looked up at the UT calendar reading treated as local wall
    clock time, so events a few hours from a DST change can get the offset
    in force on the other side of it.

    Raises:
        zoneinfo.ZoneInfoNotFoundError: Unknown zone (default provider)
    """
    if timezone == UTC_ZONE:
        return ut_jd

    provider = provider or default_offset_provider()
    nominal = _nominal_wall_clock(jd_to_civil(ut_jd))
    offset = provider.offset_seconds(timezone, nominal) - provider.offset_seconds(UTC_ZONE, nominal)
    offset_hours = offset / 3600.0

    log.debug("Offset for %s at %s: %+.2f h", timezone, nominal.isoformat(), offset_hours)
    return ut_jd + offset_hours * ONE_JULIAN_HOUR
