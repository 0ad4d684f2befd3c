"""
Core season computation modules.

Meeus chapter 27 event instants, Julian Date calendar conversion and
timezone localization, and the service that ties them together.
"""

from .seasons import EventKind, SeasonComputationError, is_supported_year, precise_julian_date
from .timescales import CivilDateTime, OffsetProvider, ZoneInfoOffsetProvider, civil_to_jd, jd_to_civil
from .service import SeasonConfig, SeasonEventService, compute_season_event

__all__ = [
    "EventKind",
    "SeasonComputationError",
    "is_supported_year",
    "precise_julian_date",
    "CivilDateTime",
    "OffsetProvider",
    "ZoneInfoOffsetProvider",
    "civil_to_jd",
    "jd_to_civil",
    "SeasonConfig",
    "SeasonEventService",
    "compute_season_event",
]
