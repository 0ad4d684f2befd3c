# equisol/core/service.py
# -----------------------------------------------------------------------------
# Season Event Service
#
# Orchestration:
#   • precise UT JD (seasons) → local JD (timescales) → civil reading
#   • Each event is an independent pipeline run; no shared intermediates
#
# Configuration:
#   • SeasonConfig is immutable; setters swap in a new snapshot
#   • Every query reads one snapshot, so a query never sees half an update
#
# Public API:
#   compute_season_event(kind, year, timezone, provider) -> CivilDateTime
#   SeasonEventService.get_season(kind, year) -> CivilDateTime
#   SeasonEventService.get_all_four_seasons(year) -> Dict[EventKind, CivilDateTime]
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Dict, Optional

from equisol.core.seasons import EventKind, precise_julian_date
from equisol.core.timescales import (
    UTC_ZONE,
    CivilDateTime,
    OffsetProvider,
    jd_to_civil,
    ut_to_local_jd,
)

log = logging.getLogger(__name__)

__all__ = [
    "SeasonConfig",
    "SeasonEventService",
    "compute_season_event",
]


def _current_year() -> int:
    return date.today().year


@dataclass(frozen=True)
class SeasonConfig:
    """Timezone and default year used by SeasonEventService queries."""
    timezone: str = UTC_ZONE
    year: int = field(default_factory=_current_year)


def compute_season_event(
    kind: EventKind,
    year: int,
    timezone: str = UTC_ZONE,
    provider: Optional[OffsetProvider] = None,
) -> CivilDateTime:
    """
    Date and time of one equinox or solstice.

    Args:
        kind: Event to compute
        year: Calendar year (accurate for 1000-3000)
        timezone: IANA zone name, or "UTC"
        provider: Offset provider; zoneinfo when omitted

    Returns:
        CivilDateTime in ``timezone``, truncated to the second

    Raises:
        zoneinfo.ZoneInfoNotFoundError: Unknown zone
        SeasonComputationError: Non-positive correction scale factor
    """
    ut_jd = precise_julian_date(kind, year)
    local_jd = ut_to_local_jd(ut_jd, timezone, provider)
    return jd_to_civil(local_jd, timezone)


class SeasonEventService:
    """Configure once, then query equinoxes and solstices."""

    def __init__(self, config: Optional[SeasonConfig] = None,
                 provider: Optional[OffsetProvider] = None):
        self.config = config or SeasonConfig()
        self.provider = provider

    def configure_timezone(self, timezone: str) -> None:
        """Set the output zone. Not validated until the next query."""
        self.config = replace(self.config, timezone=timezone)

    def configure_year(self, year: int) -> None:
        self.config = replace(self.config, year=year)

    def compute(self, kind: EventKind, year: int) -> CivilDateTime:
        return self._compute(kind, year, self.config)

    def get_season(self, kind: EventKind, year: Optional[int] = None) -> CivilDateTime:
        """One event; ``year`` defaults to the configured year."""
        config = self.config
        return self._compute(kind, config.year if year is None else year, config)

    def get_all_four_seasons(self, year: Optional[int] = None) -> Dict[EventKind, CivilDateTime]:
        config = self.config
        y = config.year if year is None else year
        return {kind: self._compute(kind, y, config) for kind in EventKind}

    def get_spring(self, year: Optional[int] = None) -> CivilDateTime:
        return self.get_season(EventKind.SPRING, year)

    def get_summer(self, year: Optional[int] = None) -> CivilDateTime:
        return self.get_season(EventKind.SUMMER, year)

    def get_autumn(self, year: Optional[int] = None) -> CivilDateTime:
        return self.get_season(EventKind.AUTUMN, year)

    def get_winter(self, year: Optional[int] = None) -> CivilDateTime:
        return self.get_season(EventKind.WINTER, year)

    def _compute(self, kind: EventKind, year: int, config: SeasonConfig) -> CivilDateTime:
        result = compute_season_event(kind, year, config.timezone, self.provider)
        log.debug("%s %d in %s: %s", kind.value, year, config.timezone, result.isoformat())
        return result
