from datetime import datetime, timedelta, timezone
from typing import Dict, List, Tuple

import pytest

from equisol.core.timescales import CivilDateTime


class FixedOffsetProvider:
    """Offset provider with one constant offset per zone; records lookups."""

    def __init__(self, offsets: Dict[str, int]):
        self.offsets = {"UTC": 0, **offsets}
        self.lookups: List[Tuple[str, datetime]] = []

    def offset_seconds(self, zone: str, naive: datetime) -> int:
        self.lookups.append((zone, naive))
        return self.offsets[zone]

    def zoned_datetime(self, zone: str, civil: CivilDateTime) -> datetime:
        tz = timezone(timedelta(seconds=self.offsets[zone]), zone)
        return civil.to_naive().replace(tzinfo=tz)


@pytest.fixture
def fixed_provider():
    return FixedOffsetProvider({"Test/Plus3": 3 * 3600, "Test/Minus5": -5 * 3600, "Test/Zero": 0})
