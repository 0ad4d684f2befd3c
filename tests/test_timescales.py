from datetime import datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import erfa
import pytest

from equisol.core.seasons import EventKind, precise_julian_date
from equisol.core.timescales import (
    CivilDateTime,
    ZoneInfoOffsetProvider,
    civil_to_jd,
    jd_to_civil,
    ut_to_local_jd,
)


def _fields(c: CivilDateTime):
    return (c.year, c.month, c.day, c.hour, c.minute, c.second)


@pytest.mark.parametrize("jd, expected", [
    (2451545.0, (2000, 1, 1, 12, 0, 0)),
    (2451544.5, (2000, 1, 1, 0, 0, 0)),
    (2436116.31, (1957, 10, 4, 19, 26, 24)),  # Meeus example 7.c
    (2299160.5, (1582, 10, 15, 0, 0, 0)),
    (2086302.5, (1000, 1, 1, 0, 0, 0)),  # proleptic Gregorian
])
def test_jd_to_civil_known_dates(jd, expected):
    assert _fields(jd_to_civil(jd)) == expected


def test_jd_to_civil_truncates_seconds():
    jd = 2451545.0 + 59.9 / 86400.0
    assert _fields(jd_to_civil(jd)) == (2000, 1, 1, 12, 0, 59)


def test_jd_to_civil_carries_full_day():
    # a few ulps before midnight
    jd = 2451544.5 - 2e-9
    assert _fields(jd_to_civil(jd)) == (2000, 1, 1, 0, 0, 0)


def test_jd_to_civil_carries_across_year_end():
    jd = 2451910.5 - 2e-9  # 2001-01-01T00:00
    assert _fields(jd_to_civil(jd)) == (2001, 1, 1, 0, 0, 0)


def test_jd_to_civil_tags_timezone():
    assert jd_to_civil(2451545.0, "Europe/Paris").timezone == "Europe/Paris"
    assert jd_to_civil(2451545.0).timezone == "UTC"


@pytest.mark.parametrize("jd", [2086400.27, 2299161.1, 2415020.68, 2451623.81, 2488070.4, 2816800.6])
def test_jd_to_civil_matches_erfa(jd):
    iy, im, iday, fd = erfa.jd2cal(jd, 0.0)
    civil = jd_to_civil(jd)
    assert (civil.year, civil.month, civil.day) == (int(iy), int(im), int(iday))
    assert civil.hour == int(float(fd) * 24)


def test_civil_to_jd():
    assert civil_to_jd(CivilDateTime(2000, 1, 1, 12, 0, 0)) == pytest.approx(2451545.0, abs=1e-9)
    assert civil_to_jd(CivilDateTime(1957, 10, 4, 19, 26, 24)) == pytest.approx(2436116.31, abs=1e-8)


@pytest.mark.parametrize("year", [1000, 1582, 2000, 2054, 2999, 3000])
def test_round_trip_recovers_julian_date(year):
    for kind in EventKind:
        jd = precise_julian_date(kind, year)
        back = civil_to_jd(jd_to_civil(jd))
        # truncation drops at most one second
        assert abs(jd - back) < 1.0 / 86400.0 + 1e-6

        whole = back
        assert civil_to_jd(jd_to_civil(whole)) == pytest.approx(whole, abs=1e-6)


def test_civil_date_time_helpers():
    civil = CivilDateTime(2054, 3, 20, 10, 35, 41, "Europe/Paris")
    assert civil.isoformat() == "2054-03-20T10:35:41"
    assert civil.to_naive() == datetime(2054, 3, 20, 10, 35, 41)
    assert civil.to_dict()["timezone"] == "Europe/Paris"

    aware = civil.to_datetime()
    assert aware.tzinfo == ZoneInfo("Europe/Paris")
    assert aware.utcoffset() == timedelta(hours=1)


def test_civil_to_datetime_with_injected_provider(fixed_provider):
    aware = CivilDateTime(2020, 6, 1, 0, 0, 0, "Test/Minus5").to_datetime(fixed_provider)
    assert aware.utcoffset() == timedelta(hours=-5)


def test_ut_to_local_utc_is_identity(fixed_provider):
    assert ut_to_local_jd(2451623.81, "UTC", fixed_provider) == 2451623.81
    assert fixed_provider.lookups == []


@pytest.mark.parametrize("zone, hours", [("Test/Plus3", 3), ("Test/Minus5", -5), ("Test/Zero", 0)])
def test_ut_to_local_applies_offset(fixed_provider, zone, hours):
    ut = 2451623.81
    assert ut_to_local_jd(ut, zone, fixed_provider) == pytest.approx(ut + hours / 24.0, abs=1e-12)


def test_ut_to_local_looks_up_offset_at_ut_reading(fixed_provider):
    ut = civil_to_jd(CivilDateTime(2030, 7, 4, 6, 15, 0))
    ut_to_local_jd(ut, "Test/Plus3", fixed_provider)
    zones = [zone for zone, _ in fixed_provider.lookups]
    assert zones == ["Test/Plus3", "UTC"]
    for _, naive in fixed_provider.lookups:
        assert naive == datetime(2030, 7, 4, 6, 15, 0)


def test_ut_to_local_dst_resolution_uses_nominal_wall_clock():
    # 01:30 UT on 2054-03-29 (spring forward) is 03:30 CEST, but the UT
    # reading taken as Paris wall clock is still before the switch.
    ut = civil_to_jd(CivilDateTime(2054, 3, 29, 1, 30, 0))
    local = ut_to_local_jd(ut, "Europe/Paris")
    assert local == pytest.approx(ut + 1.0 / 24.0, abs=1e-9)


def test_ut_to_local_summer_time():
    ut = civil_to_jd(CivilDateTime(2030, 7, 1, 12, 0, 0))
    assert ut_to_local_jd(ut, "Europe/Paris") == pytest.approx(ut + 2.0 / 24.0, abs=1e-9)
    assert ut_to_local_jd(ut, "America/New_York") == pytest.approx(ut - 4.0 / 24.0, abs=1e-9)


def test_zoneinfo_provider_offsets():
    provider = ZoneInfoOffsetProvider()
    assert provider.offset_seconds("UTC", datetime(2020, 1, 1)) == 0
    assert provider.offset_seconds("Asia/Kolkata", datetime(2020, 1, 1)) == 19800
    assert provider.offset_seconds("Europe/Paris", datetime(2020, 1, 1)) == 3600


def test_unknown_zone_propagates():
    ut = 2451623.81
    with pytest.raises(ZoneInfoNotFoundError):
        ut_to_local_jd(ut, "Nowhere/Atlantis")


def test_ut_to_local_one_day_earlier_is_unaffected():
    ut = civil_to_jd(CivilDateTime(2054, 3, 28, 1, 30, 0))
    assert ut_to_local_jd(ut, "Europe/Paris") == pytest.approx(ut + 1.0 / 24.0, abs=1e-9)


@pytest.mark.parametrize("civil, lookup_year", [
    (CivilDateTime(10000, 3, 20, 6, 0, 0), 9999),
    (CivilDateTime(-500, 3, 20, 6, 0, 0), 1),
    (CivilDateTime(0, 2, 29, 6, 0, 0), 1),
])
def test_ut_to_local_years_outside_datetime_range(fixed_provider, civil, lookup_year):
    ut = civil_to_jd(civil)
    assert ut_to_local_jd(ut, "Test/Plus3", fixed_provider) == pytest.approx(ut + 3.0 / 24.0, abs=1e-9)
    assert {naive.year for _, naive in fixed_provider.lookups} == {lookup_year}
