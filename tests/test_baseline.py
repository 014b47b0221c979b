"""
Tests for the Baseline Generation Model

These tests pin the seasonal bands and time of day multipliers, which
must stay fixed for generated data to remain comparable.

Run with: pytest tests/test_baseline.py -v
"""

import pytest
from datetime import datetime, timedelta, timezone

from core.baseline import (
    Baseline,
    BaselineConstants,
    baseline,
    seasonal_base_energy,
    time_of_day_multiplier,
    to_utc,
)


class TestBaselineConstants:
    """Test constants match the documented bands."""

    def test_seasonal_values(self):
        constants = BaselineConstants()

        assert constants.PEAK_SEASON_ENERGY == 1.5
        assert constants.SHOULDER_HIGH_ENERGY == 1.4
        assert constants.SHOULDER_LOW_ENERGY == 1.2
        assert constants.OFF_SEASON_ENERGY == 1.0

    def test_multiplier_values(self):
        constants = BaselineConstants()

        assert constants.DAYLIGHT_MULTIPLIER == 1.2
        assert constants.PEAK_SUN_MULTIPLIER == 1.5
        assert constants.NIGHT_MULTIPLIER == 0.0


class TestSeasonalBaseEnergy:
    """Tests for the month -> base energy bands (0-indexed months)."""

    @pytest.mark.parametrize("month_index", [5, 6, 7])
    def test_peak_season(self, month_index):
        assert seasonal_base_energy(month_index) == 1.5

    @pytest.mark.parametrize("month_index", [2, 3, 4])
    def test_shoulder_high(self, month_index):
        assert seasonal_base_energy(month_index) == 1.4

    @pytest.mark.parametrize("month_index", [8, 9, 10])
    def test_shoulder_low(self, month_index):
        assert seasonal_base_energy(month_index) == 1.2

    @pytest.mark.parametrize("month_index", [11, 0, 1])
    def test_off_season(self, month_index):
        assert seasonal_base_energy(month_index) == 1.0


class TestTimeOfDayMultiplier:
    """Tests for the hour -> multiplier bands."""

    @pytest.mark.parametrize("hour", [0, 1, 2, 3, 4, 5, 19, 20, 21, 22, 23])
    def test_night_is_zero(self, hour):
        """No generation outside 06:00-18:00."""
        assert time_of_day_multiplier(hour) == 0

    @pytest.mark.parametrize("hour", [6, 7, 8, 9, 15, 16, 17, 18])
    def test_daylight(self, hour):
        assert time_of_day_multiplier(hour) == 1.2

    @pytest.mark.parametrize("hour", [10, 11, 12, 13, 14])
    def test_peak_sun(self, hour):
        assert time_of_day_multiplier(hour) == 1.5


class TestBaseline:
    """Tests for the combined baseline function."""

    def test_peak_month_peak_hour(self):
        """July at noon is the best case."""
        result = baseline(datetime(2025, 7, 15, 12, 0, tzinfo=timezone.utc))

        assert result == Baseline(base_energy=1.5, time_multiplier=1.5)
        assert result.expected_energy == pytest.approx(2.25)

    def test_every_peak_month_has_peak_base(self):
        """June, July and August always give base energy 1.5."""
        for month in (6, 7, 8):
            for hour in range(24):
                ts = datetime(2025, month, 10, hour, tzinfo=timezone.utc)
                assert baseline(ts).base_energy == 1.5

    def test_august_morning(self):
        result = baseline(datetime(2025, 8, 1, 8, 0, tzinfo=timezone.utc))

        assert result.base_energy == 1.5
        assert result.time_multiplier == 1.2

    def test_december_night(self):
        result = baseline(datetime(2025, 12, 31, 23, 0, tzinfo=timezone.utc))

        assert result.base_energy == 1.0
        assert result.time_multiplier == 0
        assert result.expected_energy == 0

    def test_naive_timestamp_treated_as_utc(self):
        naive = datetime(2025, 10, 3, 11, 0)
        aware = datetime(2025, 10, 3, 11, 0, tzinfo=timezone.utc)

        assert baseline(naive) == baseline(aware)

    def test_non_utc_timestamp_converted(self):
        """01:00 at UTC-8 is 09:00 UTC (daylight, not night)."""
        pacific = timezone(timedelta(hours=-8))
        result = baseline(datetime(2025, 8, 1, 1, 0, tzinfo=pacific))

        assert result.time_multiplier == 1.2

    def test_month_boundary_in_utc(self):
        """23:00 on May 31 at UTC-2 is June 1 in UTC (peak season)."""
        offset = timezone(timedelta(hours=-2))
        result = baseline(datetime(2025, 5, 31, 23, 0, tzinfo=offset))

        assert result.base_energy == 1.5


class TestToUtc:
    """Tests for timestamp normalization."""

    def test_naive_gets_utc(self):
        assert to_utc(datetime(2025, 1, 1)).tzinfo == timezone.utc

    def test_aware_is_converted(self):
        ts = datetime(2025, 1, 1, 5, tzinfo=timezone(timedelta(hours=5)))
        assert to_utc(ts) == datetime(2025, 1, 1, 0, tzinfo=timezone.utc)
