"""
Baseline Generation Model for Solar Units

This module derives the expected, anomaly-free energy generation for a
solar unit at a given instant. The model is intentionally simple: a
seasonal band approximating monthly irradiance, scaled by a time-of-day
multiplier approximating the sun's position.

Key Quantities:
- Base Energy: Seasonal generation level (kWh-equivalent per interval)
- Time Multiplier: Diurnal scaling (0 at night, peak around midday)

The bands below must be reproduced exactly so that generated data stays
comparable across runs and releases.
"""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class BaselineConstants:
    """
    Seasonal and diurnal constants for the baseline model.

    Months are 0-indexed (January = 0) and hours are UTC (0-23).
    """

    # Seasonal base energy (kWh-equivalent)
    PEAK_SEASON_ENERGY: float = 1.5        # Jun, Jul, Aug
    SHOULDER_HIGH_ENERGY: float = 1.4      # Mar, Apr, May
    SHOULDER_LOW_ENERGY: float = 1.2       # Sep, Oct, Nov
    OFF_SEASON_ENERGY: float = 1.0         # Dec, Jan, Feb

    PEAK_SEASON_MONTHS: frozenset = frozenset({5, 6, 7})
    SHOULDER_HIGH_MONTHS: frozenset = frozenset({2, 3, 4})
    SHOULDER_LOW_MONTHS: frozenset = frozenset({8, 9, 10})

    # Time of day multipliers
    DAYLIGHT_MULTIPLIER: float = 1.2
    PEAK_SUN_MULTIPLIER: float = 1.5
    NIGHT_MULTIPLIER: float = 0.0

    DAYLIGHT_START_HOUR: int = 6
    DAYLIGHT_END_HOUR: int = 18
    PEAK_SUN_START_HOUR: int = 10
    PEAK_SUN_END_HOUR: int = 14


CONSTANTS = BaselineConstants()


@dataclass(frozen=True)
class Baseline:
    """
    Expected generation inputs for one instant.

    Attributes:
        base_energy: Seasonal generation level
        time_multiplier: Diurnal scaling factor (0 at night)
    """
    base_energy: float
    time_multiplier: float

    @property
    def expected_energy(self) -> float:
        """Anomaly-free generation before natural variation is applied."""
        return self.base_energy * self.time_multiplier


def to_utc(timestamp: datetime) -> datetime:
    """
    Normalize a timestamp to an aware UTC datetime.

    Naive timestamps are interpreted as already being in UTC.
    """
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def seasonal_base_energy(month_index: int) -> float:
    """
    Get the seasonal base energy for a month.

    Args:
        month_index: Calendar month, 0-indexed (January = 0)

    Returns:
        Base energy for the season the month falls in
    """
    if month_index in CONSTANTS.PEAK_SEASON_MONTHS:
        return CONSTANTS.PEAK_SEASON_ENERGY
    if month_index in CONSTANTS.SHOULDER_HIGH_MONTHS:
        return CONSTANTS.SHOULDER_HIGH_ENERGY
    if month_index in CONSTANTS.SHOULDER_LOW_MONTHS:
        return CONSTANTS.SHOULDER_LOW_ENERGY
    return CONSTANTS.OFF_SEASON_ENERGY


def time_of_day_multiplier(hour: int) -> float:
    """
    Get the diurnal multiplier for an hour of day.

    Daylight hours (06:00-18:00 inclusive) generate at 1.2x, narrowed to
    1.5x during peak sun (10:00-14:00 inclusive). Outside daylight the
    multiplier is exactly 0: panels produce nothing at night.

    Args:
        hour: Hour of day in UTC (0-23)

    Returns:
        Time of day multiplier
    """
    if CONSTANTS.DAYLIGHT_START_HOUR <= hour <= CONSTANTS.DAYLIGHT_END_HOUR:
        if CONSTANTS.PEAK_SUN_START_HOUR <= hour <= CONSTANTS.PEAK_SUN_END_HOUR:
            return CONSTANTS.PEAK_SUN_MULTIPLIER
        return CONSTANTS.DAYLIGHT_MULTIPLIER
    return CONSTANTS.NIGHT_MULTIPLIER


def baseline(timestamp: datetime) -> Baseline:
    """
    Calculate the baseline generation inputs for a timestamp.

    Args:
        timestamp: Instant to evaluate (naive values are treated as UTC)

    Returns:
        Baseline with seasonal base energy and time of day multiplier
    """
    utc = to_utc(timestamp)
    return Baseline(
        base_energy=seasonal_base_energy(utc.month - 1),
        time_multiplier=time_of_day_multiplier(utc.hour),
    )
