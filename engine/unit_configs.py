"""
Compiled-in Seeding Configuration

Anomaly calendars for the demo solar units and the default generation
range. Day offsets count from DEFAULT_START_TIME; the comments give the
calendar dates they map to.

Each unit has different anomaly periods to simulate varied real-world
conditions. The below-average kinds are available but not scheduled.
"""

from datetime import datetime, timezone

from .anomalies import DeviceAnomalyConfig
from .generator import DEFAULT_INTERVAL


DEFAULT_START_TIME = datetime(2025, 8, 1, 8, 0, tzinfo=timezone.utc)
DEFAULT_END_TIME = datetime(2026, 1, 3, 12, 30, tzinfo=timezone.utc)

__all__ = [
    "DEFAULT_START_TIME",
    "DEFAULT_END_TIME",
    "DEFAULT_INTERVAL",
    "UNIT_ANOMALY_WINDOWS",
    "load_unit_anomaly_config",
]


UNIT_ANOMALY_WINDOWS = {
    "SU-0001": [
        {"start": 4, "end": 6, "type": "mechanical"},      # Aug 5-7
        {"start": 29, "end": 33, "type": "temperature"},   # Aug 30 - Sep 3
        {"start": 40, "end": 44, "type": "shading"},       # Sep 10-14
        {"start": 50, "end": 54, "type": "sensor2"},       # Sep 20-24
    ],
    "SU-0002": [
        {"start": 15, "end": 17, "type": "mechanical"},    # Aug 16-18
        {"start": 25, "end": 29, "type": "sensor1"},       # Aug 26-30
        {"start": 48, "end": 52, "type": "temperature"},   # Sep 18-22
        {"start": 60, "end": 64, "type": "shading"},       # Sep 30 - Oct 4
    ],
    "SU-0003": [
        {"start": 8, "end": 10, "type": "mechanical"},     # Aug 9-11
        {"start": 45, "end": 49, "type": "temperature"},   # Sep 15-19
        {"start": 58, "end": 62, "type": "shading"},       # Sep 28 - Oct 2
        {"start": 70, "end": 74, "type": "sensor2"},       # Oct 10-14
    ],
}


def load_unit_anomaly_config() -> DeviceAnomalyConfig:
    """
    Build the validated anomaly config for the demo units.

    Raises:
        AnomalyConfigError: If the compiled-in calendar is inconsistent
    """
    return DeviceAnomalyConfig.from_mapping(UNIT_ANOMALY_WINDOWS)
