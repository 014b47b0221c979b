"""
Engine Module - Synthetic Generation Data

This module provides synthetic solar generation data for testing and
demonstration of downstream anomaly detection.

Key Components:
- SolarGenerationGenerator: Generates fixed-cadence generation records
- FaultKind / AnomalyWindow: Declarative fault windows per unit
- DeviceAnomalyConfig: Validated per-unit anomaly calendars

Usage:
    from engine import SolarGenerationGenerator, DeviceAnomalyConfig

    config = DeviceAnomalyConfig.from_mapping({
        "SU-0001": [{"start": 4, "end": 6, "type": "mechanical"}],
    })
    generator = SolarGenerationGenerator(
        serial_number="SU-0001",
        windows=config["SU-0001"],
        random_seed=7
    )
    records = generator.generate_to_list(
        start_time=datetime(2025, 8, 1, 8, tzinfo=timezone.utc),
        end_time=datetime(2025, 9, 1, 8, tzinfo=timezone.utc)
    )
"""

from .anomalies import (
    AnomalyWindow,
    DeviceAnomalyConfig,
    FaultKind,
    energy_for_fault,
    find_window,
    inject_anomaly,
    normal_energy,
)
from .generator import (
    DEFAULT_INTERVAL,
    GenerationRecord,
    SolarGenerationGenerator,
    generate,
)

__all__ = [
    # Anomalies
    "AnomalyWindow",
    "DeviceAnomalyConfig",
    "FaultKind",
    "energy_for_fault",
    "find_window",
    "inject_anomaly",
    "normal_energy",

    # Generator
    "DEFAULT_INTERVAL",
    "GenerationRecord",
    "SolarGenerationGenerator",
    "generate",
]
