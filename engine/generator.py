"""
Synthetic Data Generator for Solar Generation Records

Generates plausible solar energy generation telemetry for testing and
demonstration of downstream anomaly detection, including per-unit
anomaly windows with distinct fault signatures.

Features:
- Fixed-cadence sampling over an inclusive UTC time range
- Seasonal and time of day baseline (see core.baseline)
- Anomaly window injection keyed by day offset
- Injectable, seedable random source for reproducible runs
- Export to JSON, CSV, or as Python lists
"""

import csv
import json
import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Iterator, List, Optional, Sequence

from core.baseline import baseline, to_utc
from .anomalies import AnomalyWindow, inject_anomaly, normal_energy


DEFAULT_INTERVAL = timedelta(hours=2)
ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class GenerationRecord:
    """
    One energy generation sample for a solar unit.

    Attributes:
        serial_number: Solar unit identifier
        timestamp: Sample instant (aware, UTC)
        energy_generated: Generated energy; may be negative or far outside
            the normal range while a sensor fault is active
    """
    serial_number: str
    timestamp: datetime
    energy_generated: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted/wire record shape."""
        return {
            "serialNumber": self.serial_number,
            "timestamp": self.timestamp.isoformat().replace("+00:00", "Z"),
            "energyGenerated": self.energy_generated,
        }


def iter_ticks(
    start_time: datetime,
    end_time: datetime,
    interval: timedelta = DEFAULT_INTERVAL
) -> Iterator[datetime]:
    """
    Yield sample instants from start to end inclusive.

    Args:
        start_time: First tick (naive values are treated as UTC)
        end_time: Last possible tick; an end before the start yields nothing
        interval: Spacing between ticks

    Raises:
        ValueError: If interval is not positive
    """
    if interval <= timedelta(0):
        raise ValueError(f"Interval must be positive, got {interval}")

    current = to_utc(start_time)
    end = to_utc(end_time)
    while current <= end:
        yield current
        current += interval


def day_offset(tick: datetime, start_time: datetime) -> int:
    """Whole days elapsed between the start of the sequence and a tick."""
    return (to_utc(tick) - to_utc(start_time)) // ONE_DAY


class SolarGenerationGenerator:
    """
    Generator for synthetic solar generation records.

    Each instance is bound to one solar unit and its anomaly windows and
    owns its random source, so units can be generated independently.

    Example:
        # Create generator with a seeded random source
        gen = SolarGenerationGenerator(
            serial_number="SU-0001",
            windows=[AnomalyWindow(4, 6, FaultKind.MECHANICAL)],
            random_seed=42
        )

        # Generate one week at the default 2 hour cadence
        records = gen.generate_to_list(
            start_time=datetime(2025, 8, 1, 8, tzinfo=timezone.utc),
            end_time=datetime(2025, 8, 8, 8, tzinfo=timezone.utc)
        )
    """

    def __init__(
        self,
        serial_number: str,
        windows: Sequence[AnomalyWindow] = (),
        random_seed: Optional[int] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the generator.

        Args:
            serial_number: Identifier for the solar unit
            windows: Ordered anomaly windows; first match wins on overlap
            random_seed: Seed for reproducible generation (ignored if rng given)
            rng: Explicit random source to draw from
        """
        self.serial_number = serial_number
        self.windows = tuple(windows)
        self.rng = rng if rng is not None else random.Random(random_seed)

    def generate_reading(self, timestamp: datetime, day_number: int = 0) -> GenerationRecord:
        """
        Generate a single record.

        Args:
            timestamp: Instant of the sample
            day_number: Day offset in the sequence (keys anomaly windows)

        Returns:
            GenerationRecord for the sample
        """
        expected = baseline(timestamp)

        energy = inject_anomaly(
            day_number,
            expected.base_energy,
            expected.time_multiplier,
            self.windows,
            self.rng
        )
        if energy is None:
            energy = normal_energy(expected.base_energy, expected.time_multiplier, self.rng)

        return GenerationRecord(
            serial_number=self.serial_number,
            timestamp=to_utc(timestamp),
            energy_generated=energy,
        )

    def generate_batch(
        self,
        start_time: datetime,
        end_time: datetime,
        interval: timedelta = DEFAULT_INTERVAL
    ) -> Iterator[GenerationRecord]:
        """
        Generate records over a time range in ascending order.

        Args:
            start_time: First sample instant
            end_time: Last sample instant (inclusive)
            interval: Time between samples (default 2 hours)

        Yields:
            GenerationRecord per tick
        """
        for tick in iter_ticks(start_time, end_time, interval):
            yield self.generate_reading(tick, day_offset(tick, start_time))

    def generate_to_list(
        self,
        start_time: datetime,
        end_time: datetime,
        interval: timedelta = DEFAULT_INTERVAL
    ) -> List[GenerationRecord]:
        """Generate records and return as a list."""
        return list(self.generate_batch(start_time, end_time, interval))

    def generate_to_json(
        self,
        start_time: datetime,
        end_time: datetime,
        interval: timedelta = DEFAULT_INTERVAL,
        filepath: Optional[str] = None,
        indent: int = 2
    ) -> str:
        """
        Generate records and return/save as JSON.

        Args:
            start_time: First sample instant
            end_time: Last sample instant (inclusive)
            interval: Time between samples
            filepath: Optional file path to save JSON
            indent: JSON indentation (default 2)

        Returns:
            JSON string
        """
        records = self.generate_to_list(start_time, end_time, interval)
        json_str = json.dumps([r.to_dict() for r in records], indent=indent)

        if filepath:
            with open(filepath, 'w') as f:
                f.write(json_str)

        return json_str

    def generate_to_csv(
        self,
        start_time: datetime,
        end_time: datetime,
        interval: timedelta = DEFAULT_INTERVAL,
        filepath: str = "generation_records.csv"
    ) -> str:
        """
        Generate records and save as CSV.

        Returns:
            Filepath of saved CSV
        """
        records = self.generate_to_list(start_time, end_time, interval)

        with open(filepath, 'w', newline='') as f:
            writer = csv.DictWriter(
                f,
                fieldnames=["serialNumber", "timestamp", "energyGenerated"]
            )
            writer.writeheader()
            writer.writerows(r.to_dict() for r in records)

        return filepath


# =========================================
# Convenience Functions
# =========================================

def generate(
    serial_number: str,
    windows: Sequence[AnomalyWindow],
    start_time: datetime,
    end_time: datetime,
    interval: timedelta = DEFAULT_INTERVAL,
    rng: Optional[random.Random] = None
) -> List[GenerationRecord]:
    """
    Generate the ordered record sequence for one solar unit.

    Args:
        serial_number: Solar unit identifier
        windows: Ordered anomaly windows for the unit
        start_time: First sample instant
        end_time: Last sample instant (inclusive)
        interval: Time between samples
        rng: Random source (a fresh unseeded one if None)

    Returns:
        Records in ascending timestamp order; empty if end is before start
    """
    generator = SolarGenerationGenerator(serial_number, windows, rng=rng)
    return generator.generate_to_list(start_time, end_time, interval)
