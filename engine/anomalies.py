"""
Anomaly Window Definitions for Synthetic Generation Data

Each fault kind reproduces a distinct real-world failure signature seen
in solar telemetry. During an anomaly window the fault rule replaces
normal-operation synthesis for every sample of the affected days:

- Mechanical failure: inverter or string outage, zero output
- Sensor corruption: meter glitches producing negative or absurd readings
- Thermal derate: panels losing efficiency in extreme heat
- Shading: partial obstruction from debris, vegetation or structures
- Below average: unexplained underperformance (soiling, ageing)

Out-of-range values produced here are intentional fault data, not
generator defects.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from core.validators import (
    AnomalyConfigError,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
    validate_anomaly_config,
)


# Natural irradiance jitter applied to every non-spike sample
VARIATION_RANGE: Tuple[float, float] = (0.8, 1.2)


class FaultKind(str, Enum):
    """Types of faults that can be injected into a unit's data."""
    MECHANICAL = "mechanical"
    SENSOR_1 = "sensor1"
    SENSOR_2 = "sensor2"
    TEMPERATURE = "temperature"
    SHADING = "shading"
    BELOW_AVG_1 = "belowAvg1"
    BELOW_AVG_2 = "belowAvg2"
    NOMINAL = "nominal"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_value(cls, value: "str | FaultKind") -> "FaultKind":
        """
        Parse a fault kind from configuration.

        Accepts enum members, values ("sensor1", "belowAvg1") and
        case/separator variants ("SENSOR_1", "below_avg_1").

        Raises:
            AnomalyConfigError: If the kind is unknown
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).replace("_", "").replace("-", "").lower()
        for kind in cls:
            if kind.value.lower() == normalized:
                return kind
        raise AnomalyConfigError(ValidationResult(
            is_valid=False,
            status="rejected",
            issues=[ValidationIssue(
                severity=ValidationSeverity.ERROR,
                rule_name="fault_kind_known",
                message=f"Unknown fault kind: {value!r}",
            )],
        ))


@dataclass(frozen=True)
class AnomalyWindow:
    """
    A contiguous range of days during which a fault overrides normal data.

    Attributes:
        start_day: First affected day offset (inclusive)
        end_day: Last affected day offset (inclusive)
        kind: Fault applied to every sample in the range
    """
    start_day: int
    end_day: int
    kind: FaultKind

    def contains(self, day_offset: int) -> bool:
        """Check whether a day offset falls inside this window."""
        return self.start_day <= day_offset <= self.end_day

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "AnomalyWindow":
        """
        Build a window from a config literal.

        Accepts either ``start_day``/``end_day``/``kind`` keys or the
        short ``start``/``end``/``type`` form.

        Raises:
            AnomalyConfigError: If a key is missing or a day is not an integer
        """
        try:
            start = data["start_day"] if "start_day" in data else data["start"]
            end = data["end_day"] if "end_day" in data else data["end"]
            kind = data["kind"] if "kind" in data else data["type"]
            start_day, end_day = int(start), int(end)
        except (KeyError, TypeError, ValueError) as e:
            raise AnomalyConfigError(ValidationResult(
                is_valid=False,
                status="rejected",
                issues=[ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    rule_name="window_malformed",
                    message=f"Malformed anomaly window {data!r}: {e!r}",
                )],
            )) from e
        return cls(start_day=start_day, end_day=end_day, kind=FaultKind.from_value(kind))


# =========================================
# Fault Rules
# =========================================
# Each rule has signature (base_energy, time_multiplier, rng) -> value

FaultRule = Callable[[float, float, random.Random], float]


def draw_variation(rng: random.Random) -> float:
    """Draw the per-sample natural variation factor."""
    return rng.uniform(*VARIATION_RANGE)


def normal_energy(base_energy: float, time_multiplier: float, rng: random.Random) -> float:
    """Normal-operation generation for one sample, rounded to 2 places."""
    return round(base_energy * time_multiplier * draw_variation(rng), 2)


def _derated(efficiency: float) -> FaultRule:
    """Build a rule that scales normal generation by a fixed efficiency."""
    def rule(base_energy: float, time_multiplier: float, rng: random.Random) -> float:
        variation = draw_variation(rng)
        return round(base_energy * time_multiplier * variation * efficiency, 2)
    return rule


def _below_average(low: float, high: float) -> FaultRule:
    """Build a rule that scales normal generation by a random reduction."""
    def rule(base_energy: float, time_multiplier: float, rng: random.Random) -> float:
        variation = draw_variation(rng)
        reduction = rng.uniform(low, high)
        return round(base_energy * time_multiplier * variation * reduction, 2)
    return rule


def _mechanical(base_energy: float, time_multiplier: float, rng: random.Random) -> float:
    """Complete failure."""
    return 0.0


def _sensor_1(base_energy: float, time_multiplier: float, rng: random.Random) -> float:
    """Negative (-2.5 to -0.5) or extreme high (50 to 150) readings."""
    if rng.random() < 0.5:
        return -rng.uniform(0.5, 2.5)
    return rng.uniform(50, 150)


def _sensor_2(base_energy: float, time_multiplier: float, rng: random.Random) -> float:
    """Negative (-3 to -1) or extreme (80 to 200) readings, biased negative."""
    if rng.random() < 0.6:
        return -rng.uniform(1, 3)
    return rng.uniform(80, 200)


FAULT_RULES: Dict[FaultKind, FaultRule] = {
    FaultKind.MECHANICAL: _mechanical,
    FaultKind.SENSOR_1: _sensor_1,
    FaultKind.SENSOR_2: _sensor_2,
    FaultKind.TEMPERATURE: _derated(0.4),    # 40% efficiency in high heat
    FaultKind.SHADING: _derated(0.65),       # 65% efficiency when shaded
    FaultKind.BELOW_AVG_1: _below_average(0.3, 0.5),
    FaultKind.BELOW_AVG_2: _below_average(0.4, 0.6),
}


def energy_for_fault(
    kind: FaultKind,
    base_energy: float,
    time_multiplier: float,
    rng: random.Random
) -> float:
    """
    Synthesize the value for one sample under a fault.

    Kinds without a dedicated rule behave as normal operation.

    Args:
        kind: Fault to apply
        base_energy: Seasonal base energy
        time_multiplier: Time of day multiplier
        rng: Random source for the sample

    Returns:
        Replacement energy value
    """
    rule = FAULT_RULES.get(kind, normal_energy)
    return rule(base_energy, time_multiplier, rng)


def find_window(day_offset: int, windows: Iterable[AnomalyWindow]) -> Optional[AnomalyWindow]:
    """
    Find the anomaly window covering a day offset.

    Windows are scanned in configured order and the first match wins.
    Overlapping windows are a configuration error that is not checked
    here; see DeviceAnomalyConfig for validated calendars.
    """
    for window in windows:
        if window.contains(day_offset):
            return window
    return None


def inject_anomaly(
    day_offset: int,
    base_energy: float,
    time_multiplier: float,
    windows: Iterable[AnomalyWindow],
    rng: random.Random
) -> Optional[float]:
    """
    Apply a unit's anomaly calendar to one sample.

    Args:
        day_offset: Whole days since the start of the sequence
        base_energy: Seasonal base energy
        time_multiplier: Time of day multiplier
        windows: The unit's ordered anomaly windows
        rng: Random source for the sample

    Returns:
        Replacement energy value, or None when no window applies
    """
    window = find_window(day_offset, windows)
    if window is None:
        return None
    return energy_for_fault(window.kind, base_energy, time_multiplier, rng)


# =========================================
# Validated Configuration
# =========================================

class DeviceAnomalyConfig(Mapping[str, Tuple[AnomalyWindow, ...]]):
    """
    Validated per-unit anomaly calendars.

    Built once at startup from a plain mapping literal. Construction
    rejects overlapping or inverted windows with AnomalyConfigError, so
    first-match-wins lookup never silently masks a misconfiguration.

    Example:
        config = DeviceAnomalyConfig.from_mapping({
            "SU-0001": [
                {"start": 4, "end": 6, "type": "mechanical"},
                {"start": 29, "end": 33, "type": "temperature"},
            ],
        })
        windows = config["SU-0001"]
    """

    def __init__(self, windows_by_unit: Mapping[str, Sequence[AnomalyWindow]]):
        calendars = {
            serial_number: tuple(windows)
            for serial_number, windows in windows_by_unit.items()
        }
        result = validate_anomaly_config(calendars)
        if not result.is_valid:
            raise AnomalyConfigError(result)
        self._calendars: Dict[str, Tuple[AnomalyWindow, ...]] = calendars

    @classmethod
    def from_mapping(
        cls,
        literal: Mapping[str, Sequence[object]]
    ) -> "DeviceAnomalyConfig":
        """
        Build a config from dictionaries or AnomalyWindow instances.

        Raises:
            AnomalyConfigError: If any window is unknown, inverted or overlapping
        """
        return cls({
            serial_number: [
                w if isinstance(w, AnomalyWindow) else AnomalyWindow.from_dict(w)
                for w in windows
            ]
            for serial_number, windows in literal.items()
        })

    def __getitem__(self, serial_number: str) -> Tuple[AnomalyWindow, ...]:
        return self._calendars[serial_number]

    def __iter__(self):
        return iter(self._calendars)

    def __len__(self) -> int:
        return len(self._calendars)

    def windows_for(self, serial_number: str) -> Tuple[AnomalyWindow, ...]:
        """Get a unit's windows; units without a calendar have none."""
        return self._calendars.get(serial_number, ())
