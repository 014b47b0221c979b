"""
Core Module - Solar Generation Seeder

This module contains the framework-agnostic building blocks:
- Baseline model (seasonal and time of day generation levels)
- Anomaly configuration guard (window calendar validation)

These components have no I/O and are used by both the generation
engine and the API.
"""

from .baseline import Baseline, BaselineConstants, baseline, to_utc
from .validators import (
    AnomalyConfigError,
    AnomalyConfigGuard,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
    validate_anomaly_config,
)

__all__ = [
    # Baseline model
    "Baseline",
    "BaselineConstants",
    "baseline",
    "to_utc",

    # Validation
    "AnomalyConfigError",
    "AnomalyConfigGuard",
    "ValidationIssue",
    "ValidationResult",
    "ValidationSeverity",
    "validate_anomaly_config",
]

__version__ = "0.1.0"
