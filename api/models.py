"""
Pydantic Models for API Request/Response Validation

This module defines the data models used by the API for:
- Response serialization (camelCase wire names)
- Documentation generation (OpenAPI/Swagger)

All models use Pydantic v2 syntax for validation and serialization.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


# =========================================
# Generation Record Models
# =========================================

class GenerationRecordResponse(BaseModel):
    """
    One stored energy generation sample.

    Values are returned as stored: negative or extreme readings from
    simulated sensor faults are data, not errors.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "serialNumber": "SU-0001",
                "timestamp": "2025-08-01T10:00:00Z",
                "energyGenerated": 2.14
            }
        }
    )

    serial_number: str = Field(
        ...,
        alias="serialNumber",
        description="Solar unit serial number"
    )
    timestamp: datetime = Field(
        ...,
        description="Sample instant (ISO 8601, UTC)"
    )
    energy_generated: float = Field(
        ...,
        alias="energyGenerated",
        description="Energy generated in the interval (kWh)"
    )

    @field_validator("timestamp")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        """Stored timestamps are UTC; attach or normalize the zone."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


# =========================================
# System Models
# =========================================

class SystemHealth(BaseModel):
    """System health check response."""
    status: str = Field(..., description="Overall status: ok, degraded")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(..., description="Check time")
    database: str = Field(..., description="Database status")
    components: Dict[str, str] = Field(
        default_factory=dict,
        description="Status of individual components"
    )


class ErrorResponse(BaseModel):
    """Standard error envelope."""
    error: bool = True
    message: str
    status_code: int
    timestamp: datetime
    detail: Optional[Any] = None
