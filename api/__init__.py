"""
API Module - FastAPI Backend

This module provides the REST API and persistence layer for the
synthetic solar generation records.

Key Components:
- main.py: FastAPI application and system endpoints
- models.py: Pydantic schemas for responses
- database.py: SQLAlchemy engine, sessions and record operations
- auth.py: Bearer-token authentication
- routes/: API endpoint implementations

Endpoints:
- GET /api/energy-generation-records/solar-unit/{serialNumber}: Records for a unit
- GET /health, /ready, /live: System probes
"""

__version__ = "0.1.0"
