"""
Solar Generation Records - FastAPI Application

This is the main entry point for the FastAPI backend.
It serves the synthetic generation records written by the seeder
and provides system-wide endpoints.

Access Points:
- API Root: http://localhost:8001
- Swagger Docs: http://localhost:8001/docs
- Records: http://localhost:8001/api/energy-generation-records/solar-unit/{serialNumber}
"""

import os
import logging
from datetime import datetime, timezone
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import __version__
from api.database import check_database_health, init_database
from api.routes import generation_router
from api.models import ErrorResponse, SystemHealth

# =========================================
# Logging Configuration
# =========================================

logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# =========================================
# Application Lifespan
# =========================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown to manage resources.
    """
    logger.info("Starting Solar Generation Records API...")

    try:
        init_database()
        db_health = check_database_health()
        if db_health["status"] == "healthy":
            logger.info(f"Database connection verified ({db_health.get('dialect')})")
        else:
            logger.warning(f"Database health check failed: {db_health}")
    except Exception as e:
        logger.error(f"Startup error: {e}")
        # Don't prevent startup - database might come up later

    yield  # Application runs here

    logger.info("Shutting down Solar Generation Records API...")


# =========================================
# FastAPI Application
# =========================================

app = FastAPI(
    title="Solar Generation Records API",
    description="""
## Synthetic Solar Generation Telemetry

Read access to synthetic energy generation records for solar units,
seeded with realistic seasonal and daily patterns plus scheduled fault
windows (mechanical outages, sensor glitches, thermal derate, shading).

Negative or extreme values are deliberate sensor-fault data.

### Quick Start

1. **Seed data**: `python -m engine.seed`
2. **Check API health**: `GET /health`
3. **Read records**: `GET /api/energy-generation-records/solar-unit/SU-0001`
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


# =========================================
# CORS Middleware
# =========================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        origin.strip()
        for origin in os.getenv(
            "CORS_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173"
        ).split(",")
        if origin.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================================
# Exception Handlers
# =========================================

@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code,
            "timestamp": utc_now_iso()
        },
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "message": "An unexpected error occurred",
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "detail": str(exc) if os.getenv("DEBUG", "false").lower() == "true" else None,
            "timestamp": utc_now_iso()
        }
    )


# =========================================
# Include Routers
# =========================================

app.include_router(generation_router, prefix="/api")


# =========================================
# Root Endpoints
# =========================================

@app.get(
    "/",
    tags=["System"],
    summary="API Root",
    description="Welcome endpoint with API information"
)
async def root():
    """API root endpoint."""
    return {
        "name": "Solar Generation Records API",
        "version": __version__,
        "documentation": "/docs",
        "health_check": "/health",
        "records": "/api/energy-generation-records/solar-unit/{serialNumber}"
    }


@app.get(
    "/health",
    response_model=SystemHealth,
    tags=["System"],
    summary="System Health Check",
    description="Check the health status of the API and its database"
)
async def health_check():
    """System health check endpoint."""
    db_health = check_database_health()

    overall_status = "ok" if db_health["status"] == "healthy" else "degraded"

    return SystemHealth(
        status=overall_status,
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        database=db_health["status"],
        components={
            "api": "ok",
            "database": db_health["status"],
            "records_table": "ok" if db_health.get("records_table_exists") else "missing",
        }
    )


@app.get(
    "/ready",
    tags=["System"],
    summary="Readiness Check",
    description="Check if the API is ready to receive traffic",
    responses={503: {"model": ErrorResponse, "description": "Database not ready"}}
)
async def readiness_check():
    """Kubernetes-style readiness probe."""
    db_health = check_database_health()

    if db_health["status"] != "healthy":
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not ready"
        )

    return {"ready": True}


@app.get(
    "/live",
    tags=["System"],
    summary="Liveness Check",
    description="Check if the API process is alive"
)
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"alive": True}


def run():
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", 8001)),
        reload=os.getenv("API_RELOAD", "true").lower() == "true",
        log_level=os.getenv("LOG_LEVEL", "info").lower()
    )


if __name__ == "__main__":
    run()
