"""
Database Connection and Session Management

This module handles connections to the record store and provides
session management for the FastAPI application and the seeding run.

Features:
- Connection pooling (SQLite and server databases)
- Scoped sessions with commit/rollback
- Health checking
- Bulk record insert and per-unit queries
"""

import os
import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Iterable, List
from contextlib import contextmanager

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    Integer,
    String,
    UniqueConstraint,
    create_engine,
    delete,
    func,
    insert,
    inspect,
    select,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

# =========================================
# Database Configuration
# =========================================

def get_database_url() -> str:
    """Get database URL from environment."""
    return os.getenv("DATABASE_URL", "sqlite:///./solar_generation.db")


def create_db_engine(url: Optional[str] = None) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL.

    SQLite connections are shared across threads (FastAPI runs sync
    dependencies in a threadpool); server databases get a QueuePool.
    """
    url = url or get_database_url()
    echo = os.getenv("SQL_ECHO", "false").lower() == "true"

    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=echo
        )

    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,  # Verify connections before use
        echo=echo
    )


engine = create_db_engine()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for ORM models
Base = declarative_base()


# =========================================
# ORM Models
# =========================================

class EnergyGenerationRecord(Base):
    """One persisted generation sample."""

    __tablename__ = "energy_generation_records"
    __table_args__ = (
        UniqueConstraint("serial_number", "timestamp", name="uq_serial_timestamp"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    serial_number = Column(String(50), nullable=False, index=True)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    energy_generated = Column(Float, nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        timestamp = self.timestamp
        # SQLite drops tzinfo; stored values are always UTC
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return {
            "serial_number": self.serial_number,
            "timestamp": timestamp,
            "energy_generated": self.energy_generated,
        }


# =========================================
# Dependency for FastAPI
# =========================================

def get_db():
    """
    Dependency that provides a database session.

    Usage in FastAPI:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_session(session_factory: sessionmaker = SessionLocal):
    """
    Context manager for a transactional database session.

    Commits on success, rolls back on any exception and always closes.

    Usage:
        with get_db_session() as db:
            db.execute(query)
    """
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# =========================================
# Database Operations
# =========================================

class DatabaseManager:
    """
    Manager class for record store operations.

    Provides high-level methods used by the API endpoints and the
    seeding run. Write failures roll back and propagate.
    """

    def __init__(self, session: Optional[Session] = None):
        """
        Initialize with optional session.

        Args:
            session: SQLAlchemy session (creates new if None)
        """
        self._session = session
        self._owns_session = session is None

    @property
    def session(self) -> Session:
        """Get or create session."""
        if self._session is None:
            self._session = SessionLocal()
        return self._session

    def close(self):
        """Close session if we own it."""
        if self._owns_session and self._session:
            self._session.close()
            self._session = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.session.rollback()
        self.close()

    # =========================================
    # Generation Record Operations
    # =========================================

    def insert_records(self, records: Iterable[Any], commit: bool = True) -> int:
        """
        Bulk insert generation records in a single statement.

        Args:
            records: Objects with serial_number, timestamp and
                energy_generated attributes
            commit: Commit immediately; pass False to join a wider transaction

        Returns:
            Number of records inserted

        Raises:
            SQLAlchemyError: If the insert is rejected (after rollback)
        """
        rows = [
            {
                "serial_number": r.serial_number,
                "timestamp": r.timestamp,
                "energy_generated": r.energy_generated,
            }
            for r in records
        ]
        if not rows:
            return 0

        try:
            self.session.execute(insert(EnergyGenerationRecord), rows)
            if commit:
                self.session.commit()
            else:
                self.session.flush()
            return len(rows)
        except SQLAlchemyError as e:
            logger.error(f"Failed to insert generation records: {e}")
            self.session.rollback()
            raise

    def delete_all_records(self, commit: bool = True) -> int:
        """
        Delete every generation record.

        Returns:
            Number of rows deleted
        """
        try:
            result = self.session.execute(delete(EnergyGenerationRecord))
            if commit:
                self.session.commit()
            return result.rowcount
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete generation records: {e}")
            self.session.rollback()
            raise

    def get_records_by_serial_number(self, serial_number: str) -> List[Dict[str, Any]]:
        """
        Get all records for a unit in ascending timestamp order.

        Args:
            serial_number: Solar unit identifier

        Returns:
            List of record dictionaries (empty for unknown units)
        """
        result = self.session.execute(
            select(EnergyGenerationRecord)
            .where(EnergyGenerationRecord.serial_number == serial_number)
            .order_by(EnergyGenerationRecord.timestamp.asc())
        )
        return [row.to_dict() for row in result.scalars()]

    def get_record_count(self, serial_number: Optional[str] = None) -> int:
        """Count records, optionally for a single unit."""
        query = select(func.count()).select_from(EnergyGenerationRecord)
        if serial_number is not None:
            query = query.where(EnergyGenerationRecord.serial_number == serial_number)
        return self.session.execute(query).scalar() or 0


# =========================================
# Utility Functions
# =========================================

def check_database_health(db_engine: Optional[Engine] = None) -> Dict[str, Any]:
    """
    Check database health and return status.

    Returns:
        Dictionary with health status information
    """
    db_engine = db_engine or engine
    try:
        with db_engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            table_exists = inspect(conn).has_table(EnergyGenerationRecord.__tablename__)

        return {
            "status": "healthy",
            "connected": True,
            "dialect": db_engine.dialect.name,
            "records_table_exists": table_exists,
            "checked_at": datetime.now(timezone.utc).isoformat(),
        }

    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "unhealthy",
            "connected": False,
            "error": str(e)
        }


def init_database(db_engine: Optional[Engine] = None):
    """
    Create tables if they don't exist.

    Called on API startup and before seeding so that a fresh
    database is ready to use.
    """
    db_engine = db_engine or engine
    try:
        Base.metadata.create_all(bind=db_engine)
        logger.info("Database tables verified")
    except SQLAlchemyError as e:
        logger.error(f"Database initialization failed: {e}")
        raise
