"""
Seeding Entry Point

Populates the record store with synthetic generation data for every
configured solar unit. The run is one transaction:

    connect -> delete all records -> insert each unit's batch -> commit -> disconnect

Any failure rolls back the whole run (including the delete), is logged,
and makes the process exit with status 1. There are no retries; re-run
from scratch.

Run with:
    python -m engine.seed
"""

import os
import sys
import random
import logging
from datetime import datetime, timedelta
from typing import Dict, Optional

from sqlalchemy.orm import sessionmaker

from api.database import DatabaseManager, SessionLocal, get_db_session, init_database
from api.database import engine as db_engine
from .anomalies import DeviceAnomalyConfig
from .generator import SolarGenerationGenerator
from .unit_configs import (
    DEFAULT_END_TIME,
    DEFAULT_INTERVAL,
    DEFAULT_START_TIME,
    load_unit_anomaly_config,
)

logger = logging.getLogger(__name__)


def get_random_seed() -> Optional[int]:
    """Get the optional seed for reproducible runs from environment."""
    value = os.getenv("SEED_RANDOM_SEED")
    return int(value) if value else None


def seed_database(
    config: DeviceAnomalyConfig,
    session_factory: sessionmaker = SessionLocal,
    start_time: datetime = DEFAULT_START_TIME,
    end_time: datetime = DEFAULT_END_TIME,
    interval: timedelta = DEFAULT_INTERVAL,
    random_seed: Optional[int] = None
) -> Dict[str, int]:
    """
    Replace all stored records with freshly generated ones.

    Args:
        config: Validated anomaly calendars; one batch per unit
        session_factory: Session factory bound to the target database
        start_time: First sample instant
        end_time: Last sample instant (inclusive)
        interval: Time between samples
        random_seed: Seed for a reproducible run

    Returns:
        Number of records inserted per serial number

    Raises:
        SQLAlchemyError: If any delete or insert fails (nothing is committed)
    """
    counts: Dict[str, int] = {}

    with get_db_session(session_factory) as db:
        db_manager = DatabaseManager(db)

        logger.info("Clearing all existing energy generation records...")
        deleted = db_manager.delete_all_records(commit=False)
        logger.info(f"Deleted {deleted} existing records")

        for serial_number, windows in config.items():
            logger.info(f"Seeding {serial_number}...")
            # Independent stream per unit; derived from the run seed when given
            rng = random.Random(None if random_seed is None else f"{random_seed}:{serial_number}")
            generator = SolarGenerationGenerator(serial_number, windows, rng=rng)
            records = generator.generate_to_list(start_time, end_time, interval)
            counts[serial_number] = db_manager.insert_records(records, commit=False)
            logger.info(f"✓ Seeded {counts[serial_number]} records for {serial_number}")

    logger.info("=== SEEDING COMPLETE ===")
    logger.info(f"Units: {', '.join(counts) or 'none'}")
    logger.info(f"Period: {start_time.isoformat()} to {end_time.isoformat()}")
    logger.info(f"Interval: {interval}")

    return counts


def main() -> int:
    """
    Run the seeder with the compiled-in configuration.

    Returns:
        Process exit status (0 on success, 1 on failure)
    """
    try:
        logging.basicConfig(
            level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        config = load_unit_anomaly_config()
        init_database()
        seed_database(config, random_seed=get_random_seed())
        return 0
    except Exception as e:
        logger.exception(f"Seeding error: {e}")
        return 1
    finally:
        db_engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
