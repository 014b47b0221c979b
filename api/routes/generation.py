"""
Energy Generation Record Endpoints

Read access to the synthetic generation records written by the
seeder. Records are returned per solar unit in ascending timestamp
order, exactly as stored.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.auth import require_authentication
from api.database import get_db, DatabaseManager
from api.models import ErrorResponse, GenerationRecordResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/energy-generation-records",
    tags=["Energy Generation Records"],
    dependencies=[Depends(require_authentication)],
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"}},
)


@router.get(
    "/solar-unit/{serial_number}",
    response_model=List[GenerationRecordResponse],
    summary="Get generation records for a solar unit",
    description="""
    Get every stored generation record for a solar unit, oldest first.

    An unknown serial number returns an empty list.
    """
)
def get_records_by_serial_number(
    serial_number: str,
    db: Session = Depends(get_db)
):
    """Get all records for a solar unit."""
    with DatabaseManager(db) as db_manager:
        records = db_manager.get_records_by_serial_number(serial_number)

    logger.debug(f"Returning {len(records)} records for {serial_number}")
    return [GenerationRecordResponse(**record) for record in records]
