"""Station Routes — create, list, delete stations."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from subway.infrastructure.database import get_db
from subway.schemas.station import StationCreate, StationResponse
from subway.services import station_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/stations", tags=["stations"])


@router.post(
    "", response_model=StationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_station(
    body: StationCreate, db: AsyncSession = Depends(get_db),
):
    return await station_service.create_station(db, body)


@router.get("", response_model=list[StationResponse])
async def list_stations(db: AsyncSession = Depends(get_db)):
    return await station_service.list_stations(db)


@router.delete("/{station_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_station(
    station_id: UUID, db: AsyncSession = Depends(get_db),
):
    await station_service.delete_station(db, station_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
