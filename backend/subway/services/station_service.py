"""Station Service — create, list, and delete stations.

Invariants:
    - Station names are unique (DuplicateNameError before the INSERT)
    - A station referenced by any section cannot be deleted (StationInUseError)
"""

import logging
from uuid import UUID

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from subway.core.errors import DuplicateNameError, ResourceNotFoundError, StationInUseError
from subway.models.section import Section as SectionModel
from subway.models.station import Station as StationModel
from subway.schemas.station import StationCreate, StationResponse

logger = logging.getLogger(__name__)


def to_station_response(station: StationModel) -> StationResponse:
    return StationResponse(
        id=station.id, name=station.name, created_at=station.created_at,
    )


async def get_station_or_404(db: AsyncSession, station_id: UUID) -> StationModel:
    station = await db.get(StationModel, station_id)
    if station is None:
        raise ResourceNotFoundError("Station", str(station_id))
    return station


async def create_station(db: AsyncSession, body: StationCreate) -> StationResponse:
    existing = await db.execute(
        select(StationModel.id).where(StationModel.name == body.name),
    )
    if existing.scalar_one_or_none() is not None:
        raise DuplicateNameError("Station", body.name)

    station = StationModel(name=body.name)
    db.add(station)
    await db.commit()
    logger.info(f"Station created: {station.name}", extra={"station_id": station.id})
    return to_station_response(station)


async def list_stations(db: AsyncSession) -> list[StationResponse]:
    result = await db.execute(
        select(StationModel).order_by(StationModel.created_at, StationModel.name),
    )
    return [to_station_response(s) for s in result.scalars().all()]


async def delete_station(db: AsyncSession, station_id: UUID) -> None:
    station = await get_station_or_404(db, station_id)
    in_use = await db.execute(
        select(SectionModel.id).where(or_(
            SectionModel.up_station_id == station_id,
            SectionModel.down_station_id == station_id,
        )).limit(1),
    )
    if in_use.scalar_one_or_none() is not None:
        raise StationInUseError(station.name)

    await db.delete(station)
    await db.commit()
    logger.info(f"Station deleted: {station.name}", extra={"station_id": station_id})
