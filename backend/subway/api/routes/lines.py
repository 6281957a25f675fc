"""Line Routes — line CRUD plus section insertion, station removal, and distance.

Invariants:
    - Chain errors (split/splice rules) surface as 400 envelopes via the global handler
    - Sections are added with POST and removed by station with DELETE ?station_id=

Design Decisions:
    - Distance lookup is a GET on the line: it reads the chain, never mutates it
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from subway.infrastructure.database import get_db
from subway.schemas.line import (
    DistanceResponse, LineCreate, LineResponse, LineUpdate, SectionCreate,
)
from subway.services import line_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/lines", tags=["lines"])


@router.post(
    "", response_model=LineResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_line(body: LineCreate, db: AsyncSession = Depends(get_db)):
    """Create a line together with its first section."""
    return await line_service.create_line(db, body)


@router.get("", response_model=list[LineResponse])
async def list_lines(db: AsyncSession = Depends(get_db)):
    return await line_service.list_lines(db)


@router.get("/{line_id}", response_model=LineResponse)
async def get_line(line_id: UUID, db: AsyncSession = Depends(get_db)):
    """Line with stations in travel order."""
    return await line_service.get_line(db, line_id)


@router.put("/{line_id}", response_model=LineResponse)
async def update_line(
    line_id: UUID, body: LineUpdate, db: AsyncSession = Depends(get_db),
):
    return await line_service.update_line(db, line_id, body)


@router.delete("/{line_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_line(line_id: UUID, db: AsyncSession = Depends(get_db)):
    await line_service.delete_line(db, line_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{line_id}/sections", response_model=LineResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_section(
    line_id: UUID, body: SectionCreate, db: AsyncSession = Depends(get_db),
):
    """Insert a section, splitting the one it overlaps."""
    return await line_service.add_section(db, line_id, body)


@router.delete(
    "/{line_id}/sections", status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_station(
    line_id: UUID,
    station_id: UUID = Query(...),
    db: AsyncSession = Depends(get_db),
):
    """Remove a station from the line, joining its neighbours."""
    await line_service.remove_station(db, line_id, station_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{line_id}/distance", response_model=DistanceResponse)
async def get_distance(
    line_id: UUID,
    from_station_id: UUID = Query(...),
    to_station_id: UUID = Query(...),
    db: AsyncSession = Depends(get_db),
):
    return await line_service.get_distance(
        db, line_id, from_station_id, to_station_id,
    )
