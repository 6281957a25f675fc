"""Line Service — line CRUD and section edits through the segment chain.

Invariants:
    - Section rows are never edited directly: rows -> Sections -> add/remove -> rows
    - A rejected chain operation leaves rows untouched (nothing flushed, nothing committed)
    - Chain errors carry the line id in their ErrorContext

Design Decisions:
    - Row sync keyed on Section.id: shrunk/merged values keep the row id, so a split
      is one UPDATE + one INSERT and a splice is one UPDATE + one orphan DELETE
    - Line names unique (DuplicateNameError) checked before INSERT/UPDATE
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from subway.core.domain_types import StationId, SectionId
from subway.core.errors import DuplicateNameError, ResourceNotFoundError, SubwayError
from subway.core.section import Section, Station
from subway.core.sections import Sections
from subway.models.line import Line as LineModel
from subway.models.section import Section as SectionModel
from subway.models.station import Station as StationModel
from subway.schemas.line import (
    DistanceResponse, LineCreate, LineResponse, LineUpdate,
    SectionCreate, SectionResponse,
)
from subway.services.station_service import get_station_or_404, to_station_response

logger = logging.getLogger(__name__)


# ─── Row <-> chain mapping ──────────────────────────────────────

def to_domain_station(row: StationModel) -> Station:
    return Station(id=StationId(row.id), name=row.name)


def build_chain(line: LineModel) -> Sections:
    """Rebuild the line's chain from its rows, keeping row ids."""
    return Sections(
        Section(
            up_station=to_domain_station(row.up_station),
            down_station=to_domain_station(row.down_station),
            distance=row.distance,
            id=SectionId(row.id),
        )
        for row in line.sections
    )


def apply_chain(
    line: LineModel, chain: Sections, station_rows: dict[UUID, StationModel],
) -> None:
    """Make line.sections match the chain. Dropped rows become orphans and are deleted."""
    kept_ids = {s.id for s in chain.sections if s.id is not None}
    rows_by_id = {row.id: row for row in line.sections}

    for row in list(line.sections):
        if row.id not in kept_ids:
            line.sections.remove(row)

    for section in chain.sections:
        up_row = station_rows[section.up_station.id]
        down_row = station_rows[section.down_station.id]
        if section.id is None:
            line.sections.append(SectionModel(
                up_station=up_row, down_station=down_row, distance=section.distance,
            ))
            continue
        row = rows_by_id[section.id]
        row.up_station = up_row
        row.down_station = down_row
        row.distance = section.distance


def _station_rows(line: LineModel) -> dict[UUID, StationModel]:
    rows: dict[UUID, StationModel] = {}
    for section in line.sections:
        rows[section.up_station.id] = section.up_station
        rows[section.down_station.id] = section.down_station
    return rows


def to_line_response(line: LineModel) -> LineResponse:
    chain = build_chain(line)
    rows = _station_rows(line)
    ordered = chain.ordered_stations() if len(chain) else ()
    sections = list(chain)
    return LineResponse(
        id=line.id,
        name=line.name,
        color=line.color,
        stations=[to_station_response(rows[s.id]) for s in ordered],
        sections=[
            SectionResponse(
                id=s.id,
                up_station=to_station_response(rows[s.up_station.id]),
                down_station=to_station_response(rows[s.down_station.id]),
                distance=s.distance,
            )
            for s in sections
        ],
        total_distance=sum(s.distance for s in sections),
        created_at=line.created_at,
        modified_at=line.modified_at,
    )


@contextmanager
def _scoped_to_line(line_id: UUID) -> Iterator[None]:
    """Tag domain errors raised inside the block with the line id."""
    try:
        yield
    except SubwayError as e:
        e.context.line_id = str(line_id)
        raise


# ─── Lookups ────────────────────────────────────────────────────

async def get_line_or_404(db: AsyncSession, line_id: UUID) -> LineModel:
    result = await db.execute(select(LineModel).where(LineModel.id == line_id))
    line = result.scalar_one_or_none()
    if line is None:
        raise ResourceNotFoundError("Line", str(line_id))
    return line


async def _ensure_unique_name(
    db: AsyncSession, name: str, exclude_id: UUID | None = None,
) -> None:
    query = select(LineModel.id).where(LineModel.name == name)
    if exclude_id is not None:
        query = query.where(LineModel.id != exclude_id)
    result = await db.execute(query)
    if result.scalar_one_or_none() is not None:
        raise DuplicateNameError("Line", name)


# ─── Line CRUD ──────────────────────────────────────────────────

async def create_line(db: AsyncSession, body: LineCreate) -> LineResponse:
    await _ensure_unique_name(db, body.name)
    up_row = await get_station_or_404(db, body.up_station_id)
    down_row = await get_station_or_404(db, body.down_station_id)

    line = LineModel(name=body.name, color=body.color)
    line.sections.append(SectionModel(
        up_station=up_row, down_station=down_row, distance=body.distance,
    ))
    db.add(line)
    await db.commit()
    logger.info(f"Line created: {line.name}", extra={"line_id": line.id})
    return to_line_response(line)


async def list_lines(db: AsyncSession) -> list[LineResponse]:
    result = await db.execute(
        select(LineModel).order_by(LineModel.created_at, LineModel.name),
    )
    return [to_line_response(line) for line in result.scalars().all()]


async def get_line(db: AsyncSession, line_id: UUID) -> LineResponse:
    return to_line_response(await get_line_or_404(db, line_id))


async def update_line(
    db: AsyncSession, line_id: UUID, body: LineUpdate,
) -> LineResponse:
    line = await get_line_or_404(db, line_id)
    await _ensure_unique_name(db, body.name, exclude_id=line_id)
    line.name = body.name
    line.color = body.color
    line.modified_at = datetime.now(timezone.utc)
    await db.commit()
    logger.info(f"Line updated: {line.name}", extra={"line_id": line_id})
    return to_line_response(line)


async def delete_line(db: AsyncSession, line_id: UUID) -> None:
    line = await get_line_or_404(db, line_id)
    await db.delete(line)
    await db.commit()
    logger.info(f"Line deleted: {line.name}", extra={"line_id": line_id})


# ─── Section edits ──────────────────────────────────────────────

async def add_section(
    db: AsyncSession, line_id: UUID, body: SectionCreate,
) -> LineResponse:
    line = await get_line_or_404(db, line_id)
    up_row = await get_station_or_404(db, body.up_station_id)
    down_row = await get_station_or_404(db, body.down_station_id)

    chain = build_chain(line)
    with _scoped_to_line(line_id):
        kind = chain.add(Section(
            to_domain_station(up_row), to_domain_station(down_row), body.distance,
        ))

    station_rows = _station_rows(line)
    station_rows[up_row.id] = up_row
    station_rows[down_row.id] = down_row
    apply_chain(line, chain, station_rows)
    line.modified_at = datetime.now(timezone.utc)
    await db.commit()
    logger.info(
        f"Section {up_row.name} -> {down_row.name} added ({kind.value})",
        extra={"line_id": line_id, "section_count": len(chain)},
    )
    return to_line_response(line)


async def remove_station(
    db: AsyncSession, line_id: UUID, station_id: UUID,
) -> None:
    line = await get_line_or_404(db, line_id)
    station_row = await get_station_or_404(db, station_id)

    chain = build_chain(line)
    with _scoped_to_line(line_id):
        position = chain.remove(to_domain_station(station_row))

    apply_chain(line, chain, _station_rows(line))
    line.modified_at = datetime.now(timezone.utc)
    await db.commit()
    logger.info(
        f"Station {station_row.name} removed from line ({position.value})",
        extra={"line_id": line_id, "station_id": station_id, "section_count": len(chain)},
    )


async def get_distance(
    db: AsyncSession, line_id: UUID, from_station_id: UUID, to_station_id: UUID,
) -> DistanceResponse:
    line = await get_line_or_404(db, line_id)
    from_row = await get_station_or_404(db, from_station_id)
    to_row = await get_station_or_404(db, to_station_id)

    with _scoped_to_line(line_id):
        distance = build_chain(line).distance_between(
            to_domain_station(from_row), to_domain_station(to_row),
        )
    return DistanceResponse(
        line_id=line_id,
        from_station_id=from_station_id,
        to_station_id=to_station_id,
        distance=distance,
    )
