"""Line Schemas — Pydantic models with field-level validation for line endpoints.

Invariants:
    - LineCreate carries the first section: distinct stations, distance > 0
    - SectionCreate enforces the same endpoint rules as the core Section
    - LineResponse.stations is in traversal order (head to tail)

Design Decisions:
    - model_validator for up != down: rejected at the boundary with field detail
      instead of surfacing as a domain error
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from subway.schemas.station import StationResponse


def _strip_non_empty(v: str, field_name: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{field_name} cannot be empty or whitespace")
    return v


class SectionCreate(BaseModel):
    """New section for an existing line."""
    up_station_id: UUID
    down_station_id: UUID
    distance: int = Field(gt=0)

    @model_validator(mode="after")
    def check_distinct_stations(self) -> "SectionCreate":
        if self.up_station_id == self.down_station_id:
            raise ValueError("up_station_id and down_station_id must differ")
        return self


class LineCreate(SectionCreate):
    """Line creation — name, color, and the first section."""
    name: str = Field(min_length=1, max_length=255)
    color: str = Field(min_length=1, max_length=20)

    @field_validator("name", "color")
    @classmethod
    def strip_text(cls, v: str, info: ValidationInfo) -> str:
        return _strip_non_empty(v, info.field_name)


class LineUpdate(BaseModel):
    """Line rename / recolor. Sections are edited through their own endpoints."""
    name: str = Field(min_length=1, max_length=255)
    color: str = Field(min_length=1, max_length=20)

    @field_validator("name", "color")
    @classmethod
    def strip_text(cls, v: str, info: ValidationInfo) -> str:
        return _strip_non_empty(v, info.field_name)


class SectionResponse(BaseModel):
    id: UUID | None
    up_station: StationResponse
    down_station: StationResponse
    distance: int


class LineResponse(BaseModel):
    """Line with its stations and sections, both in traversal order."""
    id: UUID
    name: str
    color: str
    stations: list[StationResponse]
    sections: list[SectionResponse]
    total_distance: int
    created_at: datetime | None = None
    modified_at: datetime | None = None


class DistanceResponse(BaseModel):
    line_id: UUID
    from_station_id: UUID
    to_station_id: UUID
    distance: int
