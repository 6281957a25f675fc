"""Station Schemas — create request and public response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class StationCreate(BaseModel):
    """Station creation — name stripped, non-empty."""
    name: str = Field(min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class StationResponse(BaseModel):
    id: UUID
    name: str
    created_at: datetime | None = None
