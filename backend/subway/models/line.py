"""Line ORM — aggregate root owning one segment chain.

Invariants:
    - name is unique across all lines
    - sections cascade on delete; sections dropped from the list are deleted (orphans)

Design Decisions:
    - lazy="selectin" on sections: async sessions cannot lazy-load on attribute access
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from subway.db.base import Base


class Line(Base):
    """Line aggregate root — owns its sections."""
    __tablename__ = "lines"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    color: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    modified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    sections: Mapped[list["Section"]] = relationship(
        "Section", back_populates="line",
        cascade="all, delete-orphan", lazy="selectin",
    )
