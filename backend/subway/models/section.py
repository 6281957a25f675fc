"""Section ORM — one persisted edge of a line's segment chain.

Invariants:
    - Scoped by line_id; deleted with the line (ON DELETE CASCADE)
    - (line_id, up_station_id, down_station_id) is unique
    - distance > 0 and up_station_id != down_station_id (CHECK constraints mirror the core rules)

Design Decisions:
    - Stations RESTRICT on delete: a station on a line must be removed
      from the line before it can be deleted
    - Row order carries no meaning; the chain is rebuilt by traversal
"""

import uuid

from sqlalchemy import Integer, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from subway.db.base import Base


class Section(Base):
    """Directed, distance-weighted edge between two stations of one line."""
    __tablename__ = "sections"
    __table_args__ = (
        UniqueConstraint(
            "line_id", "up_station_id", "down_station_id",
            name="uq_sections_line_up_down",
        ),
        CheckConstraint("distance > 0", name="ck_sections_distance_positive"),
        CheckConstraint(
            "up_station_id != down_station_id", name="ck_sections_no_self_ref",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    line_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("lines.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    up_station_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("stations.id", ondelete="RESTRICT"),
        nullable=False,
    )
    down_station_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("stations.id", ondelete="RESTRICT"),
        nullable=False,
    )
    distance: Mapped[int] = mapped_column(Integer, nullable=False)

    line: Mapped["Line"] = relationship("Line", back_populates="sections")
    up_station: Mapped["Station"] = relationship(
        "Station", foreign_keys=[up_station_id], lazy="selectin",
    )
    down_station: Mapped["Station"] = relationship(
        "Station", foreign_keys=[down_station_id], lazy="selectin",
    )
