"""Initial schema — stations, lines, sections.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18

sections cascade with their line and restrict deletion of referenced stations.
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "stations",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "lines",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("color", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("modified_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "sections",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "line_id", UUID(as_uuid=True),
            sa.ForeignKey("lines.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "up_station_id", UUID(as_uuid=True),
            sa.ForeignKey("stations.id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column(
            "down_station_id", UUID(as_uuid=True),
            sa.ForeignKey("stations.id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column("distance", sa.Integer(), nullable=False),
        sa.UniqueConstraint(
            "line_id", "up_station_id", "down_station_id",
            name="uq_sections_line_up_down",
        ),
        sa.CheckConstraint("distance > 0", name="ck_sections_distance_positive"),
        sa.CheckConstraint(
            "up_station_id != down_station_id", name="ck_sections_no_self_ref",
        ),
    )
    op.create_index("ix_sections_line_id", "sections", ["line_id"])


def downgrade() -> None:
    op.drop_index("ix_sections_line_id", table_name="sections")
    op.drop_table("sections")
    op.drop_table("lines")
    op.drop_table("stations")
