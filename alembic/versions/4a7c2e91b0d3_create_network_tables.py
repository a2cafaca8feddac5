"""create_network_tables

Revision ID: 4a7c2e91b0d3
Revises:
Create Date: 2026-10-17 09:12:40.118204

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4a7c2e91b0d3"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema: Create stations, lines and sections tables."""
    op.create_table(
        "stations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_stations_name"), "stations", ["name"], unique=False)

    op.create_table(
        "lines",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("color", sa.String(length=50), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "sections",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("line_id", sa.Uuid(), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=False),
        sa.Column("up_station_id", sa.Uuid(), nullable=False),
        sa.Column("down_station_id", sa.Uuid(), nullable=False),
        sa.Column("distance", sa.BigInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["line_id"], ["lines.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["up_station_id"], ["stations.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["down_station_id"], ["stations.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("line_id", "sequence", name="uq_section_line_sequence"),
        sa.UniqueConstraint("line_id", "down_station_id", name="uq_section_line_down_station"),
    )
    op.create_index(op.f("ix_sections_line_id"), "sections", ["line_id"], unique=False)


def downgrade() -> None:
    """Downgrade schema: Drop network tables."""
    op.drop_index(op.f("ix_sections_line_id"), table_name="sections")
    op.drop_table("sections")
    op.drop_table("lines")
    op.drop_index(op.f("ix_stations_name"), table_name="stations")
    op.drop_table("stations")
