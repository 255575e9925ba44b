"""Initial trails table

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "trails",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(), nullable=False, index=True),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("distance", sa.Float(), nullable=False),
        sa.Column("elevation_gain", sa.Integer(), nullable=False),
        sa.Column("elevation_loss", sa.Integer(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("max_slope", sa.Float(), nullable=False),
        sa.Column("avg_slope", sa.Float(), nullable=False),
        sa.Column("terrain_json", sa.JSON(), nullable=False),
        sa.Column("difficulty", sa.String(), nullable=False, index=True),
        sa.Column("hazards_json", sa.JSON(), nullable=False),
        sa.Column("source", sa.String(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("waypoints_json", sa.JSON(), nullable=False),
        sa.Column("trail_marking", sa.String(), nullable=True),
        sa.Column("is_circular", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("trails")
