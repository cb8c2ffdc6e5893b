"""Create user_pattern_insights and signal_sightings."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op


revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "user_pattern_insights",
        sa.Column("id", sa.Integer(), nullable=False, autoincrement=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("insight_type", sa.String(length=32), nullable=False),
        sa.Column("insight_key", sa.String(length=128), nullable=False),
        sa.Column("insight_value", sa.JSON(), nullable=False),
        sa.Column("computed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("sighting_count_at_computation", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_user_pattern_insights"),
        sqlite_autoincrement=True,
    )
    op.create_index(
        "ix_user_pattern_insights_user_id", "user_pattern_insights", ["user_id"]
    )
    op.create_index(
        "ix_user_pattern_insights_user_type",
        "user_pattern_insights",
        ["user_id", "insight_type"],
    )

    op.create_table(
        "signal_sightings",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("number", sa.String(length=32), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("mood_tags", sa.JSON(), nullable=True),
        sa.Column("activity", sa.String(length=64), nullable=True),
        sa.Column(
            "timestamp",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("tz", sa.String(length=64), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_signal_sightings"),
    )
    op.create_index("ix_signal_sightings_user_id", "signal_sightings", ["user_id"])
    op.create_index("ix_signal_sightings_number", "signal_sightings", ["number"])
    op.create_index("ix_signal_sightings_timestamp", "signal_sightings", ["timestamp"])


def downgrade() -> None:
    op.drop_index("ix_signal_sightings_timestamp", table_name="signal_sightings")
    op.drop_index("ix_signal_sightings_number", table_name="signal_sightings")
    op.drop_index("ix_signal_sightings_user_id", table_name="signal_sightings")
    op.drop_table("signal_sightings")
    op.drop_index("ix_user_pattern_insights_user_type", table_name="user_pattern_insights")
    op.drop_index("ix_user_pattern_insights_user_id", table_name="user_pattern_insights")
    op.drop_table("user_pattern_insights")
