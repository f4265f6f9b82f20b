"""Initial schema: the rides table.

Revision ID: 001
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ── rides ─────────────────────────────────────────────────────────
    op.create_table(
        "rides",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("driver_id", sa.String(64), nullable=False),
        sa.Column("total_seats", sa.Integer, nullable=False),
        sa.Column("available_seats", sa.Integer, nullable=False),
        sa.Column("passengers", sa.JSON, nullable=False),
        sa.Column("former_passengers", sa.JSON, nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "WAITING",
                "EN_ROUTE",
                "FINISHED",
                "CRASHED",
                name="ridestatus",
            ),
            default="WAITING",
            nullable=False,
        ),
        sa.Column("start_location_id", sa.String(64), nullable=False),
        sa.Column("destination_id", sa.String(64), nullable=False),
        sa.Column("scheduled_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("comments", sa.JSON, nullable=False),
        sa.Column("version", sa.Integer, default=1, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("available_seats >= 0", name="ck_rides_seats_nonneg"),
        sa.CheckConstraint("total_seats >= 1", name="ck_rides_total_seats"),
    )
    op.create_index("idx_rides_status", "rides", ["status"])
    op.create_index("idx_rides_driver", "rides", ["driver_id"])
    op.create_index("idx_rides_scheduled", "rides", ["scheduled_time"])


def downgrade() -> None:
    op.drop_table("rides")
    op.execute("DROP TYPE IF EXISTS ridestatus")
