"""Initial schema: users, events, bookings, saved_events.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone_number", sa.String(50), nullable=False, server_default=""),
        sa.Column("role", sa.String(20), nullable=False, server_default=sa.text("'consumer'")),
        sa.Column("profile_image_url", sa.String(1024), nullable=True),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.CheckConstraint("role IN ('consumer', 'hotel', 'admin')", name="check_user_role"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("image_url", sa.String(1024), nullable=False),
        sa.Column("categories", sa.String(255), nullable=False, server_default=""),
        sa.Column("hotel_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'active'")),
        *_timestamps(),
        sa.CheckConstraint("status IN ('active', 'inactive')", name="check_event_status"),
    )
    op.create_index("ix_events_id", "events", ["id"])
    op.create_index("ix_events_hotel_id", "events", ["hotel_id"])
    # Public listing: WHERE status = 'active' ORDER BY created_at DESC
    op.create_index("ix_events_status_created", "events", ["status", "created_at"])

    # event_id carries no foreign key: deleting an event must leave its
    # bookings (and their snapshot) untouched.
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("event_title", sa.String(255), nullable=False),
        sa.Column("event_location", sa.String(255), nullable=False),
        sa.Column("event_image", sa.String(1024), nullable=False),
        sa.Column("event_date", sa.String(50), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, server_default=""),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("event_type", sa.String(30), nullable=False),
        sa.Column("hotel_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("consumer_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'pending'")),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'rejected')", name="check_booking_status"
        ),
    )
    op.create_index("ix_bookings_id", "bookings", ["id"])
    op.create_index("ix_bookings_event_id", "bookings", ["event_id"])
    op.create_index("ix_bookings_consumer_id", "bookings", ["consumer_id"])
    # Hotel inbox: WHERE hotel_id = :h AND status = 'pending'
    op.create_index("ix_bookings_hotel_status", "bookings", ["hotel_id", "status"])

    op.create_table(
        "saved_events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("consumer_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("event_title", sa.String(255), nullable=False),
        sa.Column("event_location", sa.String(255), nullable=False),
        sa.Column("event_image", sa.String(1024), nullable=False),
        sa.Column("event_categories", sa.String(255), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("consumer_id", "event_id", name="uq_saved_event_consumer_event"),
    )
    op.create_index("ix_saved_events_id", "saved_events", ["id"])
    op.create_index("ix_saved_events_consumer_id", "saved_events", ["consumer_id"])


def downgrade() -> None:
    op.drop_table("saved_events")
    op.drop_table("bookings")
    op.drop_table("events")
    op.drop_table("users")
