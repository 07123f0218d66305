"""initial_schema

Revision ID: 3f2a1c9d7b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

import sqlalchemy as sa
import sqlalchemy_utils
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f2a1c9d7b10"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("uuid", sqlalchemy_utils.types.uuid.UUIDType(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=50), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "app_settings",
        sa.Column("uuid", sqlalchemy_utils.types.uuid.UUIDType(), nullable=False),
        sa.Column("key", sa.String(length=100), nullable=False),
        sa.Column("value", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index(op.f("ix_app_settings_key"), "app_settings", ["key"], unique=True)

    op.create_table(
        "guests",
        sa.Column("uuid", sqlalchemy_utils.types.uuid.UUIDType(), nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=False),
        sa.Column("last_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column(
            "registration_status",
            sa.Enum("pending", "approved", "rejected", name="registration_status_enum"),
            nullable=False,
        ),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("invite_token", sa.String(length=64), nullable=True),
        sa.Column("guest_portal_token", sa.String(length=64), nullable=True),
        sa.Column(
            "rsvp_status",
            sa.Enum("pending", "yes", "no", name="rsvp_status_enum"),
            nullable=False,
        ),
        sa.Column("party_size", sa.Integer(), nullable=False),
        sa.Column("max_party_size", sa.Integer(), nullable=False),
        sa.Column("party_members", sa.JSON(), nullable=False),
        sa.Column("main_person_dietary_preference", sa.String(length=20), nullable=False),
        sa.Column("dec24_attendance", sa.Boolean(), nullable=False),
        sa.Column("dec25_attendance", sa.Boolean(), nullable=False),
        sa.Column("accommodation_dec23", sa.Boolean(), nullable=False),
        sa.Column("accommodation_dec24", sa.Boolean(), nullable=False),
        sa.Column("accommodation_dec25", sa.Boolean(), nullable=False),
        sa.Column("concerns", sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index(op.f("ix_guests_first_name"), "guests", ["first_name"], unique=False)
    op.create_index(op.f("ix_guests_last_name"), "guests", ["last_name"], unique=False)
    op.create_index(op.f("ix_guests_email"), "guests", ["email"], unique=False)
    op.create_index(
        op.f("ix_guests_registration_status"), "guests", ["registration_status"], unique=False
    )
    op.create_index(op.f("ix_guests_invite_token"), "guests", ["invite_token"], unique=True)
    op.create_index(
        op.f("ix_guests_guest_portal_token"), "guests", ["guest_portal_token"], unique=True
    )
    op.create_index(op.f("ix_guests_rsvp_status"), "guests", ["rsvp_status"], unique=False)

    op.create_table(
        "rsvps",
        sa.Column("uuid", sqlalchemy_utils.types.uuid.UUIDType(), nullable=False),
        sa.Column("guest_id", sqlalchemy_utils.types.uuid.UUIDType(), nullable=False),
        sa.Column("response", sa.Enum("yes", "no", name="rsvp_answer_enum"), nullable=False),
        sa.Column("party_size", sa.Integer(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["guest_id"], ["guests.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index(op.f("ix_rsvps_guest_id"), "rsvps", ["guest_id"], unique=True)

    op.create_table(
        "messages",
        sa.Column("uuid", sqlalchemy_utils.types.uuid.UUIDType(), nullable=False),
        sa.Column("guest_id", sqlalchemy_utils.types.uuid.UUIDType(), nullable=True),
        sa.Column("guest_token", sa.String(length=64), nullable=False),
        sa.Column("guest_name", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("status", sa.Enum("unread", "read", name="message_status_enum"), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["guest_id"], ["guests.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index(op.f("ix_messages_guest_id"), "messages", ["guest_id"], unique=False)
    op.create_index(op.f("ix_messages_guest_token"), "messages", ["guest_token"], unique=False)
    op.create_index(op.f("ix_messages_status"), "messages", ["status"], unique=False)

    op.create_table(
        "photos",
        sa.Column("uuid", sqlalchemy_utils.types.uuid.UUIDType(), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("storage_key", sa.String(length=255), nullable=False),
        sa.Column("thumbnail_key", sa.String(length=255), nullable=False),
        sa.Column("content_type", sa.String(length=100), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("width", sa.Integer(), nullable=False),
        sa.Column("height", sa.Integer(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("pending", "approved", "rejected", name="photo_status_enum"),
            nullable=False,
        ),
        sa.Column("uploaded_by", sa.String(length=255), nullable=False),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("moderated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("guest_id", sqlalchemy_utils.types.uuid.UUIDType(), nullable=True),
        sa.Column("guest_token", sa.String(length=64), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["guest_id"], ["guests.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("storage_key"),
    )
    op.create_index(op.f("ix_photos_status"), "photos", ["status"], unique=False)
    op.create_index(op.f("ix_photos_guest_id"), "photos", ["guest_id"], unique=False)
    op.create_index(op.f("ix_photos_guest_token"), "photos", ["guest_token"], unique=False)


def downgrade() -> None:
    op.drop_table("photos")
    op.drop_table("messages")
    op.drop_table("rsvps")
    op.drop_table("guests")
    op.drop_table("app_settings")
    op.drop_table("users")

    # Postgres keeps enum types around after the tables are gone
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        for name in (
            "photo_status_enum",
            "message_status_enum",
            "rsvp_answer_enum",
            "rsvp_status_enum",
            "registration_status_enum",
        ):
            sa.Enum(name=name).drop(bind, checkfirst=True)
