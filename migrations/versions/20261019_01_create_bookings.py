"""create bookings

Revision ID: 20261019_01
Revises:
Create Date: 2026-10-19 09:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261019_01"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("owner_name", sa.String(length=100), nullable=False),
        sa.Column("phone_number", sa.String(length=30), nullable=False),
        sa.Column("pet_name", sa.String(length=100), nullable=False),
        sa.Column("breed", sa.String(length=100), nullable=True),
        sa.Column("gender", sa.String(length=20), nullable=False),
        sa.Column("is_neutered", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("weight", sa.Numeric(precision=6, scale=2), nullable=True),
        sa.Column("medical_details", sa.Text(), nullable=True),
        sa.Column("is_taking_medication", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("medication_details", sa.Text(), nullable=True),
        sa.Column("personality", sa.Text(), nullable=True),
        sa.Column("service_type", sa.String(length=50), nullable=False, server_default="unspecified"),
        sa.Column("photo_consent", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_agreed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_bookings_id", "bookings", ["id"], unique=False)
    op.create_index("ix_bookings_created_at", "bookings", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_bookings_created_at", table_name="bookings")
    op.drop_index("ix_bookings_id", table_name="bookings")
    op.drop_table("bookings")
