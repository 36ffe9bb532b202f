"""Create pets, applications and medical_records tables

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates the three record tables of the adoption backend.
How:   PostgreSQL UUID primary keys (gen_random_uuid()), TIMESTAMP WITH TIME
       ZONE audit columns, and the indexes the list/approve queries use.

applications.pet_id and medical_records.pet_id carry no foreign key:
deleting a pet keeps its applications and medical records.

Rollback: downgrade() drops all three tables (all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _record_columns() -> list:
    """id / created_at / updated_at, shared by every table."""
    return [
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "pets",
        *_record_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "type",
            sa.String(20),
            nullable=False,
            comment="dog, cat, bird, rabbit, hamster, other",
        ),
        sa.Column("breed", sa.String(255), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("gender", sa.String(50), nullable=True),
        sa.Column("size", sa.String(50), nullable=True),
        sa.Column("color", sa.String(100), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'available'"),
            comment="available, pending, adopted, not_available",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_pets_status_created_at",
        "pets",
        ["status", sa.text("created_at DESC")],
    )
    op.create_index("idx_pets_type", "pets", ["type"])

    op.create_table(
        "applications",
        *_record_columns(),
        sa.Column("pet_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("applicant_name", sa.String(255), nullable=False),
        sa.Column("applicant_email", sa.String(255), nullable=False),
        sa.Column("applicant_phone", sa.String(50), nullable=True),
        sa.Column("applicant_address", sa.Text(), nullable=True),
        sa.Column("application_text", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'pending'"),
            comment="pending, approved, rejected, withdrawn",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    # Serves the sibling-rejection update: WHERE pet_id = ? AND status = 'pending'
    op.create_index(
        "idx_applications_pet_id_status",
        "applications",
        ["pet_id", "status"],
    )
    op.create_index(
        "idx_applications_status_created_at",
        "applications",
        ["status", sa.text("created_at DESC")],
    )

    op.create_table(
        "medical_records",
        *_record_columns(),
        sa.Column("pet_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("procedure", sa.String(255), nullable=False),
        sa.Column("vet_name", sa.String(255), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("cost", sa.Numeric(10, 2), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_medical_records_pet_id", "medical_records", ["pet_id"])


def downgrade() -> None:
    """Drop every table. Destructive: all adoption data is lost."""
    op.drop_index("idx_medical_records_pet_id", table_name="medical_records")
    op.drop_table("medical_records")

    op.drop_index("idx_applications_status_created_at", table_name="applications")
    op.drop_index("idx_applications_pet_id_status", table_name="applications")
    op.drop_table("applications")

    op.drop_index("idx_pets_type", table_name="pets")
    op.drop_index("idx_pets_status_created_at", table_name="pets")
    op.drop_table("pets")
