"""Create chapters and debts tables.

Revision ID: 001_create_chapters_and_debts
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_create_chapters_and_debts"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


debt_type_enum = sa.Enum("dues", "fine", "contribution", name="debt_type")
debt_category_enum = sa.Enum(
    "accident",
    "paperwork",
    "anniversary",
    "emergency",
    "event",
    "maintenance",
    "other",
    name="debt_category",
)
debt_status_enum = sa.Enum(
    "pending", "overdue", "in_review", "approved", name="debt_status"
)


def upgrade() -> None:
    op.create_table(
        "arca_chapters",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("regional", sa.String(length=60), nullable=True),
        sa.Column(
            "member_count",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
        ),
        sa.Column(
            "is_active",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("true"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "member_count >= 0",
            name="ck_arca_chapters_member_count_non_negative",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_arca_chapters_name"),
    )

    op.create_table(
        "arca_debts",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("batch_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("chapter_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("debt_type", debt_type_enum, nullable=False),
        sa.Column("category", debt_category_enum, nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column(
            "status",
            debt_status_enum,
            nullable=False,
            server_default="pending",
        ),
        sa.Column("bank_name", sa.String(length=120), nullable=False),
        sa.Column("bank_clabe", sa.String(length=18), nullable=True),
        sa.Column("bank_account", sa.String(length=16), nullable=True),
        sa.Column("bank_holder", sa.String(length=160), nullable=False),
        sa.Column("proof_file_url", sa.Text(), nullable=True),
        sa.Column("proof_uploaded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", sa.String(length=64), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("amount >= 0", name="ck_arca_debts_amount_non_negative"),
        sa.CheckConstraint(
            "bank_clabe IS NOT NULL OR bank_account IS NOT NULL",
            name="ck_arca_debts_bank_reference_present",
        ),
        sa.ForeignKeyConstraint(
            ["chapter_id"],
            ["arca_chapters.id"],
            name="fk_arca_debts_chapter_id",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("ix_arca_debts_batch_id", "arca_debts", ["batch_id"])
    op.create_index(
        "ix_arca_debts_chapter_status",
        "arca_debts",
        ["chapter_id", "status"],
    )
    op.create_index(
        "ix_arca_debts_status_due_date",
        "arca_debts",
        ["status", "due_date"],
    )


def downgrade() -> None:
    op.drop_index("ix_arca_debts_status_due_date", table_name="arca_debts")
    op.drop_index("ix_arca_debts_chapter_status", table_name="arca_debts")
    op.drop_index("ix_arca_debts_batch_id", table_name="arca_debts")
    op.drop_table("arca_debts")
    op.drop_table("arca_chapters")
    debt_status_enum.drop(op.get_bind(), checkfirst=True)
    debt_category_enum.drop(op.get_bind(), checkfirst=True)
    debt_type_enum.drop(op.get_bind(), checkfirst=True)
