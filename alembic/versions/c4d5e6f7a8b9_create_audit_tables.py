"""create unit_audits and staff_evaluations tables

Revision ID: c4d5e6f7a8b9
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "c4d5e6f7a8b9"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_DOCUMENT = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "unit_audits",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("branch", sa.String(120), nullable=False),
        sa.Column("city", sa.String(120), nullable=False),
        sa.Column("auditor", sa.String(120), nullable=False),
        sa.Column("date", sa.String(10), nullable=False),
        sa.Column("kitchen", JSON_DOCUMENT, nullable=False),
        sa.Column("hygiene", JSON_DOCUMENT, nullable=False),
        sa.Column("food_safety", JSON_DOCUMENT, nullable=False),
        sa.Column("observations", sa.Text(), nullable=False),
        sa.Column("maintenance", sa.Text(), nullable=False),
        sa.Column("action_plan", sa.Text(), nullable=False),
        sa.Column("score_out_of_100", sa.Integer(), nullable=False),
        sa.Column("score_breakdown", JSON_DOCUMENT, nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    # (branch, date) 조회 인덱스 — unique 아님 (lookup index only, not unique)
    op.create_index("ix_unit_audits_branch_date", "unit_audits", ["branch", "date"])

    op.create_table(
        "staff_evaluations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("staff_name", sa.String(200), nullable=False),
        sa.Column("emp_code", sa.String(60), nullable=False),
        sa.Column("designation", sa.String(120), nullable=False),
        sa.Column("ratings", JSON_DOCUMENT, nullable=False),
        sa.Column("total_marks", sa.String(10), nullable=False),
        sa.Column("grade", sa.String(2), nullable=False),
        sa.Column("score_out_of_100", sa.Integer(), nullable=False),
        sa.Column("selection_branch", sa.String(120), nullable=False),
        sa.Column("selection_city", sa.String(120), nullable=False),
        sa.Column("selection_auditor", sa.String(120), nullable=False),
        sa.Column("selection_date", sa.String(10), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_staff_evaluations_emp_code_date", "staff_evaluations", ["emp_code", "selection_date"]
    )
    op.create_index(
        "ix_staff_evaluations_branch_date", "staff_evaluations", ["selection_branch", "selection_date"]
    )


def downgrade() -> None:
    op.drop_index("ix_staff_evaluations_branch_date", table_name="staff_evaluations")
    op.drop_index("ix_staff_evaluations_emp_code_date", table_name="staff_evaluations")
    op.drop_table("staff_evaluations")
    op.drop_index("ix_unit_audits_branch_date", table_name="unit_audits")
    op.drop_table("unit_audits")
