"""create student hour progress and program hour targets

Revision ID: 003
Revises: 002
Create Date: 2026-09-02
"""
from alembic import op
import sqlalchemy as sa

revision = "003"
down_revision = "002"
branch_labels = None
depends_on = None

_HOUR_COLUMNS = (
    "hours_level1",
    "hours_level2",
    "hours_level3",
    "hours_level4",
    "hours_level5",
    "hours_sustainability",
)


def _hour_columns():
    return [sa.Column(name, sa.Float(), nullable=False, server_default="0") for name in _HOUR_COLUMNS]


def upgrade():
    op.create_table(
        "program_hour_targets",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("program_id", sa.Integer(), sa.ForeignKey("programs.id", ondelete="CASCADE"), nullable=False),
        sa.Column("academic_year", sa.String(9), nullable=False),
        *_hour_columns(),
        sa.UniqueConstraint("program_id", "academic_year", name="uq_target_program_year"),
    )
    op.create_index("ix_program_hour_targets_id", "program_hour_targets", ["id"])
    op.create_index("ix_program_hour_targets_program_id", "program_hour_targets", ["program_id"])

    op.create_table(
        "student_hour_progress",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.Integer(), sa.ForeignKey("students.id", ondelete="CASCADE"), nullable=False),
        sa.Column("academic_year", sa.String(9), nullable=False),
        sa.Column("program_id", sa.Integer(), sa.ForeignKey("programs.id", ondelete="SET NULL"), nullable=True),
        *_hour_columns(),
        sa.Column("last_calculated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("student_id", "academic_year", name="uq_progress_student_year"),
    )
    op.create_index("ix_student_hour_progress_id", "student_hour_progress", ["id"])
    op.create_index("ix_student_hour_progress_student_id", "student_hour_progress", ["student_id"])
    op.create_index("ix_student_hour_progress_program_id", "student_hour_progress", ["program_id"])


def downgrade():
    op.drop_index("ix_student_hour_progress_program_id", table_name="student_hour_progress")
    op.drop_index("ix_student_hour_progress_student_id", table_name="student_hour_progress")
    op.drop_index("ix_student_hour_progress_id", table_name="student_hour_progress")
    op.drop_table("student_hour_progress")
    op.drop_index("ix_program_hour_targets_program_id", table_name="program_hour_targets")
    op.drop_index("ix_program_hour_targets_id", table_name="program_hour_targets")
    op.drop_table("program_hour_targets")
