"""create activities, evaluations and enrollments

Revision ID: 002
Revises: 001
Create Date: 2026-09-01
"""
from alembic import op
import sqlalchemy as sa

revision = "002"
down_revision = "001"
branch_labels = None
depends_on = None

evidence_status_enum = sa.Enum(
    "NOT_SUBMITTED", "SUBMITTED", "APPROVED", "REJECTED",
    name="evidence_status_enum",
)


def upgrade():
    op.create_table(
        "sustainability_themes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("icon", sa.String(16), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("program_id", sa.Integer(), sa.ForeignKey("programs.id", ondelete="CASCADE"), nullable=True),
    )
    op.create_index("ix_sustainability_themes_program_id", "sustainability_themes", ["program_id"])

    op.create_table(
        "rubric_levels",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("score_value", sa.Float(), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("program_id", sa.Integer(), sa.ForeignKey("programs.id", ondelete="CASCADE"), nullable=True),
        sa.CheckConstraint("position >= 1 AND position <= 5", name="ck_rubric_level_position"),
    )
    op.create_index("ix_rubric_levels_program_id", "rubric_levels", ["program_id"])

    op.create_table(
        "activities",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.String(800), nullable=True),
        sa.Column("location", sa.String(200), nullable=True),
        sa.Column("activity_date", sa.Date(), nullable=True),
        sa.Column("start_time", sa.String(5), nullable=False),
        sa.Column("end_time", sa.String(5), nullable=False),
        sa.Column("level", sa.Integer(), nullable=True),
        sa.Column("program_id", sa.Integer(), sa.ForeignKey("programs.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_by_faculty_id", sa.Integer(), sa.ForeignKey("faculty.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_by_student_id", sa.Integer(), sa.ForeignKey("students.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
    )
    op.create_index("ix_activities_id", "activities", ["id"])
    op.create_index("ix_activities_program_id", "activities", ["program_id"])
    op.create_index("ix_activities_created_by_faculty_id", "activities", ["created_by_faculty_id"])
    op.create_index("ix_activities_created_by_student_id", "activities", ["created_by_student_id"])

    op.create_table(
        "activity_sustainability_themes",
        sa.Column("activity_id", sa.Integer(), sa.ForeignKey("activities.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("theme_id", sa.Integer(), sa.ForeignKey("sustainability_themes.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "evaluations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("activity_id", sa.Integer(), sa.ForeignKey("activities.id", ondelete="CASCADE"), nullable=False),
        sa.Column("criterion", sa.String(200), nullable=False),
        sa.Column("level_id", sa.Integer(), sa.ForeignKey("rubric_levels.id", ondelete="SET NULL"), nullable=True),
    )
    op.create_index("ix_evaluations_activity_id", "evaluations", ["activity_id"])

    op.create_table(
        "enrollments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.Integer(), sa.ForeignKey("students.id", ondelete="CASCADE"), nullable=False),
        sa.Column("activity_id", sa.Integer(), sa.ForeignKey("activities.id", ondelete="CASCADE"), nullable=False),
        sa.Column("participation_confirmed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("evidence_status", evidence_status_enum, nullable=False, server_default="NOT_SUBMITTED"),
        sa.Column("evidence_submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("evidence_reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("evidence_feedback", sa.String(1000), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.UniqueConstraint("student_id", "activity_id", name="uq_enrollment_student_activity"),
    )
    op.create_index("ix_enrollments_id", "enrollments", ["id"])
    op.create_index("ix_enrollments_student_id", "enrollments", ["student_id"])
    op.create_index("ix_enrollments_activity_id", "enrollments", ["activity_id"])
    op.create_index(
        "ix_enrollments_student_eligibility",
        "enrollments",
        ["student_id", "participation_confirmed", "evidence_status"],
    )


def downgrade():
    op.drop_index("ix_enrollments_student_eligibility", table_name="enrollments")
    op.drop_index("ix_enrollments_activity_id", table_name="enrollments")
    op.drop_index("ix_enrollments_student_id", table_name="enrollments")
    op.drop_index("ix_enrollments_id", table_name="enrollments")
    op.drop_table("enrollments")
    evidence_status_enum.drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_evaluations_activity_id", table_name="evaluations")
    op.drop_table("evaluations")
    op.drop_table("activity_sustainability_themes")
    op.drop_index("ix_activities_created_by_student_id", table_name="activities")
    op.drop_index("ix_activities_created_by_faculty_id", table_name="activities")
    op.drop_index("ix_activities_program_id", table_name="activities")
    op.drop_index("ix_activities_id", table_name="activities")
    op.drop_table("activities")
    op.drop_index("ix_rubric_levels_program_id", table_name="rubric_levels")
    op.drop_table("rubric_levels")
    op.drop_index("ix_sustainability_themes_program_id", table_name="sustainability_themes")
    op.drop_table("sustainability_themes")
