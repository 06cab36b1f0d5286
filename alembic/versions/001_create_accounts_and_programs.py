"""create accounts and programs

Revision ID: 001
Revises: 
Create Date: 2026-09-01
"""
from alembic import op
import sqlalchemy as sa

revision  = "001"
down_revision = None
branch_labels = None
depends_on    = None


def upgrade() -> None:
    op.create_table(
        "programs",
        sa.Column("id",          sa.Integer(),               primary_key=True),
        sa.Column("name",        sa.String(150),             nullable=False),
        sa.Column("code",        sa.String(30),              nullable=False),
        sa.Column("description", sa.String(800),             nullable=True),
        sa.Column("created_at",  sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_programs_code", "programs", ["code"], unique=True)

    op.create_table(
        "admins",
        sa.Column("id",            sa.Integer(),               primary_key=True, autoincrement=True),
        sa.Column("name",          sa.String(255),             nullable=False),
        sa.Column("email",         sa.String(255),             nullable=False),
        sa.Column("password_hash", sa.Text(),                  nullable=False),
        sa.Column("is_active",     sa.Boolean(),               nullable=False, server_default="true"),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at",    sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_admins_email", "admins", ["email"], unique=True)
    op.create_index("ix_admins_id",    "admins", ["id"],    unique=False)

    op.create_table(
        "faculty",
        sa.Column("id",            sa.Integer(),               primary_key=True),
        sa.Column("full_name",     sa.String(150),             nullable=False),
        sa.Column("email",         sa.String(255),             nullable=False),
        sa.Column("password_hash", sa.Text(),                  nullable=True),
        sa.Column("is_active",     sa.Boolean(),               nullable=False, server_default=sa.text("true")),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at",    sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_faculty_email", "faculty", ["email"], unique=True)

    op.create_table(
        "faculty_programs",
        sa.Column("faculty_id", sa.Integer(), sa.ForeignKey("faculty.id", ondelete="CASCADE"),  primary_key=True),
        sa.Column("program_id", sa.Integer(), sa.ForeignKey("programs.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "students",
        sa.Column("id",             sa.Integer(),               primary_key=True),
        sa.Column("name",           sa.String(120),             nullable=False),
        sa.Column("email",          sa.String(255),             nullable=False),
        sa.Column("student_number", sa.String(30),              nullable=True),
        sa.Column("password_hash",  sa.Text(),                  nullable=True),
        sa.Column("is_active",      sa.Boolean(),               nullable=False, server_default="true"),
        sa.Column("last_login_at",  sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at",     sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("program_id",     sa.Integer(), sa.ForeignKey("programs.id", ondelete="SET NULL"), nullable=True),
        sa.UniqueConstraint("email",          name="uq_students_email"),
        sa.UniqueConstraint("student_number", name="uq_students_number"),
    )
    op.create_index("ix_students_email",      "students", ["email"])
    op.create_index("ix_students_program_id", "students", ["program_id"])


def downgrade() -> None:
    op.drop_index("ix_students_program_id", table_name="students")
    op.drop_index("ix_students_email",      table_name="students")
    op.drop_table("students")
    op.drop_table("faculty_programs")
    op.drop_index("ix_faculty_email", table_name="faculty")
    op.drop_table("faculty")
    op.drop_index("ix_admins_email", table_name="admins")
    op.drop_index("ix_admins_id",    table_name="admins")
    op.drop_table("admins")
    op.drop_index("ix_programs_code", table_name="programs")
    op.drop_table("programs")
