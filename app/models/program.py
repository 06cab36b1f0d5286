from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


# --------------------------------------------------
# FACULTY <-> PROGRAM (which programs a faculty member supervises)
# --------------------------------------------------

faculty_programs = Table(
    "faculty_programs",
    Base.metadata,
    Column("faculty_id", Integer, ForeignKey("faculty.id", ondelete="CASCADE"), primary_key=True),
    Column("program_id", Integer, ForeignKey("programs.id", ondelete="CASCADE"), primary_key=True),
)


class Program(Base):
    __tablename__ = "programs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    code: Mapped[str] = mapped_column(String(30), nullable=False, unique=True, index=True)
    description: Mapped[Optional[str]] = mapped_column(String(800), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Program id={self.id} code={self.code!r}>"


class ProgramHourTarget(Base):
    """
    Required hours per level and for sustainability, per program and
    academic year. Authored by admins; only read by the scorecard.
    """

    __tablename__ = "program_hour_targets"

    id = Column(Integer, primary_key=True, index=True)

    program_id = Column(Integer, ForeignKey("programs.id", ondelete="CASCADE"), nullable=False, index=True)
    academic_year = Column(String(9), nullable=False)  # e.g. "2024-2025"

    hours_level1 = Column(Float, nullable=False, default=0.0)
    hours_level2 = Column(Float, nullable=False, default=0.0)
    hours_level3 = Column(Float, nullable=False, default=0.0)
    hours_level4 = Column(Float, nullable=False, default=0.0)
    hours_level5 = Column(Float, nullable=False, default=0.0)
    hours_sustainability = Column(Float, nullable=False, default=0.0)

    __table_args__ = (
        UniqueConstraint("program_id", "academic_year", name="uq_target_program_year"),
    )
