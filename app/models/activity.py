# app/models/activity.py
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


# Activity <-> SustainabilityTheme tags
activity_sustainability_themes = Table(
    "activity_sustainability_themes",
    Base.metadata,
    Column("activity_id", Integer, ForeignKey("activities.id", ondelete="CASCADE"), primary_key=True),
    Column("theme_id", Integer, ForeignKey("sustainability_themes.id", ondelete="CASCADE"), primary_key=True),
)


class SustainabilityTheme(Base):
    """A tag such as "SDG 7 - Affordable and clean energy"."""

    __tablename__ = "sustainability_themes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    icon: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    program_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("programs.id", ondelete="CASCADE"), nullable=True, index=True
    )


class RubricLevel(Base):
    """
    A rubric column. `position` is the competency level (1-5) that hours
    are credited to when an activity is evaluated at this level.
    """

    __tablename__ = "rubric_levels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    score_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    program_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("programs.id", ondelete="CASCADE"), nullable=True, index=True
    )

    __table_args__ = (
        CheckConstraint("position >= 1 AND position <= 5", name="ck_rubric_level_position"),
    )


class Activity(Base):
    __tablename__ = "activities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(800), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    activity_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    # wall-clock "HH:MM" (24h), same calendar day
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)

    # explicit competency level (student requests); NULL/0 = derive from evaluations
    level: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    program_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("programs.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_by_faculty_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("faculty.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_by_student_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("students.id", ondelete="SET NULL"), nullable=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    sustainability_themes: Mapped[List[SustainabilityTheme]] = relationship(
        SustainabilityTheme,
        secondary=activity_sustainability_themes,
    )

    evaluations: Mapped[List["Evaluation"]] = relationship(
        "Evaluation",
        back_populates="activity",
        cascade="all, delete-orphan",
    )


class Evaluation(Base):
    """One rubric criterion scored for an activity, pointing at a level."""

    __tablename__ = "evaluations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    activity_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("activities.id", ondelete="CASCADE"), nullable=False, index=True
    )
    criterion: Mapped[str] = mapped_column(String(200), nullable=False)
    level_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("rubric_levels.id", ondelete="SET NULL"), nullable=True
    )

    activity: Mapped[Activity] = relationship(Activity, back_populates="evaluations")
    level: Mapped[Optional[RubricLevel]] = relationship(RubricLevel)
