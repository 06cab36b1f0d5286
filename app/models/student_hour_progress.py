# app/models/student_hour_progress.py
from sqlalchemy import Column, Integer, Float, String, ForeignKey, DateTime, UniqueConstraint
from app.core.database import Base


class StudentHourProgress(Base):
    """
    Derived cache of a student's accumulated hours for one academic year.
    Fully overwritten by every recalculation; never edited by hand.
    """
    __tablename__ = "student_hour_progress"

    id = Column(Integer, primary_key=True, index=True)

    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    academic_year = Column(String(9), nullable=False)

    # program at calculation time (NULL when the student had none)
    program_id = Column(Integer, ForeignKey("programs.id", ondelete="SET NULL"), nullable=True, index=True)

    hours_level1 = Column(Float, nullable=False, default=0.0)
    hours_level2 = Column(Float, nullable=False, default=0.0)
    hours_level3 = Column(Float, nullable=False, default=0.0)
    hours_level4 = Column(Float, nullable=False, default=0.0)
    hours_level5 = Column(Float, nullable=False, default=0.0)
    hours_sustainability = Column(Float, nullable=False, default=0.0)

    last_calculated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("student_id", "academic_year", name="uq_progress_student_year"),
    )
