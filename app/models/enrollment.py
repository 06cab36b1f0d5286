import enum
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship

from app.core.database import Base


class EvidenceStatus(str, enum.Enum):
    NOT_SUBMITTED = "not_submitted"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


class Enrollment(Base):
    __tablename__ = "enrollments"

    id = Column(Integer, primary_key=True, index=True)

    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    activity_id = Column(Integer, ForeignKey("activities.id", ondelete="CASCADE"), nullable=False, index=True)

    # set by faculty after the activity took place
    participation_confirmed = Column(Boolean, nullable=False, default=False)

    evidence_status = Column(
        SAEnum(EvidenceStatus, name="evidence_status_enum"),
        nullable=False,
        default=EvidenceStatus.NOT_SUBMITTED,
    )
    evidence_submitted_at = Column(DateTime(timezone=True), nullable=True)
    evidence_reviewed_at = Column(DateTime(timezone=True), nullable=True)
    evidence_feedback = Column(String(1000), nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    student = relationship("Student")
    activity = relationship("Activity")

    __table_args__ = (
        UniqueConstraint("student_id", "activity_id", name="uq_enrollment_student_activity"),
        Index("ix_enrollments_student_eligibility", "student_id", "participation_confirmed", "evidence_status"),
    )

    @property
    def is_eligible(self) -> bool:
        """Counts toward hours: participation confirmed and evidence approved."""
        return bool(self.participation_confirmed) and self.evidence_status == EvidenceStatus.APPROVED
