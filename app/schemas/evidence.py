from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.enrollment import EvidenceStatus


class EvidenceReviewIn(BaseModel):
    action: Literal["approve", "reject"]
    feedback: Optional[str] = Field(None, max_length=1000)


class ParticipationIn(BaseModel):
    participation_confirmed: bool


class EnrollmentOut(BaseModel):
    id: int
    student_id: int
    activity_id: int
    participation_confirmed: bool
    evidence_status: EvidenceStatus
    evidence_submitted_at: Optional[datetime] = None
    evidence_reviewed_at: Optional[datetime] = None
    evidence_feedback: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class EnrollmentCreate(BaseModel):
    activity_id: int
