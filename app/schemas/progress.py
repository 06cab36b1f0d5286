from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel

Bucket = Literal["level1", "level2", "level3", "level4", "level5", "sustainability", "total"]


class BucketProgress(BaseModel):
    bucket: Bucket
    current_hours: float
    target_hours: float
    percentage: float
    is_complete: bool


class StudentScorecardOut(BaseModel):
    student_id: int
    student_name: str
    program_id: Optional[int] = None
    program_name: Optional[str] = None
    academic_year: str
    has_targets: bool
    last_calculated_at: Optional[datetime] = None

    breakdown: List[BucketProgress]
    total: BucketProgress


class HourProgressOut(BaseModel):
    student_id: int
    academic_year: str
    program_id: Optional[int] = None

    hours_level1: float
    hours_level2: float
    hours_level3: float
    hours_level4: float
    hours_level5: float
    hours_sustainability: float

    last_calculated_at: datetime

    class Config:
        from_attributes = True
