# app/controllers/enrollment_controller.py
import logging

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity import Activity
from app.models.enrollment import Enrollment, EvidenceStatus

logger = logging.getLogger(__name__)


async def enroll_in_activity(db: AsyncSession, student_id: int, activity_id: int) -> Enrollment:
    """
    Register a student for an activity. One enrollment per student and
    activity; a second registration is a conflict.
    """
    activity = await db.get(Activity, activity_id)
    if not activity:
        raise HTTPException(status_code=404, detail="Activity not found")

    res = await db.execute(
        select(Enrollment.id).where(
            Enrollment.student_id == student_id,
            Enrollment.activity_id == activity_id,
        )
    )
    if res.first() is not None:
        raise HTTPException(status_code=409, detail="Already enrolled for this activity")

    enrollment = Enrollment(
        student_id=student_id,
        activity_id=activity_id,
        participation_confirmed=False,
        evidence_status=EvidenceStatus.NOT_SUBMITTED,
        evidence_submitted_at=None,
        evidence_reviewed_at=None,
        evidence_feedback=None,
    )
    db.add(enrollment)

    try:
        await db.flush()
    except IntegrityError:
        # concurrent registration won the unique (student, activity) race
        raise HTTPException(status_code=409, detail="Already enrolled for this activity")

    logger.info("Student %s enrolled for activity %s", student_id, activity_id)
    return enrollment


async def list_student_enrollments(db: AsyncSession, student_id: int) -> list[Enrollment]:
    res = await db.execute(
        select(Enrollment)
        .where(Enrollment.student_id == student_id)
        .order_by(Enrollment.id.desc())
    )
    return list(res.scalars().all())
