# app/controllers/evidence_controller.py
from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.hours_controller import recalculate_student_hours
from app.models.activity import Activity
from app.models.enrollment import Enrollment, EvidenceStatus
from app.models.faculty import Faculty
from app.models.program import faculty_programs
from app.models.student import Student

logger = logging.getLogger(__name__)

APPROVE = "approve"
REJECT = "reject"


async def _get_enrollment(db: AsyncSession, enrollment_id: int) -> Enrollment:
    res = await db.execute(select(Enrollment).where(Enrollment.id == enrollment_id))
    enrollment = res.scalar_one_or_none()
    if not enrollment:
        raise HTTPException(status_code=404, detail="Enrollment not found")
    return enrollment


async def _assert_faculty_can_review(db: AsyncSession, faculty: Faculty, student_id: int) -> None:
    """Faculty only review students of programs they are linked to."""
    student = await db.get(Student, student_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")

    # students without a program are open to every faculty member
    if student.program_id is None:
        return

    res = await db.execute(
        select(faculty_programs.c.program_id).where(faculty_programs.c.faculty_id == faculty.id)
    )
    program_ids = set(res.scalars().all())
    if student.program_id not in program_ids:
        raise HTTPException(status_code=403, detail="No access to this student")


# ─────────────────────────────────────────────────────────────
# Student side
# ─────────────────────────────────────────────────────────────

async def submit_evidence(db: AsyncSession, student_id: int, enrollment_id: int) -> Enrollment:
    enrollment = await _get_enrollment(db, enrollment_id)
    if enrollment.student_id != student_id:
        raise HTTPException(status_code=404, detail="Enrollment not found")

    if enrollment.evidence_status == EvidenceStatus.SUBMITTED:
        raise HTTPException(status_code=409, detail="Evidence already submitted and awaiting review")
    if enrollment.evidence_status == EvidenceStatus.APPROVED:
        raise HTTPException(status_code=409, detail="Evidence already approved")

    enrollment.evidence_status = EvidenceStatus.SUBMITTED
    enrollment.evidence_submitted_at = datetime.now(timezone.utc)
    enrollment.evidence_feedback = None  # reset feedback of an earlier rejection

    await db.flush()
    return enrollment


# ─────────────────────────────────────────────────────────────
# Review side (faculty / admin)
# ─────────────────────────────────────────────────────────────

async def review_evidence(
    db: AsyncSession,
    enrollment_id: int,
    action: str,
    feedback: str | None = None,
    *,
    faculty: Faculty | None = None,
) -> Enrollment:
    """
    Approve or reject submitted evidence.

    With `faculty` set the reviewer must be linked to the student's
    program. Admin reviews pass no faculty and skip that check.

    Approval also confirms participation and recalculates the student's
    hours in the same transaction: if the recalculation fails, the request
    rolls back and the approval is not stored either.
    """
    if action not in (APPROVE, REJECT):
        raise HTTPException(status_code=400, detail='Invalid action. Use "approve" or "reject"')

    enrollment = await _get_enrollment(db, enrollment_id)

    if enrollment.evidence_status != EvidenceStatus.SUBMITTED:
        raise HTTPException(status_code=409, detail="No submitted evidence to review")

    if faculty is not None:
        await _assert_faculty_can_review(db, faculty, enrollment.student_id)

    enrollment.evidence_reviewed_at = datetime.now(timezone.utc)
    enrollment.evidence_feedback = feedback or None

    if action == REJECT:
        enrollment.evidence_status = EvidenceStatus.REJECTED
        await db.flush()
        return enrollment

    enrollment.evidence_status = EvidenceStatus.APPROVED
    enrollment.participation_confirmed = True
    await db.flush()

    await recalculate_student_hours(db, enrollment.student_id)

    logger.info(
        "Evidence for enrollment %s approved by %s",
        enrollment.id,
        f"faculty {faculty.id}" if faculty is not None else "admin",
    )
    return enrollment


async def set_participation(
    db: AsyncSession,
    faculty: Faculty,
    enrollment_id: int,
    participation_confirmed: bool,
) -> Enrollment:
    """Only the faculty member who created the activity confirms participation."""
    res = await db.execute(
        select(Enrollment)
        .join(Activity, Activity.id == Enrollment.activity_id)
        .where(
            Enrollment.id == enrollment_id,
            Activity.created_by_faculty_id == faculty.id,
        )
    )
    enrollment = res.scalar_one_or_none()
    if not enrollment:
        raise HTTPException(status_code=404, detail="Enrollment not found or no access")

    enrollment.participation_confirmed = participation_confirmed
    await db.flush()
    return enrollment


async def list_pending_evidence(db: AsyncSession, faculty: Faculty) -> list[Enrollment]:
    """Submitted evidence of students in the faculty member's programs (or without one)."""
    program_ids = select(faculty_programs.c.program_id).where(faculty_programs.c.faculty_id == faculty.id)

    res = await db.execute(
        select(Enrollment)
        .join(Student, Student.id == Enrollment.student_id)
        .where(
            Enrollment.evidence_status == EvidenceStatus.SUBMITTED,
            (Student.program_id.is_(None)) | (Student.program_id.in_(program_ids)),
        )
        .order_by(Enrollment.evidence_submitted_at.asc(), Enrollment.id.asc())
    )
    return list(res.scalars().all())
