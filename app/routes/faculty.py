from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.evidence_controller import (
    list_pending_evidence,
    review_evidence,
    set_participation,
)
from app.controllers.progress_controller import assert_faculty_can_view, get_student_scorecard
from app.core.database import get_db
from app.core.dependencies import get_current_faculty
from app.models.faculty import Faculty
from app.schemas.evidence import EnrollmentOut, EvidenceReviewIn, ParticipationIn
from app.schemas.progress import StudentScorecardOut

router = APIRouter(prefix="/faculty", tags=["Faculty"])


@router.get("/evidence/pending", response_model=list[EnrollmentOut])
async def pending_evidence(
    db: AsyncSession = Depends(get_db),
    faculty: Faculty = Depends(get_current_faculty),
):
    return await list_pending_evidence(db, faculty)


@router.patch("/enrollments/{enrollment_id}/evidence", response_model=EnrollmentOut)
async def review_enrollment_evidence(
    enrollment_id: int,
    payload: EvidenceReviewIn,
    db: AsyncSession = Depends(get_db),
    faculty: Faculty = Depends(get_current_faculty),
):
    """
    Approve / reject submitted evidence. Approval recalculates the student's
    hours; if that fails nothing is saved and the request errors.
    """
    try:
        return await review_evidence(db, enrollment_id, payload.action, payload.feedback, faculty=faculty)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Hour recalculation failed: {e}")


@router.patch("/enrollments/{enrollment_id}/participation", response_model=EnrollmentOut)
async def update_participation(
    enrollment_id: int,
    payload: ParticipationIn,
    db: AsyncSession = Depends(get_db),
    faculty: Faculty = Depends(get_current_faculty),
):
    return await set_participation(db, faculty, enrollment_id, payload.participation_confirmed)


@router.get("/students/{student_id}/progress", response_model=StudentScorecardOut)
async def student_progress(
    student_id: int,
    db: AsyncSession = Depends(get_db),
    faculty: Faculty = Depends(get_current_faculty),
):
    """Scorecard of a student in one of the faculty member's programs."""
    try:
        await assert_faculty_can_view(db, faculty, student_id)
        return await get_student_scorecard(db, student_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
