from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.evidence_controller import review_evidence
from app.controllers.hours_controller import recalculate_student_hours
from app.controllers.progress_controller import get_student_scorecard
from app.core.database import get_db
from app.core.dependencies import get_current_admin
from app.models.admin import Admin
from app.schemas.evidence import EnrollmentOut, EvidenceReviewIn
from app.schemas.progress import HourProgressOut, StudentScorecardOut

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/students/{student_id}/progress", response_model=StudentScorecardOut)
async def student_progress(
    student_id: int,
    db: AsyncSession = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    try:
        return await get_student_scorecard(db, student_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/enrollments/{enrollment_id}/evidence", response_model=EnrollmentOut)
async def review_enrollment_evidence(
    enrollment_id: int,
    payload: EvidenceReviewIn,
    db: AsyncSession = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    """Admin review: same as faculty review, without the program check."""
    try:
        return await review_evidence(db, enrollment_id, payload.action, payload.feedback)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Hour recalculation failed: {e}")


@router.post("/students/{student_id}/recalculate", response_model=HourProgressOut)
async def recalculate(
    student_id: int,
    db: AsyncSession = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    """Manual full recompute for one student (repair path)."""
    try:
        return await recalculate_student_hours(db, student_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Hour recalculation failed: {e}")
