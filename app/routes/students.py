# app/routes/students.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.enrollment_controller import enroll_in_activity, list_student_enrollments
from app.controllers.evidence_controller import submit_evidence
from app.controllers.progress_controller import get_student_scorecard
from app.core.database import get_db
from app.core.dependencies import get_current_student
from app.models.student import Student
from app.schemas.evidence import EnrollmentCreate, EnrollmentOut
from app.schemas.progress import StudentScorecardOut

router = APIRouter(prefix="/student", tags=["Student"])


@router.get("/progress", response_model=StudentScorecardOut)
async def my_progress(
    db: AsyncSession = Depends(get_db),
    student: Student = Depends(get_current_student),
):
    try:
        return await get_student_scorecard(db, student.id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/enrollments", response_model=list[EnrollmentOut])
async def my_enrollments(
    db: AsyncSession = Depends(get_db),
    student: Student = Depends(get_current_student),
):
    return await list_student_enrollments(db, student.id)


@router.post("/enrollments", response_model=EnrollmentOut, status_code=201)
async def enroll(
    payload: EnrollmentCreate,
    db: AsyncSession = Depends(get_db),
    student: Student = Depends(get_current_student),
):
    return await enroll_in_activity(db, student.id, payload.activity_id)


@router.post("/enrollments/{enrollment_id}/evidence/submit", response_model=EnrollmentOut)
async def submit_enrollment_evidence(
    enrollment_id: int,
    db: AsyncSession = Depends(get_db),
    student: Student = Depends(get_current_student),
):
    return await submit_evidence(db, student.id, enrollment_id)
