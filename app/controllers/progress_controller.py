from datetime import datetime

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.hours_controller import current_academic_year
from app.models.faculty import Faculty
from app.models.program import Program, ProgramHourTarget, faculty_programs
from app.models.student import Student
from app.models.student_hour_progress import StudentHourProgress
from app.services.hours import compare_to_targets, total_progress


def _snapshot_hours(progress: StudentHourProgress | None) -> dict:
    if not progress:
        return {}
    return {
        "level1": progress.hours_level1,
        "level2": progress.hours_level2,
        "level3": progress.hours_level3,
        "level4": progress.hours_level4,
        "level5": progress.hours_level5,
        "sustainability": progress.hours_sustainability,
    }


def _target_hours(target: ProgramHourTarget | None) -> dict | None:
    if not target:
        return None
    return {
        "level1": target.hours_level1,
        "level2": target.hours_level2,
        "level3": target.hours_level3,
        "level4": target.hours_level4,
        "level5": target.hours_level5,
        "sustainability": target.hours_sustainability,
    }


async def get_student_scorecard(
    db: AsyncSession,
    student_id: int,
    *,
    now: datetime | None = None,
) -> dict:
    """
    Snapshot totals vs program targets for the current academic year.
    Read-only: reports the stored snapshot, never recalculates.
    """
    # 1) load student
    res = await db.execute(select(Student).where(Student.id == student_id))
    student = res.scalar_one_or_none()
    if not student:
        raise LookupError("Student not found")

    academic_year = current_academic_year(now)

    # 2) stored snapshot
    prog_res = await db.execute(
        select(StudentHourProgress).where(
            StudentHourProgress.student_id == student_id,
            StudentHourProgress.academic_year == academic_year,
        )
    )
    progress = prog_res.scalar_one_or_none()

    # 3) program + targets (both optional)
    program = None
    target = None
    if student.program_id is not None:
        program = await db.get(Program, student.program_id)
        target_res = await db.execute(
            select(ProgramHourTarget).where(
                ProgramHourTarget.program_id == student.program_id,
                ProgramHourTarget.academic_year == academic_year,
            )
        )
        target = target_res.scalar_one_or_none()

    current = _snapshot_hours(progress)
    targets = _target_hours(target)

    return {
        "student_id": student.id,
        "student_name": student.name,
        "program_id": student.program_id,
        "program_name": program.name if program else None,
        "academic_year": academic_year,
        "has_targets": target is not None,
        "last_calculated_at": progress.last_calculated_at if progress else None,
        "breakdown": compare_to_targets(current, targets),
        "total": total_progress(current, targets),
    }


async def assert_faculty_can_view(db: AsyncSession, faculty: Faculty, student_id: int) -> None:
    """
    Faculty only see scorecards of students in a program they are linked to.
    Students without a program are not visible to faculty (admins see all).
    """
    student = await db.get(Student, student_id)
    if not student:
        raise LookupError("Student not found")

    if student.program_id is not None:
        res = await db.execute(
            select(faculty_programs.c.program_id).where(
                faculty_programs.c.faculty_id == faculty.id,
                faculty_programs.c.program_id == student.program_id,
            )
        )
        if res.first() is not None:
            return

    raise HTTPException(status_code=403, detail="No access to this student")
