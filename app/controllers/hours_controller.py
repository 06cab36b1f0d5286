import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import settings
from app.models.activity import Activity, Evaluation
from app.models.enrollment import Enrollment, EvidenceStatus
from app.models.student import Student
from app.models.student_hour_progress import StudentHourProgress
from app.services.hours import HourTotals, academic_year_for, aggregate_hours

logger = logging.getLogger(__name__)


def current_academic_year(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return academic_year_for(now.date(), settings.ACADEMIC_YEAR_START_MONTH)


async def list_eligible_enrollments(db: AsyncSession, student_id: int) -> list[Enrollment]:
    """Enrollments that count: participation confirmed AND evidence approved."""
    res = await db.execute(
        select(Enrollment)
        .where(
            Enrollment.student_id == student_id,
            Enrollment.participation_confirmed == True,
            Enrollment.evidence_status == EvidenceStatus.APPROVED,
        )
        .options(
            selectinload(Enrollment.activity).selectinload(Activity.sustainability_themes),
            selectinload(Enrollment.activity)
            .selectinload(Activity.evaluations)
            .selectinload(Evaluation.level),
        )
    )
    return list(res.scalars().all())


async def upsert_progress_snapshot(
    db: AsyncSession,
    student_id: int,
    academic_year: str,
    totals: HourTotals,
    program_id: int | None,
    calculated_at: datetime,
) -> StudentHourProgress:
    """
    Write the totals for (student, academic_year). Replaces every value of
    an existing row; never adds to it.
    """
    res = await db.execute(
        select(StudentHourProgress)
        .where(
            StudentHourProgress.student_id == student_id,
            StudentHourProgress.academic_year == academic_year,
        )
        .with_for_update()
    )
    progress = res.scalar_one_or_none()

    if not progress:
        progress = StudentHourProgress(student_id=student_id, academic_year=academic_year)
        db.add(progress)

    progress.program_id = program_id
    progress.hours_level1 = totals.level1
    progress.hours_level2 = totals.level2
    progress.hours_level3 = totals.level3
    progress.hours_level4 = totals.level4
    progress.hours_level5 = totals.level5
    progress.hours_sustainability = totals.sustainability
    progress.last_calculated_at = calculated_at

    await db.flush()
    return progress


async def recalculate_student_hours(
    db: AsyncSession,
    student_id: int,
    *,
    now: datetime | None = None,
) -> StudentHourProgress:
    """
    Full recompute of a student's hour snapshot for the academic year that
    contains `now` (defaults to the current UTC time).

    Runs inside the caller's transaction and does not commit. Any error
    (unknown student, malformed activity times, store failure) propagates
    before anything is written.
    """
    now = now or datetime.now(timezone.utc)
    academic_year = current_academic_year(now)

    # 1) Load + lock student (serializes concurrent recalculations on Postgres)
    res = await db.execute(
        select(Student).where(Student.id == student_id).with_for_update()
    )
    student = res.scalar_one_or_none()
    if not student:
        raise LookupError("Student not found")

    program_id = student.program_id
    if program_id is None:
        logger.warning(
            "Student %s has no program; hours are stored without a program, "
            "no target comparison possible",
            student_id,
        )

    # 2) Eligible enrollments → totals
    enrollments = await list_eligible_enrollments(db, student_id)
    try:
        totals = aggregate_hours(e.activity for e in enrollments)
    except ValueError:
        logger.exception("Hour recalculation aborted for student %s", student_id)
        raise

    # 3) Persist snapshot
    progress = await upsert_progress_snapshot(
        db,
        student_id=student_id,
        academic_year=academic_year,
        totals=totals,
        program_id=program_id,
        calculated_at=now,
    )

    # ✅ DO NOT COMMIT HERE (caller owns the request transaction)

    logger.info(
        "Recalculated hours for student %s (%s): %s, activities=%d",
        student_id,
        academic_year,
        totals.as_dict(),
        totals.activity_count,
    )
    return progress
