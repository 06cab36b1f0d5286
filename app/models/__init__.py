from app.models.program import Program, ProgramHourTarget, faculty_programs
from app.models.admin import Admin
from app.models.faculty import Faculty
from app.models.student import Student
from app.models.activity import (
    Activity,
    Evaluation,
    RubricLevel,
    SustainabilityTheme,
    activity_sustainability_themes,
)
from app.models.enrollment import Enrollment, EvidenceStatus
from app.models.student_hour_progress import StudentHourProgress

__all__ = [
    "Program", "ProgramHourTarget", "faculty_programs",
    "Admin", "Faculty", "Student",
    "Activity", "Evaluation", "RubricLevel", "SustainabilityTheme",
    "activity_sustainability_themes",
    "Enrollment", "EvidenceStatus",
    "StudentHourProgress",
]
