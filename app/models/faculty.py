from datetime import datetime, timezone
from typing import List, TYPE_CHECKING

from sqlalchemy import String, Boolean, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.program import faculty_programs

if TYPE_CHECKING:
    from app.models.program import Program


class Faculty(Base):
    """Faculty members. They confirm participation and review evidence."""

    __tablename__ = "faculty"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    full_name: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str | None] = mapped_column(Text, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # programs this faculty member may review evidence for
    programs: Mapped[List["Program"]] = relationship(
        "Program",
        secondary=faculty_programs,
    )

    @property
    def display_name(self) -> str:
        return self.full_name
