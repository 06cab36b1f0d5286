from __future__ import annotations

from typing import Optional, TYPE_CHECKING
from datetime import datetime, timezone

from sqlalchemy import (
    String,
    Integer,
    DateTime,
    Boolean,
    Text,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base

if TYPE_CHECKING:
    from app.models.program import Program


# --------------------------------------------------
# MODEL
# --------------------------------------------------

class Student(Base):
    __tablename__ = "students"

    __table_args__ = (
        UniqueConstraint("email", name="uq_students_email"),
        UniqueConstraint("student_number", name="uq_students_number"),
    )

    # --------------------------------------------------
    # PRIMARY KEY
    # --------------------------------------------------

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # --------------------------------------------------
    # BASIC DETAILS
    # --------------------------------------------------

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    student_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True, index=True)

    password_hash: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default="true",
    )

    last_login_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # --------------------------------------------------
    # PROGRAM (assigned by admins, may be empty)
    # --------------------------------------------------

    program_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("programs.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    program: Mapped[Optional["Program"]] = relationship(
        "Program",
        foreign_keys=[program_id],
    )

    @property
    def display_name(self) -> str:
        return self.name
