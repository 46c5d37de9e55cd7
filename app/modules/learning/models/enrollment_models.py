# -*- coding: utf-8 -*-
"""
backend/app/modules/learning/models/enrollment_models.py

Inscripción de un usuario a un curso. Única por (user_id, course_id):
re-inscribir extiende `expires_at` sobre la misma fila.

Autor: Seencel
Fecha: 2026-09-18
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, as_db_enum, new_uuid, utcnow


class EnrollmentStatus(StrEnum):
    ACTIVE = "active"
    EXPIRED = "expired"

    __pg_enum_name__ = "enrollment_status_enum"

    @classmethod
    def as_db_enum(cls) -> SAEnum:
        return as_db_enum(cls, name=cls.__pg_enum_name__)


class CourseEnrollment(Base):
    __tablename__ = "course_enrollments"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_course_enrollments_user_course"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    course_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[EnrollmentStatus] = mapped_column(EnrollmentStatus.as_db_enum(), nullable=False)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<CourseEnrollment user={self.user_id} course={self.course_id} status={self.status}>"


__all__ = ["CourseEnrollment", "EnrollmentStatus"]

# Fin del archivo backend/app/modules/learning/models/enrollment_models.py
