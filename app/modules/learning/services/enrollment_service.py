# -*- coding: utf-8 -*-
"""
backend/app/modules/learning/services/enrollment_service.py

Inscripción de usuarios a cursos.

`enroll` es un upsert sobre (user_id, course_id): una segunda compra
reactiva la fila existente y recalcula `expires_at` desde ahora.
No hace commit; el llamador decide el punto de durabilidad.

Autor: Seencel
Fecha: 2026-09-22
"""

from __future__ import annotations

import calendar
import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.base import as_utc, utcnow
from app.modules.learning.models import CourseEnrollment, EnrollmentStatus
from app.modules.learning.repositories import EnrollmentRepository

logger = logging.getLogger(__name__)

DEFAULT_ACCESS_MONTHS = 12


def add_months(start: datetime, months: int) -> datetime:
    """Suma meses calendario, recortando al último día del mes destino."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)


class EnrollmentService:
    def __init__(self, enrollment_repo: Optional[EnrollmentRepository] = None) -> None:
        self.enrollment_repo = enrollment_repo or EnrollmentRepository()

    async def enroll(
        self,
        session: AsyncSession,
        *,
        user_id: str,
        course_id: str,
        months: Optional[int] = None,
        days: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> CourseEnrollment:
        now = now or utcnow()
        if days is not None:
            expires_at = now + timedelta(days=days)
        else:
            expires_at = add_months(now, months or DEFAULT_ACCESS_MONTHS)

        enrollment = await self.enrollment_repo.get_for_user_course(session, user_id, course_id)
        if enrollment is None:
            enrollment = await self.enrollment_repo.create(
                session,
                user_id=user_id,
                course_id=course_id,
                status=EnrollmentStatus.ACTIVE,
                started_at=now,
                expires_at=expires_at,
            )
            logger.info("Inscripción creada user=%s course=%s hasta %s", user_id, course_id, expires_at)
            return enrollment

        enrollment.status = EnrollmentStatus.ACTIVE
        enrollment.started_at = now
        enrollment.expires_at = expires_at
        await session.flush()
        logger.info("Inscripción renovada user=%s course=%s hasta %s", user_id, course_id, expires_at)
        return enrollment

    async def has_active_enrollment(
        self,
        session: AsyncSession,
        *,
        user_id: str,
        course_id: str,
        now: Optional[datetime] = None,
    ) -> bool:
        enrollment = await self.enrollment_repo.get_for_user_course(session, user_id, course_id)
        if enrollment is None or enrollment.status != EnrollmentStatus.ACTIVE:
            return False
        expires_at = as_utc(enrollment.expires_at)
        return expires_at is None or expires_at > (now or utcnow())


__all__ = ["EnrollmentService", "DEFAULT_ACCESS_MONTHS", "add_months"]

# Fin del archivo backend/app/modules/learning/services/enrollment_service.py
