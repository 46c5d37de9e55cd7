# -*- coding: utf-8 -*-
"""
backend/app/modules/learning/repositories/enrollment_repository.py

Autor: Seencel
Fecha: 2026-09-20
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.learning.models import CourseEnrollment


class EnrollmentRepository(BaseRepository[CourseEnrollment]):
    def __init__(self) -> None:
        super().__init__(CourseEnrollment)

    async def get_for_user_course(
        self,
        session: AsyncSession,
        user_id: str,
        course_id: str,
    ) -> Optional[CourseEnrollment]:
        stmt = select(CourseEnrollment).where(
            CourseEnrollment.user_id == user_id,
            CourseEnrollment.course_id == course_id,
        )
        result = await session.execute(stmt)
        return result.scalars().first()


# Fin del archivo backend/app/modules/learning/repositories/enrollment_repository.py
