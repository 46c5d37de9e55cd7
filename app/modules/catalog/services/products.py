# -*- coding: utf-8 -*-
"""
backend/app/modules/catalog/services/products.py

Referencias de producto inmutables (curso o plan) cargadas del catálogo.
Nunca se construyen desde datos del cliente.

Autor: Seencel
Fecha: 2026-09-22
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.errors import NotFound
from app.modules.catalog.repositories import CourseRepository, PlanRepository
from app.modules.payments.enums import BillingPeriod, ProductType


@dataclass(frozen=True)
class CourseProduct:
    id: str
    slug: str
    title: str
    base_price_usd: Optional[Decimal]
    description: Optional[str] = None
    access_months: int = 12

    product_type = ProductType.COURSE

    @property
    def display_name(self) -> str:
        return self.title


@dataclass(frozen=True)
class PlanProduct:
    id: str
    slug: str
    name: str
    monthly_amount_usd: Optional[Decimal]
    annual_amount_usd: Optional[Decimal]

    product_type = ProductType.SUBSCRIPTION

    @property
    def display_name(self) -> str:
        return self.name

    def amount_for(self, billing_period: BillingPeriod) -> Optional[Decimal]:
        if billing_period == BillingPeriod.ANNUAL:
            return self.annual_amount_usd
        return self.monthly_amount_usd


ProductRef = Union[CourseProduct, PlanProduct]


class CatalogService:
    """Carga referencias de producto activas desde el catálogo."""

    def __init__(
        self,
        course_repo: Optional[CourseRepository] = None,
        plan_repo: Optional[PlanRepository] = None,
    ) -> None:
        self.course_repo = course_repo or CourseRepository()
        self.plan_repo = plan_repo or PlanRepository()

    async def load_course(self, session: AsyncSession, id_or_slug: str) -> CourseProduct:
        course = await self.course_repo.get_active(session, id_or_slug)
        if course is None:
            raise NotFound("Curso no encontrado", reason="course")
        return CourseProduct(
            id=course.id,
            slug=course.slug,
            title=course.title,
            base_price_usd=course.price,
            description=course.short_description,
            access_months=course.access_months or 12,
        )

    async def load_plan(self, session: AsyncSession, id_or_slug: str) -> PlanProduct:
        plan = await self.plan_repo.get_active(session, id_or_slug)
        if plan is None:
            raise NotFound("Plan no encontrado", reason="plan")
        return PlanProduct(
            id=plan.id,
            slug=plan.slug,
            name=plan.name,
            monthly_amount_usd=plan.monthly_amount,
            annual_amount_usd=plan.annual_amount,
        )


__all__ = ["CourseProduct", "PlanProduct", "ProductRef", "CatalogService"]

# Fin del archivo backend/app/modules/catalog/services/products.py
