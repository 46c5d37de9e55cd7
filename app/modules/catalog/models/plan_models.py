# -*- coding: utf-8 -*-
"""
backend/app/modules/catalog/models/plan_models.py

Planes de suscripción de organizaciones (montos en USD).

Autor: Seencel
Fecha: 2026-09-17
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, new_uuid


class Plan(Base):
    __tablename__ = "plans"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    monthly_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    annual_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<Plan id={self.id} slug={self.slug}>"


__all__ = ["Plan"]

# Fin del archivo backend/app/modules/catalog/models/plan_models.py
