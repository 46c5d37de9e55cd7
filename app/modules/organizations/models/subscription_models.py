# -*- coding: utf-8 -*-
"""
backend/app/modules/organizations/models/subscription_models.py

Suscripciones de una organización a un plan. A lo sumo una `active`
por organización; las anteriores quedan `expired`.

Autor: Seencel
Fecha: 2026-09-18
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Numeric, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, as_db_enum, new_uuid, utcnow
from app.modules.payments.enums import BillingPeriod


class SubscriptionStatus(StrEnum):
    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"

    __pg_enum_name__ = "subscription_status_enum"

    @classmethod
    def as_db_enum(cls) -> SAEnum:
        return as_db_enum(cls, name=cls.__pg_enum_name__)


class OrganizationSubscription(Base):
    __tablename__ = "organization_subscriptions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    organization_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    plan_id: Mapped[str] = mapped_column(String(36), ForeignKey("plans.id"), nullable=False)
    payment_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("payments.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[SubscriptionStatus] = mapped_column(SubscriptionStatus.as_db_enum(), nullable=False)
    billing_period: Mapped[BillingPeriod] = mapped_column(BillingPeriod.as_db_enum(), nullable=False)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    cancelled_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)

    def __repr__(self) -> str:
        return f"<OrganizationSubscription org={self.organization_id} plan={self.plan_id} status={self.status}>"


__all__ = ["OrganizationSubscription", "SubscriptionStatus"]

# Fin del archivo backend/app/modules/organizations/models/subscription_models.py
