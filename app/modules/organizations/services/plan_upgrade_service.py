# -*- coding: utf-8 -*-
"""
backend/app/modules/organizations/services/plan_upgrade_service.py

Upgrade de plan de una organización tras un pago de suscripción.

Pasos:
1. Expira las suscripciones activas de la organización.
2. Inserta la nueva suscripción activa (+1 mes o +1 año).
3. Actualiza organizations.plan_id.

No hace commit; el fulfillment lo hace tras la acción completa.

Autor: Seencel
Fecha: 2026-09-22
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.base import utcnow
from app.shared.errors import NotFound
from app.modules.learning.services.enrollment_service import add_months
from app.modules.organizations.models import OrganizationSubscription, SubscriptionStatus
from app.modules.organizations.repositories import OrganizationRepository, SubscriptionRepository
from app.modules.payments.enums import BillingPeriod

logger = logging.getLogger(__name__)


class PlanUpgradeService:
    def __init__(
        self,
        org_repo: Optional[OrganizationRepository] = None,
        subscription_repo: Optional[SubscriptionRepository] = None,
    ) -> None:
        self.org_repo = org_repo or OrganizationRepository()
        self.subscription_repo = subscription_repo or SubscriptionRepository()

    async def upgrade(
        self,
        session: AsyncSession,
        *,
        organization_id: str,
        plan_id: str,
        billing_period: BillingPeriod,
        payment_id: Optional[str],
        amount: Decimal,
        currency: str,
        now: Optional[datetime] = None,
    ) -> OrganizationSubscription:
        organization = await self.org_repo.get(session, organization_id)
        if organization is None:
            raise NotFound(f"Organización {organization_id} no encontrada", reason="organization")

        now = now or utcnow()
        period = BillingPeriod(billing_period)
        months = 12 if period == BillingPeriod.ANNUAL else 1

        expired = await self.subscription_repo.expire_active(session, organization_id, now=now)
        subscription = await self.subscription_repo.create(
            session,
            organization_id=organization_id,
            plan_id=plan_id,
            payment_id=payment_id,
            status=SubscriptionStatus.ACTIVE,
            billing_period=period,
            started_at=now,
            expires_at=add_months(now, months),
            amount=amount,
            currency=currency.upper(),
        )
        organization.plan_id = plan_id
        await session.flush()

        logger.info(
            "Plan actualizado org=%s plan=%s period=%s (suscripciones expiradas=%d)",
            organization_id, plan_id, period.value, expired,
        )
        return subscription


__all__ = ["PlanUpgradeService"]

# Fin del archivo backend/app/modules/organizations/services/plan_upgrade_service.py
