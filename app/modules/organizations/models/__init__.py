# -*- coding: utf-8 -*-
"""
backend/app/modules/organizations/models/__init__.py
"""

from .organization_models import Organization, OrganizationMember
from .subscription_models import OrganizationSubscription, SubscriptionStatus

__all__ = ["Organization", "OrganizationMember", "OrganizationSubscription", "SubscriptionStatus"]
