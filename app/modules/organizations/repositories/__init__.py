# -*- coding: utf-8 -*-
"""
backend/app/modules/organizations/repositories/__init__.py
"""

from .organization_repository import OrganizationRepository, SubscriptionRepository

__all__ = ["OrganizationRepository", "SubscriptionRepository"]
