# -*- coding: utf-8 -*-
"""
backend/app/modules/organizations/services/__init__.py
"""

from .plan_upgrade_service import PlanUpgradeService

__all__ = ["PlanUpgradeService"]
