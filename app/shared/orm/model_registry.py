# -*- coding: utf-8 -*-
"""
backend/app/shared/orm/model_registry.py

Importa todos los modelos ORM para que queden registrados en
Base.metadata antes de resolver ForeignKeys o crear el esquema (tests).

Autor: Seencel
Fecha: 2026-09-19
"""

from __future__ import annotations

import importlib
import logging

logger = logging.getLogger(__name__)

MODEL_MODULES = (
    "app.modules.auth.models.user_models",
    "app.modules.catalog.models",
    "app.modules.coupons.models",
    "app.modules.organizations.models",
    "app.modules.learning.models",
    "app.modules.payments.models",
)

_imported = False


def import_all_models() -> None:
    global _imported
    if _imported:
        return
    for module_path in MODEL_MODULES:
        importlib.import_module(module_path)
    _imported = True
    logger.debug("Modelos ORM registrados: %d módulos", len(MODEL_MODULES))


__all__ = ["import_all_models", "MODEL_MODULES"]

# Fin del archivo backend/app/shared/orm/model_registry.py
