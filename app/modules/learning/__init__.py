# -*- coding: utf-8 -*-
"""
backend/app/modules/learning/__init__.py

Inscripciones de usuarios a cursos.
"""
