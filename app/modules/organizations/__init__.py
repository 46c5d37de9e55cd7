# -*- coding: utf-8 -*-
"""
backend/app/modules/organizations/__init__.py

Organizaciones, membresías y suscripciones a planes.
"""
