# -*- coding: utf-8 -*-
"""
backend/app/modules/coupons/__init__.py

Cupones de descuento y su registro de uso.
"""
