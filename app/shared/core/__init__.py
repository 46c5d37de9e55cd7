# -*- coding: utf-8 -*-
"""
backend/app/shared/core/__init__.py

Recursos de proceso compartidos (cliente HTTP global).
"""

from .http_client_cache import get_http_client, close_http_client

__all__ = ["get_http_client", "close_http_client"]
