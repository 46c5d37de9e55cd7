# -*- coding: utf-8 -*-
"""
backend/app/shared/config/logging_config.py

Configuración centralizada de logging del backend de pagos.
Soporta formato plain (desarrollo) y json (producción).

Incluye un filtro que enmascara secretos que puedan colarse en mensajes
(query `secret=` de webhooks y tokens Bearer).

Autor: Seencel
Fecha: 2026-09-14
"""

import logging
import logging.config
import re
from typing import Literal

_SECRET_PATTERNS = (
    (re.compile(r"(secret=)[^&\s]+", re.IGNORECASE), r"\1***"),
    (re.compile(r"(Bearer\s+)[A-Za-z0-9\-_\.=]+", re.IGNORECASE), r"\1***"),
)


class SecretRedactionFilter(logging.Filter):
    """Enmascara secretos en el mensaje final del registro."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = message
        for pattern, replacement in _SECRET_PATTERNS:
            redacted = pattern.sub(replacement, redacted)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    fmt: Literal["plain", "pretty", "json"] = "plain"
) -> None:
    """
    Configura el sistema de logging de la aplicación.

    Args:
        level: Nivel de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: Formato de salida (plain, pretty, json)
    """
    use_json = fmt == "json"
    # python-json-logger v3 movió jsonlogger -> json
    try:
        import importlib
        importlib.import_module("pythonjsonlogger.json")
        json_formatter_path = "pythonjsonlogger.json.JsonFormatter"
    except ImportError:  # pragma: no cover
        json_formatter_path = "pythonjsonlogger.jsonlogger.JsonFormatter"

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "redact": {"()": SecretRedactionFilter},
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s [%(name)s]: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "()": json_formatter_path,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json" if use_json else "default",
                "filters": ["redact"],
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": {
            # httpx registra cada request con la URL completa
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
        },
        "root": {
            "handlers": ["console"],
            "level": level.upper(),
        },
    }

    logging.config.dictConfig(logging_config)


__all__ = ["setup_logging", "SecretRedactionFilter"]
# Fin del archivo backend/app/shared/config/logging_config.py
