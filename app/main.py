# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada principal del backend de pagos de Seencel.

Ajustes clave:
- .env cargado antes de leer configuración (python-dotenv)
- Logging centralizado (plain/json) vía app.shared.config.setup_logging
- Handlers de errores de dominio → JSON `{error, status, reason?}`
- Montaje de observabilidad Prometheus (/metrics) vía app.observability.prom
- Ciclo de vida: registro de modelos ORM al arrancar; cierre del cliente
  HTTP global y del engine en shutdown

Autor: Seencel
Fecha: 2026-09-28
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de cualquier import que lea configuración
# En DEV: override=True para que .env mande sobre variables del entorno
# En PROD: override=False para respetar variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = os.getenv("PYTHON_ENV", "development").strip().strip('"').strip("'").lower()
load_dotenv(dotenv_path=_ENV_PATH, override=_PYTHON_ENV not in ("production", "test"))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.shared.config import get_settings, setup_logging
from app.shared.core.http_client_cache import close_http_client
from app.shared.database import check_database_health, dispose_engine
from app.shared.middleware.exception_handler import register_exception_handlers
from app.shared.orm import import_all_models
from app.observability.prom import setup_observability
from app.modules.payments.routes import router as payments_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    import_all_models()
    settings = get_settings()
    logger.info("🟢 %s v%s iniciado (env=%s)", settings.app_name, settings.app_version, settings.python_env)
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        logger.info("🔴 Iniciando shutdown ordenado...")
        await close_http_client()
        await dispose_engine()
        logger.info("✅ Shutdown completado")


def _configure_cors(app_instance: FastAPI) -> None:
    settings = get_settings()
    origins = settings.get_cors_origins()
    if settings.is_prod and origins == ["*"]:
        logger.warning("CORS_ORIGINS no configurado en producción; se permite cualquier origen sin credenciales")
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # El navegador rechaza credenciales con origen comodín
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(level=settings.log_level, fmt=settings.log_format)

    app_instance = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    register_exception_handlers(app_instance)
    setup_observability(app_instance, http_metrics=settings.http_metrics_enabled)
    _configure_cors(app_instance)

    app_instance.include_router(payments_router)

    @app_instance.get("/health", tags=["health"])
    async def health():
        db_ok = await check_database_health()
        return {"status": "ok" if db_ok else "degraded", "database": db_ok}

    return app_instance


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("app.main:app", host=_settings.app_host, port=_settings.app_port)

# Fin del archivo backend/app/main.py
