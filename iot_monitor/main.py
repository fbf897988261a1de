# iot_monitor/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from iot_monitor.database import settings
from iot_monitor.exceptions import IoTMonitorError, ValidationError
from iot_monitor.init_db import init_database

# Routers
from iot_monitor.routers import (
    users_router, zones_router, devices_router,
    sensors_router, readings_router, health_router,
)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="IoT Monitor API",
        description="API for managing users, zones, devices, sensors and readings",
        version="1.0.0",
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Errores de servicio -> respuesta JSON con su código HTTP
    @app.exception_handler(IoTMonitorError)
    async def service_error_handler(request: Request, exc: IoTMonitorError):
        body = {"detail": exc.message}
        if isinstance(exc, ValidationError):
            body["errors"] = exc.errors
        return JSONResponse(status_code=exc.http_status, content=body)

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Unhandled storage error on {request.method} {request.url.path}: {str(exc)}")
        return JSONResponse(status_code=500, content={"detail": "Error al acceder a la base de datos"})

    # Mount router
    app.include_router(health_router)      # /healthz, /api/v1/health
    app.include_router(users_router)       # /api/v1/users/...
    app.include_router(zones_router)       # /api/v1/zones/...
    app.include_router(devices_router)     # /api/v1/devices/...
    app.include_router(sensors_router)     # /api/v1/sensors/...
    app.include_router(readings_router)    # /api/v1/readings/...

    # Startup: tablas + contadores (idempotente)
    @app.on_event("startup")
    async def _startup():
        init_database()

    return app


app = create_app()
