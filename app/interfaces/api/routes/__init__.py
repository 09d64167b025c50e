from fastapi import FastAPI

from .audit_logs import router as audit_logs_router
from .auth import router as auth_router
from .bulk_uploads import router as bulk_uploads_router
from .vehicles import router as vehicles_router


def register_routes(app: FastAPI) -> None:
    """Registra todos los routers de la API en la aplicación FastAPI."""

    app.include_router(auth_router)
    app.include_router(audit_logs_router)
    app.include_router(bulk_uploads_router)
    app.include_router(vehicles_router)
