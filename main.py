from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure.database import engine, initialize_database
from app.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Inicializa la base de datos al arrancar y libera los recursos al cerrar."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Crea y configura la aplicación principal de FastAPI."""

    settings = get_settings()
    app = FastAPI(title="Catálogo - Administración", lifespan=lifespan)

    # Autoriza peticiones desde el panel de administración.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            origin.strip()
            for origin in settings.cors_allow_origins.split(",")
            if origin.strip()
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
