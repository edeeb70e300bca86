"""DearGuest invitation and RSVP service."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from dearguest.core.config import Settings
from dearguest.core.database import create_db_and_tables, create_db_engine
from dearguest.core.errors import register_exception_handlers
from dearguest.core.security import TokenSigner
from dearguest.invites.accounts import ensure_main_admin
from dearguest.routes import admin, admin_guests, auth, early_access, events, invites

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "latest.log"

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=str(log_file),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting DearGuest application")
    create_db_and_tables(app.state.engine)
    if settings.main_admin_email and settings.main_admin_password:
        with Session(app.state.engine) as session:
            ensure_main_admin(
                session,
                settings.main_admin_email,
                settings.main_admin_password,
                settings.bcrypt_rounds,
            )
    yield
    # Shutdown
    app.state.engine.dispose()
    logger.info("DearGuest application shut down")


def create_app(settings: Settings | None = None, engine=None) -> FastAPI:
    """
    Build the application.

    The settings, database engine and token signer live on ``app.state`` so
    tests can build an isolated app with their own configuration.
    """
    settings = settings or Settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Event invitations with per-guest links and RSVP collection",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine or create_db_engine(settings.database_url)
    app.state.signer = TokenSigner.from_settings(settings)

    # Configure CORS for the separately served frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth.router)
    app.include_router(admin.router)
    app.include_router(admin_guests.router)
    app.include_router(events.router)
    app.include_router(early_access.router)
    app.include_router(invites.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "app": settings.app_name}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
