import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from formvault.application.use_cases import OtpManager
from formvault.config import get_settings
from formvault.infrastructure.database import engine, initialize_database
from formvault.infrastructure.notifiers import build_notifier
from formvault.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup and release resources on shutdown."""

    initialize_database()
    yield
    app.state.otp_manager.clear()
    engine.dispose()


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="FormVault", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.otp_manager = OtpManager(
        build_notifier(settings),
        expires_in=timedelta(seconds=settings.otp_expire_seconds),
    )
    logger.info(
        "Passcodes expire after %d seconds", settings.otp_expire_seconds
    )

    register_routes(app)
    return app


app = create_app()
