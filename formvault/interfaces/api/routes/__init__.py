from fastapi import FastAPI

from .health import router as health_router
from .otp import router as otp_router
from .records import router as records_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(records_router)
    app.include_router(otp_router)
