"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.

Run with: uvicorn src.main:create_app --factory
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .auth.router import router as auth_router
from .doctors.router import router as doctors_router
from .patients.router import router as patients_router
from .auth import models as auth_models  # noqa: F401  registers the users table
from .patients import models as patient_models  # noqa: F401  registers the patients table
from .config import Settings, get_settings
from .core.middleware import setup_middlewares
from .core.security import TokenIssuer
from .database import Base, build_engine, build_session_factory
from .exceptions import register_exception_handlers

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to run with; loaded from the environment when omitted

    Returns:
        FastAPI: Configured application. Engine, session factory, settings and
        token issuer are kept on ``app.state``.

    Raises:
        pydantic.ValidationError: If required configuration is missing
    """
    settings = settings or get_settings()

    # Configure logging
    logging.basicConfig(level=settings.log_level)

    engine = build_engine(settings.database_url)

    # Create database tables if they don't exist
    Base.metadata.create_all(bind=engine)

    logger.info("Starting Hospital API...")

    app = FastAPI(
        title=settings.app_title,
        description="Hospital management API: authentication, patients and doctors",
        version=settings.app_version
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_issuer = TokenIssuer(settings)

    # Register exception handlers
    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup custom middleware
    setup_middlewares(app)

    # Include routers
    app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(doctors_router, prefix="/api/doctors", tags=["Doctors"])
    app.include_router(patients_router, prefix="/api/patients", tags=["Patients"])

    # Root endpoint
    @app.get("/")
    def root():
        """
        Root endpoint for API health check.
        """
        return {"message": "Welcome to Hospital API", "version": settings.app_version}

    # Health check endpoint
    @app.get("/health")
    def health_check(request: Request):
        """
        Health check endpoint for monitoring.

        Answers 503 with status ``unhealthy`` when the database cannot be reached.
        """
        try:
            with request.app.state.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Health check database error: {str(e)}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy", "database": "unavailable"}
            )
        return {"status": "healthy", "database": "connected"}

    return app
