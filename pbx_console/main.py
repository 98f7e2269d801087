"""
PBX Console - Main Application Entry Point
Multi-tenant admin console for phone-system users
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import structlog

from pbx_console.core.config import get_settings
from pbx_console.core.exceptions import (
    AuthorizationError,
    ConsoleError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from pbx_console.core.session_middleware import SessionGuardMiddleware
from pbx_console.api import auth, companies, editors, users

settings = get_settings()


def configure_logging() -> None:
    """Configure structured logging"""
    logging.basicConfig(format="%(message)s", level=settings.LOG_LEVEL.upper())
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.LOG_JSON
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


configure_logging()
logger = structlog.get_logger(__name__)

ERROR_STATUS = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (PersistenceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


async def console_error_handler(request: Request, exc: ConsoleError) -> JSONResponse:
    """Map console errors to HTTP responses"""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            break
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting PBX Console backend")
    # Tables are created by Alembic migrations, not auto-generated
    yield
    logger.info("Shutting down PBX Console backend")


def create_app() -> FastAPI:
    """Create FastAPI application"""
    app = FastAPI(
        title="PBX Console API",
        description="Multi-tenant admin console for companies and their phone extensions",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(SessionGuardMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ConsoleError, console_error_handler)

    prefix = settings.API_V1_PREFIX
    app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(companies.router, prefix=f"{prefix}/companies", tags=["companies"])
    app.include_router(users.router, prefix=f"{prefix}/companies/{{company_id}}/users", tags=["users"])
    app.include_router(
        editors.router,
        prefix=f"{prefix}/companies/{{company_id}}/users/{{user_id}}/editor",
        tags=["editors"],
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "pbx-console-api"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "pbx_console.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
    )
