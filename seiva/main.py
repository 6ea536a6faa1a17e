"""FastAPI Application Entry Point"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder

from seiva.config import settings
from seiva.core.logging import setup_logging, get_logger
from seiva.core.middleware import RequestContextMiddleware
from seiva.api.v1.router import api_router
from seiva.persistence.base import DataBackend
from seiva.persistence.factory import create_backend
from seiva.services.school_data import open_school_data
from seiva.services.status_classifier import StatusPolicy

setup_logging()
logger = get_logger(__name__)


def create_app(backend: Optional[DataBackend] = None) -> FastAPI:
    """
    Build the application. The school data store is constructed on startup
    from ``backend`` (default: the one named by DATA_BACKEND) and closed on
    shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting application",
            extra={"environment": settings.ENVIRONMENT, "data_backend": settings.DATA_BACKEND},
        )
        policy = StatusPolicy.from_settings(settings)
        async with open_school_data(backend or create_backend(settings), policy) as store:
            app.state.school_data = store
            yield
            logger.info("Shutting down application")
            app.state.school_data = None

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="School administration data service: students, finance, calendar and HR",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Process-Time"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """Health check; reports whether the initial data load is still running."""
        store = getattr(request.app.state, "school_data", None)
        return {
            "status": "healthy",
            "app_name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "loading": store.loading if store is not None else True,
        }

    @app.get("/", tags=["Root"])
    async def root():
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.APP_VERSION,
            "docs": "/docs",
            "health": "/health"
        }

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            "Validation error",
            extra={
                "path": request.url.path,
                "errors": exc.errors(),
                "correlation_id": getattr(request.state, "request_id", None),
            }
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception: {str(exc)}",
            extra={
                "path": request.url.path,
                "correlation_id": getattr(request.state, "request_id", None),
            },
            exc_info=True
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "seiva.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
