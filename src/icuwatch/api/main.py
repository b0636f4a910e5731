"""
icuwatch API Main Application

FastAPI application serving patient data to the monitoring dashboard.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from icuwatch import __version__
from icuwatch.api.routes import patients_router, vitals_router
from icuwatch.config import DataSourceConfig, get_settings
from icuwatch.observability.logging import configure_logging
from icuwatch.repository import PatientsRepository
from icuwatch.sources.base import DataSourceError

logger = structlog.get_logger(__name__)


def create_app(data_source: DataSourceConfig | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        data_source: Source to serve; taken from settings when omitted
    """
    settings = get_settings()
    configure_logging(settings.app.log_level, settings.app.log_json)
    source_config = data_source or settings.data_source_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager for startup/shutdown events."""
        logger.info(
            "Starting icuwatch API",
            env=settings.app.env,
            data_source=source_config.type,
        )
        app.state.repository = await PatientsRepository.from_config(source_config)

        yield

        logger.info("Shutting down icuwatch API")
        await app.state.repository.close()

    app = FastAPI(
        title="icuwatch API",
        description="ICU patient monitoring data",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DataSourceError)
    async def data_source_error_handler(request: Request, exc: DataSourceError):
        logger.error(
            "Data source error",
            path=request.url.path,
            code=exc.code,
            source=exc.source,
            error=exc.message,
        )
        return JSONResponse(
            status_code=502,
            content={"code": exc.code, "source": exc.source, "detail": exc.message},
        )

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        repository: PatientsRepository = request.app.state.repository
        return {
            "status": "healthy",
            "version": __version__,
            "data_source": repository.source_type,
        }

    app.include_router(patients_router, prefix="/v1")
    app.include_router(vitals_router, prefix="/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "icuwatch.api.main:app",
        host=settings.app.api_host,
        port=settings.app.api_port,
        reload=settings.is_development,
    )
