"""
MoviePin - Main Application
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from moviepin.api.api import api_router
from moviepin.api.errors import register_exception_handlers
from moviepin.api.middleware import log_requests
from moviepin.core.config import Settings, get_settings, validate_settings
from moviepin.core.database import init_database
from moviepin.core.logging import get_logger, setup_logging
from moviepin.services.data import MoviesRepository, SQLAlchemyMoviesRepository

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[MoviesRepository] = None,
) -> FastAPI:
    """
    Build the application.

    When no repository is given one backed by the configured database is
    created at startup.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    for problem in validate_settings(settings):
        logger.warning("Configuration problem", problem=problem)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        # Startup
        if app.state.movies_repository is None:
            app.state.database = await init_database(settings)
            app.state.movies_repository = SQLAlchemyMoviesRepository(app.state.database)
        logger.info("Application started", version=settings.APP_VERSION)
        yield
        # Shutdown
        if app.state.database is not None:
            await app.state.database.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Movie collection API with review ratings",
        version=settings.APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.database = None
    app.state.movies_repository = repository

    register_exception_handlers(app)
    app.middleware("http")(log_requests)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    return app


def run() -> None:
    """Run the API with uvicorn"""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "moviepin.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
