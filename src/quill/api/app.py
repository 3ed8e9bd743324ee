"""
Main FastAPI application for the Quill backend
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import is_production, settings
from ..database import create_schema, dispose_database, init_database
from ..database.connection import get_database_url
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

configure_logging(debug=settings.debug, level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Quill API...")
    init_database()

    # SQLite databases are not migrated; create missing tables instead
    if get_database_url().startswith("sqlite"):
        await create_schema()

    from ..validation import ValidationError, validate_startup_configuration

    validation_results = await validate_startup_configuration()
    if not validation_results["overall_valid"] and is_production():
        raise ValidationError("Critical configuration validation failed in production")

    yield

    logger.info("Shutting down Quill API...")
    await dispose_database()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Quill API",
        description="GraphQL API for users, posts and authentication",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    try:
        from ..graphql.schema import create_graphql_router, validate_schema

        logger.info("Validating GraphQL schema...")
        validate_schema()

        app.include_router(create_graphql_router(), prefix="")
        logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        raise

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "quill.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
