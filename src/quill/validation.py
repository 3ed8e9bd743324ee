"""
Startup configuration validation
"""

from typing import Any

from .config import DEVELOPMENT_JWT_SECRET, is_production, settings
from .logging import get_logger

logger = get_logger(__name__)


class ValidationError(Exception):
    """Raised when critical configuration is invalid."""

    pass


async def validate_database_connection() -> dict[str, Any]:
    """Check that the configured database answers a trivial query."""
    from .database.connection import check_database_connection, init_database

    init_database()
    ok, error = await check_database_connection()
    if ok:
        return {"valid": True, "warnings": [], "errors": []}

    logger.error("Database connection check failed", error=error)
    return {"valid": False, "warnings": [], "errors": [error or "Database connection failed"]}


def validate_auth_configuration() -> dict[str, Any]:
    """Check the token signing configuration."""
    warnings: list[str] = []
    errors: list[str] = []

    if not settings.jwt_secret:
        if is_production():
            errors.append("QUILL_JWT_SECRET must be set in production")
        else:
            warnings.append("QUILL_JWT_SECRET is not set; using the development secret")
    elif settings.jwt_secret == DEVELOPMENT_JWT_SECRET and is_production():
        errors.append("QUILL_JWT_SECRET must not be the development secret in production")
    elif len(settings.jwt_secret) < 32:
        warnings.append("QUILL_JWT_SECRET is shorter than 32 characters")

    if settings.token_expiry_days <= 0:
        errors.append("QUILL_TOKEN_EXPIRY_DAYS must be positive")

    if settings.min_password_length < 1:
        errors.append("QUILL_MIN_PASSWORD_LENGTH must be at least 1")

    return {
        "valid": not errors,
        "warnings": warnings,
        "errors": errors,
        "auth_info": {
            "algorithm": settings.jwt_algorithm,
            "token_expiry_days": settings.token_expiry_days,
        },
    }


async def validate_startup_configuration() -> dict[str, Any]:
    """
    Comprehensive startup validation.

    Called during application startup to ensure critical configuration
    is valid before requests are served.
    """
    logger.info("Starting application configuration validation")

    db_results = await validate_database_connection()
    auth_results = validate_auth_configuration()

    combined_results = {
        "overall_valid": db_results["valid"] and auth_results["valid"],
        "database": db_results,
        "auth": auth_results,
        "environment": {
            "environment": settings.environment,
            "debug": settings.debug,
        },
    }

    for warning in db_results["warnings"] + auth_results["warnings"]:
        logger.warning("Configuration warning", warning=warning)

    if combined_results["overall_valid"]:
        logger.info("Application configuration validation completed successfully")
    else:
        logger.error(
            "Application configuration validation failed",
            errors=db_results["errors"] + auth_results["errors"],
        )

    return combined_results
