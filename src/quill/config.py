"""
Configuration management for the Quill backend
"""

from pydantic_settings import BaseSettings

# Only used outside production when QUILL_JWT_SECRET is unset
DEVELOPMENT_JWT_SECRET = "quill-development-secret"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./quill.db"
    database_pool_size: int = 10
    database_max_overflow: int = 20
    sql_echo: bool = False

    # Auth
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "quill"
    jwt_audience: str = "quill-api"
    token_expiry_days: int = 7
    min_password_length: int = 8

    # Client
    graphql_endpoint: str = "http://localhost:4000/graphql"

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 4000
    api_reload: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]
    graphiql: bool = True

    # Environment
    environment: str = "development"  # 'development', 'test', 'production'
    debug: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "QUILL_"
        case_sensitive = False


# Global settings instance
settings = Settings()


def is_production() -> bool:
    return settings.environment.lower() in ("production", "prod")


def get_jwt_secret() -> str:
    """Return the signing secret, falling back to a development value off production."""
    if settings.jwt_secret:
        return settings.jwt_secret
    if is_production():
        raise ValueError("JWT secret is required in production. Set QUILL_JWT_SECRET.")
    return DEVELOPMENT_JWT_SECRET
