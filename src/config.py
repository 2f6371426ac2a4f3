"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from functools import lru_cache
from typing import List

from fastapi import Request
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: SQLAlchemy connection string
        jwt_secret_key: Secret key used to sign access tokens
        jwt_issuer: Issuer written to and required from every token
        jwt_audience: Audience written to and required from every token
        jwt_algorithm: Algorithm used for JWT encoding (HS256)
        token_lifetime_hours: Access token lifetime in hours

        # API behaviour
        legacy_query_auth: Allow GET /register and GET /login to act on query parameters
        expose_store_errors: Return raw database error text in 400 responses

        # HTTP settings
        cors_origins: Origins allowed by the CORS middleware
        log_level: Root logging level
    """
    # Database settings
    database_url: str

    # JWT settings
    jwt_secret_key: str
    jwt_issuer: str
    jwt_audience: str
    jwt_algorithm: str = "HS256"
    token_lifetime_hours: int = 24

    # API behaviour
    legacy_query_auth: bool = False
    expose_store_errors: bool = True

    # HTTP settings
    cors_origins: List[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    app_title: str = "Hospital API"
    app_version: str = "1.0.0"

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """
    Load settings once per process.

    Raises:
        pydantic.ValidationError: If a required value (database URL, signing key,
            issuer or audience) is missing
    """
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings
