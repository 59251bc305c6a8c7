# inzozi/adapters/configuration/config.py

"""
Application Settings Configuration
"""

from pathlib import Path
from dotenv import load_dotenv

# project root .env
env_path = Path(__file__).parent.parent.parent.parent / ".env"
load_dotenv(env_path)

from pydantic import SecretStr, AnyHttpUrl, PostgresDsn, Field, field_validator, ConfigDict
from pydantic_settings import BaseSettings
from typing import Optional, List, Union
from logging import getLevelName

import pytz


class Settings(BaseSettings):
    """
    Application Settings for environment, database, session cache, auth, mail and logging.
    """
    model_config = ConfigDict(
        env_file=str(env_path),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # General Project Info
    PROJECT_NAME: str = Field(default="Inzozi School Admissions API", description="Name of the project")
    VERSION: str = Field(default="1.0.0", description="Application version")
    ENVIRONMENT: str = Field(default="development", description="Environment: development, production, testing")
    DEBUG: bool = Field(default=False, description="Enable debug mode (detailed error logs)")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")

    # Database
    DB_DRIVER: str = Field(default="asyncpg", description="Database driver (asyncpg)")
    POSTGRES_USER: str = Field(default="postgres")
    POSTGRES_PASSWORD: str = Field(default="postgres")
    POSTGRES_DB: str = Field(default="inzozi")
    POSTGRES_HOST: str = Field(default="localhost")
    POSTGRES_PORT: int = Field(default=5432)
    DATABASE_URL: Optional[PostgresDsn] = Field(default=None, description="Database connection URL")
    TEST_MODE: bool = Field(default=False, description="Enable test mode (use test database)")
    TEST_POSTGRES_DB: Optional[str] = Field(default=None, description="Name of the test database")

    # Session cache
    REDIS_URL: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")

    # Auth Settings
    SECRET_KEY: SecretStr = Field(default=SecretStr("change-this-secret-in-production"))
    ALGORITHM: str = Field(default="HS256", description="JWT algorithm")
    SESSION_TTL_SECONDS: int = Field(default=12 * 60 * 60, description="Session (access token) lifetime")
    BLACKLIST_TTL_SECONDS: int = Field(default=24 * 60 * 60,
                                       description="Blacklist window when a token's expiry cannot be read")
    RESET_TICKET_TTL_SECONDS: int = Field(default=15 * 60, description="Password reset ticket lifetime")

    # Bootstrap administrator (created by the seed script when both are set)
    FIRST_ADMIN_EMAIL: Optional[str] = Field(default=None, description="Email of the initial SYSTEM_ADMIN")
    FIRST_ADMIN_PASSWORD: Optional[SecretStr] = Field(default=None, description="Password of the initial SYSTEM_ADMIN")

    # Mail
    RESEND_API_KEY: Optional[SecretStr] = Field(default=None, description="Resend API key; unset logs emails")
    EMAIL_FROM: str = Field(default="InzoziSchool <noreply@inzozi.rw>", description="Sender address")
    FRONTEND_URL: str = Field(default="http://localhost:3000", description="Frontend base URL used in email links")
    TIMEZONE: str = Field(default="Africa/Kigali", description="Timezone used for dates shown to users")

    # Security (CORS)
    BASE_URL: str = Field(default="http://localhost:8000", description="Base URL of the application")
    CORS_ORIGINS: List[AnyHttpUrl] = Field(default=["http://localhost:3000", "http://127.0.0.1:3000"],
                                           description="Allowed CORS origins")

    # API Documentation
    SCHEMA_VISIBILITY: bool = Field(default=True, description="Show API docs (Swagger UI and Redoc)")

    def model_post_init(self, __context) -> None:
        """Build DATABASE_URL from the POSTGRES_* parts when it was not given."""
        # a blacklisted token must stay blocked for at least its whole lifetime
        if self.BLACKLIST_TTL_SECONDS < self.SESSION_TTL_SECONDS:
            raise ValueError("BLACKLIST_TTL_SECONDS must be >= SESSION_TTL_SECONDS")

        if not self.DATABASE_URL:
            if self.TEST_MODE and self.TEST_POSTGRES_DB:
                db_name = self.TEST_POSTGRES_DB
            else:
                db_name = self.POSTGRES_DB

            self.DATABASE_URL = PostgresDsn.build(
                scheme=f"postgresql+{self.DB_DRIVER}",
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_HOST,
                port=self.POSTGRES_PORT,
                path=f"{db_name}",
            )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @field_validator("TEST_MODE", "DEBUG", "SCHEMA_VISIBILITY", mode="before")
    def parse_boolean(cls, v: Union[str, bool]) -> bool:
        """Convert string boolean values to proper boolean."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() in ("true", "1", "yes", "y", "on")
        return bool(v)

    @field_validator("CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """
        Assemble CORS origins if provided as comma-separated string.
        """
        if isinstance(v, str) and not v.startswith("["):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        if isinstance(v, list):
            return v
        raise ValueError(f"Invalid CORS_ORIGINS format: {v!r}")

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, v: str) -> str:
        """
        Validate that the log level is a valid level name.
        """
        lvl = v.upper()
        if getLevelName(lvl) == "Level %s" % lvl:
            raise ValueError(f"Invalid LOG_LEVEL: {v}")
        return lvl

    @field_validator("TIMEZONE", mode="before")
    def validate_timezone(cls, v: str) -> str:
        if v not in pytz.all_timezones_set:
            raise ValueError(f"Unknown TIMEZONE: {v}")
        return v

    @field_validator("SESSION_TTL_SECONDS", "BLACKLIST_TTL_SECONDS", "RESET_TICKET_TTL_SECONDS", mode="before")
    def validate_positive_ttl(cls, v: Union[str, int]) -> int:
        """TTLs must be positive integers."""
        if isinstance(v, str):
            try:
                v = int(v)
            except ValueError:
                raise ValueError(f"TTL must be an integer, got: {v}")
        if v <= 0:
            raise ValueError(f"TTL must be positive, got: {v}")
        return v


# Create settings instance
settings = Settings()

# Quick debug if run directly
if __name__ == "__main__":
    import json

    print(json.dumps(settings.model_dump(mode="json"), indent=4))
