"""Application configuration with validation."""
from typing import Optional, Literal, List
from functools import lru_cache
from pydantic import Field, model_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from the environment and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Champ Funnel"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"
    CORS_ORIGINS: List[str] = Field(default=["*"])

    # Admin dashboard
    ADMIN_PASSWORD: SecretStr = SecretStr("")

    # Submission store. "memory" keeps entries in-process (local runs, demos, tests).
    SUBMISSION_STORE: Literal["snowflake", "memory"] = "memory"

    # Snowflake
    SNOWFLAKE_ACCOUNT: Optional[str] = None
    SNOWFLAKE_USER: Optional[str] = None
    SNOWFLAKE_PASSWORD: Optional[SecretStr] = None
    SNOWFLAKE_DATABASE: Optional[str] = None
    SNOWFLAKE_SCHEMA: Optional[str] = None
    SNOWFLAKE_WAREHOUSE: Optional[str] = None
    SNOWFLAKE_ROLE: Optional[str] = None
    SNOWFLAKE_TABLE: str = Field(default="CHAMP_ENTRIES", pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_ENABLED: bool = True
    CACHE_KEY_PREFIX: str = "champ:"
    CACHE_TTL_SUBMISSIONS: int = Field(default=120, ge=1, le=86400)
    CACHE_TTL_STATS: int = Field(default=300, ge=1, le=86400)

    # Calibration gate
    REQUIRE_CALIBRATION: bool = True
    GATE_SNAP_RADIUS: float = Field(default=12.0, gt=0, le=50)
    GATE_SESSION_LIMIT: int = Field(default=10000, ge=10)

    @model_validator(mode="after")
    def validate_snowflake_settings(self):
        """A Snowflake store needs a full set of credentials."""
        if self.SUBMISSION_STORE == "snowflake":
            missing = [
                name
                for name in ("SNOWFLAKE_ACCOUNT", "SNOWFLAKE_USER", "SNOWFLAKE_PASSWORD",
                             "SNOWFLAKE_DATABASE", "SNOWFLAKE_SCHEMA", "SNOWFLAKE_WAREHOUSE")
                if not getattr(self, name)
            ]
            if missing:
                raise ValueError(f"Snowflake store requires: {', '.join(missing)}")
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has a real store and an admin password."""
        if self.APP_ENV == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            if self.SUBMISSION_STORE != "snowflake":
                raise ValueError("Production requires SUBMISSION_STORE=snowflake")
            if len(self.ADMIN_PASSWORD.get_secret_value()) < 12:
                raise ValueError("ADMIN_PASSWORD must be ≥12 characters in production")
        return self

    @property
    def admin_enabled(self) -> bool:
        return bool(self.ADMIN_PASSWORD.get_secret_value())

    @property
    def snowflake_params(self) -> dict:
        """Connection kwargs for snowflake.connector.connect()."""
        return {
            "account": self.SNOWFLAKE_ACCOUNT,
            "user": self.SNOWFLAKE_USER,
            "password": self.SNOWFLAKE_PASSWORD.get_secret_value() if self.SNOWFLAKE_PASSWORD else None,
            "warehouse": self.SNOWFLAKE_WAREHOUSE,
            "database": self.SNOWFLAKE_DATABASE,
            "schema": self.SNOWFLAKE_SCHEMA,
            "role": self.SNOWFLAKE_ROLE,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()
