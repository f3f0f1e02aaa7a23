"""Application settings and configuration.

This module defines all configuration options for the Thrryv Stage application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    This class defines all configuration options for the Thrryv Stage application.
    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Thrryv Stage", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")

    # Database configuration
    database_url: str = Field(default="sqlite:///./thrryv.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # JWT authentication settings (tokens are minted by the hosting application)
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # External AI evaluation capability (OpenAI-compatible chat completions)
    evaluator_base_url: str | None = Field(
        default="https://generativelanguage.googleapis.com/v1beta/openai/",
        alias="EVALUATOR_BASE_URL",
    )
    evaluator_api_key: str | None = Field(default=None, alias="EVALUATOR_API_KEY")
    evaluator_model: str = Field(default="gemini-2.0-flash", alias="EVALUATOR_MODEL")
    evaluator_temperature: float = Field(default=0.3, alias="EVALUATOR_TEMPERATURE")
    evaluator_timeout_seconds: float = Field(default=30.0, alias="EVALUATOR_TIMEOUT_SECONDS")

    # Reputation and moderation scoring
    reputation_base_score: float = Field(default=50.0, alias="REPUTATION_BASE_SCORE")
    reply_default_quality_score: float = Field(
        default=50.0,
        alias="REPLY_DEFAULT_QUALITY_SCORE",
    )
    misinformation_flag_threshold: float = Field(
        default=70.0,
        alias="MISINFORMATION_FLAG_THRESHOLD",
    )

    # Background reputation recompute worker
    recompute_max_attempts: int = Field(default=3, alias="RECOMPUTE_MAX_ATTEMPTS")
    recompute_retry_delay_seconds: float = Field(
        default=1.0,
        alias="RECOMPUTE_RETRY_DELAY_SECONDS",
    )

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.

        Returns:
            Database URL compatible with synchronous database drivers
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()  # type: ignore[call-arg]
