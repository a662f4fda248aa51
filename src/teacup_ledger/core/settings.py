"""Application settings and configuration.

This module defines all configuration options for the TeaCup ledger service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

THREE_DAYS_SECONDS = 3 * 24 * 60 * 60


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="TeaCup Ledger", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Caller identity tokens
    secret_key: str = Field(default="teacup-dev-secret", alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./teacup.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Ledger administration
    admin_account: str = Field(
        default="0x0000000000000000000000000000000000000000",
        alias="ADMIN_ACCOUNT",
    )

    # Reward distribution cycle
    distribution_interval_seconds: int = Field(
        default=THREE_DAYS_SECONDS,
        gt=0,
        alias="DISTRIBUTION_INTERVAL_SECONDS",
    )
    reward_top_k: int = Field(default=10, ge=0, alias="REWARD_TOP_K")
    reward_min_likes: int = Field(default=0, ge=0, alias="REWARD_MIN_LIKES")

    # Token and content metadata
    ipfs_gateway: str = Field(default="https://ipfs.io/ipfs/", alias="IPFS_GATEWAY")
    base_token_uri: str = Field(
        default="https://api.teacupai.com/nft/",
        alias="BASE_TOKEN_URI",
    )
    nft_name: str = Field(default="TeaCupAI NFT", alias="NFT_NAME")
    nft_symbol: str = Field(default="TCAI", alias="NFT_SYMBOL")

    # In-memory event log retention
    event_log_size: int = Field(default=1000, gt=0, alias="EVENT_LOG_SIZE")

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
        populate_by_name=True,
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()
