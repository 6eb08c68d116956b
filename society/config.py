from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be configured via .env file or environment variables.
    """

    # Database
    DATABASE_URL: str = "sqlite:///./society.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    # Session tokens (signing key for the session cookie)
    SECRET_KEY: str
    TOKEN_ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "token"
    SESSION_TTL_DAYS: int = 7

    # Application
    APP_NAME: str = "Society Management API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Feature limits
    NOTIFICATION_LIMIT: int = 20
    SERVER_LOG_CAPACITY: int = 50

    # CORS
    CORS_ORIGINS: str = ""
    CORS_ALLOW_CREDENTIALS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS from comma-separated string"""
        if not self.CORS_ORIGINS:
            return []
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def session_max_age(self) -> int:
        """Session cookie lifetime in seconds"""
        return self.SESSION_TTL_DAYS * 24 * 60 * 60


# Global settings instance
settings = Settings()
