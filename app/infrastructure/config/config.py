from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Quote Desk API"
    DEBUG: bool = False
    CORS_ALLOWED_ORIGINS: str = "http://localhost:3000"

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    QUOTE_NUMBER_ATTEMPTS: int = 5
    EXPORT_BATCH_SIZE: int = 500


class DBConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASS: str = "postgres"
    DB_NAME: str = "quote_desk"
    # Full SQLAlchemy URL, takes precedence over the DB_* parts when set
    DB_URL: str | None = None

    # Upper bound in seconds for a single store call
    QUERY_TIMEOUT: float = 10.0

    def get_url(self, is_async: bool = True) -> str:
        if self.DB_URL:
            return self.DB_URL
        driver = "postgresql+asyncpg" if is_async else "postgresql"
        return (
            f"{driver}://{self.DB_USER}:{self.DB_PASS}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


class JWTConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="JWT_", extra="ignore")

    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"


APP_CONFIG = AppConfig()
DB_CONFIG = DBConfig()
JWT_CONFIG = JWTConfig()
