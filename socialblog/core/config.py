import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

# don't use this in production, startup refuses it when APP_ENV=production
INSECURE_DEFAULT_SECRET = "your-secret-key"

SQLITE_DEV_DB = "sqlite:///./dev.db"
SQLITE_TEST_DB = "sqlite:///./test.db"
SQLITE_PROD_DB = "sqlite:///./prod.db"


class ConfigurationError(RuntimeError):
    """Raised when the process is started with an unusable configuration"""


class Settings(BaseModel):
    """Process-wide settings, read once from the environment"""
    app_env: str = "development"
    database_url: str = SQLITE_DEV_DB
    jwt_secret: str = INSECURE_DEFAULT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: float = 30.0
    db_statement_timeout_ms: int = 5000
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    port: int = 5000

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    def validate_for_startup(self) -> None:
        """Refuse to boot a production process with the shipped secret"""
        if self.is_production and self.jwt_secret == INSECURE_DEFAULT_SECRET:
            raise ConfigurationError("JWT_SECRET must be set when APP_ENV=production")


def _default_database_url(env: str) -> str:
    if env == "test":
        return SQLITE_TEST_DB
    if env == "production":
        return SQLITE_PROD_DB
    return SQLITE_DEV_DB


@lru_cache()
def get_settings() -> Settings:
    """Build settings from environment variables"""
    env = os.getenv("APP_ENV", "development")
    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        app_env=env,
        database_url=os.getenv("DATABASE_URL") or _default_database_url(env),
        jwt_secret=os.getenv("JWT_SECRET") or INSECURE_DEFAULT_SECRET,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7)),
        db_pool_size=int(os.getenv("DB_POOL_SIZE", 5)),
        db_max_overflow=int(os.getenv("DB_MAX_OVERFLOW", 10)),
        db_pool_timeout=float(os.getenv("DB_POOL_TIMEOUT", 30)),
        db_statement_timeout_ms=int(os.getenv("DB_STATEMENT_TIMEOUT_MS", 5000)),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        port=int(os.getenv("PORT", 5000)),
    )
