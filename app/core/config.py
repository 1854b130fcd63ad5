import logging
from typing import Any, Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEVELOPMENT_SECRET_KEY = "development_secret_key"


class Settings(BaseSettings):
    """Application settings."""
    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")

    PROJECT_NAME: str = "AgroMarket"

    # Security
    JWT_SECRET: Optional[str] = None
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 8  # 8 hours
    ALGORITHM: str = "HS256"
    BCRYPT_ROUNDS: int = 10

    # Database
    DATABASE_URL: str = "sqlite:///./agromarket.db"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # CORS
    BACKEND_CORS_ORIGINS: Any = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Any) -> list:
        """Parse the CORS origins from a string or return the list as is."""
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    @model_validator(mode="after")
    def require_secret_outside_development(self) -> "Settings":
        """Refuse to start without a JWT secret unless running locally."""
        if self.JWT_SECRET:
            return self
        if self.ENVIRONMENT not in ("development", "test"):
            raise ValueError(f"JWT_SECRET must be set when ENVIRONMENT={self.ENVIRONMENT}")
        logger.warning("JWT_SECRET is not set, using the insecure development secret")
        self.JWT_SECRET = DEVELOPMENT_SECRET_KEY
        return self


settings = Settings()
