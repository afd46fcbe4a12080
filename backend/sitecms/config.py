from pydantic_settings import BaseSettings
from typing import Dict, List


class Settings(BaseSettings):
    PROJECT_NAME: str = "sitecms"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    API_V1_STR: str = "/api/v1"

    DATABASE_URL: str = "sqlite+aiosqlite:///./sitecms.db"

    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    CORS_ORIGINS: str = "http://localhost:3000"

    LOG_LEVEL: str = "INFO"

    # Site routing
    # Path under which the whole CMS is mounted inside the outer application.
    PUBLIC_CMS_PATH: str = "/"
    # Canonical hostname -> hostnames routed as if they were the canonical one.
    # Set as JSON in the environment, e.g. {"example.com": ["www.example.com"]}
    HOSTNAME_ALIASES: Dict[str, List[str]] = {}

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origins_list(self) -> List[str]:
        if isinstance(self.CORS_ORIGINS, str):
            return [o.strip() for o in self.CORS_ORIGINS.split(",")]
        return self.CORS_ORIGINS

    @property
    def async_database_url(self) -> str:
        return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://")


settings = Settings()
