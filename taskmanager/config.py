"""Runtime configuration for the Task Manager API."""

import os
from dataclasses import dataclass, field
from typing import List
import logging

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_JWT_SECRET = "your-secret-key-change-in-production"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Server settings.

    Attributes:
        jwt_secret: Key used to sign session tokens
        jwt_algorithm: JWT signing algorithm
        token_expire_hours: Validity window of a session token
        auth_enabled: When False, task routes run unscoped without a bearer token
        storage_backend: "memory" or "sql"
        database_url: SQLAlchemy URL used by the "sql" backend
        seed_demo_data: Create the demo user, task and review at startup
        cors_origins: Allowed CORS origins
        log_level: Root logging level
        port: Port used by ``python -m taskmanager``
        version: API version reported by the health endpoint
    """
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    token_expire_hours: int = 24
    auth_enabled: bool = True
    storage_backend: str = "memory"
    database_url: str = "sqlite:///./taskmanager.db"
    seed_demo_data: bool = True
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    port: int = 3000
    version: str = "1.0.0"

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        jwt_secret = os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET)
        if jwt_secret == DEFAULT_JWT_SECRET:
            logger.warning("JWT_SECRET is not set, using the development default")

        return cls(
            jwt_secret=jwt_secret,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            token_expire_hours=int(os.getenv("TOKEN_EXPIRE_HOURS", "24")),
            auth_enabled=_env_bool("AUTH_ENABLED", True),
            storage_backend=os.getenv("STORAGE_BACKEND", "memory").lower(),
            database_url=os.getenv("DATABASE_URL", "sqlite:///./taskmanager.db"),
            seed_demo_data=_env_bool("SEED_DEMO_DATA", True),
            cors_origins=[
                origin.strip()
                for origin in os.getenv("CORS_ORIGINS", "*").split(",")
                if origin.strip()
            ],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            port=int(os.getenv("PORT", "3000")),
        )
