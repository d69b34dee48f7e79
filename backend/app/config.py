"""Configuration management using environment variables."""
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    # Document store
    mongo_uri: str = ""
    mongo_db_name: str = ""
    answers_collection: str = "answers"
    mongo_connect_timeout_ms: int = 5000

    # Ephemeral upload storage (wiped on redeploy/restart)
    upload_dir: str = "/tmp/uploads"

    # Server settings
    cors_origins: str = "*"
    log_level: str = "INFO"
    backend_host: str = "0.0.0.0"
    backend_port: int = 8000
    debug: bool = False

    def __post_init__(self):
        """Load from environment variables."""
        self.mongo_uri = os.getenv("MONGO_URI", self.mongo_uri)
        self.mongo_db_name = os.getenv("MONGO_DB_NAME", self.mongo_db_name)
        self.answers_collection = os.getenv("ANSWERS_COLLECTION", self.answers_collection)
        self.mongo_connect_timeout_ms = int(
            os.getenv("MONGO_CONNECT_TIMEOUT_MS", str(self.mongo_connect_timeout_ms))
        )
        self.upload_dir = os.getenv("UPLOAD_DIR", self.upload_dir)
        self.cors_origins = os.getenv("CORS_ORIGINS", self.cors_origins)
        self.log_level = os.getenv("LOG_LEVEL", self.log_level).upper()
        self.backend_host = os.getenv("BACKEND_HOST", self.backend_host)
        self.backend_port = int(os.getenv("BACKEND_PORT", str(self.backend_port)))
        self.debug = os.getenv("DEBUG", str(self.debug)).lower() == "true"

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
