from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):

    # API Configuration
    app_name: str = "QuickChart Server"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS Configuration
    cors_origins: List[str] = ["*"]
    cors_credentials: bool = True
    cors_methods: List[str] = ["*"]
    cors_headers: List[str] = ["*"]

    # QuickChart requests (seconds)
    request_timeout: float = 30.0

    # Logging Configuration
    logs_dir: str = "logs"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields from .env


# Global settings instance
settings = Settings()
