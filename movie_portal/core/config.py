# Settings management (reads env vars/.env)
# movie_portal/core/config.py

import json
import logging
from functools import lru_cache
from typing import Annotated, List, Optional, Union
from urllib.parse import quote_plus

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)

class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables or .env file.
    """
    # --- Project Info ---
    PROJECT_NAME: str = Field("Movie Portal Server", validation_alias="PROJECT_NAME")
    VERSION: str = Field("1.0.0", validation_alias="APP_VERSION")

    # --- Server ---
    HOST: str = Field("0.0.0.0", validation_alias="HOST")
    PORT: int = Field(5000, validation_alias="PORT")

    # --- Logging ---
    LOG_LEVEL: str = Field("INFO", validation_alias="LOG_LEVEL")

    # --- Database (MongoDB) ---
    # A full URI wins; otherwise one is assembled from the Atlas credentials below
    MONGODB_URI: Optional[SecretStr] = Field(None, validation_alias="MONGODB_URI")
    DB_USER: Optional[str] = Field(None, validation_alias="DB_USER")
    DB_PASS: Optional[SecretStr] = Field(None, validation_alias="DB_PASS")
    MONGODB_HOST: str = Field("cluster0.mongodb.net", validation_alias="MONGODB_HOST")
    MONGODB_APP_NAME: str = Field("Cluster0", validation_alias="MONGODB_APP_NAME")
    MONGODB_DB_NAME: str = Field("movieDB", validation_alias="MONGODB_DB_NAME")

    # --- CORS ---
    # Expects a comma-separated string in env var like "http://localhost:3000,https://example.com"
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=["*"],
        validation_alias="BACKEND_CORS_ORIGINS"
    )

    @field_validator("BACKEND_CORS_ORIGINS", mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str) and v.startswith("["):
            return json.loads(v)
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, list):
            return v
        raise ValueError(f"Invalid BACKEND_CORS_ORIGINS format: {v}")

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    def mongodb_uri(self) -> str:
        """
        Resolves the MongoDB connection string.

        Returns:
            MONGODB_URI when set, otherwise a mongodb+srv URI built from
            DB_USER, DB_PASS and MONGODB_HOST.

        Raises:
            ValueError: If neither a URI nor both credentials are configured.
        """
        if self.MONGODB_URI is not None:
            return self.MONGODB_URI.get_secret_value()
        if not self.DB_USER or self.DB_PASS is None:
            raise ValueError("Set MONGODB_URI, or both DB_USER and DB_PASS, to connect to MongoDB.")
        user = quote_plus(self.DB_USER)
        password = quote_plus(self.DB_PASS.get_secret_value())
        return (
            f"mongodb+srv://{user}:{password}@{self.MONGODB_HOST}/"
            f"?retryWrites=true&w=majority&appName={self.MONGODB_APP_NAME}"
        )

    model_config = SettingsConfigDict(
        # Load .env file if it exists (useful for local development)
        env_file=".env",
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

# Settings are loaded only once per process
@lru_cache()
def get_settings() -> Settings:
    """Returns the application settings instance."""
    try:
        settings_instance = Settings()
        logger.info(f"Settings loaded for project: {settings_instance.PROJECT_NAME}")
        logger.info(f"Log Level: {settings_instance.LOG_LEVEL}")
        logger.info(f"CORS Origins: {settings_instance.BACKEND_CORS_ORIGINS}")
        logger.info(f"MongoDB database: {settings_instance.MONGODB_DB_NAME}")
        # DO NOT log SecretStr values directly
        return settings_instance
    except Exception as e:
        logger.critical(f"CRITICAL ERROR: Failed to load application settings: {e}", exc_info=True)
        raise RuntimeError(f"Could not load settings: {e}")


settings: Settings = get_settings()
