"""
Configuration settings for the Trending GIF Pipeline.
"""

import json
from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")

    # API settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Trending GIF Pipeline"

    # Giphy settings
    GIPHY_API: str = ""
    GIPHY_BASE_URL: str = "https://api.giphy.com"
    NUMBER_OF_GIFS: int = 25

    # Storage bucket
    BUCKET: str = ""

    # GCP settings
    GCP_PROJECT_ID: str = ""
    GCP_SERVICE_ACCOUNT_JSON: str = ""

    # Development mode
    DEV_MODE: bool = False
    LOCAL_STORAGE_DIR: str = "storage"

    # Fan-out limit per invocation, 0 means unbounded
    MAX_CONCURRENCY: int = 10
    HTTP_TIMEOUT: float = 30.0

    # Logging
    LOG_LEVEL: Optional[str] = None
    LOG_FILE: Optional[str] = None

    @property
    def GCP_SERVICE_ACCOUNT_INFO(self) -> Dict[str, Any]:
        """Load service account info from the JSON string setting"""
        if not self.GCP_SERVICE_ACCOUNT_JSON:
            return {}
        try:
            return json.loads(self.GCP_SERVICE_ACCOUNT_JSON)
        except json.JSONDecodeError:
            # Return empty dict if JSON is invalid
            return {}


@lru_cache()
def get_settings():
    return Settings()
