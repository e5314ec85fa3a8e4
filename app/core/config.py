# app/core/config.py

from pathlib import Path
from typing import List, Literal, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the project root directory (where .env should be located)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore"
    )

    # App Configuration
    APP_NAME: str = "Expense Tracker API"
    DEBUG: bool = False
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"

    # Routers are mounted under this prefix ("" mounts them at the root)
    API_PREFIX: str = ""

    # CORS Configuration (comma-separated list, "*" allows any origin)
    CORS_ORIGINS: str = "*"

    # Storage backends: "firestore" talks to Firebase, "memory" keeps everything in-process
    STORE_BACKEND: Literal["firestore", "memory"] = "firestore"

    # Firebase Configuration
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CREDENTIALS_FILE: Optional[str] = None  # falls back to application default credentials
    FIREBASE_STORAGE_BUCKET: Optional[str] = None

    # Receipts are stored as <RECEIPTS_FOLDER>/<file name> in the bucket
    RECEIPTS_FOLDER: str = "receipts"

    # Round income/expense/balance to this many places; unset keeps full float precision
    TOTALS_DECIMAL_PLACES: Optional[int] = None

    @field_validator("API_PREFIX")
    @classmethod
    def normalize_prefix(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = "/" + value
        return value

    @field_validator("TOTALS_DECIMAL_PLACES")
    @classmethod
    def non_negative_places(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise ValueError("TOTALS_DECIMAL_PLACES must be >= 0")
        return value

    @property
    def cors_origins(self) -> List[str]:
        """CORS_ORIGINS split on commas, blanks dropped"""
        origins = [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
        return origins or ["*"]

    @property
    def bucket_name(self) -> str:
        return self.FIREBASE_STORAGE_BUCKET or f"{self.FIREBASE_PROJECT_ID or 'local'}.appspot.com"

# Create a global settings instance
settings = Settings()
