from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator
import os
from pathlib import Path
from enum import Enum

PACKAGE_DATA_DIR = Path(__file__).resolve().parents[1] / "data"


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    # Environment Configuration
    ENVIRONMENT: Environment = Environment.DEVELOPMENT

    # Project Information
    PROJECT_NAME: str = "Health Approved"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"

    # Server settings
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    # Static catalogs shipped with the package; submissions go to a writable dir
    DATA_DIR: Optional[str] = None
    PRODUCTS_PATH: Optional[str] = None
    ADDITIVES_PATH: Optional[str] = None
    SUBMISSIONS_PATH: Optional[str] = None

    # Open Food Facts fallback provider
    OFF_ENABLED: bool = True
    OFF_BASE_URL: str = "https://world.openfoodfacts.org"
    OFF_TIMEOUT_SECONDS: float = 5.0
    OFF_USER_AGENT: str = "HealthApproved/0.1"

    # CORS (empty = derive from environment)
    CORS_ORIGINS: List[str] = []

    # --- Validators & Derived Settings ---
    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Optional[str]) -> str:
        if v is None or (isinstance(v, str) and v.strip() == ""):
            return "INFO"
        return str(v).strip().upper()

    @field_validator("OFF_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @model_validator(mode="after")
    def _derive_paths(self) -> "Settings":
        if not self.DATA_DIR:
            self.DATA_DIR = str(PACKAGE_DATA_DIR)

        data_dir = Path(self.DATA_DIR)
        if not self.PRODUCTS_PATH:
            self.PRODUCTS_PATH = str(data_dir / "india_products.json")
        if not self.ADDITIVES_PATH:
            self.ADDITIVES_PATH = str(data_dir / "india_additives.json")

        # The packaged data dir may be read-only (site-packages), so
        # submissions default to the working directory
        if not self.SUBMISSIONS_PATH:
            self.SUBMISSIONS_PATH = str(Path(os.getcwd()) / "data" / "product_submissions.json")

        if self.OFF_TIMEOUT_SECONDS <= 0:
            raise ValueError("OFF_TIMEOUT_SECONDS must be positive")

        return self

    # Environment-specific properties
    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT

    @property
    def is_staging(self) -> bool:
        return self.ENVIRONMENT == Environment.STAGING

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PRODUCTION

    @property
    def cors_origins_development(self) -> List[str]:
        return [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]

    @property
    def allowed_cors_origins(self) -> List[str]:
        if self.CORS_ORIGINS:
            return self.CORS_ORIGINS
        if self.is_production:
            return []
        return self.cors_origins_development

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")


settings = Settings()
