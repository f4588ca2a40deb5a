# Application configuration
import os
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    FLASK_ENV: str = "production"
    SECRET_KEY: str = "change-me"
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    # root folder holding documents.json, physicians.json, pdfs/ and signatures/
    STORAGE_ROOT: str = "Storage"
    # leading segment of stored paths that stands for STORAGE_ROOT
    STORAGE_MARKER: str = "Storage"
    DOCUMENTS_FILE: str = "documents.json"
    PHYSICIANS_FILE: str = "physicians.json"
    # relative to STORAGE_ROOT unless absolute
    SIGNATURE_IMAGE: str = "signatures/signatures.png"

    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:3001"]
    # None means: expose internal error messages only in development
    EXPOSE_ERROR_DETAILS: Optional[bool] = None

    @property
    def storage_root(self) -> str:
        return os.path.abspath(self.STORAGE_ROOT)

    @property
    def signature_image_path(self) -> str:
        return os.path.join(self.storage_root, self.SIGNATURE_IMAGE)

    @property
    def expose_error_details(self) -> bool:
        if self.EXPOSE_ERROR_DETAILS is None:
            return self.FLASK_ENV == "development"
        return self.EXPOSE_ERROR_DETAILS


settings = Settings()
