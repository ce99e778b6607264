from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # App
    APP_NAME: str = "ReceiptScan"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000"]

    # OCR
    TESSERACT_CMD: str = "/usr/local/bin/tesseract"  # macOS default
    OCR_LANG: str = "eng"
    OCR_CONFIG: str = "--oem 3 --psm 6"

    # Locale (single configured currency)
    CURRENCY_CODE: str = "GBP"
    CURRENCY_SYMBOL: str = "£"

    # Uploads
    MAX_UPLOAD_MB: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
