import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from dotenv import load_dotenv


load_dotenv()  # Load environment variables from a .env file if present

class Config(BaseSettings):
    """
    Application configuration settings.
    Reads from environment variables by default.
    """
    PROJECT_NAME: str = "Misinfo Lens"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: List[str] = ["*"]

    GEMINI_API_KEY: Optional[str] = os.getenv("GEMINI_API_KEY")
    LLM_MODEL_NAME: str = os.getenv("LLM_MODEL_NAME", "gemini-2.5-flash-lite")
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0"))
    LLM_MAX_TOKEN: int = int(os.getenv("LLM_MAX_TOKEN", "1024"))
    LLM_TIMEOUT: float = float(os.getenv("LLM_TIMEOUT", "30"))

    # Trust domain for alternative sources
    TRUSTED_SOURCE_NAME: str = "World Health Organization"
    TRUSTED_SOURCE_DOMAIN: str = "who.int"
    MAX_SOURCES: int = 5

    # Report export
    REPORT_FILE_NAME: str = "misinformation_report.txt"
    REPORT_CONTENT_TYPE: str = "text/plain"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


config = Config()
