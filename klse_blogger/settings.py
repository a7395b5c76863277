from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):

    APP_VERSION: str = "1.0.0"
    DEFAULT_GEMINI_MODEL: str = "gemini-2.5-flash"
    LLM_TEMPERATURE: float = Field(0.4, ge=0.0, le=2.0)

    # Cosmetic progress bar: +PROGRESS_STEP every PROGRESS_INTERVAL_SECONDS, capped at PROGRESS_CEILING
    PROGRESS_INTERVAL_SECONDS: float = 0.5
    PROGRESS_STEP: int = 5
    PROGRESS_CEILING: int = 95

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="allow",
        env_file_encoding="utf-8",
    )

settings = Settings() # type: ignore
